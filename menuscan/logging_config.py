"""Basic logging configuration (minimal).

Library modules only create loggers; the embedding application calls
configure_logging() once at startup.
"""

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging from LOG_LEVEL (default INFO).

    Args:
        level: Explicit level name, overrides LOG_LEVEL
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )

    # Per-entry cache logs are DEBUG; keep them quiet unless asked for
    cache_logger = logging.getLogger("menuscan.infrastructure.cache")
    if cache_logger.level == logging.NOTSET and level_name != "DEBUG":
        cache_logger.setLevel(logging.INFO)
