"""Backend factory.

Environment-based adapter selection with a safe in-memory default.
Strategy:
- .env (runtime): DOCUMENT_BACKEND=appwrite (hosted backend)
- self-hosted:    DOCUMENT_BACKEND=mongodb
- pytest / dev:   DOCUMENT_BACKEND=inmemory (fast, isolated)
- Default: inmemory (safe fallback if env vars not set)

Usage:
    from menuscan.infrastructure.backends.factory import (
        create_document_backend,
        get_document_backend,
    )

    backend = create_document_backend()  # New adapter based on env
    backend = get_document_backend()     # Singleton instance
    await aclose_document_backend()      # Release connections on shutdown
"""

import logging
import os
from typing import Optional

from menuscan.config import AppwriteSettings, CatalogSettings
from menuscan.domain.shared.errors import ConfigurationError
from menuscan.domain.shared.ports.document_backend import IDocumentBackend
from menuscan.domain.shared.ports.file_storage import IFileStorage
from menuscan.domain.shared.ports.session_provider import ISessionProvider
from menuscan.infrastructure.backends.appwrite import AppwriteDocumentBackend
from menuscan.infrastructure.backends.appwrite_http import AppwriteHttpClient
from menuscan.infrastructure.backends.appwrite_storage import AppwriteFileStorage
from menuscan.infrastructure.backends.in_memory import InMemoryDocumentBackend
from menuscan.infrastructure.backends.in_memory_storage import InMemoryFileStorage
from menuscan.infrastructure.session.appwrite import AppwriteSessionProvider
from menuscan.infrastructure.session.in_memory import InMemorySessionProvider

logger = logging.getLogger(__name__)

BACKEND_MODES = ("inmemory", "appwrite", "mongodb")


def get_backend_mode() -> str:
    """
    Read DOCUMENT_BACKEND (default "inmemory").

    Raises:
        ConfigurationError: For an unknown mode
    """
    mode = os.getenv("DOCUMENT_BACKEND", "inmemory").lower()
    if mode not in BACKEND_MODES:
        raise ConfigurationError(
            f"Unknown DOCUMENT_BACKEND={mode!r}. Use one of: {', '.join(BACKEND_MODES)}"
        )
    return mode


# Shared Appwrite transport (lazy initialization)
_appwrite_http: Optional[AppwriteHttpClient] = None


def _get_appwrite_http() -> AppwriteHttpClient:
    global _appwrite_http
    if _appwrite_http is None:
        _appwrite_http = AppwriteHttpClient(
            AppwriteSettings.from_env(),
            session_secret=os.getenv("APPWRITE_SESSION") or None,
        )
    return _appwrite_http


def create_document_backend(settings: Optional[CatalogSettings] = None) -> IDocumentBackend:
    """Create a document backend based on DOCUMENT_BACKEND.

    Environment variable: DOCUMENT_BACKEND
    Values:
        - "inmemory": In-memory backend (default, fast, transient)
        - "appwrite": Appwrite REST backend (requires APPWRITE_* settings)
        - "mongodb": MongoDB backend (requires MONGODB_URI)

    Returns:
        IDocumentBackend: Backend instance

    Raises:
        ConfigurationError: If the selected backend is not configured
    """
    mode = get_backend_mode()

    if mode == "appwrite":
        catalog_settings = settings or CatalogSettings.from_env()
        logger.info("Using Appwrite document backend")
        return AppwriteDocumentBackend(_get_appwrite_http(), catalog_settings.database_id)

    if mode == "mongodb":
        # Imported lazily so motor is only loaded when selected
        from menuscan.infrastructure.backends.mongodb import MongoDocumentBackend

        logger.info("Using MongoDB document backend")
        return MongoDocumentBackend()

    logger.info("Using in-memory document backend")
    return InMemoryDocumentBackend()


def create_file_storage() -> IFileStorage:
    """Create the file storage matching DOCUMENT_BACKEND."""
    if get_backend_mode() == "appwrite":
        return AppwriteFileStorage(AppwriteSettings.from_env().require())
    return InMemoryFileStorage()


def create_session_provider() -> ISessionProvider:
    """Create the session provider matching DOCUMENT_BACKEND."""
    if get_backend_mode() == "appwrite":
        return AppwriteSessionProvider(_get_appwrite_http())
    return InMemorySessionProvider()


# Singleton instance (lazy initialization)
_document_backend: Optional[IDocumentBackend] = None


def get_document_backend() -> IDocumentBackend:
    """Get singleton document backend instance."""
    global _document_backend
    if _document_backend is None:
        _document_backend = create_document_backend()
    return _document_backend


def reset_document_backend() -> None:
    """Reset singleton instances without closing them.

    Useful for testing to force re-creation with different env vars. Open
    connections are left to the caller; see aclose_document_backend().
    """
    global _document_backend, _appwrite_http
    _document_backend = None
    _appwrite_http = None


async def aclose_document_backend() -> None:
    """Close the shared connections, then reset singleton instances.

    Call this instead of reset_document_backend() when the process (or a
    test) is done with an Appwrite or MongoDB backend, so the underlying
    httpx client or motor client is released.
    """
    backend, http = _document_backend, _appwrite_http
    reset_document_backend()

    if http is not None:
        await http.aclose()
    close = getattr(backend, "close", None)
    if close is not None:
        await close()
    logger.info("Document backend closed")
