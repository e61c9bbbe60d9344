"""
Domain exceptions.

Typed exceptions for explicit error handling in the catalog layer.
Only NotFoundError is ever turned into a cached value; every other error
propagates to the caller untouched.
"""

from __future__ import annotations

from typing import Optional


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class CatalogError(Exception):
    """
    Base exception for all catalog errors.

    Allows catching every menuscan error with a single except clause.
    """

    pass


# ═══════════════════════════════════════════════════════════
# BACKEND EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class NotFoundError(CatalogError):
    """
    Requested document (or collection) does not exist.

    Raised by document backends on a 404. Single-document lookups cache it
    as a short-lived negative entry instead of surfacing it.

    Example:
        >>> raise NotFoundError("foods/abc123 not found")
    """

    pass


class ConflictError(CatalogError):
    """
    Document with the same id already exists.

    Raised by document backends on a 409 during create.
    """

    pass


class BackendError(CatalogError):
    """
    Transient backend failure.

    Network failure, permission error, schema mismatch or any unexpected
    response. Never cached; the caller decides whether to retry.

    Attributes:
        message: Human-readable message (from the backend when available)
        status_code: HTTP-like status, None for transport failures
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SchemaMismatchError(BackendError):
    """
    Backend collection schema does not match the fields this app sends.

    Carries an actionable description of the attributes to add.
    """

    pass


# ═══════════════════════════════════════════════════════════
# LOCAL EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ConfigurationError(CatalogError):
    """
    Required backend identifiers are missing.

    Raised synchronously before any network attempt. Not retryable until
    the environment is fixed.
    """

    pass


class InvalidInputError(CatalogError, ValueError):
    """
    Caller supplied invalid input (blank name, rating out of range, ...).
    """

    pass
