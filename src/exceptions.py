"""
Custom exception hierarchy for the user data-access layer.

Provides typed exceptions so callers can map failures to responses without
inspecting messages.

Exception Hierarchy:
    LightweightError (base)
    ├── ExpressError → NotFoundError, BadRequestError, UnauthorizedError
    ├── StorageError → DatabaseConnectionError
    └── ConfigurationError

Usage:
    from src.exceptions import NotFoundError, UnauthorizedError

    try:
        user = await queries.authenticate(username, password)
    except UnauthorizedError as e:
        return JSONResponse({"error": e.message}, status_code=e.status_code)
"""

from typing import Any, Dict, Optional


class LightweightError(Exception):
    """Base exception for all errors raised by this package."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message} (caused by: {type(self.cause).__name__}: {self.cause})"
        return self.message


# =============================================================================
# User-visible Errors
# =============================================================================

class ExpressError(LightweightError):
    """
    Error meant to reach the end user.

    Carries an HTTP status code so request handlers can translate it
    directly into a response.
    """

    status_code: int = 500


class NotFoundError(ExpressError):
    """Requested record does not exist."""
    status_code = 404


class BadRequestError(ExpressError):
    """Request conflicts with existing data (e.g. duplicate username)."""
    status_code = 400


class UnauthorizedError(ExpressError):
    """Credentials are missing or wrong."""
    status_code = 401


# =============================================================================
# Storage Errors
# =============================================================================

class StorageError(LightweightError):
    """Error in storage layer (database)."""
    pass


class DatabaseConnectionError(StorageError):
    """Failed to connect to database."""
    pass


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(LightweightError):
    """Error in configuration (missing keys, invalid values)."""
    pass
