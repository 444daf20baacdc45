# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from typing import Any


# =============================================================================
# Body Helpers
# =============================================================================

def without_keys(row: dict[str, Any] | None, *keys: str) -> dict[str, Any] | None:
    """
    Return a shallow copy of a row with the given keys removed.

    Used to strip secrets (e.g. password_hash) from store rows before
    they are sent back to clients.

    Example:
        without_keys({"phone": "1", "password_hash": "x"}, "password_hash")
        # {"phone": "1"}
    """
    if row is None:
        return None
    return {k: v for k, v in row.items() if k not in keys}


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for errors raised by the lib/ utilities.

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        details: Additional context for debugging

    Example:
        class MyServiceError(ApplicationError):
            def __init__(self, message: str, **kwargs):
                super().__init__(message, code="MY_SERVICE_ERROR", **kwargs)
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
