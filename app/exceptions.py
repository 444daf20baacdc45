# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every failure is terminal for its request and reaches the caller as
# JSON {"error": message} with the status code of its exception class.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lib.supabase_client import StoreError

logger = logging.getLogger(__name__)


class GatewayException(Exception):
    """
    Base exception for the API gateway.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "GATEWAY_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {"error": self.message}


# =============================================================================
# Request Exceptions
# =============================================================================

class InvalidRoleError(GatewayException):
    """Raised when a signup/login names a role that isn't one of the four tags."""

    def __init__(self, role: Any = None):
        super().__init__(
            message="Invalid role",
            code="INVALID_ROLE",
            status_code=400,
            details={"role": role},
        )


class MissingFileError(GatewayException):
    """Raised when a multipart upload has no file part."""

    def __init__(self):
        super().__init__(
            message="No file uploaded",
            code="MISSING_FILE",
            status_code=400,
        )


class RequestValidationFailed(GatewayException):
    """Raised when a request body is missing a field or can't be parsed."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class UnauthenticatedError(GatewayException):
    """Raised when a protected endpoint gets no token or a token that fails verification."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(
            message=message,
            code="UNAUTHENTICATED",
            status_code=401,
        )


class InvalidCredentialsError(GatewayException):
    """Raised when a login password doesn't match the stored hash."""

    def __init__(self):
        super().__init__(
            message="Invalid credentials",
            code="INVALID_CREDENTIALS",
            status_code=401,
        )


class ForbiddenError(GatewayException):
    """Raised when the authenticated role isn't the one an endpoint requires."""

    def __init__(self, required_role: str | None = None):
        super().__init__(
            message="Forbidden: Insufficient role",
            code="FORBIDDEN",
            status_code=403,
            details={"required_role": required_role},
        )


# =============================================================================
# Lookup Exceptions
# =============================================================================

class NotFoundError(GatewayException):
    """Raised when a single-row lookup finds nothing."""

    def __init__(self, message: str = "Not found", code: str = "NOT_FOUND"):
        super().__init__(
            message=message,
            code=code,
            status_code=404,
        )


class UserNotFoundError(NotFoundError):
    """Raised when no identity matches a login phone or token subject."""

    def __init__(self):
        super().__init__(message="User not found", code="USER_NOT_FOUND")


class RouteNotFoundError(NotFoundError):
    """Raised for any path/method combination no router handles."""

    def __init__(self, path: str):
        super().__init__(message=f"Route not found: {path}", code="ROUTE_NOT_FOUND")


# =============================================================================
# Upload Exceptions
# =============================================================================

class UploadFailedError(GatewayException):
    """Raised when file upload to object storage fails."""

    def __init__(self, error: str | None = None):
        super().__init__(
            message="File upload failed",
            code="UPLOAD_FAILED",
            status_code=500,
            details={"error": error} if error else None,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def gateway_exception_handler(
    request: Request,
    exc: GatewayException
) -> JSONResponse:
    """
    Convert GatewayException to JSON response.

    Only the message reaches the client; code and details are logged.
    """
    log = logger.error if exc.status_code >= 500 else logger.info
    log(f"{request.method} {request.url.path} -> {exc.status_code} [{exc.code}] {exc.details}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def store_exception_handler(
    request: Request,
    exc: StoreError
) -> JSONResponse:
    """
    Surface a store failure as 400 with the store's message verbatim.
    """
    logger.warning(f"{request.method} {request.url.path} -> 400 [{exc.code}] {exc.details}")
    return JSONResponse(
        status_code=400,
        content={"error": exc.message}
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Turn the first pydantic error into a one-line message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    field = str(first.get("loc", ["body"])[-1])
    if first.get("type") == "missing":
        return f"Missing required field: {field}"
    if first.get("type") == "json_invalid":
        return "Malformed JSON body"
    return f"Invalid value for {field}: {first.get('msg', 'invalid')}"


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Presence and type checks are the only validation done by the API,
    so these are reported as plain 400s.
    """
    return await gateway_exception_handler(
        request, RequestValidationFailed(_describe_validation_error(exc))
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Render framework HTTP errors in the {"error": ...} shape.

    Unknown paths and unsupported methods both count as an unmatched route.
    """
    if exc.status_code in (404, 405):
        return await gateway_exception_handler(request, RouteNotFoundError(request.url.path))
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unexpected_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "An unexpected error occurred"}
    )
