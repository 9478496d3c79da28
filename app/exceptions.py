# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API. Every failure reaching the
# transport layer is turned into {"message": ..., "code": ...} here, and
# any image saved for the failing request is deleted before responding.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Status used when an exception was raised without one
DEFAULT_STATUS_CODE = 505


class PlacesException(Exception):
    """
    Base exception for the Places API.

    All custom exceptions inherit from this class. Status and body are
    rendered together by places_exception_handler.
    """

    def __init__(
        self,
        message: str,
        code: str = "PLACES_ERROR",
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code or DEFAULT_STATUS_CODE
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "message": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Validation (422)
# =============================================================================

class ValidationFailedError(PlacesException):
    """Raised when request input breaks a field rule."""

    def __init__(self, problem: str, field: str):
        super().__init__(
            message=f"{problem} of {field}",
            code="VALIDATION_ERROR",
            status_code=422,
            details={"field": field},
        )

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> "ValidationFailedError":
        """Report the first failing field, like the request-body handler does."""
        error = exc.errors()[0]
        return cls(_describe_problem(error), _field_name(error))


class EmailAlreadyExistsError(PlacesException):
    def __init__(self, email: str):
        super().__init__(
            message="Email already exists, try with other email.",
            code="EMAIL_EXISTS",
            status_code=422,
            details={"email": email},
        )


class InvalidImageError(PlacesException):
    def __init__(self, reason: str):
        super().__init__(
            message=reason,
            code="INVALID_IMAGE",
            status_code=422,
        )


# =============================================================================
# Authentication / Authorization (401, 403)
# =============================================================================

class UnauthorizedError(PlacesException):
    """Raised when the bearer token is missing or fails verification."""

    def __init__(self, message: str = "Authentication failed!"):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            status_code=401,
        )


class NotPlaceOwnerError(PlacesException):
    """Raised when someone other than the creator edits or deletes a place."""

    def __init__(self, place_id: str, action: str):
        super().__init__(
            message=f"You are not allowed to {action} this place.",
            code="NOT_PLACE_OWNER",
            status_code=401,
            details={"place_id": place_id},
        )


class WrongCredentialsError(PlacesException):
    def __init__(self):
        super().__init__(
            message="Wrong User Credentials.",
            code="WRONG_CREDENTIALS",
            status_code=403,
        )


# =============================================================================
# Not Found (404)
# =============================================================================

class PlaceNotFoundError(PlacesException):
    def __init__(self, place_id: str):
        super().__init__(
            message="Could not find a place for provided id.",
            code="PLACE_NOT_FOUND",
            status_code=404,
            details={"place_id": place_id},
        )


class UserPlacesNotFoundError(PlacesException):
    def __init__(self, user_id: str):
        super().__init__(
            message="Could not find a place for provided user id.",
            code="USER_PLACES_NOT_FOUND",
            status_code=404,
            details={"user_id": user_id},
        )


class UserNotFoundError(PlacesException):
    def __init__(self, user_id: str):
        super().__init__(
            message="User not found.",
            code="USER_NOT_FOUND",
            status_code=404,
            details={"user_id": user_id},
        )


class RouteNotFoundError(PlacesException):
    def __init__(self, path: str):
        super().__init__(
            message="Could not find this route.",
            code="ROUTE_NOT_FOUND",
            status_code=404,
            details={"path": path},
        )


# =============================================================================
# Geocoding (422 / 500)
# =============================================================================

class GeocodeError(PlacesException):
    """
    Raised when the address of a new place cannot be geocoded.

    An address the service does not know is the client's problem (422);
    a service that cannot be reached is ours (500).
    """

    def __init__(self, message: str, address: str, address_not_found: bool):
        super().__init__(
            message=message if address_not_found else "Could not resolve the address, please try again.",
            code="ADDRESS_NOT_FOUND" if address_not_found else "GEOCODING_FAILED",
            status_code=422 if address_not_found else 500,
            details={"address": address},
        )


# =============================================================================
# Internal Failure (500)
# =============================================================================

class InternalFailureError(PlacesException):
    """Storage or other infrastructure failure. The raw cause is logged, never returned."""

    def __init__(self, message: str = "Something went wrong, please try again."):
        super().__init__(
            message=message,
            code="INTERNAL_ERROR",
            status_code=500,
        )


# =============================================================================
# Helpers
# =============================================================================

def _field_name(error: dict[str, Any]) -> str:
    # loc is ("body", "title") for request bodies, ("title",) for models
    if error.get("type") == "json_invalid":
        # loc is ("body", <character offset>)
        return "request"
    parts = [str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path", "form")]
    return ".".join(parts) or "request"


def _describe_problem(error: dict[str, Any]) -> str:
    if error.get("type") == "missing":
        return "Missing value"
    return "Invalid value"


def cleanup_upload(request: Request) -> None:
    """
    Delete the image saved for this request, if any.

    Called on every error path. Failures are logged by ImageStorage and
    never replace the original error.
    """
    upload_path = getattr(request.state, "upload_path", None)
    if not upload_path:
        return
    context = getattr(request.app.state, "context", None)
    if context is None:
        logger.warning(f"No service context to clean up upload {upload_path}")
        return
    context.images.delete(upload_path)
    request.state.upload_path = None


# =============================================================================
# Exception Handlers
# =============================================================================

async def places_exception_handler(
    request: Request,
    exc: PlacesException
) -> JSONResponse:
    """Convert PlacesException to JSON response."""
    cleanup_upload(request)
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: [{exc.code}] {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Reports the first failing field as "<problem> of <field>".
    """
    cleanup_upload(request)
    errors = exc.errors()
    error = errors[0] if errors else {}
    field = _field_name(error)
    return JSONResponse(
        status_code=422,
        content={
            "message": f"{_describe_problem(error)} of {field}",
            "code": "VALIDATION_ERROR",
            "details": {"field": field},
        }
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Render framework HTTP errors (unknown routes, wrong methods) in the same shape."""
    cleanup_upload(request)
    if exc.status_code == 404:
        return await places_exception_handler(request, RouteNotFoundError(request.url.path))
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail), "code": "HTTP_ERROR"},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback and return a generic 500."""
    logger.exception(f"Unexpected error: {exc}")
    cleanup_upload(request)
    return JSONResponse(
        status_code=500,
        content={
            "message": "Unknown error occurred.",
            "code": "INTERNAL_ERROR",
        }
    )
