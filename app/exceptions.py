# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error tells the caller HOW to recover, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class SignDBException(Exception):
    """
    Base exception for the SignDB API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "SIGNDB_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigurationError(SignDBException):
    """Raised at startup when required settings are missing or invalid."""

    def __init__(self, fields: list[str]):
        super().__init__(
            message=f"Missing or invalid configuration: {', '.join(fields) or 'unknown'}",
            code="CONFIGURATION_ERROR",
            status_code=503,
            suggestion="Set SUPABASE_URL and SUPABASE_ANON_KEY in the environment or .env file",
            details={"fields": fields}
        )


# =============================================================================
# Authorization Exceptions
# =============================================================================

class AuthorizationFailedError(SignDBException):
    """Raised when the upload password does not match."""

    def __init__(self):
        super().__init__(
            message="Incorrect password. Please try again.",
            code="AUTHORIZATION_FAILED",
            status_code=401,
            suggestion="Check the upload password with the catalog maintainer",
        )


class AuthorizationRequiredError(SignDBException):
    """Raised when a write is attempted without upload authorization."""

    def __init__(self):
        super().__init__(
            message="Upload authorization required",
            code="AUTHORIZATION_REQUIRED",
            status_code=401,
            suggestion="Authorize first using POST /api/v1/auth/authorize",
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class PhotoRequiredError(SignDBException):
    """Raised when a sign is submitted without a photo."""

    def __init__(self):
        super().__init__(
            message="Please upload a photo",
            code="PHOTO_REQUIRED",
            status_code=400,
            suggestion="Attach a JPEG, PNG, GIF, or WebP image in the 'photo' field",
        )


class InvalidImageTypeError(SignDBException):
    """Raised when the photo's MIME type is not allowed."""

    def __init__(self, content_type: str | None, allowed: list[str]):
        super().__init__(
            message="Please upload a valid image file (JPEG, PNG, GIF, or WebP)",
            code="INVALID_IMAGE_TYPE",
            status_code=400,
            suggestion=f"Only these image types are supported: {', '.join(allowed)}",
            details={"content_type": content_type, "allowed_types": allowed}
        )


class ImageTooLargeError(SignDBException):
    """Raised when the photo exceeds the size limit."""

    def __init__(self, size_bytes: int, max_mb: int):
        size_mb = size_bytes / (1024 * 1024)
        super().__init__(
            message=f"File size must be less than {max_mb}MB",
            code="IMAGE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a photo smaller than {max_mb}MB",
            details={"size_mb": round(size_mb, 2), "max_mb": max_mb}
        )


class ImageReadError(SignDBException):
    """Raised when the uploaded photo cannot be read."""

    def __init__(self, filename: str | None, error: str):
        super().__init__(
            message=f"Failed to read image: {error}",
            code="IMAGE_READ_ERROR",
            status_code=400,
            suggestion="Try selecting the photo again",
            details={"filename": filename, "error": error}
        )


# =============================================================================
# Store / Catalog Exceptions
# =============================================================================

class StoreError(SignDBException):
    """Raised when a list or insert call against the sign store fails."""

    def __init__(self, message: str, operation: str = "query"):
        super().__init__(
            message=message,
            code="STORE_ERROR",
            status_code=502,
            suggestion="Try again; nothing is retried automatically",
            details={"operation": operation}
        )


class CatalogUnavailableError(SignDBException):
    """Raised when the catalog could not be loaded from the store."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Database Connection Error: {error}",
            code="CATALOG_UNAVAILABLE",
            status_code=503,
            suggestion="Make sure Supabase is properly configured, then POST /api/v1/signs/refresh",
            details={"error": error}
        )


class SignNotFoundError(SignDBException):
    """Raised when a sign ID isn't in the catalog."""

    def __init__(self, sign_id: str):
        super().__init__(
            message=f"Sign not found: {sign_id}",
            code="SIGN_NOT_FOUND",
            status_code=404,
            suggestion="Check that the sign id is correct or refresh the catalog",
            details={"sign_id": sign_id}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def signdb_exception_handler(
    request: Request,
    exc: SignDBException
) -> JSONResponse:
    """
    Convert SignDBException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle request validation errors.

    Converts validation errors to user-friendly messages.
    """
    errors = exc.errors() if hasattr(exc, "errors") else str(exc)
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors if isinstance(errors, str) else [
                {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg")}
                for err in errors
            ],
        }
    )
