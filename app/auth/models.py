# =============================================================================
# app/auth/models.py - Authorization Models
# =============================================================================
# Pydantic models for the upload password gate.
# =============================================================================

from pydantic import BaseModel, Field


class UploadAuthorization(BaseModel):
    """
    Session-scoped upload authorization.

    Resolved per request from the session token, never stored globally.
    """
    authorized: bool = False

    class Config:
        frozen = True  # Make immutable


class AuthorizeRequest(BaseModel):
    """Password submitted from the upload authorization prompt."""
    password: str = Field(..., description="Upload password")


class AuthorizeResponse(BaseModel):
    """Result of a successful authorization."""
    authorized: bool = True
    message: str = "Authorization successful! You can now upload signs."
    token: str = Field(..., description="Session token; also set as a cookie")
