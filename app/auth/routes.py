# =============================================================================
# app/auth/routes.py - Authorization Routes
# =============================================================================
# API endpoints for the upload password gate.
#
# Viewing and searching signs needs no authorization; only uploads do.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, Response

from app.auth.dependencies import get_upload_authorization
from app.auth.gate import authorize, issue_upload_token
from app.auth.models import AuthorizeRequest, AuthorizeResponse, UploadAuthorization
from app.config import get_settings
from app.exceptions import AuthorizationFailedError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/authorize", response_model=AuthorizeResponse)
async def authorize_upload(request: AuthorizeRequest, response: Response) -> AuthorizeResponse:
    """
    Exchange the upload password for a session token.

    The token is returned in the body and set as a session cookie
    (no max-age, so it is dropped when the browser session ends).

    Raises:
        401: If the password is incorrect (unlimited attempts)
    """
    if not authorize(request.password):
        logger.info("Upload authorization failed")
        raise AuthorizationFailedError()

    settings = get_settings()
    token = issue_upload_token()
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )

    logger.info("Upload authorization granted")
    return AuthorizeResponse(token=token)


@router.get("/status", response_model=UploadAuthorization)
async def authorization_status(
    auth: UploadAuthorization = Depends(get_upload_authorization),
) -> UploadAuthorization:
    """Report whether the current session may upload."""
    return auth
