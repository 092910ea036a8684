# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Resolves upload authorization for the current request.
#
# The session token is read from:
# - the upload session cookie (browser clients)
# - an "Authorization: Bearer <token>" header (API clients)
#
# Usage:
#   from app.auth import require_upload_authorization
#
#   @router.post("/signs")
#   async def create(auth: UploadAuthorization = Depends(require_upload_authorization)):
#       ...
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.auth.gate import verify_upload_token
from app.auth.models import UploadAuthorization
from app.config import get_settings
from app.exceptions import AuthorizationRequiredError

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor (optional - cookie is the usual carrier)
security_optional = HTTPBearer(auto_error=False)


async def get_upload_authorization(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
) -> UploadAuthorization:
    """
    Get the current request's upload authorization.

    Returns an unauthorized state instead of raising when no valid
    token is present.
    """
    token = credentials.credentials if credentials else None
    if token is None:
        token = request.cookies.get(get_settings().AUTH_COOKIE_NAME)

    return UploadAuthorization(authorized=verify_upload_token(token))


async def require_upload_authorization(
    auth: UploadAuthorization = Depends(get_upload_authorization),
) -> UploadAuthorization:
    """
    Require upload authorization.

    Raises:
        AuthorizationRequiredError: 401 if the session isn't authorized
    """
    if not auth.authorized:
        logger.info("Rejected upload without authorization")
        raise AuthorizationRequiredError()
    return auth
