# =============================================================================
# app/auth/__init__.py - Upload Authorization Module
# =============================================================================
# Provides the password gate that unlocks sign uploads for a session.
#
# Usage:
#   from app.auth import require_upload_authorization, UploadAuthorization
#
#   @router.post("/signs")
#   async def create(auth: UploadAuthorization = Depends(require_upload_authorization)):
#       ...
# =============================================================================

from app.auth.dependencies import get_upload_authorization, require_upload_authorization
from app.auth.gate import authorize, issue_upload_token, verify_upload_token
from app.auth.models import UploadAuthorization

__all__ = [
    "authorize",
    "issue_upload_token",
    "verify_upload_token",
    "get_upload_authorization",
    "require_upload_authorization",
    "UploadAuthorization",
]
