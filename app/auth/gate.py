# =============================================================================
# app/auth/gate.py - Upload Password Gate
# =============================================================================
# Write access to the catalog is unlocked by a single shared password.
# A correct password earns a signed session token; the token carries no
# expiry, so authorization lasts until the browser session ends.
#
#   Unauthorized --correct password--> Authorized
#
# There is no lockout or rate limiting.
# =============================================================================

import hmac
import logging
from datetime import datetime, timezone

from jose import jwt, JWTError

from app.config import get_settings

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"
UPLOAD_SCOPE = "signs:write"


def authorize(candidate_secret: str) -> bool:
    """
    Compare a candidate password against UPLOAD_PASSWORD.

    Exact, case-sensitive comparison with no trimming. Never raises.
    """
    if not isinstance(candidate_secret, str):
        return False
    expected = get_settings().UPLOAD_PASSWORD
    # surrogatepass: lone surrogates from JSON bodies must compare, not raise
    return hmac.compare_digest(
        candidate_secret.encode("utf-8", "surrogatepass"),
        expected.encode("utf-8", "surrogatepass"),
    )


def issue_upload_token() -> str:
    """Sign a session token granting upload access."""
    payload = {
        "sub": "uploader",
        "scope": UPLOAD_SCOPE,
        "iat": int(datetime.now(timezone.utc).timestamp()),
    }
    return jwt.encode(payload, get_settings().SECRET_KEY, algorithm=TOKEN_ALGORITHM)


def verify_upload_token(token: str | None) -> bool:
    """
    Check that a token was issued by this app for uploads.

    Any decoding problem counts as unauthorized rather than an error.
    """
    if not token:
        return False
    try:
        payload = jwt.decode(
            token,
            get_settings().SECRET_KEY,
            algorithms=[TOKEN_ALGORITHM],
        )
    except JWTError as e:
        logger.debug(f"Rejected upload token: {e}")
        return False
    return payload.get("scope") == UPLOAD_SCOPE
