# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - signs.py: Catalog search, detail, refresh and upload endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import signs

__all__ = [
    "health",
    "signs",
]
