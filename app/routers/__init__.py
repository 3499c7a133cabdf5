# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - images.py: Community/business image upload endpoint
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import images

__all__ = [
    "health",
    "images",
]
