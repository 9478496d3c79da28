# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Keep-alive and health check endpoints
# - users.py: Sign-up, log-in and user listing
# - places.py: Place CRUD (mutations require a bearer token)
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import places
from . import users

__all__ = [
    "health",
    "places",
    "users",
]
