# =============================================================================
# core/models/ - Data Models
# =============================================================================
# This package contains:
# - records.py: SQLAlchemy tables (users, places, user_places)
# - user.py: Account request/response schemas
# - place.py: Place request/response schemas
#
# The pydantic models define the "contract" between API and clients.
# =============================================================================

from .records import PlaceRecord, UserPlaceRecord, UserRecord
from .place import Location, PlaceCreateForm, PlaceResponse, PlaceUpdate
from .user import AuthResult, LoginRequest, SignupForm, UserResponse, normalize_email

__all__ = [
    # Records
    "PlaceRecord",
    "UserPlaceRecord",
    "UserRecord",
    # Place
    "Location",
    "PlaceCreateForm",
    "PlaceResponse",
    "PlaceUpdate",
    # User
    "AuthResult",
    "LoginRequest",
    "SignupForm",
    "UserResponse",
    "normalize_email",
]
