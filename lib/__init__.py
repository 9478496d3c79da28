# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains infrastructure that knows nothing about HTTP:
# - credentials.py: Password hashing and JWT issue/verify
# - geocoder.py: Address -> coordinates via the Geocoding API
# - database.py: SQLAlchemy engine, sessions and transaction scope
# - utils.py: Shared utilities (identifier normalization, base error)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.credentials import CredentialService, InvalidTokenError, TokenClaims
from lib.database import Base, Database
from lib.geocoder import Coordinates, Geocoder, GeocodingError
from lib.utils import ApplicationError, canonical_id, new_id, same_identity

__all__ = [
    # Credentials
    "CredentialService",
    "InvalidTokenError",
    "TokenClaims",
    # Database
    "Base",
    "Database",
    # Geocoding
    "Coordinates",
    "Geocoder",
    "GeocodingError",
    # Utils
    "ApplicationError",
    "canonical_id",
    "new_id",
    "same_identity",
]
