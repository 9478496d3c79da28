# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .context import ServiceContext
from .place_service import PlaceService
from .storage_service import ImageStorage
from .user_service import UserService

__all__ = [
    "ServiceContext",
    "PlaceService",
    "ImageStorage",
    "UserService",
]
