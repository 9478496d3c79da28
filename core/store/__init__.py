# =============================================================================
# core/store/ - Repositories
# =============================================================================
# Session-scoped repositories over the SQLAlchemy tables. Services open the
# session (and the transaction) and hand it to the stores.
# =============================================================================

from .place_store import PlaceStore
from .user_store import UserStore

__all__ = [
    "PlaceStore",
    "UserStore",
]
