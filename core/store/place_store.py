# =============================================================================
# core/store/place_store.py - Place Repository
# =============================================================================
# Reads and writes place rows within a caller-owned session. Like
# UserStore it never commits on its own.
# =============================================================================

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from core.models.records import PlaceRecord
from lib.utils import canonical_id


class PlaceStore:
    """Repository for the places table."""

    def __init__(self, session: Session):
        self._session = session

    def get(self, place_id: object) -> PlaceRecord | None:
        """Fetch a place by id. Malformed ids match nothing."""
        key = canonical_id(place_id)
        if key is None:
            return None
        return self._session.get(PlaceRecord, key)

    def list_by_creator(self, user_id: object) -> list[PlaceRecord]:
        key = canonical_id(user_id)
        if key is None:
            return []
        stmt = (
            select(PlaceRecord)
            .where(PlaceRecord.creator_id == key)
            .order_by(PlaceRecord.created_at)
        )
        return list(self._session.execute(stmt).scalars().all())

    def add(self, place: PlaceRecord) -> PlaceRecord:
        self._session.add(place)
        self._session.flush()
        return place

    def delete(self, place_id: str) -> None:
        self._session.execute(delete(PlaceRecord).where(PlaceRecord.id == place_id))
