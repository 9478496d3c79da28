# =============================================================================
# core/store/user_store.py - User Repository
# =============================================================================
# Reads and writes users and their place lists within a caller-owned
# session. The store never commits: the caller decides the transaction
# boundary, so a place-list change can commit together with a place write.
# =============================================================================

import logging

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from core.models.records import UserPlaceRecord, UserRecord
from lib.utils import canonical_id

logger = logging.getLogger(__name__)


class UserStore:
    """Repository for the users and user_places tables."""

    def __init__(self, session: Session):
        self._session = session

    def get(self, user_id: object) -> UserRecord | None:
        """Fetch a user by id. Malformed ids match nothing."""
        key = canonical_id(user_id)
        if key is None:
            return None
        return self._session.get(UserRecord, key)

    def get_by_email(self, email: str) -> UserRecord | None:
        stmt = select(UserRecord).where(UserRecord.email == email)
        return self._session.execute(stmt).scalar_one_or_none()

    def list_all(self) -> list[UserRecord]:
        stmt = select(UserRecord).order_by(UserRecord.created_at)
        return list(self._session.execute(stmt).scalars().all())

    def add(self, user: UserRecord) -> UserRecord:
        """Insert a user; the unique email constraint is checked at flush."""
        self._session.add(user)
        self._session.flush()
        return user

    # -------------------------------------------------------------------------
    # Place list
    # -------------------------------------------------------------------------

    def place_ids(self, user_id: str) -> list[str]:
        stmt = select(UserPlaceRecord.place_id).where(UserPlaceRecord.user_id == user_id)
        return list(self._session.execute(stmt).scalars().all())

    def append_place(self, user_id: str, place_id: str) -> None:
        self._session.add(UserPlaceRecord(user_id=user_id, place_id=place_id))
        self._session.flush()
        logger.debug(f"Linked place {place_id} to user {user_id}")

    def remove_place(self, user_id: str, place_id: str) -> None:
        self._session.execute(
            delete(UserPlaceRecord).where(
                UserPlaceRecord.user_id == user_id,
                UserPlaceRecord.place_id == place_id,
            )
        )
        logger.debug(f"Unlinked place {place_id} from user {user_id}")
