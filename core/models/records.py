# =============================================================================
# core/models/records.py - Database Tables
# =============================================================================
# SQLAlchemy mappings for the three tables:
# - users:       registered accounts (password stored as a salted hash)
# - places:      place rows, each pointing at its creator
# - user_places: each user's place list, one row per owned place
#
# Users and places reference each other only by identifier. The user's
# place list is its own table so that linking a place to its owner is a
# separate write which must commit together with the place row.
# =============================================================================

from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lib.database import Base
from lib.utils import new_id


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRecord(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    image: Mapped[str] = mapped_column(String(1024), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    # Read-only view of the place list; writes go through UserStore
    place_links: Mapped[list["UserPlaceRecord"]] = relationship(
        lazy="selectin",
        viewonly=True,
    )

    @property
    def place_ids(self) -> list[str]:
        return [link.place_id for link in self.place_links]

    def __repr__(self) -> str:
        return f"UserRecord(id={self.id!r}, email={self.email!r})"


class PlaceRecord(Base):
    __tablename__ = "places"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str] = mapped_column(String(1024), nullable=False)
    lat: Mapped[float] = mapped_column(Float, nullable=False)
    lng: Mapped[float] = mapped_column(Float, nullable=False)
    image: Mapped[str] = mapped_column(String(1024), nullable=False)
    creator_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("users.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"PlaceRecord(id={self.id!r}, creator_id={self.creator_id!r})"


class UserPlaceRecord(Base):
    __tablename__ = "user_places"

    user_id: Mapped[str] = mapped_column(String(32), ForeignKey("users.id"), primary_key=True)
    place_id: Mapped[str] = mapped_column(String(32), ForeignKey("places.id"), primary_key=True)
