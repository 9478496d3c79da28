# =============================================================================
# core/services/place_service.py - Place Business Logic
# =============================================================================
# Creates, reads, updates and deletes places. Creating and deleting touch
# two tables (places and the owner's place list in user_places); both
# writes happen inside one transaction so they land together or not at
# all. Only a place's creator may update or delete it.
# =============================================================================

import logging

from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import (
    GeocodeError,
    InternalFailureError,
    NotPlaceOwnerError,
    PlaceNotFoundError,
    UserNotFoundError,
    UserPlacesNotFoundError,
)
from core.models.place import PlaceResponse
from core.models.records import PlaceRecord
from core.services.context import ServiceContext
from core.store import PlaceStore, UserStore
from lib.geocoder import GeocodingError
from lib.utils import same_identity

logger = logging.getLogger(__name__)


class PlaceService:
    """
    Service for place operations.

    The only component that writes both a place and its owner's place list.
    Storage errors are logged and reported as InternalFailureError; nothing
    is retried.
    """

    def __init__(self, context: ServiceContext):
        self._db = context.database
        self._geocoder = context.geocoder
        self._images = context.images

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_place(self, place_id: str) -> PlaceResponse:
        try:
            with self._db.session() as session:
                place = PlaceStore(session).get(place_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch place {place_id}: {e}")
            raise InternalFailureError("Something went wrong. Could not find a place.")

        if place is None:
            raise PlaceNotFoundError(place_id)
        return PlaceResponse.from_record(place)

    def get_places_by_user(self, user_id: str) -> list[PlaceResponse]:
        """
        List the places created by a user.

        Raises:
            UserPlacesNotFoundError: If the user has no places (or does not exist)
        """
        try:
            with self._db.session() as session:
                places = PlaceStore(session).list_by_creator(user_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to list places for user {user_id}: {e}")
            raise InternalFailureError("Something went wrong.")

        if not places:
            raise UserPlacesNotFoundError(user_id)
        return [PlaceResponse.from_record(p) for p in places]

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def create_place(
        self,
        title: str,
        description: str,
        address: str,
        image_path: str,
        requester_id: str,
    ) -> PlaceResponse:
        """
        Create a place owned by the requester.

        Steps:
        1. Geocode the address (before any database work)
        2. In one transaction: check the requester exists, insert the place,
           append it to the requester's place list
        3. Commit; on any storage error neither write is kept

        Raises:
            GeocodeError: If the address cannot be resolved
            UserNotFoundError: If requester_id names no user
            InternalFailureError: If the transaction fails
        """
        try:
            coordinates = self._geocoder.geocode(address)
        except GeocodingError as e:
            raise GeocodeError(e.message, address=address, address_not_found=e.address_not_found)

        try:
            with self._db.transaction() as session:
                users = UserStore(session)
                owner = users.get(requester_id)
                if owner is None:
                    raise UserNotFoundError(requester_id)

                place = PlaceStore(session).add(
                    PlaceRecord(
                        title=title,
                        description=description,
                        address=address,
                        lat=coordinates.lat,
                        lng=coordinates.lng,
                        image=image_path,
                        creator_id=owner.id,
                    )
                )
                users.append_place(owner.id, place.id)
        except SQLAlchemyError as e:
            logger.error(f"Creating place for user {requester_id} failed: {e}")
            raise InternalFailureError("Creating place failed, please try again.")

        logger.info(f"Created place {place.id} for user {owner.id}")
        return PlaceResponse.from_record(place)

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    def update_place(
        self,
        place_id: str,
        title: str,
        description: str,
        requester_id: str,
    ) -> PlaceResponse:
        """
        Change a place's title and description. Single-row update.

        Raises:
            PlaceNotFoundError: If the place does not exist
            NotPlaceOwnerError: If the requester is not the creator
            InternalFailureError: If the update fails
        """
        try:
            with self._db.transaction() as session:
                place = PlaceStore(session).get(place_id)
                if place is None:
                    raise PlaceNotFoundError(place_id)
                if not same_identity(place.creator_id, requester_id):
                    raise NotPlaceOwnerError(place_id, action="edit")

                place.title = title
                place.description = description
        except SQLAlchemyError as e:
            logger.error(f"Updating place {place_id} failed: {e}")
            raise InternalFailureError("Updating place failed, please try again.")

        logger.info(f"Updated place {place.id}")
        return PlaceResponse.from_record(place)

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    def delete_place(self, place_id: str, requester_id: str) -> None:
        """
        Delete a place and remove it from its owner's place list.

        Both writes commit as one transaction. Afterwards the place's image
        is deleted best-effort; a failure there is only logged.

        Raises:
            PlaceNotFoundError: If the place does not exist
            NotPlaceOwnerError: If the requester is not the creator
            InternalFailureError: If the transaction fails
        """
        try:
            with self._db.transaction() as session:
                place = PlaceStore(session).get(place_id)
                if place is None:
                    raise PlaceNotFoundError(place_id)
                if not same_identity(place.creator_id, requester_id):
                    raise NotPlaceOwnerError(place_id, action="delete")

                image_path = place.image
                # Link first: user_places.place_id references places.id
                UserStore(session).remove_place(place.creator_id, place.id)
                PlaceStore(session).delete(place.id)
        except SQLAlchemyError as e:
            logger.error(f"Deleting place {place_id} failed: {e}")
            raise InternalFailureError("Place deletion failed.")

        logger.info(f"Deleted place {place_id}")
        self._images.delete(image_path)
