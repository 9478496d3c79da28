# =============================================================================
# app/routers/places.py - Place Endpoints
# =============================================================================
# Reading places is public; creating, editing and deleting require a
# bearer token, and editing/deleting additionally require ownership.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, Request, UploadFile, status
from pydantic import BaseModel, ValidationError

from app.auth import AuthUser, get_current_user
from app.dependencies import ContextDep, PlaceServiceDep
from app.exceptions import ValidationFailedError
from core.models.place import PlaceCreateForm, PlaceResponse, PlaceUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class PlaceEnvelope(BaseModel):
    place: PlaceResponse


class PlaceListEnvelope(BaseModel):
    places: list[PlaceResponse]


class MessageResponse(BaseModel):
    message: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/user/{uid}", response_model=PlaceListEnvelope)
def get_places_by_user(
    uid: Annotated[str, Path(description="User id")],
    places: PlaceServiceDep,
):
    """List the places created by a user. 404 when there are none."""
    return PlaceListEnvelope(places=places.get_places_by_user(uid))


@router.get("/{pid}", response_model=PlaceEnvelope)
def get_place(
    pid: Annotated[str, Path(description="Place id")],
    places: PlaceServiceDep,
):
    return PlaceEnvelope(place=places.get_place(pid))


@router.post("", response_model=PlaceEnvelope, status_code=status.HTTP_201_CREATED)
def create_place(
    request: Request,
    title: Annotated[str, Form()],
    description: Annotated[str, Form()],
    address: Annotated[str, Form()],
    image: Annotated[UploadFile, File(description="PNG or JPEG image")],
    places: PlaceServiceDep,
    context: ContextDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a place owned by the caller.

    This endpoint:
    1. Validates the text fields
    2. Stores the uploaded image
    3. Geocodes the address
    4. Inserts the place and links it to the caller in one transaction

    If any step after (2) fails, the stored image is removed again by the
    error handlers.
    """
    try:
        form = PlaceCreateForm(title=title, description=description, address=address)
    except ValidationError as e:
        raise ValidationFailedError.from_pydantic(e)

    content = image.file.read(context.images.max_size_bytes + 1)
    request.state.upload_path = context.images.save(content, image.content_type)

    place = places.create_place(
        title=form.title,
        description=form.description,
        address=form.address,
        image_path=request.state.upload_path,
        requester_id=user.id,
    )
    return PlaceEnvelope(place=place)


@router.patch("/{pid}", response_model=PlaceEnvelope)
def update_place(
    pid: Annotated[str, Path(description="Place id")],
    payload: PlaceUpdate,
    places: PlaceServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Change title and description. Only the creator may do this."""
    place = places.update_place(
        place_id=pid,
        title=payload.title,
        description=payload.description,
        requester_id=user.id,
    )
    return PlaceEnvelope(place=place)


@router.delete("/{pid}", response_model=MessageResponse)
def delete_place(
    pid: Annotated[str, Path(description="Place id")],
    places: PlaceServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Delete a place and unlink it from its creator. Only the creator may do this."""
    places.delete_place(place_id=pid, requester_id=user.id)
    return MessageResponse(message="Deleted successfully")
