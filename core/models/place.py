# =============================================================================
# core/models/place.py - Place Schemas
# =============================================================================
# These models define the API contract for place operations:
# - PlaceCreateForm: Fields of the multipart create request
# - PlaceUpdate: JSON body of the update request
# - PlaceResponse: Place as returned to clients
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field

from core.models.records import PlaceRecord


class Location(BaseModel):
    """Coordinates resolved from the place's address."""
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class PlaceCreateForm(BaseModel):
    """
    Text fields submitted with a new place.

    The image travels in the same multipart request but is handled by
    ImageStorage, not by this model.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=5)
    address: str = Field(..., min_length=1, max_length=1024)


class PlaceUpdate(BaseModel):
    """Editable fields of a place. Address and creator never change."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {"title": "Empire State Building", "description": "Famous sky scraper"}
        },
    )

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=5)


class PlaceResponse(BaseModel):
    """
    Place as returned to clients.

    Example:
        {
            "id": "3f0c...",
            "title": "Googleplex",
            "description": "Google headquarters",
            "address": "1600 Amphitheatre Parkway",
            "location": {"lat": 37.422, "lng": -122.084},
            "image": "uploads/images/9b1e....png",
            "creator": "a71d..."
        }
    """

    id: str
    title: str
    description: str
    address: str
    location: Location
    image: str
    creator: str

    @classmethod
    def from_record(cls, record: PlaceRecord) -> "PlaceResponse":
        return cls(
            id=record.id,
            title=record.title,
            description=record.description,
            address=record.address,
            location=Location(lat=record.lat, lng=record.lng),
            image=record.image,
            creator=record.creator_id,
        )
