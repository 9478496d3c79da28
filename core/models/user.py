# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for account operations:
# - SignupForm: Fields of the multipart sign-up request
# - LoginRequest: JSON body of the log-in request
# - AuthResult: Identity + token returned by sign-up and log-in
# - UserResponse: Public view of a user (never includes the password)
# =============================================================================

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from core.models.records import UserRecord


def normalize_email(email: str) -> str:
    return email.strip().lower()


class SignupForm(BaseModel):
    """Text fields submitted with a sign-up. The avatar image is handled separately."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, v):
        return normalize_email(v) if isinstance(v, str) else v


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthResult(BaseModel):
    """
    Returned by sign-up and log-in.

    Serialized with camelCase keys: {"userId": ..., "email": ..., "token": ...}
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    email: str
    token: str


class UserResponse(BaseModel):
    """Public view of a user. There is deliberately no password field."""

    id: str
    name: str
    email: str
    image: str
    places: list[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserResponse":
        return cls(
            id=record.id,
            name=record.name,
            email=record.email,
            image=record.image,
            places=record.place_ids,
        )
