# =============================================================================
# app/routers/users.py - Account Endpoints
# =============================================================================
# Sign-up (multipart, with avatar image), log-in (JSON) and user listing.
# None of these require a token; sign-up and log-in hand one out.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, File, Form, Request, UploadFile, status
from pydantic import BaseModel, ValidationError

from app.dependencies import ContextDep, UserServiceDep
from app.exceptions import ValidationFailedError
from core.models.user import AuthResult, LoginRequest, SignupForm, UserResponse

router = APIRouter()


class UserListEnvelope(BaseModel):
    users: list[UserResponse]


@router.get("", response_model=UserListEnvelope)
def list_users(users: UserServiceDep):
    """List all users. Passwords are never included."""
    return UserListEnvelope(users=users.list_users())


@router.post("/signup", response_model=AuthResult, status_code=status.HTTP_201_CREATED)
def sign_up(
    request: Request,
    name: Annotated[str, Form()],
    email: Annotated[str, Form()],
    password: Annotated[str, Form()],
    image: Annotated[UploadFile, File(description="Avatar image (PNG or JPEG)")],
    users: UserServiceDep,
    context: ContextDep,
):
    """
    Create an account and return its token.

    Fails with 422 on invalid input or when the email is already registered.
    """
    try:
        form = SignupForm(name=name, email=email, password=password)
    except ValidationError as e:
        raise ValidationFailedError.from_pydantic(e)

    content = image.file.read(context.images.max_size_bytes + 1)
    request.state.upload_path = context.images.save(content, image.content_type)

    return users.sign_up(
        name=form.name,
        email=form.email,
        password=form.password,
        image_path=request.state.upload_path,
    )


@router.post("/login", response_model=AuthResult)
def log_in(payload: LoginRequest, users: UserServiceDep):
    """Exchange email and password for a token. Fails with 403 on bad credentials."""
    return users.log_in(email=payload.email, password=payload.password)
