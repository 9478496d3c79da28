# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated caller extracted from a verified bearer token.

    This is the identity carried by the token itself, without querying
    the database.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
