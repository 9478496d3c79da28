# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Tokens are HS256 JWTs issued by CredentialService at sign-up/log-in and
# sent back as "Authorization: Bearer <token>".
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.delete("/{pid}")
#   def delete(pid: str, user: AuthUser = Depends(get_current_user)):
#       ...
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.models import AuthUser
from app.dependencies import get_context
from app.exceptions import UnauthorizedError
from core.services import ServiceContext
from lib.credentials import InvalidTokenError

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor. Missing headers are reported by us (401),
# not by FastAPI (403).
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    context: ServiceContext = Depends(get_context),
) -> AuthUser:
    """
    Extract and validate the caller from the bearer token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the JWT signature and expiry
    3. Returns an AuthUser with the user's ID and email

    Raises:
        UnauthorizedError: 401 if the header is missing or the token is
            malformed, tampered with or expired
    """
    if credentials is None or not credentials.credentials:
        logger.debug("Request without bearer token")
        raise UnauthorizedError()

    try:
        claims = context.credentials.verify_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning(f"JWT validation failed: {e.message}")
        raise UnauthorizedError()

    logger.debug(f"Authenticated user: {claims.user_id}")
    return AuthUser(id=claims.user_id, email=claims.email)
