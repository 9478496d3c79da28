# =============================================================================
# lib/credentials.py - Password Hashing and Bearer Tokens
# =============================================================================
# Issues and verifies signed, time-limited JWTs (python-jose) and hashes
# passwords with salted PBKDF2-HMAC-SHA256.
#
# Usage:
#   credentials = CredentialService(secret_key="...")
#   token = credentials.issue_token(user_id, email)
#   claims = credentials.verify_token(token)   # raises InvalidTokenError
# =============================================================================

from __future__ import annotations

import hashlib
import hmac
import logging
import os
import time
from dataclasses import dataclass

from jose import ExpiredSignatureError, JWTError, jwt

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

HASH_SCHEME = "pbkdf2_sha256"
SALT_BYTES = 16
DEFAULT_TOKEN_LIFETIME_SECONDS = 24 * 60 * 60


class InvalidTokenError(ApplicationError):
    """Raised when a token fails signature, expiry or claim checks."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Invalid token: {reason}",
            code="INVALID_TOKEN",
            details={"reason": reason},
        )


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified token."""
    user_id: str
    email: str


class CredentialService:
    """
    Password hashing and token signing bound to one server secret.

    Tokens carry `userId` and `email` claims plus `iat`/`exp`. Their lifetime
    is fixed when issued.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        token_lifetime_seconds: int = DEFAULT_TOKEN_LIFETIME_SECONDS,
        hash_iterations: int = 310_000,
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._token_lifetime = token_lifetime_seconds
        self._iterations = hash_iterations

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------

    def issue_token(self, user_id: str, email: str, now: float | None = None) -> str:
        issued_at = int(now if now is not None else time.time())
        claims = {
            "userId": user_id,
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self._token_lifetime,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify_token(self, token: str) -> TokenClaims:
        """
        Verify signature and expiry, then return the embedded identity.

        Raises:
            InvalidTokenError: On a bad signature, an expired or malformed
                token, or missing identity claims
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            raise InvalidTokenError("token has expired")
        except JWTError as e:
            raise InvalidTokenError(str(e))

        user_id = payload.get("userId")
        email = payload.get("email")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidTokenError("missing userId claim")
        if not isinstance(email, str):
            raise InvalidTokenError("missing email claim")

        return TokenClaims(user_id=user_id, email=email)

    # -------------------------------------------------------------------------
    # Passwords
    # -------------------------------------------------------------------------

    def hash_password(self, password: str) -> str:
        """
        Hash a password with a fresh random salt.

        Format: ``pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>``. The
        iteration count is stored with the hash so it can be raised later
        without invalidating existing passwords.
        """
        salt = os.urandom(SALT_BYTES)
        digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, self._iterations)
        return f"{HASH_SCHEME}${self._iterations}${salt.hex()}${digest.hex()}"

    def verify_password(self, password: str, hashed_password: str) -> bool:
        try:
            scheme, iterations, salt_hex, hash_hex = hashed_password.split("$")
            if scheme != HASH_SCHEME:
                return False
            salt = bytes.fromhex(salt_hex)
            expected = bytes.fromhex(hash_hex)
            rounds = int(iterations)
        except (AttributeError, ValueError):
            logger.warning("Stored password hash has an unexpected format")
            return False

        digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
        return hmac.compare_digest(digest, expected)
