# =============================================================================
# core/services/user_service.py - Account Business Logic
# =============================================================================
# Handles sign-up, log-in and user listing. Both sign-up and log-in end
# by issuing a bearer token for the account.
# =============================================================================

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.exceptions import (
    EmailAlreadyExistsError,
    InternalFailureError,
    WrongCredentialsError,
)
from core.models.records import UserRecord
from core.models.user import AuthResult, UserResponse, normalize_email
from core.services.context import ServiceContext
from core.store import UserStore

logger = logging.getLogger(__name__)


class UserService:
    """Service for account operations."""

    def __init__(self, context: ServiceContext):
        self._db = context.database
        self._credentials = context.credentials

    def list_users(self) -> list[UserResponse]:
        try:
            with self._db.session() as session:
                users = UserStore(session).list_all()
                return [UserResponse.from_record(u) for u in users]
        except SQLAlchemyError as e:
            logger.error(f"Failed to list users: {e}")
            raise InternalFailureError("Fetching users failed, please try again.")

    def sign_up(self, name: str, email: str, password: str, image_path: str) -> AuthResult:
        """
        Register a new account and log it in.

        Args:
            name: Display name
            email: Email address (normalized before storing)
            password: Plaintext password; only its hash is stored
            image_path: Stored path of the avatar image

        Returns:
            AuthResult with the new user's id, email and token

        Raises:
            EmailAlreadyExistsError: If the email is already registered
            InternalFailureError: If the user cannot be stored
        """
        email = normalize_email(email)
        hashed_password = self._credentials.hash_password(password)

        try:
            with self._db.transaction() as session:
                users = UserStore(session)
                if users.get_by_email(email) is not None:
                    raise EmailAlreadyExistsError(email)
                user = users.add(
                    UserRecord(
                        name=name,
                        email=email,
                        password=hashed_password,
                        image=image_path,
                    )
                )
        except IntegrityError:
            # Lost a race with a concurrent sign-up for the same email
            raise EmailAlreadyExistsError(email)
        except SQLAlchemyError as e:
            logger.error(f"Signing up {email} failed: {e}")
            raise InternalFailureError("Signing up failed, please try again.")

        logger.info(f"Signed up user {user.id}")
        return self._issue(user)

    def log_in(self, email: str, password: str) -> AuthResult:
        """
        Check credentials and issue a token.

        Unknown emails and wrong passwords fail the same way.

        Raises:
            WrongCredentialsError: If the email or password is wrong
        """
        email = normalize_email(email)
        try:
            with self._db.session() as session:
                user = UserStore(session).get_by_email(email)
        except SQLAlchemyError as e:
            logger.error(f"Log-in lookup for {email} failed: {e}")
            raise InternalFailureError("Something went wrong.")

        if user is None or not self._credentials.verify_password(password, user.password):
            logger.info(f"Rejected log-in for {email}")
            raise WrongCredentialsError()

        logger.info(f"Logged in user {user.id}")
        return self._issue(user)

    def _issue(self, user: UserRecord) -> AuthResult:
        token = self._credentials.issue_token(user.id, user.email)
        return AuthResult(user_id=user.id, email=user.email, token=token)
