# =============================================================================
# core/services/context.py - Service Context
# =============================================================================
# Bundles the long-lived collaborators (database, credentials, geocoder,
# image storage) into one explicitly constructed object. The FastAPI
# lifespan starts it, routes receive it through a dependency, and tests
# build their own with fakes.
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Protocol

from app.config import Settings
from core.models import records  # noqa: F401  (registers tables on Base.metadata)
from core.services.storage_service import ImageStorage
from lib.credentials import CredentialService
from lib.database import Database
from lib.geocoder import Coordinates, Geocoder

logger = logging.getLogger(__name__)


class AddressResolver(Protocol):
    """Anything that turns an address into coordinates (Geocoder or a test fake)."""

    def geocode(self, address: str) -> Coordinates: ...


@dataclass
class ServiceContext:
    database: Database
    credentials: CredentialService
    geocoder: AddressResolver
    images: ImageStorage

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceContext":
        return cls(
            database=Database(settings.DATABASE_URL),
            credentials=CredentialService(
                secret_key=settings.JWT_SECRET_KEY,
                algorithm=settings.JWT_ALGORITHM,
                token_lifetime_seconds=settings.token_lifetime_seconds,
                hash_iterations=settings.PASSWORD_HASH_ITERATIONS,
            ),
            geocoder=Geocoder(
                api_key=settings.GOOGLE_API_KEY,
                base_url=settings.GEOCODING_URL,
                timeout=settings.GEOCODING_TIMEOUT_SECONDS,
            ),
            images=ImageStorage(
                upload_dir=settings.UPLOAD_DIR,
                max_size_bytes=settings.MAX_IMAGE_SIZE_BYTES,
                allowed_types=settings.allowed_image_types_list,
            ),
        )

    def startup(self) -> None:
        self.database.create_schema()
        self.images.ensure_directory()
        logger.info("Service context started")

    def shutdown(self) -> None:
        close = getattr(self.geocoder, "close", None)
        if callable(close):
            close()
        self.database.dispose()
        logger.info("Service context stopped")
