# =============================================================================
# core/services/storage_service.py - Uploaded Image Storage
# =============================================================================
# Validates and stores uploaded images in a local directory, and removes
# them again when a request fails or a place is deleted.
# =============================================================================

import logging
from pathlib import Path

from app.exceptions import InvalidImageError
from lib.utils import new_id

logger = logging.getLogger(__name__)

MIME_EXTENSIONS = {
    "image/png": "png",
    "image/jpg": "jpg",
    "image/jpeg": "jpeg",
}


class ImageStorage:
    """
    Service for image files referenced by users and places.

    Stored paths are returned as strings joined onto the configured upload
    directory (e.g. "uploads/images/<uuid>.png"); that string is what the
    database keeps.
    """

    def __init__(
        self,
        upload_dir: str,
        max_size_bytes: int = 500_000,
        allowed_types: list[str] | None = None,
    ):
        self.upload_dir = upload_dir
        self.max_size_bytes = max_size_bytes
        self.allowed_types = allowed_types or list(MIME_EXTENSIONS)

    def ensure_directory(self) -> None:
        Path(self.upload_dir).mkdir(parents=True, exist_ok=True)

    def save(self, content: bytes, content_type: str | None) -> str:
        """
        Validate and write an uploaded image.

        Args:
            content: Raw file bytes
            content_type: MIME type reported by the client

        Returns:
            Stored path of the new file

        Raises:
            InvalidImageError: If the type is not allowed, or the file is
                empty or too large
        """
        mime = (content_type or "").lower()
        if mime not in self.allowed_types or mime not in MIME_EXTENSIONS:
            raise InvalidImageError("Invalid image type.")
        if not content:
            raise InvalidImageError("Image file is empty.")
        if len(content) > self.max_size_bytes:
            raise InvalidImageError("Image is too large.")

        self.ensure_directory()
        path = f"{self.upload_dir.rstrip('/')}/{new_id()}.{MIME_EXTENSIONS[mime]}"
        Path(path).write_bytes(content)

        logger.info(f"Stored image: {path} ({len(content)} bytes)")
        return path

    def delete(self, path: str) -> bool:
        """
        Best-effort removal of a stored image.

        Never raises: a missing file, a path outside the upload directory or
        an OS error is logged and reported as False.
        """
        try:
            target = Path(path).resolve()
            root = Path(self.upload_dir).resolve()
            if root not in target.parents:
                logger.warning(f"Refusing to delete file outside upload dir: {path}")
                return False
            target.unlink()
            logger.info(f"Deleted image: {path}")
            return True
        except FileNotFoundError:
            logger.warning(f"Image already gone: {path}")
            return False
        except OSError as e:
            logger.warning(f"Failed to delete image {path}: {e}")
            return False
