# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from typing import Any
from uuid import UUID, uuid4


# =============================================================================
# Identifier Utilities
# =============================================================================

def new_id() -> str:
    """Generate a fresh record identifier (UUID4, hex form)."""
    return uuid4().hex


def canonical_id(value: Any) -> str | None:
    """
    Normalize an identifier to its canonical string form.

    Accepts UUID objects and UUID strings in any of the standard spellings
    (hex, hyphenated, braced, upper-case). Anything else, including non-string
    types and malformed strings, has no canonical form and returns None.

    Example:
        canonical_id("550E8400-E29B-41D4-A716-446655440000")  # "550e8400e29b41d4a716446655440000"
        canonical_id(42)  # None
    """
    if isinstance(value, UUID):
        return value.hex
    if not isinstance(value, str):
        return None
    try:
        return UUID(value.strip()).hex
    except ValueError:
        return None


def same_identity(left: Any, right: Any) -> bool:
    """
    Compare two identifiers after normalization.

    Values without a canonical form never match anything, not even each other.
    """
    left_id = canonical_id(left)
    right_id = canonical_id(right)
    return left_id is not None and left_id == right_id


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for errors raised by the lib/ modules.

    lib/ does not know about HTTP, so these errors carry a machine-readable
    code and a message; the service layer translates them into API errors.

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
