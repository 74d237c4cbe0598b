"""Domain exceptions raised by the gallery services.

The API layer maps each class to an HTTP status in ``gallery.main``.
"""
from typing import Any, Dict, Optional


class GalleryError(Exception):
    """Base class for all gallery errors."""

    default_error_code = "GALLERY_001"
    status_code = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}


class ValidationError(GalleryError):
    """Rejected input: bad feedback type, rating out of range, empty comment."""

    default_error_code = "VALIDATION_001"
    status_code = 400


class NotFoundError(GalleryError):
    default_error_code = "NOT_FOUND_001"
    status_code = 404


class FeedbackNotAllowedError(GalleryError):
    """The event does not accept this kind of feedback."""

    default_error_code = "FEEDBACK_DISABLED_001"
    status_code = 403


class GuestTokenError(GalleryError):
    default_error_code = "GUEST_TOKEN_001"
    status_code = 401
