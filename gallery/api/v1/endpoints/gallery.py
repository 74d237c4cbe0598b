# File: gallery/api/v1/endpoints/gallery.py
"""Guest-facing gallery routes."""
from pathlib import Path
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session
from gallery import crud
from gallery.api import deps
from gallery.core.config import settings
from gallery.core.exceptions import GuestTokenError
from gallery.core.security import create_guest_token, new_guest_id
from gallery.db.database import get_db
from gallery.models.event import Event
from gallery.models.photo import Photo
from gallery.schemas.feedback import (
    ClientInfo,
    FeedbackCreate,
    FeedbackResponse,
    FeedbackSettings,
    FeedbackSubmitResult,
    GuestToken,
    PhotoFeedbackQuery,
    PhotoFilter,
)
from gallery.schemas.photo import PhotoOut
from gallery.services.feedback_service import FeedbackService
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_photo_or_404(db: Session, event: Event, photo_id: int) -> Photo:
    photo = crud.photo.get_in_event(db, event_id=event.id, photo_id=photo_id)
    if not photo:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Photo not found")
    return photo


@router.post("/{slug}/guest-token", response_model=GuestToken)
def issue_guest_token(
    event: Event = Depends(deps.get_event_by_slug),
    guest_id: Optional[str] = Depends(deps.get_optional_guest_id),
) -> Any:
    """Issue a guest token, or refresh the one the caller already holds"""
    guest_id = guest_id or new_guest_id()
    token = create_guest_token(event.id, guest_id)
    return GuestToken(guest_token=token, guest_id=guest_id, event_id=event.id)


@router.get("/{slug}/feedback-settings", response_model=FeedbackSettings)
def get_gallery_feedback_settings(
    event: Event = Depends(deps.get_event_by_slug),
    db: Session = Depends(get_db),
    service: FeedbackService = Depends(deps.get_feedback_service),
) -> Any:
    return service.get_event_feedback_settings(db, event.id)


@router.get("/{slug}/photos", response_model=List[PhotoOut])
def list_gallery_photos(
    event: Event = Depends(deps.get_event_by_slug),
    db: Session = Depends(get_db),
    service: FeedbackService = Depends(deps.get_feedback_service),
    guest_id: Optional[str] = Depends(deps.get_optional_guest_id),
    category_id: Optional[int] = None,
    liked: bool = False,
    favorited: bool = False,
    operator: str = Query(
        "OR",
        description=(
            "How liked and favorited combine when both are set: AND or OR, case-insensitive. "
            "Any other value is rejected with 400 VALIDATION_001 rather than read as OR."
        ),
    ),
) -> Any:
    """List photos, optionally narrowed to the guest's liked/favorited ones

    Filtering by feedback needs a guest token. ``operator`` is only read when
    a feedback filter is set.
    """
    photos = crud.photo.get_by_event(db, event_id=event.id, category_id=category_id)
    if not liked and not favorited:
        return photos

    if not guest_id:
        raise GuestTokenError("A guest token is required to filter by feedback")

    matching_ids = set(
        service.get_filtered_photos(
            db, event.id, guest_id, PhotoFilter(liked=liked, favorited=favorited, operator=operator)
        )
    )
    return [photo for photo in photos if photo.id in matching_ids]


@router.get("/{slug}/photos/{photo_id}/download")
def download_photo(
    photo_id: int,
    event: Event = Depends(deps.get_event_by_slug),
    db: Session = Depends(get_db),
):
    photo = _get_photo_or_404(db, event, photo_id)

    storage_dir = Path(settings.PHOTO_STORAGE_DIR).resolve()
    path = (storage_dir / photo.filename).resolve()
    if storage_dir not in path.parents or not path.is_file():
        logger.warning(f"Original for photo {photo.id} not found in storage: {photo.filename}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Photo file not found")

    logger.info(f"Photo {photo.id} downloaded from gallery {event.slug}")
    return FileResponse(path, filename=Path(photo.filename).name)


@router.post("/{slug}/photos/{photo_id}/feedback", response_model=FeedbackSubmitResult)
def submit_photo_feedback(
    photo_id: int,
    feedback_in: FeedbackCreate,
    event: Event = Depends(deps.get_event_by_slug),
    db: Session = Depends(get_db),
    service: FeedbackService = Depends(deps.get_feedback_service),
    client_info: ClientInfo = Depends(deps.get_client_info),
) -> Any:
    """Like, favorite, rate or comment on a photo"""
    _get_photo_or_404(db, event, photo_id)
    service.validate_feedback(feedback_in)

    event_settings = service.get_event_feedback_settings(db, event.id)
    service.check_feedback_allowed(event_settings, feedback_in)

    return service.submit_feedback(db, event.id, photo_id, feedback_in, client_info)


@router.get("/{slug}/photos/{photo_id}/feedback", response_model=List[FeedbackResponse])
def get_public_photo_feedback(
    photo_id: int,
    event: Event = Depends(deps.get_event_by_slug),
    db: Session = Depends(get_db),
    service: FeedbackService = Depends(deps.get_feedback_service),
    feedback_type: Optional[str] = None,
) -> Any:
    """Approved, visible feedback other guests can see"""
    _get_photo_or_404(db, event, photo_id)

    event_settings = service.get_event_feedback_settings(db, event.id)
    if not event_settings.show_feedback_to_guests:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Feedback is not shown to guests")

    return service.get_photo_feedback(
        db, photo_id, PhotoFeedbackQuery(feedback_type=feedback_type, approved_only=True)
    )


@router.get("/{slug}/photos/{photo_id}/my-feedback", response_model=List[FeedbackResponse])
def get_my_photo_feedback(
    photo_id: int,
    event: Event = Depends(deps.get_event_by_slug),
    db: Session = Depends(get_db),
    service: FeedbackService = Depends(deps.get_feedback_service),
    client_info: ClientInfo = Depends(deps.get_client_info),
) -> Any:
    """Everything the calling guest has left on a photo, pending comments included"""
    _get_photo_or_404(db, event, photo_id)

    return service.get_photo_feedback(
        db, photo_id, PhotoFeedbackQuery(guest_identifier=service.resolve_guest_id(client_info))
    )
