# File: gallery/api/v1/endpoints/feedback_admin.py
"""Event owner / admin routes for feedback settings, moderation and reports."""
import csv
import io
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from gallery import crud
from gallery.api import deps
from gallery.db.database import get_db
from gallery.models.event import Event
from gallery.schemas.feedback import (
    AdminFeedback,
    EventFeedbackSummary,
    FeedbackExportRow,
    FeedbackSettings,
    FeedbackSettingsUpdate,
    ModerationRequest,
    PendingFeedback,
    PhotoFeedbackQuery,
)
from gallery.services.feedback_service import FeedbackService

router = APIRouter()

EXPORT_COLUMNS = ["filename", "feedback_type", "rating", "comment_text", "guest_name", "guest_email", "created_at"]


def _get_event_or_404(db: Session, event_id: int) -> Event:
    event = crud.event.get(db, event_id)
    if not event:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return event


@router.get("/events/{event_id}/feedback-settings", response_model=FeedbackSettings)
def get_feedback_settings(
    event_id: int,
    db: Session = Depends(get_db),
    service: FeedbackService = Depends(deps.get_feedback_service),
    admin_id: str = Depends(deps.get_admin_id),
) -> Any:
    _get_event_or_404(db, event_id)
    return service.get_event_feedback_settings(db, event_id)


@router.put("/events/{event_id}/feedback-settings", response_model=FeedbackSettings)
def update_feedback_settings(
    event_id: int,
    settings_in: FeedbackSettingsUpdate,
    db: Session = Depends(get_db),
    service: FeedbackService = Depends(deps.get_feedback_service),
    admin_id: str = Depends(deps.get_admin_id),
) -> Any:
    _get_event_or_404(db, event_id)
    return service.update_event_feedback_settings(db, event_id, settings_in, actor=admin_id)


@router.get("/events/{event_id}/feedback-summary", response_model=EventFeedbackSummary)
def get_feedback_summary(
    event_id: int,
    db: Session = Depends(get_db),
    service: FeedbackService = Depends(deps.get_feedback_service),
    admin_id: str = Depends(deps.get_admin_id),
) -> Any:
    _get_event_or_404(db, event_id)
    return service.get_event_feedback_summary(db, event_id)


@router.get("/events/{event_id}/feedback/export", response_model=List[FeedbackExportRow])
def export_feedback(
    event_id: int,
    format: str = Query("json", pattern="^(json|csv)$"),
    db: Session = Depends(get_db),
    service: FeedbackService = Depends(deps.get_feedback_service),
    admin_id: str = Depends(deps.get_admin_id),
) -> Any:
    """Export all feedback for an event as JSON rows or a CSV file"""
    event = _get_event_or_404(db, event_id)
    rows = service.export_event_feedback(db, event_id)
    if format == "json":
        return rows

    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=EXPORT_COLUMNS)
    writer.writeheader()
    for row in rows:
        record = row.dict()
        record["created_at"] = row.created_at.isoformat()
        writer.writerow(record)
    buffer.seek(0)

    return StreamingResponse(
        iter([buffer.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{event.slug}-feedback.csv"'},
    )


@router.get("/feedback/pending", response_model=List[PendingFeedback])
def get_pending_feedback(
    event_id: Optional[int] = None,
    db: Session = Depends(get_db),
    service: FeedbackService = Depends(deps.get_feedback_service),
    admin_id: str = Depends(deps.get_admin_id),
) -> Any:
    """Comments waiting for moderation, optionally for one event"""
    return service.get_pending_moderation(db, event_id)


@router.get("/photos/{photo_id}/feedback", response_model=List[AdminFeedback])
def get_photo_feedback(
    photo_id: int,
    feedback_type: Optional[str] = None,
    approved_only: bool = False,
    include_hidden: bool = False,
    guest_identifier: Optional[str] = None,
    db: Session = Depends(get_db),
    service: FeedbackService = Depends(deps.get_feedback_service),
    admin_id: str = Depends(deps.get_admin_id),
) -> Any:
    options = PhotoFeedbackQuery(
        feedback_type=feedback_type,
        approved_only=approved_only,
        include_hidden=include_hidden,
        guest_identifier=guest_identifier,
    )
    return service.get_photo_feedback(db, photo_id, options)


@router.post("/feedback/{feedback_id}/moderate")
def moderate_feedback(
    feedback_id: int,
    moderation_in: ModerationRequest,
    db: Session = Depends(get_db),
    service: FeedbackService = Depends(deps.get_feedback_service),
    admin_id: str = Depends(deps.get_admin_id),
) -> Any:
    service.moderate_feedback(db, feedback_id, moderation_in.action, admin_id)
    return {"success": True, "feedback_id": feedback_id, "action": moderation_in.action}


@router.delete("/feedback/{feedback_id}")
def delete_feedback(
    feedback_id: int,
    db: Session = Depends(get_db),
    service: FeedbackService = Depends(deps.get_feedback_service),
    admin_id: str = Depends(deps.get_admin_id),
) -> Any:
    service.delete_feedback(db, feedback_id, admin_id)
    return {"success": True, "feedback_id": feedback_id}
