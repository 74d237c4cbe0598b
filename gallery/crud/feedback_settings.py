# File: gallery/crud/feedback_settings.py
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from gallery.crud.base import CRUDBase
from gallery.models.feedback import EventFeedbackSettings
from gallery.schemas.feedback import FeedbackSettingsUpdate


class CRUDFeedbackSettings(CRUDBase[EventFeedbackSettings, FeedbackSettingsUpdate, FeedbackSettingsUpdate]):

    def get_by_event(self, db: Session, *, event_id: int) -> Optional[EventFeedbackSettings]:
        return (
            db.query(EventFeedbackSettings)
            .filter(EventFeedbackSettings.event_id == event_id)
            .first()
        )

    def upsert(self, db: Session, *, event_id: int, values: Dict[str, Any]) -> EventFeedbackSettings:
        """Insert or partially update the event's row. Does not commit."""
        existing = self.get_by_event(db, event_id=event_id)
        if existing:
            for field, value in values.items():
                setattr(existing, field, value)
            db.add(existing)
            db.flush()
            return existing

        db_obj = EventFeedbackSettings(event_id=event_id, **values)
        db.add(db_obj)
        db.flush()
        return db_obj


feedback_settings = CRUDFeedbackSettings(EventFeedbackSettings)
