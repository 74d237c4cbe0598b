# File: gallery/crud/activity_log.py
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from gallery.models.activity_log import ActivityLog


def log_activity(
    db: Session,
    activity_type: str,
    details: Dict[str, Any],
    event_id: Optional[int] = None,
    actor: Optional[str] = None,
) -> ActivityLog:
    """Add an audit entry to the current transaction; the caller commits."""
    entry = ActivityLog(
        activity_type=activity_type,
        event_id=event_id,
        actor=actor,
        details=details,
    )
    db.add(entry)
    return entry


def get_for_event(db: Session, event_id: int, limit: int = 100) -> List[ActivityLog]:
    return (
        db.query(ActivityLog)
        .filter(ActivityLog.event_id == event_id)
        .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
        .limit(limit)
        .all()
    )
