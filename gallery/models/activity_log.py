# File: gallery/models/activity_log.py
from sqlalchemy import Column, String, Integer, ForeignKey, JSON
from gallery.models.base import BaseModel


class ActivityLog(BaseModel):
    __tablename__ = "activity_logs"

    activity_type = Column(String(100), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="SET NULL"), nullable=True, index=True)
    actor = Column(String(255), nullable=True)
    details = Column(JSON, nullable=True)
