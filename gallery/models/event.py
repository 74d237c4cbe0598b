# File: gallery/models/event.py
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from gallery.models.base import BaseModel


class Event(BaseModel):
    __tablename__ = "events"

    slug = Column(String(255), nullable=False, unique=True, index=True)
    event_name = Column(String(255), nullable=False)

    # Relationships
    photos = relationship("Photo", back_populates="event", cascade="all, delete-orphan")
    feedback_settings = relationship(
        "EventFeedbackSettings", back_populates="event", uselist=False, cascade="all, delete-orphan"
    )
