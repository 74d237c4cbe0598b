# File: gallery/models/photo.py
from sqlalchemy import Column, String, Integer, Float, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from gallery.models.base import BaseModel
import enum


class PhotoType(str, enum.Enum):
    SINGLE = "single"
    COLLAGE = "collage"


class Photo(BaseModel):
    __tablename__ = "photos"

    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    filename = Column(String(255), nullable=False)
    url = Column(String(500), nullable=True)
    thumbnail_url = Column(String(500), nullable=True)
    type = Column(String(20), nullable=False, default=PhotoType.SINGLE.value)
    category_id = Column(Integer, nullable=True, index=True)
    requires_token = Column(Boolean, nullable=False, default=False)

    # Denormalized counters, written only by FeedbackAggregator
    comment_count = Column(Integer, nullable=False, default=0)
    like_count = Column(Integer, nullable=False, default=0)
    favorite_count = Column(Integer, nullable=False, default=0)
    feedback_count = Column(Integer, nullable=False, default=0)
    average_rating = Column(Float, nullable=False, default=0.0)

    # Relationships
    event = relationship("Event", back_populates="photos")
    feedback = relationship("PhotoFeedback", back_populates="photo", cascade="all, delete-orphan")
