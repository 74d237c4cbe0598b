# File: gallery/models/feedback.py
from sqlalchemy import Column, String, Integer, Text, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from gallery.models.base import BaseModel
import enum


class FeedbackType(str, enum.Enum):
    LIKE = "like"
    RATING = "rating"
    COMMENT = "comment"
    FAVORITE = "favorite"


# Types that act as on/off switches per guest
TOGGLE_FEEDBACK_TYPES = (FeedbackType.LIKE.value, FeedbackType.FAVORITE.value)


class EventFeedbackSettings(BaseModel):
    __tablename__ = "event_feedback_settings"

    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, unique=True)

    feedback_enabled = Column(Boolean, nullable=False, default=False)
    allow_ratings = Column(Boolean, nullable=False, default=True)
    allow_likes = Column(Boolean, nullable=False, default=True)
    allow_comments = Column(Boolean, nullable=False, default=False)
    allow_favorites = Column(Boolean, nullable=False, default=True)
    require_name_email = Column(Boolean, nullable=False, default=False)
    moderate_comments = Column(Boolean, nullable=False, default=True)
    show_feedback_to_guests = Column(Boolean, nullable=False, default=True)

    # Relationships
    event = relationship("Event", back_populates="feedback_settings")


class PhotoFeedback(BaseModel):
    __tablename__ = "photo_feedback"
    __table_args__ = (
        UniqueConstraint(
            "event_id", "photo_id", "guest_identifier", "feedback_type",
            name="uq_photo_feedback_guest_type",
        ),
    )

    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    photo_id = Column(Integer, ForeignKey("photos.id", ondelete="CASCADE"), nullable=False, index=True)
    guest_identifier = Column(String(255), nullable=False, index=True)
    feedback_type = Column(String(20), nullable=False)

    rating = Column(Integer, nullable=True)  # 1-5, rating rows only
    comment_text = Column(Text, nullable=True)  # comment rows only
    guest_name = Column(String(255), nullable=True)
    guest_email = Column(String(255), nullable=True)

    # Tracking
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(String(500), nullable=True)

    # Moderation
    is_approved = Column(Boolean, nullable=False, default=True)
    is_hidden = Column(Boolean, nullable=False, default=False)

    # Relationships
    photo = relationship("Photo", back_populates="feedback")
    event = relationship("Event")
