# File: gallery/schemas/feedback.py
from pydantic import BaseModel, Field, validator
from typing import List, Literal, Optional
from datetime import datetime

from gallery.schemas.photo import PhotoFeedbackStats


# ---------------------------
# Settings
# ---------------------------
class FeedbackSettingsBase(BaseModel):
    feedback_enabled: bool = False
    allow_ratings: bool = True
    allow_likes: bool = True
    allow_comments: bool = False
    allow_favorites: bool = True
    require_name_email: bool = False
    moderate_comments: bool = True
    show_feedback_to_guests: bool = True


class FeedbackSettings(FeedbackSettingsBase):
    event_id: int

    class Config:
        from_attributes = True


class FeedbackSettingsUpdate(BaseModel):
    feedback_enabled: Optional[bool] = None
    allow_ratings: Optional[bool] = None
    allow_likes: Optional[bool] = None
    allow_comments: Optional[bool] = None
    allow_favorites: Optional[bool] = None
    require_name_email: Optional[bool] = None
    moderate_comments: Optional[bool] = None
    show_feedback_to_guests: Optional[bool] = None


# ---------------------------
# Submission
# ---------------------------
class FeedbackCreate(BaseModel):
    # Range and content checks live in FeedbackService so that direct service
    # callers get the same ValidationError as API callers.
    feedback_type: Optional[str] = None
    rating: Optional[int] = None
    comment: Optional[str] = None
    guest_name: Optional[str] = Field(None, max_length=255)
    guest_email: Optional[str] = Field(None, max_length=255)


class ClientInfo(BaseModel):
    guest_id: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class FeedbackResponse(BaseModel):
    id: int
    photo_id: int
    feedback_type: str
    rating: Optional[int] = None
    comment_text: Optional[str] = None
    guest_name: Optional[str] = None
    is_approved: bool
    is_hidden: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FeedbackSubmitResult(BaseModel):
    action: Literal["added", "updated", "removed"]
    feedback_type: str
    feedback: Optional[FeedbackResponse] = None


# ---------------------------
# Queries
# ---------------------------
class PhotoFeedbackQuery(BaseModel):
    feedback_type: Optional[str] = None
    approved_only: bool = False
    include_hidden: bool = False
    guest_identifier: Optional[str] = None


class PhotoFilter(BaseModel):
    liked: bool = False
    favorited: bool = False
    operator: str = "OR"

    @validator("operator", pre=True)
    def normalize_operator(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class ModerationRequest(BaseModel):
    action: str


# ---------------------------
# Admin views
# ---------------------------
class EventFeedbackTotals(BaseModel):
    unique_raters: int = 0
    total_ratings: int = 0
    total_likes: int = 0
    total_comments: int = 0
    total_favorites: int = 0


class EventFeedbackSummary(BaseModel):
    photos: List[PhotoFeedbackStats]
    stats: EventFeedbackTotals


class PendingFeedback(BaseModel):
    id: int
    event_id: int
    photo_id: int
    feedback_type: str
    comment_text: Optional[str] = None
    guest_name: Optional[str] = None
    guest_email: Optional[str] = None
    created_at: datetime
    photo_filename: str
    event_name: str


class FeedbackExportRow(BaseModel):
    filename: str
    feedback_type: str
    rating: Optional[int] = None
    comment_text: Optional[str] = None
    guest_name: Optional[str] = None
    guest_email: Optional[str] = None
    created_at: datetime


class AdminFeedback(FeedbackResponse):
    event_id: int
    guest_identifier: str
    guest_email: Optional[str] = None
    ip_address: Optional[str] = None


class GuestToken(BaseModel):
    guest_token: str
    guest_id: str
    event_id: int
