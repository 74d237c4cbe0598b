# File: gallery/schemas/photo.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class PhotoBase(BaseModel):
    filename: str
    url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    type: str = "single"
    category_id: Optional[int] = None
    requires_token: bool = False


class PhotoOut(PhotoBase):
    id: int
    event_id: int
    comment_count: int = 0
    like_count: int = 0
    favorite_count: int = 0
    feedback_count: int = 0
    average_rating: float = 0.0
    created_at: Optional[datetime] = None

    @property
    def has_feedback(self) -> bool:
        return self.feedback_count > 0

    class Config:
        from_attributes = True


class PhotoFeedbackStats(BaseModel):
    id: int
    filename: str
    feedback_count: int
    like_count: int
    comment_count: int
    favorite_count: int
    average_rating: float

    class Config:
        from_attributes = True
