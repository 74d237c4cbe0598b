from .base import BaseModel
from .event import Event
from .photo import Photo, PhotoType
from .feedback import EventFeedbackSettings, FeedbackType, PhotoFeedback, TOGGLE_FEEDBACK_TYPES
from .activity_log import ActivityLog

__all__ = [
    "BaseModel",
    "Event",
    "Photo",
    "PhotoType",
    "EventFeedbackSettings",
    "FeedbackType",
    "PhotoFeedback",
    "TOGGLE_FEEDBACK_TYPES",
    "ActivityLog",
]
