from .event import event
from .photo import photo
from .feedback import photo_feedback
from .feedback_settings import feedback_settings
from . import activity_log

__all__ = ["event", "photo", "photo_feedback", "feedback_settings", "activity_log"]
