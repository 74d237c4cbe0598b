from .feedback_aggregator import FeedbackAggregator
from .feedback_service import FeedbackService

__all__ = ["FeedbackAggregator", "FeedbackService"]
