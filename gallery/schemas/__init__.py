from .photo import PhotoOut, PhotoFeedbackStats
from .feedback import (
    FeedbackSettings,
    FeedbackSettingsUpdate,
    FeedbackCreate,
    ClientInfo,
    FeedbackResponse,
    FeedbackSubmitResult,
    PhotoFeedbackQuery,
    PhotoFilter,
    ModerationRequest,
    EventFeedbackSummary,
    EventFeedbackTotals,
    PendingFeedback,
    FeedbackExportRow,
    AdminFeedback,
    GuestToken,
)
