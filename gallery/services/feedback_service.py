# File: gallery/services/feedback_service.py
from typing import List, Optional
from sqlalchemy.orm import Session
from gallery import crud
from gallery.core.config import Settings, settings as default_settings
from gallery.core.exceptions import FeedbackNotAllowedError, NotFoundError, ValidationError
from gallery.core.security import redact_guest_id
from gallery.models.feedback import FeedbackType, PhotoFeedback, TOGGLE_FEEDBACK_TYPES
from gallery.models.photo import Photo
from gallery.schemas.feedback import (
    ClientInfo,
    EventFeedbackSummary,
    EventFeedbackTotals,
    FeedbackCreate,
    FeedbackExportRow,
    FeedbackResponse,
    FeedbackSettings,
    FeedbackSettingsUpdate,
    FeedbackSubmitResult,
    PendingFeedback,
    PhotoFeedbackQuery,
    PhotoFilter,
)
from gallery.schemas.photo import PhotoFeedbackStats
from gallery.services.feedback_aggregator import FeedbackAggregator
import logging

logger = logging.getLogger(__name__)

VALID_FEEDBACK_TYPES = tuple(t.value for t in FeedbackType)
MODERATION_ACTIONS = {
    "approve": {"is_approved": True, "is_hidden": False},
    "hide": {"is_hidden": True},
    "reject": {"is_approved": False, "is_hidden": True},
}
FILTER_OPERATORS = ("AND", "OR")


class FeedbackService:
    """Guest feedback on photos: settings, submission, moderation and reports.

    One instance is built at startup and shared by all requests; every method
    works on the session it is given.
    """

    def __init__(self, aggregator: Optional[FeedbackAggregator] = None, settings: Optional[Settings] = None):
        self.aggregator = aggregator or FeedbackAggregator()
        self.settings = settings or default_settings

    # ---------------------------
    # Settings
    # ---------------------------
    def get_event_feedback_settings(self, db: Session, event_id: int) -> FeedbackSettings:
        try:
            existing = crud.feedback_settings.get_by_event(db, event_id=event_id)
        except Exception as e:
            logger.error(f"Error getting feedback settings for event {event_id}: {str(e)}")
            raise

        if not existing:
            return FeedbackSettings(event_id=event_id)
        return FeedbackSettings.model_validate(existing)

    def update_event_feedback_settings(
        self, db: Session, event_id: int, settings_in: FeedbackSettingsUpdate, actor: Optional[str] = None
    ) -> FeedbackSettings:
        values = {k: v for k, v in settings_in.dict(exclude_unset=True).items() if v is not None}
        try:
            crud.feedback_settings.upsert(db, event_id=event_id, values=values)
            crud.activity_log.log_activity(
                db, "feedback_settings_updated", values, event_id=event_id, actor=actor
            )
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating feedback settings for event {event_id}: {str(e)}")
            raise

        return self.get_event_feedback_settings(db, event_id)

    def check_feedback_allowed(self, event_settings: FeedbackSettings, feedback_in: FeedbackCreate) -> None:
        if not event_settings.feedback_enabled:
            raise FeedbackNotAllowedError("Feedback is disabled for this gallery")

        allowed = {
            FeedbackType.LIKE.value: event_settings.allow_likes,
            FeedbackType.RATING.value: event_settings.allow_ratings,
            FeedbackType.COMMENT.value: event_settings.allow_comments,
            FeedbackType.FAVORITE.value: event_settings.allow_favorites,
        }
        if not allowed.get(feedback_in.feedback_type, False):
            raise FeedbackNotAllowedError(
                f"{feedback_in.feedback_type} feedback is disabled for this gallery",
                details={"feedback_type": feedback_in.feedback_type},
            )

        if event_settings.require_name_email and not (
            (feedback_in.guest_name or "").strip() and (feedback_in.guest_email or "").strip()
        ):
            raise FeedbackNotAllowedError("Name and email are required to leave feedback")

    # ---------------------------
    # Submission
    # ---------------------------
    def validate_feedback(self, feedback_in: FeedbackCreate) -> None:
        feedback_type = feedback_in.feedback_type
        if not feedback_type or feedback_type not in VALID_FEEDBACK_TYPES:
            raise ValidationError("Invalid feedback type", details={"feedback_type": feedback_type})

        if feedback_type == FeedbackType.RATING.value:
            rating = feedback_in.rating
            if rating is None or isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
                raise ValidationError("Rating must be between 1 and 5", details={"rating": rating})

        if feedback_type == FeedbackType.COMMENT.value:
            if not feedback_in.comment or not feedback_in.comment.strip():
                raise ValidationError("Comment cannot be empty")

    @staticmethod
    def resolve_guest_id(client_info: ClientInfo) -> str:
        return client_info.guest_id or client_info.ip_address or "anonymous"

    def submit_feedback(
        self,
        db: Session,
        event_id: int,
        photo_id: int,
        feedback_in: FeedbackCreate,
        client_info: Optional[ClientInfo] = None,
    ) -> FeedbackSubmitResult:
        self.validate_feedback(feedback_in)

        client_info = client_info or ClientInfo()
        guest_id = self.resolve_guest_id(client_info)
        feedback_type = feedback_in.feedback_type
        key = {
            "event_id": event_id,
            "photo_id": photo_id,
            "guest_identifier": guest_id,
            "feedback_type": feedback_type,
        }

        try:
            if feedback_type in TOGGLE_FEEDBACK_TYPES:
                result = self._toggle(db, key, feedback_in, client_info)
            else:
                result = self._upsert(db, key, feedback_in, client_info)

            self.aggregator.recompute(db, photo_id)
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(
                f"Failed to submit feedback: {str(e)} "
                f"(event={event_id}, photo={photo_id}, feedback_type={feedback_type}, "
                f"guest={redact_guest_id(guest_id)})"
            )
            raise

        logger.info(
            f"{feedback_type} {result} for event {event_id} photo {photo_id} "
            f"guest {redact_guest_id(guest_id)}"
        )

        if result == "removed":
            return FeedbackSubmitResult(action=result, feedback_type=feedback_type)

        row = crud.photo_feedback.get_by_key(db, **key)
        return FeedbackSubmitResult(
            action=result,
            feedback_type=feedback_type,
            feedback=FeedbackResponse.model_validate(row) if row else None,
        )

    def _new_record(self, db: Session, key: dict, feedback_in: FeedbackCreate, client_info: ClientInfo) -> dict:
        feedback_type = key["feedback_type"]
        is_approved = True
        if feedback_type == FeedbackType.COMMENT.value:
            is_approved = not self.get_event_feedback_settings(db, key["event_id"]).moderate_comments

        return {
            **key,
            "rating": feedback_in.rating if feedback_type == FeedbackType.RATING.value else None,
            "comment_text": feedback_in.comment if feedback_type == FeedbackType.COMMENT.value else None,
            "guest_name": feedback_in.guest_name or None,
            "guest_email": feedback_in.guest_email or None,
            "ip_address": client_info.ip_address,
            "user_agent": client_info.user_agent,
            "is_approved": is_approved,
            "is_hidden": False,
        }

    def _toggle(self, db: Session, key: dict, feedback_in: FeedbackCreate, client_info: ClientInfo) -> str:
        if crud.photo_feedback.delete_by_key(db, **key):
            return "removed"

        # A concurrent identical submission may have inserted first; either
        # way exactly one row exists afterwards.
        crud.photo_feedback.insert_if_absent(db, values=self._new_record(db, key, feedback_in, client_info))
        return "added"

    def _upsert(self, db: Session, key: dict, feedback_in: FeedbackCreate, client_info: ClientInfo) -> str:
        record = self._new_record(db, key, feedback_in, client_info)
        if crud.photo_feedback.insert_if_absent(db, values=record):
            return "added"

        if key["feedback_type"] == FeedbackType.RATING.value:
            updates = {"rating": feedback_in.rating}
        else:
            is_approved = True if self.settings.AUTO_APPROVE_EDITED_COMMENTS else record["is_approved"]
            updates = {"comment_text": feedback_in.comment, "is_approved": is_approved}

        crud.photo_feedback.update_by_key(db, values=updates, **key)
        return "updated"

    # ---------------------------
    # Reads
    # ---------------------------
    def get_photo_feedback(
        self, db: Session, photo_id: int, options: Optional[PhotoFeedbackQuery] = None
    ) -> List[PhotoFeedback]:
        try:
            return crud.photo_feedback.get_for_photo(db, photo_id=photo_id, options=options or PhotoFeedbackQuery())
        except Exception as e:
            logger.error(f"Error getting photo feedback for photo {photo_id}: {str(e)}")
            raise

    def get_event_feedback_summary(self, db: Session, event_id: int) -> EventFeedbackSummary:
        try:
            photos = (
                db.query(Photo)
                .filter(Photo.event_id == event_id)
                .order_by(Photo.average_rating.desc(), Photo.like_count.desc(), Photo.id)
                .all()
            )
            totals = crud.photo_feedback.get_event_totals(db, event_id=event_id)
        except Exception as e:
            logger.error(f"Error getting feedback summary for event {event_id}: {str(e)}")
            raise

        return EventFeedbackSummary(
            photos=[PhotoFeedbackStats.model_validate(p) for p in photos],
            stats=EventFeedbackTotals(
                unique_raters=totals.unique_raters or 0,
                total_ratings=totals.total_ratings or 0,
                total_likes=totals.total_likes or 0,
                total_comments=totals.total_comments or 0,
                total_favorites=totals.total_favorites or 0,
            ),
        )

    def get_pending_moderation(self, db: Session, event_id: Optional[int] = None) -> List[PendingFeedback]:
        try:
            rows = crud.photo_feedback.get_pending_comments(db, event_id=event_id)
        except Exception as e:
            logger.error(f"Error getting pending moderation: {str(e)}")
            raise

        return [
            PendingFeedback(
                id=feedback.id,
                event_id=feedback.event_id,
                photo_id=feedback.photo_id,
                feedback_type=feedback.feedback_type,
                comment_text=feedback.comment_text,
                guest_name=feedback.guest_name,
                guest_email=feedback.guest_email,
                created_at=feedback.created_at,
                photo_filename=photo_filename,
                event_name=event_name,
            )
            for feedback, photo_filename, event_name in rows
        ]

    def export_event_feedback(self, db: Session, event_id: int) -> List[FeedbackExportRow]:
        try:
            rows = crud.photo_feedback.get_export_rows(db, event_id=event_id)
        except Exception as e:
            logger.error(f"Error exporting feedback for event {event_id}: {str(e)}")
            raise

        return [
            FeedbackExportRow(
                filename=row.filename,
                feedback_type=row.feedback_type,
                rating=row.rating,
                comment_text=row.comment_text,
                guest_name=row.guest_name,
                guest_email=row.guest_email,
                created_at=row.created_at,
            )
            for row in rows
        ]

    def get_filtered_photos(
        self, db: Session, event_id: int, guest_identifier: Optional[str], filters: Optional[PhotoFilter] = None
    ) -> List[int]:
        filters = filters or PhotoFilter()
        if filters.operator not in FILTER_OPERATORS:
            raise ValidationError("Operator must be AND or OR", details={"operator": filters.operator})

        try:
            if not filters.liked and not filters.favorited:
                return crud.photo.get_ids_by_event(db, event_id=event_id)

            if filters.operator == "AND" and filters.liked and filters.favorited:
                liked_ids = crud.photo_feedback.get_photo_ids(
                    db, event_id=event_id, guest_identifier=guest_identifier,
                    feedback_types=[FeedbackType.LIKE.value],
                )
                favorited_ids = crud.photo_feedback.get_photo_ids(
                    db, event_id=event_id, guest_identifier=guest_identifier,
                    feedback_types=[FeedbackType.FAVORITE.value],
                )
                return sorted(liked_ids & favorited_ids)

            feedback_types = []
            if filters.liked:
                feedback_types.append(FeedbackType.LIKE.value)
            if filters.favorited:
                feedback_types.append(FeedbackType.FAVORITE.value)

            return sorted(
                crud.photo_feedback.get_photo_ids(
                    db, event_id=event_id, guest_identifier=guest_identifier, feedback_types=feedback_types
                )
            )
        except Exception as e:
            logger.error(f"Error getting filtered photos for event {event_id}: {str(e)}")
            raise

    # ---------------------------
    # Moderation
    # ---------------------------
    def moderate_feedback(self, db: Session, feedback_id: int, action: str, admin_id: Optional[str]) -> bool:
        updates = MODERATION_ACTIONS.get(action)
        if updates is None:
            raise ValidationError(
                "Moderation action must be approve, hide or reject", details={"action": action}
            )

        feedback = crud.photo_feedback.get(db, feedback_id)
        if not feedback:
            raise NotFoundError("Feedback not found", details={"feedback_id": feedback_id})

        try:
            for field, value in updates.items():
                setattr(feedback, field, value)
            db.add(feedback)
            db.flush()

            self.aggregator.recompute(db, feedback.photo_id)
            crud.activity_log.log_activity(
                db,
                "feedback_moderated",
                {"feedback_id": feedback_id, "action": action, "admin_id": admin_id},
                event_id=feedback.event_id,
                actor=admin_id,
            )
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error moderating feedback {feedback_id}: {str(e)}")
            raise

        logger.info(f"Feedback {feedback_id} moderated ({action}) by {admin_id}")
        return True

    def delete_feedback(self, db: Session, feedback_id: int, admin_id: Optional[str]) -> bool:
        feedback = crud.photo_feedback.get(db, feedback_id)
        if not feedback:
            raise NotFoundError("Feedback not found", details={"feedback_id": feedback_id})

        photo_id = feedback.photo_id
        event_id = feedback.event_id
        feedback_type = feedback.feedback_type
        try:
            db.delete(feedback)
            db.flush()

            self.aggregator.recompute(db, photo_id)
            crud.activity_log.log_activity(
                db,
                "feedback_deleted",
                {"feedback_id": feedback_id, "feedback_type": feedback_type, "admin_id": admin_id},
                event_id=event_id,
                actor=admin_id,
            )
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting feedback {feedback_id}: {str(e)}")
            raise

        logger.info(f"Feedback {feedback_id} ({feedback_type}) deleted by {admin_id}")
        return True
