# File: gallery/services/feedback_aggregator.py
from sqlalchemy import and_, case, distinct, func
from sqlalchemy.orm import Session
from gallery.models.feedback import FeedbackType, PhotoFeedback
from gallery.models.photo import Photo
import logging

logger = logging.getLogger(__name__)


class FeedbackAggregator:
    """Rebuilds the denormalized feedback counters stored on a photo.

    Counters are always recomputed from the full set of visible rows, so
    running ``recompute`` any number of times gives the same result for the
    same rows. Hidden rows never contribute.
    """

    def compute(self, db: Session, photo_id: int) -> dict:
        feedback_type = PhotoFeedback.feedback_type
        stats = (
            db.query(
                func.count(
                    case((and_(feedback_type == FeedbackType.COMMENT.value, PhotoFeedback.is_approved.is_(True)), 1))
                ).label("comment_count"),
                func.count(case((feedback_type == FeedbackType.LIKE.value, 1))).label("like_count"),
                func.count(case((feedback_type == FeedbackType.FAVORITE.value, 1))).label("favorite_count"),
                func.avg(case((feedback_type == FeedbackType.RATING.value, PhotoFeedback.rating))).label("average_rating"),
                func.count(distinct(PhotoFeedback.guest_identifier)).label("feedback_count"),
            )
            .filter(PhotoFeedback.photo_id == photo_id, PhotoFeedback.is_hidden.is_(False))
            .one()
        )

        return {
            "comment_count": stats.comment_count or 0,
            "like_count": stats.like_count or 0,
            "favorite_count": stats.favorite_count or 0,
            # AVG comes back as Decimal on PostgreSQL
            "average_rating": float(stats.average_rating) if stats.average_rating is not None else 0.0,
            "feedback_count": stats.feedback_count or 0,
        }

    def recompute(self, db: Session, photo_id: int) -> None:
        """Write fresh counters onto the photo. Runs inside the caller's transaction."""
        try:
            values = self.compute(db, photo_id)
            db.query(Photo).filter(Photo.id == photo_id).update(values, synchronize_session="fetch")
        except Exception as e:
            logger.error(f"Error updating photo feedback stats for photo {photo_id}: {str(e)}")
            raise
