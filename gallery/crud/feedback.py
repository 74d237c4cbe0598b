# File: gallery/crud/feedback.py
from typing import Any, Dict, Iterable, List, Optional, Set
from sqlalchemy import case, distinct, func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session
from gallery.core.exceptions import GalleryError
from gallery.crud.base import CRUDBase
from gallery.models.event import Event
from gallery.models.feedback import FeedbackType, PhotoFeedback
from gallery.models.photo import Photo
from gallery.schemas.feedback import FeedbackCreate, PhotoFeedbackQuery

FEEDBACK_KEY_COLUMNS = ["event_id", "photo_id", "guest_identifier", "feedback_type"]


def _insert_for(db: Session):
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return pg_insert
    if dialect == "sqlite":
        return sqlite_insert
    raise GalleryError(
        f"Conflict-aware inserts are not supported on {dialect}",
        error_code="DATABASE_001",
        details={"dialect": dialect},
    )


class CRUDPhotoFeedback(CRUDBase[PhotoFeedback, FeedbackCreate, FeedbackCreate]):

    def _by_key(self, db: Session, event_id: int, photo_id: int, guest_identifier: str, feedback_type: str):
        return db.query(PhotoFeedback).filter(
            PhotoFeedback.event_id == event_id,
            PhotoFeedback.photo_id == photo_id,
            PhotoFeedback.guest_identifier == guest_identifier,
            PhotoFeedback.feedback_type == feedback_type,
        )

    def get_by_key(
        self, db: Session, *, event_id: int, photo_id: int, guest_identifier: str, feedback_type: str
    ) -> Optional[PhotoFeedback]:
        return self._by_key(db, event_id, photo_id, guest_identifier, feedback_type).first()

    def insert_if_absent(self, db: Session, *, values: Dict[str, Any]) -> bool:
        """INSERT ... ON CONFLICT DO NOTHING on the guest/type key.

        Returns True when a row was written, False when the key already existed.
        """
        insert = _insert_for(db)
        stmt = (
            insert(PhotoFeedback)
            .values(**values)
            .on_conflict_do_nothing(index_elements=FEEDBACK_KEY_COLUMNS)
        )
        result = db.execute(stmt)
        return result.rowcount > 0

    def update_by_key(
        self,
        db: Session,
        *,
        event_id: int,
        photo_id: int,
        guest_identifier: str,
        feedback_type: str,
        values: Dict[str, Any],
    ) -> int:
        return self._by_key(db, event_id, photo_id, guest_identifier, feedback_type).update(
            values, synchronize_session=False
        )

    def delete_by_key(
        self, db: Session, *, event_id: int, photo_id: int, guest_identifier: str, feedback_type: str
    ) -> int:
        return self._by_key(db, event_id, photo_id, guest_identifier, feedback_type).delete(
            synchronize_session=False
        )

    def get_for_photo(self, db: Session, *, photo_id: int, options: PhotoFeedbackQuery) -> List[PhotoFeedback]:
        query = db.query(PhotoFeedback).filter(PhotoFeedback.photo_id == photo_id)

        if options.feedback_type:
            query = query.filter(PhotoFeedback.feedback_type == options.feedback_type)
        if options.approved_only:
            query = query.filter(PhotoFeedback.is_approved.is_(True))
        if not options.include_hidden:
            query = query.filter(PhotoFeedback.is_hidden.is_(False))
        if options.guest_identifier:
            query = query.filter(PhotoFeedback.guest_identifier == options.guest_identifier)

        return query.order_by(PhotoFeedback.created_at.desc(), PhotoFeedback.id.desc()).all()

    def get_photo_ids(
        self, db: Session, *, event_id: int, guest_identifier: str, feedback_types: Iterable[str]
    ) -> Set[int]:
        rows = (
            db.query(PhotoFeedback.photo_id)
            .filter(
                PhotoFeedback.event_id == event_id,
                PhotoFeedback.guest_identifier == guest_identifier,
                PhotoFeedback.feedback_type.in_(list(feedback_types)),
                PhotoFeedback.is_hidden.is_(False),
            )
            .distinct()
            .all()
        )
        return {row.photo_id for row in rows}

    def get_pending_comments(self, db: Session, *, event_id: Optional[int] = None):
        query = (
            db.query(
                PhotoFeedback,
                Photo.filename.label("photo_filename"),
                Event.event_name.label("event_name"),
            )
            .join(Photo, PhotoFeedback.photo_id == Photo.id)
            .join(Event, PhotoFeedback.event_id == Event.id)
            .filter(
                PhotoFeedback.is_approved.is_(False),
                PhotoFeedback.is_hidden.is_(False),
                PhotoFeedback.feedback_type == FeedbackType.COMMENT.value,
            )
        )
        if event_id:
            query = query.filter(PhotoFeedback.event_id == event_id)

        return query.order_by(PhotoFeedback.created_at.desc(), PhotoFeedback.id.desc()).all()

    def get_export_rows(self, db: Session, *, event_id: int):
        return (
            db.query(
                Photo.filename,
                PhotoFeedback.feedback_type,
                PhotoFeedback.rating,
                PhotoFeedback.comment_text,
                PhotoFeedback.guest_name,
                PhotoFeedback.guest_email,
                PhotoFeedback.created_at,
            )
            .join(Photo, PhotoFeedback.photo_id == Photo.id)
            .filter(PhotoFeedback.event_id == event_id)
            .order_by(Photo.filename, PhotoFeedback.created_at, PhotoFeedback.id)
            .all()
        )

    def get_event_totals(self, db: Session, *, event_id: int):
        feedback_type = PhotoFeedback.feedback_type
        return (
            db.query(
                func.count(
                    distinct(case((feedback_type == FeedbackType.RATING.value, PhotoFeedback.guest_identifier)))
                ).label("unique_raters"),
                func.count(case((feedback_type == FeedbackType.RATING.value, 1))).label("total_ratings"),
                func.count(case((feedback_type == FeedbackType.LIKE.value, 1))).label("total_likes"),
                func.count(case((feedback_type == FeedbackType.COMMENT.value, 1))).label("total_comments"),
                func.count(case((feedback_type == FeedbackType.FAVORITE.value, 1))).label("total_favorites"),
            )
            .filter(PhotoFeedback.event_id == event_id)
            .one()
        )


photo_feedback = CRUDPhotoFeedback(PhotoFeedback)
