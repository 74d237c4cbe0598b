# File: gallery/crud/photo.py
from typing import List, Optional
from pydantic import BaseModel
from sqlalchemy.orm import Session
from gallery.crud.base import CRUDBase
from gallery.models.photo import Photo


class PhotoCreate(BaseModel):
    event_id: int
    filename: str
    url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    type: str = "single"
    category_id: Optional[int] = None


class CRUDPhoto(CRUDBase[Photo, PhotoCreate, PhotoCreate]):

    def get_in_event(self, db: Session, *, event_id: int, photo_id: int) -> Optional[Photo]:
        return (
            db.query(Photo)
            .filter(Photo.event_id == event_id, Photo.id == photo_id)
            .first()
        )

    def get_by_event(
        self, db: Session, *, event_id: int, category_id: Optional[int] = None
    ) -> List[Photo]:
        query = db.query(Photo).filter(Photo.event_id == event_id)
        if category_id is not None:
            query = query.filter(Photo.category_id == category_id)
        return query.order_by(Photo.id).all()

    def get_ids_by_event(self, db: Session, *, event_id: int) -> List[int]:
        rows = db.query(Photo.id).filter(Photo.event_id == event_id).order_by(Photo.id).all()
        return [row.id for row in rows]


photo = CRUDPhoto(Photo)
