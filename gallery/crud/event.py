# File: gallery/crud/event.py
from typing import Optional
from pydantic import BaseModel
from sqlalchemy.orm import Session
from gallery.crud.base import CRUDBase
from gallery.models.event import Event


class EventCreate(BaseModel):
    slug: str
    event_name: str


class CRUDEvent(CRUDBase[Event, EventCreate, EventCreate]):

    def get_by_slug(self, db: Session, *, slug: str) -> Optional[Event]:
        return db.query(Event).filter(Event.slug == slug).first()


event = CRUDEvent(Event)
