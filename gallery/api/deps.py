# File: gallery/api/deps.py
from typing import Optional
from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session
from gallery import crud
from gallery.core.config import settings
from gallery.core.exceptions import GuestTokenError
from gallery.core.security import decode_guest_token
from gallery.db.database import get_db
from gallery.models.event import Event
from gallery.schemas.feedback import ClientInfo
from gallery.services.feedback_service import FeedbackService


def get_feedback_service(request: Request) -> FeedbackService:
    """The service instance created once in ``create_app``."""
    return request.app.state.feedback_service


def get_event_by_slug(slug: str, db: Session = Depends(get_db)) -> Event:
    event = crud.event.get_by_slug(db, slug=slug)
    if not event:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Gallery not found")
    return event


def get_optional_guest_id(
    event: Event = Depends(get_event_by_slug),
    x_guest_token: Optional[str] = Header(None),
) -> Optional[str]:
    if not x_guest_token:
        return None
    return decode_guest_token(x_guest_token, event.id)


def get_client_info(
    request: Request,
    guest_id: Optional[str] = Depends(get_optional_guest_id),
) -> ClientInfo:
    """Guest identity for mutating requests.

    A guest token is required unless IP fallback is switched on.
    """
    ip_address = request.client.host if request.client else None
    if not guest_id and not settings.ALLOW_IP_GUEST_FALLBACK:
        raise GuestTokenError("A guest token is required")

    return ClientInfo(
        guest_id=guest_id,
        ip_address=ip_address,
        user_agent=(request.headers.get("user-agent") or "")[:500] or None,
    )


def get_admin_id(x_admin_id: Optional[str] = Header(None)) -> str:
    # Admin authentication happens upstream; the header names the actor for the audit trail.
    if not x_admin_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Admin-Id header is required",
        )
    return x_admin_id
