# File: gallery/core/security.py
"""Guest identity tokens.

A guest token is issued on the first interaction with a gallery and sent back
on every later request. It is scoped to one event, so a token minted for one
gallery cannot be replayed against another.
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from gallery.core.config import settings
from gallery.core.exceptions import GuestTokenError

GUEST_TOKEN_TYPE = "guest"


def new_guest_id() -> str:
    return uuid.uuid4().hex


def create_guest_token(
    event_id: int, guest_id: Optional[str] = None, expires_delta: Optional[timedelta] = None
) -> str:
    guest_id = guest_id or new_guest_id()
    if expires_delta is None:
        expires_delta = timedelta(days=settings.GUEST_TOKEN_EXPIRE_DAYS)

    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {
        "sub": guest_id,
        "evt": event_id,
        "typ": GUEST_TOKEN_TYPE,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_guest_token(token: str, event_id: int) -> str:
    """Return the guest id carried by ``token`` if it is valid for ``event_id``."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        raise GuestTokenError("Invalid or expired guest token", details={"reason": str(e)})

    if payload.get("typ") != GUEST_TOKEN_TYPE:
        raise GuestTokenError("Token is not a guest token")
    if payload.get("evt") != event_id:
        raise GuestTokenError("Guest token was issued for a different gallery")

    guest_id = payload.get("sub")
    if not guest_id:
        raise GuestTokenError("Guest token has no subject")
    return guest_id


def redact_guest_id(guest_id: Optional[str]) -> str:
    if not guest_id:
        return "anonymous"
    return guest_id[:8] + "..."
