# quickchat/api/deps.py

from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from quickchat.core.presence import PresenceTable
from quickchat.core.user import check_auth
from quickchat.infra.database import get_db
from quickchat.models.user import User


def get_token(
    token: Optional[str] = Header(None),
    authorization: Optional[str] = Header(None),
) -> Optional[str]:
    """The client sends a `token` header; `Authorization: Bearer` works too."""
    if token:
        return token
    if authorization and authorization.startswith("Bearer "):
        return authorization.split(" ", 1)[1]
    return None


def get_current_user(
    token: Optional[str] = Depends(get_token),
    db: Session = Depends(get_db),
) -> User:
    return check_auth(db, token)


def get_presence(request: Request) -> PresenceTable:
    return request.app.state.presence
