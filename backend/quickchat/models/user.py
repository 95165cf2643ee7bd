# quickchat/models/user.py

from uuid import uuid4
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime
from quickchat.models.base import Base


def _now():
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=lambda: uuid4().hex)

    # Stored normalized (trimmed, lowercase); see core.user.normalize_email
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    fullname = Column(String(255), nullable=False)
    bio = Column(Text, nullable=False, default="")
    profilepic = Column(String(1024), nullable=False, default="")

    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now)

    def to_dict(self) -> dict:
        """Public wire representation; never includes the password hash."""
        return {
            "_id": self.id,
            "email": self.email,
            "fullname": self.fullname,
            "bio": self.bio,
            "profilepic": self.profilepic,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
