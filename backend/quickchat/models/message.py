from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from quickchat.models.base import Base


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True)

    sender_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    receiver_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)

    # At least one of text / image is set
    text = Column(Text, nullable=True)
    image = Column(String(1024), nullable=True)

    # Only ever flips False -> True
    seen = Column(Boolean, nullable=False, default=False)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    def to_dict(self) -> dict:
        return {
            "_id": self.id,
            "senderId": self.sender_id,
            "receiverId": self.receiver_id,
            "text": self.text,
            "image": self.image,
            "seen": bool(self.seen),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
