from typing import Dict, List, Optional, Tuple

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session

from quickchat.core.errors import ValidationError
from quickchat.models.message import Message
from quickchat.models.user import User


def unseen_counts(db: Session, user_id: str) -> Dict[str, int]:
    """Per peer id, the number of messages that peer sent to `user_id` still unseen."""
    rows = (
        db.query(Message.sender_id, func.count(Message.id))
        .filter(Message.receiver_id == user_id, Message.seen.is_(False))
        .group_by(Message.sender_id)
        .all()
    )
    return {sender_id: count for sender_id, count in rows if count > 0}


def list_peers(db: Session, user_id: str) -> Tuple[List[User], Dict[str, int]]:
    """Every other user, plus unseen counts keyed by peer id."""
    users = db.query(User).filter(User.id != user_id).order_by(User.created_at, User.id).all()
    counts = unseen_counts(db, user_id)
    peer_ids = {u.id for u in users}
    return users, {peer_id: n for peer_id, n in counts.items() if peer_id in peer_ids}


def fetch_conversation(db: Session, user_id: str, peer_id: str) -> List[Message]:
    """All messages between the two ids in creation order. Read only."""
    return (
        db.query(Message)
        .filter(
            or_(
                and_(Message.sender_id == user_id, Message.receiver_id == peer_id),
                and_(Message.sender_id == peer_id, Message.receiver_id == user_id),
            )
        )
        .order_by(Message.created_at, Message.id)
        .all()
    )


def mark_conversation_seen(db: Session, user_id: str, peer_id: str) -> int:
    """Flip every unseen peer -> user message to seen. Returns how many changed."""
    updated = (
        db.query(Message)
        .filter(
            Message.sender_id == peer_id,
            Message.receiver_id == user_id,
            Message.seen.is_(False),
        )
        .update({Message.seen: True}, synchronize_session="fetch")
    )
    db.commit()
    return updated


def list_conversation(db: Session, user_id: str, peer_id: str) -> List[Message]:
    """
    Fetch the conversation and mark the peer's messages to `user_id` as seen.
    Opening a conversation is what counts as reading it, so the read has this
    side effect; use fetch_conversation + mark_conversation_seen to split it.
    """
    messages = fetch_conversation(db, user_id, peer_id)
    mark_conversation_seen(db, user_id, peer_id)
    return messages


def store_message(
    db: Session,
    sender_id: str,
    receiver_id: str,
    text: Optional[str] = None,
    image: Optional[str] = None,
) -> Message:
    """Persist a message. `image` is an already uploaded asset URL."""
    if not text and not image:
        raise ValidationError("Message text or image is required")

    if db.query(User.id).filter(User.id == receiver_id).first() is None:
        raise ValidationError("Receiver not found")

    message = Message(
        sender_id=sender_id,
        receiver_id=receiver_id,
        text=text or None,
        image=image or None,
        seen=False,
    )
    db.add(message)
    db.commit()
    db.refresh(message)
    return message


def mark_seen(db: Session, message_id: int) -> Message:
    """Set the seen flag. Calling it again on a seen message is a no-op."""
    message = db.query(Message).filter(Message.id == message_id).first()
    if message is None:
        raise ValidationError("Message not found")

    if not message.seen:
        message.seen = True
        db.commit()
    return message
