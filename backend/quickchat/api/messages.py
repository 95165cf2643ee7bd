# quickchat/api/messages.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quickchat.api.deps import get_current_user, get_presence
from quickchat.api.schemas import SendMessageSchema
from quickchat.core import message as message_service
from quickchat.core.presence import PresenceTable
from quickchat.infra.database import get_db
from quickchat.models.user import User
from quickchat.services.delivery_service import send_message

router = APIRouter(prefix="/api/messages")


# Must be registered before /{peer_id}
@router.get("/users")
def list_users_endpoint(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    users, unseen = message_service.list_peers(db, current_user.id)
    return {
        "success": True,
        "users": [u.to_dict() for u in users],
        "unseenMessages": unseen,
    }


@router.get("/{peer_id}")
def conversation_endpoint(
    peer_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    # Also marks the peer's messages as seen
    messages = message_service.list_conversation(db, current_user.id, peer_id)
    return {"success": True, "messages": [m.to_dict() for m in messages]}


@router.post("/send/{receiver_id}")
async def send_message_endpoint(
    receiver_id: str,
    payload: SendMessageSchema,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    presence: PresenceTable = Depends(get_presence),
):
    message = await send_message(
        db,
        presence,
        sender_id=current_user.id,
        receiver_id=receiver_id,
        text=payload.text,
        image=payload.image,
    )
    return {"success": True, "message": message.to_dict()}


@router.put("/mark/{message_id}")
def mark_seen_endpoint(
    message_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    message_service.mark_seen(db, message_id)
    return {"success": True}
