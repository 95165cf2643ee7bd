# quickchat/services/delivery_service.py

import logging
from typing import Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from quickchat.core.message import store_message
from quickchat.core.presence import NEW_MESSAGE_EVENT, PresenceTable
from quickchat.infra.assets import upload_image
from quickchat.models.message import Message

logger = logging.getLogger(__name__)


async def send_message(
    db: Session,
    presence: PresenceTable,
    sender_id: str,
    receiver_id: str,
    text: Optional[str] = None,
    image: Optional[str] = None,
) -> Message:
    """
    Persist a message and push it to the receiver if they are online.

    The upload and the database write are blocking, so they run in the
    threadpool; only the push happens on the event loop, next to the socket
    handlers that own the presence table.

    There is no retry or queue for offline receivers: the stored message shows
    up the next time they open the conversation.
    """
    image_url = await run_in_threadpool(upload_image, image) if image else None
    message = await run_in_threadpool(
        store_message, db, sender_id, receiver_id, text=text, image=image_url
    )
    payload = message.to_dict()

    pushed = await presence.emit(receiver_id, NEW_MESSAGE_EVENT, payload)
    logger.info(
        "📨 Message %s %s -> %s (%s)",
        message.id, sender_id, receiver_id, "pushed" if pushed else "stored",
    )
    return message
