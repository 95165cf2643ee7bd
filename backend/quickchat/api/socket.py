# quickchat/api/socket.py

import logging
from typing import Optional

from fastapi import APIRouter, Query, WebSocket, status

from quickchat.core.presence import PresenceTable

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/socket")
async def socket_endpoint(websocket: WebSocket, user_id: Optional[str] = Query(None, alias="userId")):
    """
    Push channel. The client connects with ?userId=<id>; the server only
    sends (getOnlineUsers, newMessage) and ignores anything received, text or
    binary.
    """
    presence: PresenceTable = websocket.app.state.presence

    await websocket.accept()
    if not user_id:
        logger.warning("Socket connection without userId rejected")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await presence.connect(user_id, websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    finally:
        await presence.disconnect(user_id, websocket)
