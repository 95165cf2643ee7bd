# quickchat/core/presence.py

import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

ONLINE_USERS_EVENT = "getOnlineUsers"
NEW_MESSAGE_EVENT = "newMessage"


class PresenceTable:
    """
    In-memory map of user id -> live connection.

    A connection is anything with an async `send_json(data)` (a Starlette
    WebSocket in production). Only one connection per user id is kept: a
    second connect for the same id replaces the first (last connect wins).

    Mutated only from socket handlers on the event loop, so no locking.
    """

    def __init__(self):
        self._connections: Dict[str, Any] = {}

    def __len__(self):
        return len(self._connections)

    def __contains__(self, user_id):
        return user_id in self._connections

    def get(self, user_id: str) -> Optional[Any]:
        return self._connections.get(user_id)

    def online_user_ids(self) -> List[str]:
        return list(self._connections)

    def add(self, user_id: str, connection: Any) -> None:
        previous = self._connections.get(user_id)
        if previous is not None and previous is not connection:
            logger.info("User %s reconnected, replacing previous connection", user_id)
        self._connections[user_id] = connection

    def remove(self, user_id: str, connection: Any = None) -> bool:
        """
        Drop the entry for `user_id`. When `connection` is given, the entry is
        only dropped if it is still that connection, so a stale socket closing
        after a reconnect doesn't evict the newer one.
        """
        current = self._connections.get(user_id)
        if current is None:
            return False
        if connection is not None and current is not connection:
            return False
        del self._connections[user_id]
        return True

    def clear(self) -> None:
        self._connections.clear()

    # ---------- push ----------

    async def emit(self, user_id: str, event: str, data: Any) -> bool:
        """Send one frame to `user_id` if online. Returns whether it was pushed."""
        connection = self._connections.get(user_id)
        if connection is None:
            return False
        try:
            await connection.send_json({"event": event, "data": data})
        except Exception as e:
            logger.warning("Push of %s to %s failed: %s", event, user_id, e)
            return False
        return True

    async def broadcast(self, event: str, data: Any) -> None:
        # Snapshot: a failed send must not break iteration
        for user_id in list(self._connections):
            await self.emit(user_id, event, data)

    async def broadcast_online_users(self) -> None:
        await self.broadcast(ONLINE_USERS_EVENT, self.online_user_ids())

    # ---------- connection lifecycle ----------

    async def connect(self, user_id: str, connection: Any) -> None:
        self.add(user_id, connection)
        logger.info("🟢 %s connected (%d online)", user_id, len(self))
        await self.broadcast_online_users()

    async def disconnect(self, user_id: str, connection: Any = None) -> None:
        if self.remove(user_id, connection):
            logger.info("🔴 %s disconnected (%d online)", user_id, len(self))
        await self.broadcast_online_users()
