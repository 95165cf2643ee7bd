# quickchat/clients/chat_client.py

import json
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlencode, urlparse

import requests
import websocket

logger = logging.getLogger(__name__)

# =========================
# CONFIGURATION
# =========================

SERVER_URL = "http://127.0.0.1:8000"
REQUEST_TIMEOUT = 15
GENERIC_ERROR = "Network error"

# =========================
# STATE MIRRORS
# =========================


@dataclass
class AuthState:
    token: Optional[str] = None
    user: Optional[dict] = None
    online_users: List[str] = field(default_factory=list)


@dataclass
class ChatState:
    users: List[dict] = field(default_factory=list)
    unseen_messages: Dict[str, int] = field(default_factory=dict)
    selected_user: Optional[dict] = None
    messages: List[dict] = field(default_factory=list)


# =========================
# CHAT CLIENT
# =========================

class ChatClient:
    """
    Replays server responses into local auth/chat state.

    Every failure is surfaced through `notify("error", message)`; the
    `{success: false, message}` text is shown as is, transport failures fall
    back to GENERIC_ERROR.

    After login or a successful auth check the client opens the push channel
    (a websocket-client `WebSocketApp` running in a daemon thread) and feeds
    every frame to `handle_push`, so state is also mutated from that thread.
    """

    def __init__(
        self,
        server_url: str = SERVER_URL,
        session: Optional[requests.Session] = None,
        notify: Optional[Callable[[str, str], None]] = None,
        socket_factory: Callable[..., Any] = websocket.WebSocketApp,
    ):
        self.server_url = server_url.rstrip("/")
        self.session = session or requests.Session()
        self.auth = AuthState()
        self.chat = ChatState()
        self.notifications: List[tuple] = []
        self._notify = notify
        self._socket_factory = socket_factory
        self.socket = None
        self._socket_thread: Optional[threading.Thread] = None

    # ---------- plumbing ----------

    def notify(self, level: str, message: str):
        self.notifications.append((level, message))
        if self._notify:
            self._notify(level, message)

    def _request(self, method: str, path: str, **kwargs) -> Optional[dict]:
        """Perform a request and return the JSON body, or None on transport failure."""
        headers = kwargs.pop("headers", {})
        if self.auth.token:
            headers["token"] = self.auth.token
        try:
            resp = self.session.request(
                method,
                f"{self.server_url}{path}",
                headers=headers,
                timeout=REQUEST_TIMEOUT,
                **kwargs,
            )
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("%s %s failed: %s", method, path, e)
            self.notify("error", GENERIC_ERROR)
            return None

    def _ok(self, data: Optional[dict]) -> bool:
        if data is None:
            return False
        if data.get("success"):
            return True
        self.notify("error", data.get("message") or GENERIC_ERROR)
        return False

    # ---------- auth ----------

    def login(self, state: str, credentials: dict) -> bool:
        """`state` is "login" or "signup"."""
        data = self._request("POST", f"/api/auth/{state}", json=credentials)
        if not self._ok(data):
            return False
        self.auth.user = data["user"]
        self.auth.token = data["token"]
        self.connect_socket()
        self.notify("success", data.get("message", ""))
        return True

    def check_auth(self) -> bool:
        if not self.auth.token:
            return False
        data = self._request("GET", "/api/auth/check")
        if not self._ok(data):
            return False
        self.auth.user = data["user"]
        self.connect_socket()
        return True

    def logout(self):
        self.disconnect_socket()
        self.auth = AuthState()
        self.chat = ChatState()
        self.notify("success", "Logged out successfully")

    def update_profile(self, body: dict) -> bool:
        data = self._request("PUT", "/api/auth/updateprofile", json=body)
        if not self._ok(data):
            return False
        self.auth.user = data["user"]
        self.notify("success", "Profile updated successfully")
        return True

    # ---------- chat ----------

    def get_users(self) -> bool:
        data = self._request("GET", "/api/messages/users")
        if not self._ok(data):
            return False
        self.chat.users = data["users"]
        self.chat.unseen_messages = dict(data.get("unseenMessages") or {})
        return True

    def select_user(self, user: Optional[dict]):
        self.chat.selected_user = user
        self.chat.messages = []
        if user is not None:
            self.get_messages(user["_id"])

    def get_messages(self, user_id: str) -> bool:
        data = self._request("GET", f"/api/messages/{user_id}")
        if not self._ok(data):
            self.chat.messages = []
            return False
        self.chat.messages = data.get("messages") or []
        # The server marked them seen while answering
        self.chat.unseen_messages.pop(user_id, None)
        return True

    def send_message(self, body: dict) -> Optional[dict]:
        """Send {text?, image?} to the selected user; returns the stored message."""
        if self.chat.selected_user is None:
            self.notify("error", "No conversation selected")
            return None
        receiver_id = self.chat.selected_user["_id"]
        data = self._request("POST", f"/api/messages/send/{receiver_id}", json=body)
        if not self._ok(data):
            return None
        message = data["message"]
        self.chat.messages.append(message)
        return message

    def mark_seen(self, message_id) -> bool:
        return self._ok(self._request("PUT", f"/api/messages/mark/{message_id}"))

    # ---------- push channel ----------

    def socket_url(self) -> str:
        """WebSocket URL for the push channel of the logged-in user."""
        if not self.auth.user:
            raise RuntimeError("Not logged in")
        parsed = urlparse(self.server_url)
        scheme = "wss" if parsed.scheme == "https" else "ws"
        query = urlencode({"userId": self.auth.user["_id"]})
        return f"{scheme}://{parsed.netloc}/socket?{query}"

    def connect_socket(self):
        """Open the push channel unless one is already open."""
        if not self.auth.user or self.socket is not None:
            return
        self.socket = self._socket_factory(
            self.socket_url(),
            on_message=self._on_socket_message,
            on_error=self._on_socket_error,
            on_close=self._on_socket_close,
        )
        self._socket_thread = threading.Thread(target=self.socket.run_forever, daemon=True)
        self._socket_thread.start()

    def disconnect_socket(self):
        socket, self.socket = self.socket, None
        if socket is not None:
            socket.close()
        self._socket_thread = None

    def _on_socket_message(self, ws, message):
        try:
            frame = json.loads(message)
        except ValueError:
            logger.error("Undecodable push frame: %r", message)
            return
        self.handle_push(frame)

    def _on_socket_error(self, ws, error):
        logger.error("Push channel error: %s", error)

    def _on_socket_close(self, ws, status_code, reason):
        logger.info("Push channel closed (%s %s)", status_code, reason)
        if self.socket is ws:
            self.socket = None

    def handle_push(self, frame: Dict[str, Any]):
        event = frame.get("event")
        data = frame.get("data")

        if event == "getOnlineUsers":
            self.auth.online_users = list(data or [])
        elif event == "newMessage":
            self._on_new_message(data)
        else:
            logger.debug("Ignoring push event %s", event)

    def _on_new_message(self, message: Optional[dict]):
        if not message or not message.get("senderId") or not message.get("_id"):
            logger.error("Received invalid message from socket: %s", message)
            return

        sender_id = message["senderId"]
        selected = self.chat.selected_user
        if selected and selected["_id"] == sender_id:
            message = dict(message, seen=True)
            self.chat.messages.append(message)
            self.mark_seen(message["_id"])
        else:
            self.chat.unseen_messages[sender_id] = self.chat.unseen_messages.get(sender_id, 0) + 1
