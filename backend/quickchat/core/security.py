# quickchat/core/security.py

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from quickchat.core.config import BCRYPT_ROUNDS, JWT_ALGORITHM, JWT_SECRET, TOKEN_EXPIRE_DAYS
from quickchat.core.errors import AuthError


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Salted bcrypt hash, stored as text."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def create_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a session token carrying the user id and an expiry.
    Tokens are stateless: nothing is stored server-side and there is no
    revocation list.
    """
    if expires_delta is None:
        expires_delta = timedelta(days=TOKEN_EXPIRE_DAYS)
    payload = {
        "userId": user_id,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> str:
    """Verify signature and expiry, return the user id inside the token."""
    if not token:
        raise AuthError("Not authorized, token missing")
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthError("Token expired")
    except jwt.InvalidTokenError:
        raise AuthError("Invalid token")

    user_id = payload.get("userId")
    if not user_id:
        raise AuthError("Invalid token")
    return user_id
