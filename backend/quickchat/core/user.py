# quickchat/core/user.py

import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quickchat.core.errors import AuthError, ConflictError, ValidationError
from quickchat.core.security import create_token, decode_token, hash_password, verify_password
from quickchat.infra.assets import upload_image
from quickchat.models.user import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def signup(db: Session, fullname: str, email: str, password: str, bio: str) -> Tuple[str, User]:
    """Create an account and return (token, user)."""
    if not all(value and value.strip() for value in (fullname, email, password, bio)):
        raise ValidationError("All fields are required")

    normalized_email = normalize_email(email)
    if get_user_by_email(db, normalized_email):
        raise ConflictError("User already exists")

    user = User(
        fullname=fullname.strip(),
        email=normalized_email,
        password_hash=hash_password(password),
        bio=bio,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent signup with the same email
        db.rollback()
        raise ConflictError("User already exists")
    db.refresh(user)

    logger.info("✅ User %s registered", user.id)
    return create_token(user.id), user


def login(db: Session, email: str, password: str) -> Tuple[str, User]:
    if not email or not password:
        raise AuthError("Invalid credentials")

    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        raise AuthError("Invalid credentials")

    return create_token(user.id), user


def check_auth(db: Session, token: str) -> User:
    """Resolve a session token to its user, or raise AuthError."""
    user_id = decode_token(token)
    user = get_user(db, user_id)
    if user is None:
        raise AuthError("User not found")
    return user


def update_profile(
    db: Session,
    user_id: str,
    fullname: Optional[str] = None,
    bio: Optional[str] = None,
    profilepic: Optional[str] = None,
) -> User:
    """
    Merge the supplied fields into the user record. Fields left as None keep
    their stored value; a new profile picture goes through the asset store
    and only the returned URL is saved.
    """
    user = get_user(db, user_id)
    if user is None:
        raise AuthError("User not found")

    if fullname is not None:
        if not fullname.strip():
            raise ValidationError("Full name cannot be empty")
        user.fullname = fullname.strip()
    if bio is not None:
        user.bio = bio
    if profilepic:
        user.profilepic = upload_image(profilepic)

    db.commit()
    db.refresh(user)
    return user
