# quickchat/api/auth.py

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from quickchat.api.deps import get_current_user
from quickchat.api.schemas import LoginSchema, SignupSchema, UpdateProfileSchema
from quickchat.core import user as user_service
from quickchat.core.rate_limit import AUTH_LIMIT, limiter
from quickchat.infra.database import get_db
from quickchat.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth")


@router.post("/signup")
@limiter.limit(AUTH_LIMIT)
def signup_endpoint(request: Request, payload: SignupSchema, db: Session = Depends(get_db)):
    token, user = user_service.signup(
        db,
        fullname=payload.fullname,
        email=payload.email,
        password=payload.password,
        bio=payload.bio,
    )
    return {
        "success": True,
        "user": user.to_dict(),
        "token": token,
        "message": "User registered successfully",
    }


@router.post("/login")
@limiter.limit(AUTH_LIMIT)
def login_endpoint(request: Request, payload: LoginSchema, db: Session = Depends(get_db)):
    token, user = user_service.login(db, email=payload.email, password=payload.password)
    logger.info("User %s logged in", user.id)
    return {
        "success": True,
        "user": user.to_dict(),
        "token": token,
        "message": "Logged in successfully",
    }


@router.get("/check")
def check_auth_endpoint(current_user: User = Depends(get_current_user)):
    return {"success": True, "user": current_user.to_dict()}


@router.put("/updateprofile")
def update_profile_endpoint(
    payload: UpdateProfileSchema,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = user_service.update_profile(
        db,
        current_user.id,
        fullname=payload.fullname,
        bio=payload.bio,
        profilepic=payload.profilepic,
    )
    return {"success": True, "user": user.to_dict()}
