# quickchat/api/schemas.py
#
# Every field is optional: missing input is reported by the services as
# {success: false, message} rather than as a 422.

from typing import Optional

from pydantic import BaseModel


class SignupSchema(BaseModel):
    fullname: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    bio: Optional[str] = None


class LoginSchema(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UpdateProfileSchema(BaseModel):
    fullname: Optional[str] = None
    bio: Optional[str] = None
    profilepic: Optional[str] = None


class SendMessageSchema(BaseModel):
    text: Optional[str] = None
    image: Optional[str] = None
