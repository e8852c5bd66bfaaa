from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from api.schemas.user_schemas import CamelModel, UserPublic

MIN_PASSWORD_LENGTH = 6


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1)
    email: EmailStr
    password: str


class VerifyEmailRequest(CamelModel):
    user_id: str
    code: str


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(CamelModel):
    email: EmailStr
    code: str
    new_password: str


class LoginResponse(BaseModel):
    message: str
    user: UserPublic


class RegisterResponse(CamelModel):
    message: str
    user_id: str


class VerifyEmailResponse(BaseModel):
    message: str
    user: UserPublic


class MessageResponse(BaseModel):
    message: str


class AuthTokenPayload(BaseModel):
    sub: str  # user id
    exp: Optional[datetime] = None
