"""Auth and user request/response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from newsportal.models.user import Role


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    full_name: str = Field(min_length=1, max_length=255)


class LoginRequest(BaseModel):
    email: str
    password: str = Field(min_length=1)


class UserResponse(BaseModel):
    """Public view of a user. Never carries the password hash."""

    id: int
    username: str
    email: str
    full_name: str
    role: Role
    avatar: Optional[str] = None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    message: str
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class ProfileUpdateRequest(BaseModel):
    full_name: str
    email: str
    current_password: Optional[str] = None
    new_password: Optional[str] = Field(default=None, min_length=6, max_length=72)


class MessageResponse(BaseModel):
    message: str


class ForgotPasswordRequest(BaseModel):
    email: Optional[str] = None


class ForgotPasswordResponse(BaseModel):
    message: str
    reset_url: Optional[str] = None


class ResetPasswordRequest(BaseModel):
    token: Optional[str] = None
    password: Optional[str] = Field(default=None, max_length=72)
