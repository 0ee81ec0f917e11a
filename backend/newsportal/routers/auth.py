"""Auth router: registration, login, password reset, and current user info."""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from newsportal.config import settings
from newsportal.database import get_db
from newsportal.middleware.auth import create_access_token, get_current_user
from newsportal.middleware.rate_limit import limiter
from newsportal.models.user import User
from newsportal.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    UserResponse,
)
from newsportal.services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
@limiter.limit(settings.AUTH_RATE_LIMIT)
def register(request: Request, req: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new USER account and return a token for it."""
    user = user_service.create_user(
        db,
        username=req.username,
        email=req.email,
        password=req.password,
        full_name=req.full_name,
    )
    return AuthResponse(
        message="Registrasi berhasil",
        access_token=create_access_token(user),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
def login(request: Request, req: LoginRequest, db: Session = Depends(get_db)):
    """Login and get JWT token."""
    user = user_service.authenticate(db, req.email, req.password)
    return AuthResponse(
        message="Login berhasil",
        access_token=create_access_token(user),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """Get current user info."""
    return UserResponse.model_validate(current_user)


@router.post("/forgot-password", response_model=ForgotPasswordResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
def forgot_password(request: Request, req: ForgotPasswordRequest, db: Session = Depends(get_db)):
    """Issue a single-use reset link for the given email."""
    user, token = user_service.request_password_reset(db, req.email)
    reset_url = f"{settings.FRONTEND_URL.rstrip('/')}/reset-password?token={token}"
    # No mail transport yet; operators pick the link up from the log
    logger.info("Password reset link for user %s: %s", user.id, reset_url)
    return ForgotPasswordResponse(
        message="Link reset password telah dikirim ke email",
        reset_url=reset_url if settings.RESET_LINK_IN_RESPONSE else None,
    )


@router.post("/reset-password", response_model=MessageResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
def reset_password(request: Request, req: ResetPasswordRequest, db: Session = Depends(get_db)):
    """Set a new password using a token from /forgot-password."""
    user_service.reset_password(db, req.token, req.password)
    return MessageResponse(message="Password berhasil direset, silakan login dengan password baru.")
