"""Password hashing, JWT access and reset tokens, and role dependencies."""

import hashlib
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from newsportal.config import settings
from newsportal.database import get_db
from newsportal.errors import ValidationError
from newsportal.models.user import User

security = HTTPBearer(auto_error=False)

# bcrypt only reads the first 72 bytes and bcrypt>=5 rejects anything longer
MAX_PASSWORD_BYTES = 72
RESET_PURPOSE = "reset"


def hash_password(password: str) -> str:
    """Hash a password using bcrypt directly (passlib is broken with bcrypt>=4.1)."""
    pwd_bytes = password.encode("utf-8")
    if len(pwd_bytes) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password maksimal {MAX_PASSWORD_BYTES} byte")
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(pwd_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a bcrypt hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
    except ValueError:
        return False


def create_access_token(user: User) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": str(user.id),
        "username": user.username,
        "email": user.email,
        "role": user.role.value,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def password_fingerprint(password_hash: str) -> str:
    """Short digest of the stored hash; changes whenever the password does."""
    return hashlib.sha256(password_hash.encode("utf-8")).hexdigest()[:16]


def create_reset_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Signed password reset token.

    Bound to the user's current password hash, so it stops working once the
    password has been changed with it.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.RESET_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": str(user.id),
        "purpose": RESET_PURPOSE,
        "pwd": password_fingerprint(user.password_hash),
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def read_reset_token(token: str) -> tuple[int, str]:
    """Return ``(user_id, password_fingerprint)`` from a reset token."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        if payload.get("purpose") != RESET_PURPOSE:
            raise ValidationError("Token tidak valid")
        return int(payload["sub"]), str(payload["pwd"])
    except (JWTError, KeyError, TypeError, ValueError):
        raise ValidationError("Token tidak valid")


def decode_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return payload
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token tidak valid",
        )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Token akses diperlukan")
    payload = decode_token(credentials.credentials)
    if payload.get("purpose") is not None:
        # Reset tokens are not access tokens
        raise HTTPException(status_code=401, detail="Token tidak valid")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Token tidak valid")
    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="Token tidak valid atau pengguna tidak aktif")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.role.is_admin_level:
        raise HTTPException(status_code=403, detail="Akses ditolak - peran tidak memadai")
    return current_user


def require_developer(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.role.is_developer_level:
        raise HTTPException(status_code=403, detail="Akses ditolak - peran tidak memadai")
    return current_user
