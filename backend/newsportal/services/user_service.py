"""User service: lookups, registration, login, profile, password reset and the role writer."""

import logging
from typing import Optional, Union

from sqlalchemy import or_
from sqlalchemy.orm import Session

from newsportal.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from newsportal.middleware.auth import (
    create_reset_token,
    hash_password,
    password_fingerprint,
    read_reset_token,
    verify_password,
)
from newsportal.models.user import Role, User

logger = logging.getLogger(__name__)


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


def create_user(
    db: Session,
    username: str,
    email: str,
    password: str,
    full_name: str,
    role: Role = Role.USER,
) -> User:
    """Register a new account. Email is stored lower-cased."""
    email = email.strip().lower()
    existing = (
        db.query(User)
        .filter(or_(User.email == email, User.username == username))
        .first()
    )
    if existing:
        raise ConflictError("Email atau username sudah digunakan")

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        full_name=full_name,
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the active user owning these credentials."""
    user = get_user_by_email(db, email)
    if not user or not user.is_active or not verify_password(password, user.password_hash):
        raise AuthenticationError("Email atau password salah")
    return user


def update_profile(
    db: Session,
    user_id: int,
    full_name: str,
    email: str,
    current_password: Optional[str] = None,
    new_password: Optional[str] = None,
) -> User:
    """Update name/email, and the password when the current one is confirmed."""
    if not full_name or not email:
        raise ValidationError("Nama dan email diperlukan")

    user = get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User tidak ditemukan")

    email = email.strip().lower()
    if email != user.email and get_user_by_email(db, email):
        raise ConflictError("Email sudah digunakan")

    if new_password:
        if not current_password:
            raise ValidationError("Password lama diperlukan untuk mengubah password")
        if not verify_password(current_password, user.password_hash):
            raise ValidationError("Password lama tidak benar")
        user.password_hash = hash_password(new_password)

    user.full_name = full_name
    user.email = email
    db.commit()
    db.refresh(user)
    return user


def request_password_reset(db: Session, email: Optional[str]) -> tuple[User, str]:
    """Issue a reset token for the account owning ``email``."""
    if not email or not email.strip():
        raise ValidationError("Email diperlukan")
    user = get_user_by_email(db, email)
    if not user or not user.is_active:
        raise NotFoundError("Email tidak ditemukan")
    return user, create_reset_token(user)


def reset_password(db: Session, token: Optional[str], new_password: Optional[str]) -> User:
    """Set a new password from a reset token. Each token works once."""
    if not token or not new_password:
        raise ValidationError("Token dan password baru diperlukan")
    if len(new_password) < 6:
        raise ValidationError("Password minimal 6 karakter")

    user_id, fingerprint = read_reset_token(token)
    user = get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User tidak ditemukan")
    if not user.is_active or fingerprint != password_fingerprint(user.password_hash):
        raise ValidationError("Token tidak valid")

    user.password_hash = hash_password(new_password)
    db.commit()
    db.refresh(user)
    logger.info("Password reset for user %s", user.id)
    return user


def update_user_role(db: Session, user_id: int, role: Union[Role, str]) -> User:
    """Set a user's role. The only code path that writes ``User.role``.

    Flushes without committing; the role workflow commits the change together
    with its audit row.
    """
    try:
        role = Role(role)
    except ValueError:
        raise ValidationError("Role tidak valid")

    user = get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User tidak ditemukan")

    user.role = role
    db.flush()
    return user
