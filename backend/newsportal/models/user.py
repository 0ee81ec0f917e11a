"""User model and the closed role enum."""

import enum
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Integer, Boolean, Enum
from sqlalchemy.orm import relationship

from newsportal.database import Base


class Role(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"
    DEVELOPER = "DEVELOPER"

    @property
    def is_admin_level(self) -> bool:
        return self in (Role.ADMIN, Role.DEVELOPER)

    @property
    def is_developer_level(self) -> bool:
        return self is Role.DEVELOPER


def _now():
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    # Written only by user_service.update_user_role (via the role workflow)
    role = Column(
        Enum(Role, name="user_role", native_enum=False, length=20, validate_strings=True),
        nullable=False,
        default=Role.USER,
    )
    full_name = Column(String(255), nullable=False)
    avatar = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=_now)
    updated_at = Column(DateTime, nullable=False, default=_now, onupdate=_now)

    # Relationships
    articles = relationship("Article", back_populates="author")
    comments = relationship("Comment", back_populates="author")
