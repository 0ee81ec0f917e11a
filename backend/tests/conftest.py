"""Shared fixtures: in-memory database, API client and data factories."""

import os
import sys

# Must be set before newsportal.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")  # Speed up password hashing in tests
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from newsportal import models  # noqa: F401
from newsportal.database import Base, get_db
from newsportal.main import app
from newsportal.middleware.auth import create_access_token
from newsportal.models.user import Role
from newsportal.services import article_service, user_service

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "rahasia123"


@pytest.fixture
def db():
    """A session on a freshly created schema, dropped after the test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """API client whose requests share the test's session."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Factory creating users; ids are assigned 1, 2, 3... per test."""
    counter = {"n": 0}

    def _make_user(role=Role.USER, password=DEFAULT_PASSWORD, username=None):
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        return user_service.create_user(
            db,
            username=username,
            email=f"{username}@portal.id",
            password=password,
            full_name=f"Pengguna {counter['n']}",
            role=role,
        )

    return _make_user


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return _headers


@pytest.fixture
def category(db):
    return article_service.create_category(db, name="Nasional", description="Berita nasional Indonesia")


@pytest.fixture
def article(db, make_user, category):
    """A published article written by an ADMIN."""
    author = make_user(role=Role.ADMIN, username="redaksi")
    return article_service.create_article(
        db,
        author_id=author.id,
        title="Pemilu Berjalan Lancar",
        excerpt="Ringkasan hari pemungutan suara.",
        content="Isi lengkap berita pemilu.",
        category_id=category.id,
        is_published=True,
    )
