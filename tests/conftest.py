# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="linkfeed-uploads-"))
os.environ.setdefault("LOG_LEVEL", "WARNING")

from linkfeed.core.security import create_access_token, hash_password  # noqa: E402
from linkfeed.core.settings import Settings  # noqa: E402
from linkfeed.db.session import Base  # noqa: E402
from linkfeed.db.session import get_db as app_get_session  # noqa: E402
from linkfeed.main import app as fastapi_app  # noqa: E402
from linkfeed.models import Post, User  # noqa: E402

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "password123"

# Hash once; bcrypt is deliberately slow.
_TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)
_TEST_SETTINGS_INSTANCE = Settings()


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide a Settings instance aligned with runtime configuration."""
    return _TEST_SETTINGS_INSTANCE


@pytest.fixture(scope="session")
def api_prefix(test_settings: Settings) -> str:
    return test_settings.api_prefix


def _make_user(db_session: Session, name: str, email: str) -> User:
    user = User(name=name, email=email, password_hash=_TEST_PASSWORD_HASH)
    db_session.add(user)
    db_session.flush()
    db_session.refresh(user)
    return user


@pytest.fixture()
def test_user(db_session: Session) -> Iterator[User]:
    """Create and return a persisted test user."""
    yield _make_user(db_session, "Test User", "test@example.com")


@pytest.fixture()
def other_user(db_session: Session) -> Iterator[User]:
    """Create and return a second persisted user."""
    yield _make_user(db_session, "Other User", "other@example.com")


@pytest.fixture()
def third_user(db_session: Session) -> Iterator[User]:
    """A user with no relation to the post under test."""
    yield _make_user(db_session, "Third User", "third@example.com")


def bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return bearer(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return bearer(other_user)


@pytest.fixture()
def third_auth_token(third_user: User) -> dict[str, str]:
    return bearer(third_user)


@pytest.fixture()
def test_post(db_session: Session, test_user: User) -> Iterator[Post]:
    """Create a baseline post owned by ``test_user``."""
    post = Post(
        author_id=test_user.id,
        author_name=test_user.name,
        content="Test post content",
    )
    db_session.add(post)
    db_session.flush()
    db_session.refresh(post)
    yield post
