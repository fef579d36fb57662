"""Shared fixtures: temporary SQLite stores and wired-up services."""

import os
import tempfile

import pytest

TEST_SECRET = "test-secret-key-for-unit-testing-only-32chars"

# Settings require a signing secret; set one before anything reads the env
os.environ.setdefault("JWT_SECRET_KEY", TEST_SECRET)

from kalistheniks.auth.token_codec import TokenCodec  # noqa: E402
from kalistheniks.db.repositories import SessionRepository, UserRepository  # noqa: E402
from kalistheniks.services.auth_service import AuthService  # noqa: E402
from kalistheniks.services.authorization import AuthorizationGate  # noqa: E402
from kalistheniks.services.plan_service import PlanService  # noqa: E402
from kalistheniks.services.session_service import SessionService  # noqa: E402


@pytest.fixture
def temp_db_path():
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name
    yield db_path
    try:
        os.unlink(db_path)
    except OSError:
        pass


@pytest.fixture
def user_repo(temp_db_path):
    return UserRepository(db_path=temp_db_path)


@pytest.fixture
def session_repo(temp_db_path):
    return SessionRepository(db_path=temp_db_path)


@pytest.fixture
def secret():
    return TEST_SECRET


@pytest.fixture
def codec(secret):
    return TokenCodec(secret=secret)


@pytest.fixture
def auth_service(user_repo, codec):
    return AuthService(users=user_repo, codec=codec)


@pytest.fixture
def gate(auth_service, user_repo, session_repo):
    return AuthorizationGate(
        auth_service=auth_service,
        users=user_repo,
        sessions=session_repo,
    )


@pytest.fixture
def session_service(session_repo, gate):
    return SessionService(sessions=session_repo, gate=gate)


@pytest.fixture
def plan_service(session_repo):
    return PlanService(sessions=session_repo)


@pytest.fixture
def make_user(user_repo):
    """Create users directly in the store (skips bcrypt for speed)."""
    counter = {"n": 0}

    def _make(email=None):
        counter["n"] += 1
        return user_repo.create_user(
            email=email or f"user{counter['n']}@example.com",
            password_hash="not-a-real-hash",
        )

    return _make
