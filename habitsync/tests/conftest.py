import pytest

from habitsync import create_app
from habitsync.core.auth.auth_service import issue_access_token
from habitsync.core.auth.password import hash_password
from habitsync.core.users.models import User
from habitsync.extensions import db


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, API)")


@pytest.fixture()
def app():
    """
    Create a per-test app backed by a fresh in-memory database.

    The app context stays pushed for the whole test, so test-client requests
    reuse it and share the test's session.
    """
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        try:
            yield app
        finally:
            db.session.remove()
            db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_user(app):
    """Insert a user with an explicit id and return it."""

    def _make(user_id: int, email: str | None = None, username: str | None = None, **fields) -> User:
        user = User(
            user_id=user_id,
            username=username or f"user{user_id}",
            email=email or f"user{user_id}@example.com",
            password_hash=fields.pop("password_hash", None) or hash_password("secret123"),
            **fields,
        )
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture()
def auth_headers():
    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {issue_access_token(user)}"}

    return _headers
