import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storefront import create_app
from storefront.core.auth.constants import (
    SESSION_CSRF_TOKEN,
    SESSION_USER_EMAIL,
    SESSION_USER_ID,
    SESSION_USER_NAME,
    SESSION_USER_ROLE,
)
from storefront.core.users.models import User
from storefront.extensions import db

DEFAULT_PASSWORD = "secret123"
TEST_CSRF_TOKEN = "a" * 64


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, HTTP client)")


@pytest.fixture()
def app():
    """Per-test app on a fresh in-memory database."""
    app = create_app("testing")
    ctx = app.app_context()
    ctx.push()
    db.create_all()
    try:
        yield app
    finally:
        db.session.remove()
        db.drop_all()
        ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_user(app):
    def _make(email: str, role: str = "cashier", name: str = "", password: str = DEFAULT_PASSWORD) -> User:
        user = User(email=email, name=name or email.split("@")[0].title(), role=role)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture()
def admin(make_user):
    return make_user("admin@example.com", role="admin", name="Ada Admin")


@pytest.fixture()
def cashier(make_user):
    return make_user("cashier@example.com", role="cashier", name="Cas Cashier")


def login_as(client, user=None, **overrides) -> None:
    """Prime the client's session with a signed-in identity."""
    with client.session_transaction() as sess:
        if user is not None:
            sess[SESSION_USER_ID] = user.id
            sess[SESSION_USER_NAME] = user.name
            sess[SESSION_USER_ROLE] = user.role
            sess[SESSION_USER_EMAIL] = user.email
        for key, value in overrides.items():
            if value is None:
                sess.pop(key, None)
            else:
                sess[key] = value


def prime_csrf(client, token: str = TEST_CSRF_TOKEN) -> str:
    with client.session_transaction() as sess:
        sess[SESSION_CSRF_TOKEN] = token
    return token
