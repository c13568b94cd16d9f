import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from habitflow import create_app
from habitflow.extensions import db
from habitflow.core.auth.auth_service import issue_tokens
from habitflow.core.auth.csrf import SESSION_KEY
from habitflow.core.users import models as user_models
from habitflow.domains.categories.models import category_models
from habitflow.domains.habits.models import habit_models
from habitflow.platform.outbox import models as outbox_models


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, API)")


@pytest.fixture()
def app():
    """Per-test app bound to a fresh in-memory database."""
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
def user(app):
    user = user_models.User(email="test@example.com")
    user.set_password("secret123")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture()
def category(app):
    category = category_models.Category(name="Health & Fitness", color="#10B981", icon="heart")
    db.session.add(category)
    db.session.commit()
    return category


def _prime_csrf(client) -> str:
    """Insert CSRF token into client session."""
    token = "test-csrf-token"
    with client.session_transaction() as sess:
        sess[SESSION_KEY] = token
    return token


@pytest.fixture()
def auth_headers(app, client, user):
    """JWT + CSRF headers for the default test user."""
    tokens = issue_tokens(user)
    csrf_token = _prime_csrf(client)
    return {"Authorization": f"Bearer {tokens['access_token']}", "X-CSRF-Token": csrf_token}
