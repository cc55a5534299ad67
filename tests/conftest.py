# tests/conftest.py
import os
import sys
import pytest

# so that `from app import create_app` works when run from the repo root
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from app import create_app
from config import TestingConfig
from extensions import db
from modules.roles.services import create_role


@pytest.fixture()
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def role(app):
    return create_role("admin")


@pytest.fixture()
def make_user(app):
    """Factory creating users through the service layer."""
    from modules.users.services import create_user

    def _make(username, email=None, password="pw1", **extra):
        payload = {"username": username, "email": email or f"{username}@x.com", "password": password}
        payload.update(extra)
        return create_user(payload)

    return _make
