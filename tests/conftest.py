"""
Shared fixtures: an app on in-memory SQLite, two users, a small exercise
catalog and auth headers for each user.
"""
import pytest
from flask_jwt_extended import create_access_token

from config import TestingConfig
from fitcore import create_app, db
from fitcore.models import Exercise, User


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    ctx = app.app_context()
    ctx.push()
    yield app
    db.session.remove()
    db.drop_all()
    ctx.pop()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_user(username):
    user = User(email=f"{username}@example.com", username=username, display_name=username)
    user.set_password("secret123")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def alice(app):
    return _make_user("alice")


@pytest.fixture
def bob(app):
    return _make_user("bob")


@pytest.fixture
def exercise(app):
    """Catalog exercise with id 5."""
    ex = Exercise(id=5, name="Bench Press", category="strength", equipment="barbell")
    db.session.add(ex)
    db.session.commit()
    return ex


@pytest.fixture
def auth_headers(alice):
    token = create_access_token(identity=str(alice.id))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def bob_headers(bob):
    token = create_access_token(identity=str(bob.id))
    return {"Authorization": f"Bearer {token}"}
