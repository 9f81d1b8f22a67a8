import os

# cheap hashes and a known secret; must be set before taskboard.config is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient

from taskboard.main import create_app

from helpers import bearer, signup


@pytest.fixture
def app(tmp_path):
    return create_app(database_url=f"sqlite:///{tmp_path / 'taskboard.db'}")


@pytest.fixture
def client(app):
    # entering the client runs the lifespan: engine + schema
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(client):
    session = client.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_and_token(client):
    return signup(client)


@pytest.fixture
def headers(user_and_token):
    return bearer(user_and_token[1])
