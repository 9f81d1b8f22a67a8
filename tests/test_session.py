import base64
import json

import pytest
from jose import jwt

import taskboard.config as config
from taskboard.utils.auth import create_token
from taskboard.utils.session import Identity, resolve_identity
from taskboard.errors import InvalidToken, Unauthorized

from helpers import bearer, signup


def _tamper(token: str) -> str:
    header, payload, signature = token.split(".")
    claims = json.loads(base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)))
    claims["userId"] = claims["userId"] + 1000
    forged = base64.urlsafe_b64encode(json.dumps(claims).encode()).decode().rstrip("=")
    return ".".join([header, forged, signature])


def _expired(user):
    return jwt.encode(
        {"userId": user["id"], "email": user["email"], "exp": 1},
        config.SECRET_KEY,
        algorithm=config.ALGORITHM,
    )


def _wrong_secret(user):
    return jwt.encode({"userId": user["id"], "email": user["email"]}, "not-the-secret", algorithm="HS256")


BAD_TOKENS = {
    "expired": _expired,
    "tampered": lambda user: _tamper(create_token(user["id"], user["email"])),
    "wrong_secret": _wrong_secret,
    "garbage": lambda user: "not.a.token",
}


def test_resolve_identity():
    token = create_token(3, "c@example.com")
    assert resolve_identity(token) == Identity(user_id=3, email="c@example.com")


def test_resolve_identity_without_token():
    with pytest.raises(Unauthorized):
        resolve_identity(None)
    with pytest.raises(Unauthorized):
        resolve_identity("")


def test_resolve_identity_rejects_tampered_token():
    with pytest.raises(InvalidToken):
        resolve_identity(_tamper(create_token(3, "c@example.com")))


def test_header_and_cookie_accept_issued_token(client):
    user, token = signup(client)
    assert client.get("/tasks", headers=bearer(token)).status_code == 200

    client.cookies.set("token", token)
    try:
        assert client.get("/tasks").status_code == 200
        assert client.get("/board").json()["user"] == {"id": user["id"], "email": user["email"]}
    finally:
        client.cookies.clear()


@pytest.mark.parametrize("kind", sorted(BAD_TOKENS))
def test_bad_token_rejected_identically_by_header_and_cookie(client, kind):
    user, _ = signup(client)
    token = BAD_TOKENS[kind](user)

    via_header = client.get("/tasks", headers=bearer(token))

    client.cookies.set("token", token)
    try:
        via_cookie = client.get("/tasks")
        page = client.get("/board", follow_redirects=False)
    finally:
        client.cookies.clear()

    assert via_header.status_code == via_cookie.status_code == 401
    assert via_header.json() == via_cookie.json()
    assert page.status_code == 303
    assert page.headers["location"] == "/auth"


def test_missing_token(client):
    r = client.get("/tasks")
    assert r.status_code == 401
    assert r.json()["detail"] == "Missing token"


def test_board_without_cookie_redirects(client):
    r = client.get("/board", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/auth"


def test_board_ignores_bearer_header(client):
    _, token = signup(client)
    r = client.get("/board", headers=bearer(token), follow_redirects=False)
    assert r.status_code == 303


def test_header_takes_precedence_over_cookie(client):
    _, token = signup(client)
    client.cookies.set("token", "garbage")
    try:
        assert client.get("/tasks", headers=bearer(token)).status_code == 200
    finally:
        client.cookies.clear()


def test_malformed_authorization_header(client):
    _, token = signup(client)
    assert client.get("/tasks", headers={"Authorization": token}).status_code == 401
    assert client.get("/tasks", headers={"Authorization": f"Token {token}"}).status_code == 401


def test_task_view_page(client):
    user, token = signup(client)
    assert client.get("/tasks/view", follow_redirects=False).status_code == 303

    client.cookies.set("token", token)
    try:
        r = client.get("/tasks/view")
    finally:
        client.cookies.clear()
    assert r.status_code == 200
    assert r.json() == {"title": "Task Details", "user": {"id": user["id"], "email": user["email"]}}


def test_auth_page_names_signed_in_user(client):
    user, token = signup(client)
    assert client.get("/auth").json() == {"title": "Sign Up / Login"}

    client.cookies.set("token", "garbage")
    try:
        assert client.get("/auth").json() == {"title": "Sign Up / Login"}
        client.cookies.set("token", token)
        assert client.get("/auth").json()["user"] == {"id": user["id"], "email": user["email"]}
    finally:
        client.cookies.clear()
