import uuid

from fastapi.testclient import TestClient


def unique_email(prefix: str = "user") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}@example.com"


def signup(client: TestClient, email: str = None, password: str = "Pass123!"):
    """Register a user through the API and return (user, token)."""
    r = client.post("/users/signup", json={"email": email or unique_email(), "password": password})
    assert r.status_code == 201, r.text
    data = r.json()
    return data["user"], data["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
