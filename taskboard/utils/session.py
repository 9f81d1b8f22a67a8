"""Session guards.

Both guards share :func:`resolve_identity`; they differ only in where the token is read
from and in how a failure is presented (401 payload vs. redirect to the login page).
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Header, Request

from taskboard.errors import LoginRequired, Unauthorized
from taskboard.utils.auth import decode_token

COOKIE_NAME = "token"


@dataclass(frozen=True)
class Identity:
    user_id: int
    email: str


def resolve_identity(token: Optional[str]) -> Identity:
    if not token:
        raise Unauthorized("Missing token")
    payload = decode_token(token)
    return Identity(user_id=payload["userId"], email=payload["email"])


def _extract_bearer(authorization: Optional[str]) -> Optional[str]:
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return None


def require_user(request: Request, authorization: Optional[str] = Header(None)) -> Identity:
    """API guard: token from ``Authorization: Bearer``, else the session cookie.

    Header has precedence. Fails with Unauthorized.
    """
    token = _extract_bearer(authorization) or request.cookies.get(COOKIE_NAME)
    identity = resolve_identity(token)
    request.state.user = identity
    return identity


def require_page_user(request: Request) -> Identity:
    """Interactive guard: token from the session cookie; failures redirect to login."""
    try:
        identity = resolve_identity(request.cookies.get(COOKIE_NAME))
    except Unauthorized:
        raise LoginRequired()
    request.state.user = identity
    return identity
