from fastapi import APIRouter, Depends, Request

from taskboard.errors import Unauthorized
from taskboard.utils.session import COOKIE_NAME, Identity, require_page_user, resolve_identity

router = APIRouter(tags=["pages"])


def _user(identity: Identity) -> dict:
    return {"id": identity.user_id, "email": identity.email}


@router.get("/auth")
def auth_page(request: Request):
    """Context for the login page; names the signed-in user when the cookie is valid."""
    context = {"title": "Sign Up / Login"}
    try:
        context["user"] = _user(resolve_identity(request.cookies.get(COOKIE_NAME)))
    except Unauthorized:
        pass
    return context


@router.get("/board")
def board(identity: Identity = Depends(require_page_user)):
    """Context for the board page; browsers without a valid session are sent to login."""
    return {"title": "Task Board", "user": _user(identity)}


@router.get("/tasks/view")
def task_view(identity: Identity = Depends(require_page_user)):
    return {"title": "Task Details", "user": _user(identity)}
