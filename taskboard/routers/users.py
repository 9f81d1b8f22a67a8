from fastapi import APIRouter, Depends, Response
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

import taskboard.config as _cfg
from taskboard.database import get_db
from taskboard.schemas.user import AuthOut, Credentials, UserOut
from taskboard.services import users as user_service
from taskboard.utils.session import COOKIE_NAME, Identity, require_user

router = APIRouter(prefix="/users", tags=["users"])


def _cookie_opts() -> dict:
    cross_site = _cfg.CROSS_SITE_COOKIES
    return {
        "httponly": True,
        "samesite": "none" if cross_site else "lax",
        "secure": True if cross_site else _cfg.is_production(),
        "path": "/",
    }


@router.post("/signup", response_model=AuthOut, status_code=201)
def signup(creds: Credentials, db: Session = Depends(get_db)):
    user, token = user_service.signup(db, creds.email, creds.password)
    return {"token": token, "user": user}


@router.post("/login", response_model=AuthOut)
def login(creds: Credentials, response: Response, db: Session = Depends(get_db)):
    user, token = user_service.login(db, creds.email, creds.password)
    response.set_cookie(
        COOKIE_NAME,
        token,
        max_age=int(_cfg.ACCESS_TOKEN_EXPIRE_MINUTES * 60),
        **_cookie_opts(),
    )
    return {"token": token, "user": user}


@router.get("/me", response_model=UserOut)
def me(identity: Identity = Depends(require_user), db: Session = Depends(get_db)):
    return user_service.get_user(db, identity.user_id)


@router.api_route("/logout", methods=["GET", "POST"])
def logout():
    response = RedirectResponse(url=_cfg.LOGIN_PATH, status_code=303)
    response.delete_cookie(COOKIE_NAME, **_cookie_opts())
    return response
