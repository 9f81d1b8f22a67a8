import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskboard.database import in_id_range
from taskboard.errors import Conflict, InvalidInput, NotFound, Unauthorized
from taskboard.models.user import User
from taskboard.utils.auth import hash_password, verify_password, create_token

logger = logging.getLogger(__name__)


def find_by_email(db: Session, email: str) -> Optional[User]:
    return db.execute(
        select(User).where(func.lower(User.email) == email.lower())
    ).scalar_one_or_none()


def _require_credentials(email: Optional[str], password: Optional[str]):
    if not email or not password:
        raise InvalidInput("email and password required")


def signup(db: Session, email: Optional[str], password: Optional[str]):
    """Create a user and return ``(user, token)``."""
    _require_credentials(email, password)
    if find_by_email(db, email):
        raise Conflict("email already registered")

    user = User(email=email, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race against a concurrent signup for the same address
        db.rollback()
        raise Conflict("email already registered")
    db.refresh(user)
    logger.info("user %s signed up", user.id)
    return user, create_token(user.id, user.email)


def login(db: Session, email: Optional[str], password: Optional[str]):
    """Check credentials and return ``(user, token)``."""
    _require_credentials(email, password)
    user = find_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.info("login rejected")
        raise Unauthorized("invalid credentials")
    logger.info("user %s logged in", user.id)
    return user, create_token(user.id, user.email)


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id) if in_id_range(user_id) else None
    if not user:
        raise NotFound("not found")
    return user


def user_exists(db: Session, user_id: int) -> bool:
    if not in_id_range(user_id):
        return False
    return db.execute(select(User.id).where(User.id == user_id)).first() is not None
