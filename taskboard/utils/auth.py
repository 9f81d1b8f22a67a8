import logging
from datetime import datetime, timedelta, UTC

from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext

import taskboard.config as _cfg
from taskboard.errors import InvalidInput, InvalidToken

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72

_contexts = {}


def _pwd_context() -> CryptContext:
    # rounds are read at call-time so tests can lower the cost factor
    rounds = _cfg.BCRYPT_ROUNDS
    ctx = _contexts.get(rounds)
    if ctx is None:
        ctx = _contexts[rounds] = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )
    return ctx


def hash_password(password: str) -> str:
    """Hash a password after validating bcrypt's 72-byte limit.

    Raises InvalidInput if the UTF-8 encoding of the password exceeds 72 bytes.
    """
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise InvalidInput("password too long: must be at most 72 bytes when UTF-8 encoded")
    return _pwd_context().hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plaintext password against a hash.

    Over-long passwords and unreadable hashes verify as False so callers answer with an
    authentication failure instead of an error.
    """
    if len(plain.encode("utf-8")) > BCRYPT_MAX_BYTES:
        return False
    try:
        return _pwd_context().verify(plain, hashed)
    except ValueError:
        return False


def create_token(user_id: int, email: str) -> str:
    # expiry is read at call-time so runtime overrides of the config take effect immediately
    expire = datetime.now(UTC) + timedelta(minutes=_cfg.ACCESS_TOKEN_EXPIRE_MINUTES)
    data = {"userId": user_id, "email": email, "exp": int(expire.timestamp())}
    return jwt.encode(data, _cfg.SECRET_KEY, algorithm=_cfg.ALGORITHM)


def decode_token(token: str) -> dict:
    """Return ``{"userId", "email"}`` from a token issued by :func:`create_token`.

    Raises InvalidToken for a bad signature, a malformed token or payload, or an expired token.
    """
    try:
        # jwt.decode validates exp automatically
        payload = jwt.decode(token, _cfg.SECRET_KEY, algorithms=[_cfg.ALGORITHM])
    except ExpiredSignatureError:
        raise InvalidToken("Token has expired")
    except JWTError:
        raise InvalidToken("Invalid token")

    user_id = payload.get("userId")
    email = payload.get("email")
    if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(email, str):
        raise InvalidToken("Invalid token: missing user")
    return {"userId": user_id, "email": email}
