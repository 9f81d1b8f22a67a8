import os
import secrets


class ConfigurationError(RuntimeError):
    pass


def _flag(name: str, default: str = "") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


APP_ENV = os.environ.get("APP_ENV", "development")

# No fixed fallback: outside production an unset secret becomes a per-process random value
SECRET_KEY = os.environ.get("SECRET_KEY") or ""
if not SECRET_KEY and APP_ENV != "production":
    SECRET_KEY = secrets.token_urlsafe(32)

ALGORITHM = os.environ.get("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = float(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 7 * 24 * 60))
BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", 12))

# Default to local SQLite for dev/tests; override via env in Docker/Prod
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./taskboard.db")
DATABASE_SSL = _flag("DATABASE_SSL")

# Set when the frontend and the API are served from different origins
CROSS_SITE_COOKIES = _flag("CROSS_SITE_COOKIES")
LOGIN_PATH = os.environ.get("LOGIN_PATH", "/auth")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FILE = os.environ.get("LOG_FILE")


def is_production() -> bool:
    return APP_ENV == "production"


def validate_settings():
    """Refuse to start a production profile without an externally supplied secret."""
    if is_production() and not SECRET_KEY:
        raise ConfigurationError("SECRET_KEY must be set when APP_ENV=production")
