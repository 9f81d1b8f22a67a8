import logging
import threading
import weakref

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base

logger = logging.getLogger(__name__)

Base = declarative_base()

_init_lock = threading.Lock()
_initialized = weakref.WeakSet()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE rules unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str, require_ssl: bool = False):
    is_sqlite = database_url.startswith("sqlite")
    # Only apply sqlite-specific connect_args when using sqlite
    connect_args = {"check_same_thread": False} if is_sqlite else {}
    if require_ssl and not is_sqlite:
        connect_args["sslmode"] = "require"

    # Enable pool_pre_ping to avoid stale connections (useful for cloud DBs like Neon)
    engine = create_engine(
        database_url,
        connect_args=connect_args,
        pool_pre_ping=True,
    )
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def init_db(engine) -> bool:
    """Create tables and indexes once per engine.

    Concurrent callers block on the lock; only the first one issues DDL. Every statement
    is create-if-missing, so a second process racing on the same database is harmless.
    Returns True when this call performed the initialisation.
    """
    # models must be registered on Base.metadata before create_all
    from taskboard import models  # noqa: F401

    with _init_lock:
        if engine in _initialized:
            return False
        Base.metadata.create_all(bind=engine, checkfirst=True)
        _initialized.add(engine)
    logger.info("schema ready on %s", engine.url.render_as_string(hide_password=True))
    return True


# id columns are plain Integer, which is 32-bit on PostgreSQL
MAX_ID = 2**31 - 1


def in_id_range(value: int) -> bool:
    return 0 < value <= MAX_ID


def create_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
