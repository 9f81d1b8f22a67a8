import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError

import taskboard.config as _cfg
from taskboard.database import create_db_engine, create_session_factory, init_db
from taskboard.errors import LoginRequired, TaskboardError, Unauthorized
from taskboard.logging_setup import setup_logging
from taskboard.routers import pages, tasks, users

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message}, headers=headers)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "invalid input"


def create_app(database_url: Optional[str] = None) -> FastAPI:
    setup_logging(_cfg.LOG_LEVEL, _cfg.LOG_FILE)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _cfg.validate_settings()
        engine = create_db_engine(database_url or _cfg.DATABASE_URL, require_ssl=_cfg.DATABASE_SSL)
        init_db(engine)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        logger.info("store connected")
        try:
            yield
        finally:
            engine.dispose()
            logger.info("store pool closed")

    app = FastAPI(title="Taskboard", lifespan=lifespan)

    app.include_router(users.router)
    # pages first: /tasks/view must not be taken for /tasks/{task_id}
    app.include_router(pages.router)
    app.include_router(tasks.router)

    @app.exception_handler(TaskboardError)
    async def taskboard_error_handler(request: Request, exc: TaskboardError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
        return _error(exc.status_code, exc.message, headers)

    @app.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired):
        return RedirectResponse(url=_cfg.LOGIN_PATH, status_code=303)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error(400, _validation_message(exc))

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("store error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(500, "Internal server error")

    # Generic error handler to return JSON errors for unexpected exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(500, "Internal server error")

    return app


app = create_app()
