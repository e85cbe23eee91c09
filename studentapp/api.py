"""
FastAPI app entry point aggregating the routers under studentapp/routes.
Keep as `uvicorn studentapp.api:app`.
"""
from __future__ import annotations

from fastapi import FastAPI

from . import __version__
from .config import get_log_level
from .db import StorageHandle, open_storage
from .logs import configure_logging
from .services.student_svc import StudentRepository


def create_app(storage: StorageHandle | None = None) -> FastAPI:
    """
    Build the application.

    With no storage given, the store is opened on startup from the configured
    path; a StorageError there is left to propagate so the server refuses to
    start.
    """
    configure_logging(get_log_level())
    app = FastAPI(title="studentapp", version=__version__)

    if storage is not None:
        app.state.repository = StudentRepository(storage)
    else:
        @app.on_event("startup")
        def on_startup():
            app.state.repository = StudentRepository(open_storage())

    from .routes import base as base_routes
    from .routes import students as students_routes
    from .routes import api_students as api_students_routes

    app.include_router(base_routes.router)
    app.include_router(students_routes.router)
    app.include_router(api_students_routes.router)
    return app


app = create_app()
