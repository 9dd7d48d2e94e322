from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schedulenest.api.routes import categories, codes, document, folders, preferences, schedules, todos
from schedulenest.errors import StorageWriteError
from schedulenest.logging_config import configure_logging


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="ScheduleNest API", version="0.1.0")

    app.include_router(codes.router)
    app.include_router(document.router)
    app.include_router(schedules.router)
    app.include_router(todos.router)
    app.include_router(folders.router)
    app.include_router(categories.router)
    app.include_router(preferences.router)

    @app.exception_handler(StorageWriteError)
    async def _storage_write_handler(request: Request, exc: StorageWriteError):
        logging.getLogger("schedulenest").error("Storage write failed: %s", exc)
        return JSONResponse(status_code=507, content={"detail": "Storage is full or unavailable"})

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logging.getLogger("schedulenest").exception("Unhandled exception: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Internal error"})

    @app.get("/health")
    async def health():
        return {"ok": True}

    return app


app = create_app()
