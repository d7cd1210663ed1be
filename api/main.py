from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blogposts import router as blogposts_router
from blogposts.dependencies import get_database
from blogposts.repository import BlogPostDataStore
from core import config, db
from core.errors import ConstraintViolation, StorageUnavailable
from core.log import configure_logging

logger = logging.getLogger(__name__)


def create_app(settings: config.Settings | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        resolved = settings or config.load_settings()
        configure_logging(resolved.log_level)

        # One pool per process, shared by every request.
        database = db.Database(resolved)
        await database.connect()
        app.state.database = database
        try:
            if resolved.create_schema:
                await BlogPostDataStore(database).ensure_schema()
            yield
        finally:
            await database.close()

    app = FastAPI(title="blogpost-api", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins if settings else config.cors_origins()),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StorageUnavailable)
    async def storage_unavailable_handler(request: Request, exc: StorageUnavailable) -> JSONResponse:
        logger.error("storage_unavailable method=%s path=%s error=%s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Storage is unavailable."},
        )

    @app.exception_handler(ConstraintViolation)
    async def constraint_violation_handler(request: Request, exc: ConstraintViolation) -> JSONResponse:
        logger.error("constraint_violation method=%s path=%s error=%s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Stored data violated a constraint."},
        )

    app.include_router(blogposts_router.router, tags=["blogpost"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/health/db")
    async def health_db(database: db.Database = Depends(get_database)) -> JSONResponse:
        if not await database.ping():
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unavailable"},
            )
        return JSONResponse(content={"status": "ok"})

    @app.get("/")
    def root() -> dict:
        return {"message": "blogpost api"}

    return app


app = create_app()
