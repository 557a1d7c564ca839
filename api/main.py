import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request

from core import db
from core.config import Settings, get_settings
from core.errors import register_error_handlers
from core.log import configure_logging
from groups import router as groups_router
from users import router as users_router

logger = logging.getLogger(__name__)


async def log_request(request: Request, call_next):
    started = time.perf_counter()
    # Unhandled exceptions surface here and become a 500 further out.
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "request method=%s path=%s status=%d elapsed_ms=%.1f",
            request.method,
            request.url.path,
            status_code,
            elapsed_ms,
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        # Initialize the DB pool once per process.
        await db.init_pool(settings)
        try:
            yield
        finally:
            await db.close_pool()

    app = FastAPI(title="membership-service", lifespan=lifespan)

    register_error_handlers(app)
    app.middleware("http")(log_request)

    app.include_router(users_router.router, tags=["users"])
    app.include_router(groups_router.router, tags=["groups"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


def run() -> None:
    settings = get_settings()
    app = create_app(settings)
    logger.info("listening host=%s port=%d", settings.serve_host, settings.serve_port)
    uvicorn.run(app, host=settings.serve_host, port=settings.serve_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
