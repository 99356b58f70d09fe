"""FastAPI application setup and lifecycle."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import PlainTextResponse

from src.books_api.api.http.app_data import ApplicationDependencies
from src.books_api.api.http.errors import register_exception_handlers
from src.books_api.api.http.middleware.inflight import (
    InFlightRequestMiddleware,
    RequestTracker,
)
from src.books_api.api.http.routers.books import router as books_router
from src.books_api.api.utils.app_startup import configure_logging
from src.books_api.core.services import DbSessionService
from src.books_api.runtime.context import get_config

# Initialize logging
configure_logging()


# --- FastAPI app setup ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


app = FastAPI(
    title="Books API",
    lifespan=lifespan,
    docs_url=None if get_config().app.environment == "production" else "/docs",
    redoc_url=None if get_config().app.environment == "production" else "/redoc",
)

# expose startup for tests
__all__ = ["app", "startup", "shutdown"]

register_exception_handlers(app)

request_tracker = RequestTracker()
app.state.request_tracker = request_tracker
app.add_middleware(InFlightRequestMiddleware, tracker=request_tracker)


# --- Request logging middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else "unknown",
    }

    start = time.perf_counter()

    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end {} {} -> {}", request.method, request.url.path, response.status_code)

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return PlainTextResponse(
                str(exc) or type(exc).__name__,
                status_code=500,
                headers={"X-Request-ID": request_id},
            )


# --- Router registration ---
app.include_router(books_router, prefix="/books")


# --- Lifecycle hooks ---
async def startup() -> None:
    """Create the shared database service and make sure the database answers.

    Raises:
        RuntimeError: If the engine cannot be created or ``SELECT 1`` fails.
    """
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    try:
        database_service = DbSessionService(config.database)
        database_service.ping()
    except SQLAlchemyError as exc:
        logger.critical("Database connectivity check failed: {}", exc)
        raise RuntimeError(f"Database connectivity check failed: {exc}") from exc

    logger.info("Database connection verified")
    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
    )


async def shutdown() -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        app_dependencies.database_service.close()
        del app.state.app_dependencies
    logger.info("Server stopped")


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run(
        app,
        host=config.app.host,
        port=config.app.port,
        access_log=False,  # We handle access logging in middleware
        timeout_graceful_shutdown=config.app.shutdown_grace_seconds,
    )
