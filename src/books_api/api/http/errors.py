"""Plain-text rendering of request and database errors.

Error bodies carry the raw exception text; clients get no structured error
payload.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import PlainTextResponse

from src.books_api.entities.book import BookNotFoundError


def format_validation_error(exc: RequestValidationError) -> str:
    """Collapse FastAPI validation errors into one line of text."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "invalid request"


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> PlainTextResponse:
    return PlainTextResponse(format_validation_error(exc), status_code=400)


async def book_not_found_handler(
    request: Request, exc: BookNotFoundError
) -> PlainTextResponse:
    return PlainTextResponse(str(exc), status_code=404)


async def database_error_handler(
    request: Request, exc: SQLAlchemyError
) -> PlainTextResponse:
    logger.bind(error_type=type(exc).__name__).error("Database statement failed: {}", exc)
    return PlainTextResponse(str(exc), status_code=500)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> PlainTextResponse:
    return PlainTextResponse(
        str(exc.detail), status_code=exc.status_code, headers=exc.headers
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(BookNotFoundError, book_not_found_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
