"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlmodel import Session

from src.books_api.api.http.app_data import ApplicationDependencies
from src.books_api.core.services import DbSessionService
from src.books_api.entities.book import Book


def get_database_service(request: Request) -> DbSessionService:
    """Get the shared database service created at startup."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Check a session out of the shared engine for the length of one request."""
    with database_service.session_scope() as session:
        yield session


async def get_book_body(request: Request) -> Book:
    """Decode the request body as a JSON Book whatever its Content-Type says.

    Raises:
        RequestValidationError: If the body is not valid JSON or a field has
            the wrong type; rendered as a plain-text 400.
    """
    body = await request.body()
    try:
        return Book.model_validate_json(body)
    except ValidationError as e:
        errors = [
            {**error, "loc": ("body", *error["loc"])}
            for error in e.errors(include_url=False)
        ]
        raise RequestValidationError(errors, body=body) from e
