"""Book API router with CRUD operations."""

from fastapi import APIRouter, Depends
from loguru import logger
from sqlmodel import Session
from starlette.responses import PlainTextResponse

from src.books_api.api.http.deps import get_book_body, get_db_session
from src.books_api.entities.book import Book, BookRepository

router = APIRouter(tags=["books"])


@router.get("", response_model=list[Book])
def list_books(session: Session = Depends(get_db_session)) -> list[Book]:
    """List all books in database order."""
    return BookRepository(session).list_all()


@router.get("/{item_id}", response_model=Book)
def get_book(item_id: int, session: Session = Depends(get_db_session)) -> Book:
    """Get a book by ID."""
    return BookRepository(session).get(item_id)


@router.post("", status_code=201, response_class=PlainTextResponse)
def create_book(
    book: Book = Depends(get_book_body),
    session: Session = Depends(get_db_session),
) -> PlainTextResponse:
    """Create a new book; the database assigns the id."""
    BookRepository(session).create(book)
    session.commit()
    logger.info("Book created")
    return PlainTextResponse("Book created successfully", status_code=201)


@router.put("/{item_id}", response_model=Book)
def update_book(
    item_id: int,
    book_update: Book = Depends(get_book_body),
    session: Session = Depends(get_db_session),
) -> Book:
    """Update a book and echo the request body back."""
    BookRepository(session).update(item_id, book_update)
    session.commit()

    book_update.id = item_id
    return book_update


@router.delete("/{item_id}", response_class=PlainTextResponse)
def delete_book(
    item_id: int,
    session: Session = Depends(get_db_session),
) -> PlainTextResponse:
    """Delete a book. Deleting an unknown id still succeeds."""
    BookRepository(session).delete(item_id)
    session.commit()
    return PlainTextResponse("Book deleted successfully")
