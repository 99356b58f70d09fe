"""Book repository: the SQL statements behind the book endpoints."""

from sqlmodel import Session, select

from .entity import Book
from .table import BookTable


class BookNotFoundError(LookupError):
    """Raised when no row matches the requested book id."""

    def __init__(self, book_id: int) -> None:
        super().__init__(f"book {book_id} not found")
        self.book_id = book_id


class BookRepository:
    """Data-access layer for books.

    Statements run on the session handed in; committing is left to the caller.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_all(self) -> list[Book]:
        rows = self._session.exec(select(BookTable)).all()
        return [Book.model_validate(row, from_attributes=True) for row in rows]

    def get(self, book_id: int) -> Book:
        row = self._session.get(BookTable, book_id)
        if row is None:
            raise BookNotFoundError(book_id)
        return Book.model_validate(row, from_attributes=True)

    def create(self, book: Book) -> None:
        """Insert a row; the id in ``book`` is ignored."""
        row = BookTable(title=book.title, author=book.author, isbn=book.isbn)
        self._session.add(row)
        self._session.flush()

    def update(self, book_id: int, book: Book) -> None:
        """Overwrite title, author and isbn of ``book_id``; a missing row is not an error."""
        row = self._session.get(BookTable, book_id)
        if row is None:
            return
        row.title = book.title
        row.author = book.author
        row.isbn = book.isbn
        self._session.add(row)
        self._session.flush()

    def delete(self, book_id: int) -> None:
        """Delete ``book_id``; deleting a missing row is not an error."""
        row = self._session.get(BookTable, book_id)
        if row is None:
            return
        self._session.delete(row)
        self._session.flush()
