"""Book entity module.

- Book: the API/domain model
- BookTable: database persistence model for the ``books`` table
- BookRepository: data access layer
"""

from .entity import Book
from .repository import BookNotFoundError, BookRepository
from .table import BookTable

__all__ = ["Book", "BookNotFoundError", "BookRepository", "BookTable"]
