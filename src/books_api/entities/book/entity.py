"""Entity: Book."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class Book(BaseModel):
    """Book entity as it travels over the HTTP API.

    ``id`` is assigned by the database; it is ignored when a book is created
    and taken from the URL path when one is updated. Text fields that are
    absent from a request body or sent as ``null`` decode to the
    empty string.
    """

    id: int | None = Field(default=None, description="Database-assigned identifier")
    title: str = Field(default="", description="Title")
    author: str = Field(default="", description="Author")
    isbn: str = Field(default="", description="ISBN, stored as given")

    @field_validator("title", "author", "isbn", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def __eq__(self, other: Any) -> bool:
        """Compare books by identifier and field values."""
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.author == other.author
            and self.isbn == other.isbn
        )

    def __hash__(self) -> int:
        return hash((self.id, self.title, self.author, self.isbn))
