"""Book database table model."""

from sqlmodel import Field, SQLModel


class BookTable(SQLModel, table=True):
    """Persistence model for the ``books`` table.

    The table itself is provisioned outside this service; this model only
    describes the columns the handlers read and write.
    """

    __tablename__ = "books"

    id: int | None = Field(default=None, primary_key=True)
    title: str
    author: str
    isbn: str
