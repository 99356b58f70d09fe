"""Database engine and session factory shared by every request."""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, create_engine

from src.books_api.runtime.config.config_data import DatabaseConfig


class DbSessionService:
    """Owns the process-wide engine; sessions are checked out per request."""

    def __init__(self, db_config: DatabaseConfig):
        """Create the engine for ``db_config``.

        Raises:
            sqlalchemy.exc.ArgumentError: If the URL cannot be parsed.
        """
        connection_string = db_config.connection_string
        logger.info("Initializing {} database engine", db_config.backend)
        self._engine: Engine = create_engine(
            connection_string,
            echo=False,
            connect_args=self._get_connect_args(connection_string),
        )
        logger.debug(
            "Database engine ready for {}",
            make_url(connection_string).render_as_string(hide_password=True),
        )

    @staticmethod
    def _get_connect_args(connection_string: str) -> dict:
        """Get database-specific connection arguments."""
        connect_args = {}

        if connection_string.startswith("sqlite"):
            # Pooled connections are handed to whichever worker thread asks next
            connect_args["check_same_thread"] = False

        return connect_args

    @property
    def engine(self) -> Engine:
        return self._engine

    def ping(self) -> None:
        """Run ``SELECT 1`` and let any connectivity error propagate."""
        with self._engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(self._engine, expire_on_commit=False)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session that is rolled back on database errors and always closed."""
        db = self.get_session()
        try:
            yield db
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                "Database transaction failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise
        finally:
            db.close()

    def close(self) -> None:
        """Dispose of the engine and every pooled connection."""
        self._engine.dispose()
        logger.info("Database engine disposed")
