"""Core services exports."""

# Database Service
from .database.db_session import DbSessionService

__all__ = [
    "DbSessionService",
]
