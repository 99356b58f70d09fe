from dataclasses import dataclass

from src.books_api.core.services import DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
