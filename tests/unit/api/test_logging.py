"""Logging setup: stdlib records end up in loguru sinks."""

import json
import logging

import pytest
from loguru import logger

from src.books_api.api.utils.app_startup import configure_logging
from src.books_api.runtime.config.config_data import ConfigData


@pytest.fixture
def captured():
    """Configure logging with defaults and collect every formatted line."""
    configure_logging(ConfigData())
    lines: list[str] = []
    logger.add(lines.append, format="{extra[request_id]} {message}", level="DEBUG")
    yield lines
    configure_logging(ConfigData())


class TestConfigureLogging:
    def test_stdlib_records_are_forwarded(self, captured):
        logging.getLogger("books.test").warning("disk %s is full", "sda1")

        assert any("disk sda1 is full" in line for line in captured)

    def test_records_outside_a_request_get_placeholder_id(self, captured):
        logging.getLogger("books.test").warning("outside")

        assert any(line.startswith("- outside") for line in captured)

    def test_request_id_from_context_is_used(self, captured):
        with logger.contextualize(request_id="req-7"):
            logging.getLogger("books.test").warning("inside")

        assert any(line.startswith("req-7 inside") for line in captured)

    def test_uvicorn_access_lines_are_dropped(self, captured):
        logging.getLogger("uvicorn.access").warning("GET /books 200")

        assert not any("GET /books 200" in line for line in captured)

    def test_sqlalchemy_statement_logging_is_quiet(self, captured):
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

        logging.getLogger("sqlalchemy.engine").info("SELECT 1")

        assert not any("SELECT 1" in line for line in captured)

    def test_json_file_sink(self, tmp_path):
        config = ConfigData()
        config.logging.file = str(tmp_path / "logs" / "books.log")
        config.logging.format = "json"

        try:
            configure_logging(config)
            logging.getLogger("books.test").error("written to file")
            logger.complete()
        finally:
            configure_logging(ConfigData())

        records = [
            json.loads(line)["record"]
            for line in (tmp_path / "logs" / "books.log").read_text().splitlines()
        ]
        assert any(record["message"] == "written to file" for record in records)
