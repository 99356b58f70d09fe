"""Unit tests for config.yaml loading, env substitution and .env handling."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.books_api.runtime.config.config_data import ConfigData, DatabaseConfig
from src.books_api.runtime.config.config_template import (
    load_env_file,
    load_templated_yaml,
    substitute_env_vars,
)


class TestSubstituteEnvVars:
    def test_required_variable(self):
        with patch.dict(os.environ, {"DATABASE_URL": "sqlite:///x.db"}):
            assert substitute_env_vars("url: ${DATABASE_URL}") == "url: sqlite:///x.db"

    def test_missing_required_variable_raises(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="DATABASE_URL not set"):
                substitute_env_vars("url: ${DATABASE_URL}")

    def test_default_value(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("level: ${LOG_LEVEL:-INFO}") == "level: INFO"

    def test_custom_error_message(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="point me at postgres"):
                substitute_env_vars("${DATABASE_URL:?point me at postgres}")


class TestLoadTemplatedYaml:
    def test_reads_file_and_substitutes(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "config:\n"
            "  app:\n"
            "    port: 4000\n"
            "  database:\n"
            "    url: \"${DATABASE_URL:-}\"\n"
        )

        with patch.dict(os.environ, {"DATABASE_URL": "sqlite:///books.db"}):
            config = load_templated_yaml(config_file, env_path=None)

        assert config.app.port == 4000
        assert config.app.shutdown_grace_seconds == 10
        assert config.database.url == "sqlite:///books.db"

    def test_missing_file_uses_builtin_template(self, tmp_path: Path):
        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(tmp_path / "absent.yaml", env_path=None)

        assert config.app.port == 3000
        assert config.database.url == ""
        assert config.logging.level == "INFO"

    def test_env_file_values_are_substituted(self, tmp_path: Path):
        env_file = tmp_path / ".env"
        env_file.write_text("DATABASE_URL=sqlite:///from-dotenv.db\n")

        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(tmp_path / "absent.yaml", env_path=env_file)

        assert config.database.url == "sqlite:///from-dotenv.db"

    def test_invalid_values_raise_value_error(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("config:\n  app:\n    port: not-a-port\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(config_file, env_path=None)

    def test_empty_file_raises_value_error(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_templated_yaml(config_file, env_path=None)


class TestLoadEnvFile:
    def test_missing_file_is_not_fatal(self, tmp_path: Path):
        assert load_env_file(tmp_path / ".env") is False

    def test_existing_environment_wins(self, tmp_path: Path):
        env_file = tmp_path / ".env"
        env_file.write_text("DATABASE_URL=sqlite:///from-file.db\n")

        with patch.dict(os.environ, {"DATABASE_URL": "sqlite:///from-env.db"}):
            assert load_env_file(env_file) is True
            assert os.environ["DATABASE_URL"] == "sqlite:///from-env.db"


class TestDatabaseConfig:
    def test_postgres_scheme_is_normalized(self):
        config = DatabaseConfig(url="postgres://user:pw@localhost:5432/books?sslmode=disable")

        assert config.connection_string == (
            "postgresql://user:pw@localhost:5432/books?sslmode=disable"
        )
        assert config.backend == "postgresql"

    def test_other_urls_are_left_alone(self):
        config = DatabaseConfig(url="postgresql+psycopg2://user@db/books")

        assert config.connection_string == "postgresql+psycopg2://user@db/books"
        assert config.backend == "postgresql"

    def test_sqlite_backend(self):
        assert DatabaseConfig(url="sqlite:///books.db").backend == "sqlite"

    def test_defaults(self):
        config = ConfigData()

        assert config.database.url == ""
        assert config.app.host == "0.0.0.0"
        assert config.app.port == 3000
        assert config.app.shutdown_grace_seconds == 10
