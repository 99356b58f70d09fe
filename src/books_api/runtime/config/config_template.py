"""Configuration template substitution utilities."""

import os
import re
from pathlib import Path

import yaml
from dotenv import load_dotenv
from loguru import logger
from pydantic_core import ValidationError

from src.books_api.runtime.config.config_data import ConfigData

# Used when no config.yaml sits in the working directory
DEFAULT_TEMPLATE = """\
config:
  app:
    environment: ${APP_ENVIRONMENT:-development}
    host: 0.0.0.0
    port: 3000
    shutdown_grace_seconds: 10
  database:
    url: "${DATABASE_URL:-}"
  logging:
    level: ${LOG_LEVEL:-INFO}
    format: ${LOG_FORMAT:-plain}
    file: "${LOG_FILE:-}"
"""


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message
    """
    def replacer(match):
        var_expr = match.group(1)

        # Handle default values: ${VAR:-default}
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.getenv(var_name, default)

        # Handle error messages: ${VAR:?message}
        elif ":?" in var_expr:
            var_name, error_msg = var_expr.split(":?", 1)
            value = os.getenv(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name}: {error_msg}")
            return value

        # Handle required variables: ${VAR}
        else:
            var_name = var_expr
            value = os.getenv(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name} not set")
            return value

    # Match ${...} patterns
    pattern = r'\$\{([^}]+)\}'
    return re.sub(pattern, replacer, text)


def load_env_file(env_path: Path) -> bool:
    """Load variables from a dotenv file without overriding the real environment.

    Returns True when the file existed and was read.
    """
    if not env_path.is_file():
        logger.warning("No {} file found; using process environment only", env_path)
        return False

    load_dotenv(env_path, override=False)
    logger.info("Loaded environment from {}", env_path)
    return True


def load_templated_yaml(file_path: Path, env_path: Path | None = Path(".env")) -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Args:
        file_path: Path to the YAML file. The built-in template is used when
            the file does not exist.
        env_path: Optional dotenv file loaded before substitution.

    Returns:
        Parsed YAML with environment variables substituted

    Raises:
        ValueError: If required environment variables are missing or the
            configuration does not validate
    """
    if env_path is not None:
        load_env_file(env_path)

    if file_path.is_file():
        with open(file_path) as f:
            content = f.read()
        logger.info("Loading configuration from {}", file_path)
    else:
        logger.info("{} not found; using built-in configuration template", file_path)
        content = DEFAULT_TEMPLATE

    # Substitute environment variables
    substituted_content = substitute_env_vars(content)

    # Parse YAML
    try:
        loaded = yaml.safe_load(substituted_content)
        if not loaded:
            raise ValueError("Failed to parse YAML")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e

    # Validate and return as ConfigData
    try:
        # Extract the 'config' section from the YAML structure
        config_data = loaded.get('config') or {}
        config = ConfigData(**config_data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    if not config.database.url:
        logger.warning("DATABASE_URL is not set; the database check at startup will fail")

    return config
