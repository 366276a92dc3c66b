"""Centralized configuration for environment variables."""

import logging
import os
from pathlib import Path

DATA_DIR_ENV = "SCORING_DATA_DIR"
LOG_LEVEL_ENV = "SCORING_LOG_LEVEL"
PORT_ENV = "PORT"

DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data" / "games"
DEFAULT_PORT = 5050

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def get_data_dir() -> Path:
    """Return the directory game documents are stored in."""
    value = os.environ.get(DATA_DIR_ENV, "")
    return Path(value) if value else DEFAULT_DATA_DIR


def get_log_level() -> int:
    """Return the configured log level, or INFO if unset or unknown."""
    name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_port() -> int:
    """Return the HTTP port for the dispatch API."""
    value = os.environ.get(PORT_ENV, "")
    try:
        return int(value) if value else DEFAULT_PORT
    except ValueError:
        return DEFAULT_PORT


def configure_logging() -> None:
    """Set up root logging for entry points."""
    logging.basicConfig(level=get_log_level(), format=LOG_FORMAT)
