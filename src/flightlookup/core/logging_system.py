"""Logging setup for FlightLookup.

Modules obtain their logger through get_logger() and the embedding
application calls initialize_logging() once at startup, either with a
YAML dictConfig file or with the built-in console configuration.

Typical usage:
    from flightlookup.core.logging_system import get_logger, initialize_logging

    initialize_logging("config/logging.yaml")
    logger = get_logger(__name__)
    logger.info("Reference data loaded")
"""

import logging
import logging.config
from pathlib import Path
from typing import Any

import yaml

ROOT_LOGGER_NAME = "flightlookup"

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

DEFAULT_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {"format": DEFAULT_FORMAT},
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "level": "DEBUG",
        },
    },
    "loggers": {
        ROOT_LOGGER_NAME: {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
    },
}

_initialized = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module.

    Args:
        name: Logger name, usually the module's __name__.

    Returns:
        Standard library logger.
    """
    return logging.getLogger(name)


def initialize_logging(
    config_path: str | Path | None = None,
    level: str | int | None = None,
) -> bool:
    """Configure logging for the package.

    Args:
        config_path: Optional YAML file holding a logging dictConfig.
            Falls back to the built-in console configuration when the file
            is missing or unreadable.
        level: Optional level override for the package logger
            (e.g., "DEBUG" or logging.DEBUG).

    Returns:
        True if the YAML configuration was applied, False if the built-in
        configuration was used.
    """
    global _initialized

    config: dict[str, Any] | None = None
    if config_path is not None:
        config = _load_yaml_config(Path(config_path))

    used_file = False
    if config is not None:
        try:
            logging.config.dictConfig(config)
            used_file = True
        except (ValueError, TypeError, AttributeError, ImportError) as e:
            logging.getLogger(__name__).error("Invalid logging config %s: %s", config_path, e)

    if not used_file:
        logging.config.dictConfig(DEFAULT_CONFIG)

    if level is not None:
        if isinstance(level, str):
            level = level.upper()
        logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)

    _initialized = True
    get_logger(__name__).debug(
        "Logging initialized (%s)", config_path if used_file else "built-in config"
    )
    return used_file


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Read a logging dictConfig from YAML.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed configuration, or None if it cannot be used.
    """
    if not path.exists():
        logging.getLogger(__name__).warning("Logging config not found: %s", path)
        return None

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logging.getLogger(__name__).error("Failed to read logging config %s: %s", path, e)
        return None

    if not isinstance(data, dict) or "version" not in data:
        logging.getLogger(__name__).error("Invalid logging config in %s", path)
        return None

    return data


def is_initialized() -> bool:
    """Check whether initialize_logging() has run."""
    return _initialized
