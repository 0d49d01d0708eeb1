"""
Logging configuration for the MCP extension.

All output goes to stderr: stdout is reserved for the MCP stdio transport.
Structured (JSON) output uses python-json-logger.
"""

import logging
import logging.config
import sys
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter

STANDARD_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
STRUCTURED_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    name: str | None = None,
    level: str | None = None,
    structured: bool = False,
    log_file: Path | None = None
) -> logging.Logger:
    """Setup a module logger.

    Loggers under the ``mcp_extension`` namespace get no handlers of their own
    so that ``configure_root_logging`` controls their output; any other name
    gets a stderr handler.

    Args:
        name: Logger name (defaults to this module)
        level: Logging level (INFO, DEBUG, etc.)
        structured: Enable JSON structured logging
        log_file: Optional log file path

    Returns:
        Configured logger instance
    """
    if name is None:
        name = __name__

    logger = logging.getLogger(name)

    if name.startswith("mcp_extension") or logger.handlers:
        if level:
            logger.setLevel(getattr(logging, level.upper()))
        return logger

    logger.setLevel(getattr(logging, (level or "INFO").upper()))

    if structured:
        formatter: logging.Formatter = JsonFormatter(fmt=STRUCTURED_FORMAT, datefmt=DATE_FORMAT)
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def build_logging_config(
    level: str = "INFO",
    structured: bool = False,
    log_file: Path | None = None
) -> dict:
    """Build a ``dictConfig`` mapping for the whole application."""
    formatter = "structured" if structured else "standard"
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": STANDARD_FORMAT,
                "datefmt": DATE_FORMAT
            },
            "structured": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": STRUCTURED_FORMAT,
                "datefmt": DATE_FORMAT
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": formatter,
                "stream": "ext://sys.stderr"
            }
        },
        "root": {
            "level": level,
            "handlers": ["console"]
        },
        "loggers": {
            "mcp_extension": {
                "level": level,
                "handlers": ["console"],
                "propagate": False
            }
        }
    }

    if log_file:
        config["handlers"]["file"] = {
            "class": "logging.FileHandler",
            "level": level,
            "formatter": formatter,
            "filename": str(log_file)
        }
        config["root"]["handlers"].append("file")
        config["loggers"]["mcp_extension"]["handlers"].append("file")

    return config


def configure_root_logging(
    level: str = "INFO",
    structured: bool = False,
    log_file: Path | None = None
) -> None:
    """Configure root logging for the entire application.

    Args:
        level: Root logging level
        structured: Enable JSON structured logging
        log_file: Optional log file path
    """
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(build_logging_config(level.upper(), structured, log_file))

    # The SDK is chatty at INFO
    logging.getLogger("mcp").setLevel(logging.WARNING)


class LoggerMixin:
    """Mixin class to add logging capabilities to any class."""

    @property
    def logger(self) -> logging.Logger:
        """Get logger for this class."""
        return logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")
