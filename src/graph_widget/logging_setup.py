"""Loguru configuration for the CLI and server."""

import logging
import os
import sys
from typing import Optional, Union

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "[<level>{level:<8}</level>] | "
    "<white>{name}.{function}:{line}</white> | "
    "<level>{message}</level>"
)

_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def parse_level(level_value: Union[str, int, None]) -> str:
    """Accept a logging-style int or a level name and return a Loguru level name."""
    if isinstance(level_value, int):
        mapping = {
            logging.CRITICAL: "CRITICAL",
            logging.ERROR: "ERROR",
            logging.WARNING: "WARNING",
            logging.INFO: "INFO",
            logging.DEBUG: "DEBUG",
        }
        return mapping.get(level_value, "INFO")

    if isinstance(level_value, str):
        val = level_value.strip().upper()
        if val in _LEVELS:
            return val

    return "INFO"


def setup_logging(level: Union[str, int, None] = None, log_file: Optional[str] = None) -> None:
    """Configure a colored stderr sink and, optionally, a rotating file sink.

    Args:
        level: Console level; defaults to the LOG_LEVEL environment variable
        log_file: Path of an additional log file
    """
    console_level = parse_level(level if level is not None else os.getenv("LOG_LEVEL", "INFO"))

    handlers = [
        {"sink": sys.stderr, "format": LOG_FORMAT, "colorize": True, "level": console_level},
    ]
    if log_file:
        handlers.append(
            {
                "sink": log_file,
                "format": LOG_FORMAT,
                "rotation": "10 MB",
                "retention": 10,
                "colorize": False,
                "level": "DEBUG",
            }
        )

    logger.remove()
    logger.configure(handlers=handlers)
    logger.debug(f"[setup_logging] - logger_initialized - console_level={console_level} log_file={log_file}")
