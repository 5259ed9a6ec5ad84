"""Logging for the analyzer: a rotating log file plus console output on stderr.

Reports and previews are printed to stdout, so the console handler never
writes there.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Union

LOGGER_NAME = "profile_analyzer"
LOG_FILE = "profile_analyzer.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# HTTP and OpenAI client chatter stays at WARNING unless we are debugging
CLIENT_LOGGERS = ("urllib3", "requests", "httpx", "openai")


def resolve_level(level: Union[str, int]) -> int:
    """Map a level name such as ``"debug"`` to its number; unknown names mean INFO."""
    if isinstance(level, int):
        return level
    name = str(level).strip().upper()
    return getattr(logging, name) if name in LOG_LEVELS else logging.INFO


def setup_logging(
    log_dir: str = "logs",
    level: Union[str, int] = "INFO",
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    numeric_level = resolve_level(level)
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Close before dropping so repeated runs in one process don't leak files
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    file_handler = RotatingFileHandler(
        log_path / LOG_FILE,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    client_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(client_level)

    logger.debug("Logging to %s at %s", log_path / LOG_FILE, logging.getLevelName(numeric_level))
    return logger
