"""Logging configuration for the exporter."""

import logging
import sys
from pathlib import Path

from wiz_export.config import Settings

PACKAGE_LOGGER = "wiz_export"

# Connection-level logs of the HTTP stack, shown only with --verbose
HTTP_LOGGERS = ("urllib3",)


def setup_logging(settings: Settings, verbose: bool = False) -> list[logging.Handler]:
    """Attach console and optional file handlers to the package logger.

    Progress goes to stderr so stdout stays free for the CLI summary. With
    ``verbose`` the level drops to DEBUG, which logs every fetched URL, and
    the ``urllib3`` connection logs are routed through the same handlers.

    Args:
        settings: Application settings containing logging config.
        verbose: If True, override level to DEBUG.

    Returns:
        The handlers that were installed.
    """
    log_settings = settings.logging
    level = logging.DEBUG if verbose else logging.getLevelName(log_settings.level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    formatter = logging.Formatter(log_settings.format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    # Optional log file, e.g. ./logs/wiz-export.log
    if log_settings.file:
        log_path = Path(log_settings.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    targets = [PACKAGE_LOGGER, *(HTTP_LOGGERS if verbose else ())]
    for name in targets:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)

    return handlers
