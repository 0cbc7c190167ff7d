"""
Logging Configuration

Centralized loguru setup. Every record carries a `component` extra so
analysis, project and cache messages can be told apart.
"""

import sys
from typing import Optional

from loguru import logger

from config import Settings, get_settings


CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[component]}:{function}:{line} | {message}"


def setup_logging(settings: Optional[Settings] = None) -> None:
    """(Re)install the console sink and, when configured, a rotating file sink."""
    settings = settings or get_settings()

    logger.remove()
    logger.configure(extra={"component": "app"})

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level="DEBUG" if settings.debug else settings.log_level,
        colorize=True,
    )

    if settings.log_file:
        logger.add(
            settings.log_file,
            rotation="10 MB",
            retention="7 days",
            format=FILE_FORMAT,
            level="DEBUG",
            encoding="utf-8",
        )


def get_logger(name: str):
    """Get a logger bound to a component name."""
    return logger.bind(component=name)


setup_logging()

# Component loggers
analysis_logger = get_logger("analysis")
projects_logger = get_logger("projects")
cache_logger = get_logger("cache")
