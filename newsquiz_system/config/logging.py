"""Logging configuration using loguru with automatic dev/prod detection."""

import sys
from loguru import logger

from newsquiz_system.config.settings import settings


def configure_logging(level: str | None = None, log_format: str | None = None) -> None:
    """
    Configure loguru based on environment settings.

    Behavior:
    - Development (TTY + console format): Colorized, human-readable output
    - Production (non-TTY or json format): JSON-structured logs to stdout
    - Respects LOG_LEVEL from settings unless overridden

    Args:
        level: Optional level overriding settings.log_level
        log_format: Optional format overriding settings.log_format
    """
    level = (level or settings.log_level).upper()
    log_format = (log_format or settings.log_format).lower()

    logger.remove()
    logger.configure(extra={"component": "newsquiz"})

    if sys.stderr.isatty() and log_format == "console":
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[component]}</cyan> | <level>{message}</level>",
            level=level,
            colorize=True,
        )
    else:
        logger.add(
            sys.stdout,
            format="{message}",
            level=level,
            serialize=True,
            diagnose=False,
        )


def get_logger(component: str):
    """
    Get a logger instance bound to a specific component name.

    Example:
        >>> log = get_logger("crawler.newsfeed")
        >>> log.info("Fetching articles")
    """
    return logger.bind(component=component)


__all__ = ["logger", "get_logger", "configure_logging"]
