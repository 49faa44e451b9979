"""Logging configuration for the application."""
import logging
import sys
from app.config import settings

LOGGER_NAME = "app"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _log_level() -> int:
    return logging.DEBUG if settings.environment == "development" else logging.INFO


def configure_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Configure the application logger with a stdout handler.

    Safe to call more than once; the handler is only attached the first time.

    Args:
        name: Logger name

    Returns:
        The configured logger
    """
    configured = logging.getLogger(name)
    configured.setLevel(_log_level())

    if not configured.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(_log_level())
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        configured.addHandler(handler)

    # Prevent duplicate logs through the root logger
    configured.propagate = False
    return configured


def get_logger(component: str) -> logging.Logger:
    """Return a child of the application logger, e.g. ``app.auth``."""
    return logger.getChild(component)


logger = configure_logger()

__all__ = ["logger", "get_logger", "configure_logger"]
