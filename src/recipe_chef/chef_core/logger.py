"""Logging utilities for the recipe chef service."""

import logging
import sys
from typing import Sequence

_LOGGER_NAME = "recipe_chef"

# HTTP and SDK loggers of the vendor clients; they log every request at INFO.
VENDOR_LOGGERS = ("httpx", "httpcore", "openai", "google_genai", "qdrant_client")


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance under the ``recipe_chef`` namespace.

    Module names that already start with the namespace (``__name__`` inside
    the package) are used as they are.

    Args:
        name: Optional sub-logger name. If None, returns the root service logger.

    Returns:
        The requested logger.
    """
    if name:
        if name.startswith(f"{_LOGGER_NAME}."):
            return logging.getLogger(name)
        return logging.getLogger(f"{_LOGGER_NAME}.{name}")
    return logging.getLogger(_LOGGER_NAME)


def _as_level(level: int | str) -> int:
    if isinstance(level, str):
        return logging.getLevelName(level.upper())
    return level


def setup_logging(
    level: int | str = logging.INFO,
    format_str: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    vendor_level: int | str = logging.WARNING,
    vendor_loggers: Sequence[str] = VENDOR_LOGGERS,
) -> None:
    """Attach a stdout handler to the service's root logger.

    Called by the hosting layer (the HTTP app or a job entry point), never by
    library code. The vendor client loggers are held at ``vendor_level``
    unless the service itself logs at a more verbose level.

    Args:
        level: Logging level, as a number or a level name such as ``"DEBUG"``.
        format_str: Log format string.
        vendor_level: Level for the vendor client loggers.
        vendor_loggers: Names of the vendor client loggers.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    service_level = _as_level(level)
    logger.setLevel(service_level)

    quiet_level = max(_as_level(vendor_level), service_level)
    for name in vendor_loggers:
        logging.getLogger(name).setLevel(quiet_level)

    # the default NullHandler does not count
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_str))
    logger.addHandler(handler)


# Set default NullHandler to avoid "No handler found" warnings
logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())
