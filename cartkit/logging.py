"""
Centralized logging configuration for cartkit.

Usage:
    from cartkit.logging import get_logger, setup_logging
    setup_logging()  # once, from the application entry point

    logger = get_logger(__name__)

    logger.info("Cart has been cleared")
    logger.warning("Discarding corrupted cart snapshot", exc_info=True)
"""

import logging
import os
import sys
from functools import cache

# Default format for logs
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"


def _get_log_level() -> int:
    """Get log level from environment or default to INFO."""
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def setup_logging(level: int | None = None) -> bool:
    """
    Attach a stdout handler to the root logger.

    Meant for applications and scripts; the library itself never calls it.
    Does nothing if the root logger already has handlers.

    Returns:
        True if a handler was added
    """
    root = logging.getLogger()

    # Only configure if no handlers exist
    if root.handlers:
        return False

    level = _get_log_level() if level is None else level
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    # Short lines in production, timestamps locally
    is_production = os.environ.get("CART_ENV") == "production"
    formatter = logging.Formatter(LOG_FORMAT_SIMPLE if is_production else LOG_FORMAT)
    handler.setFormatter(formatter)

    root.addHandler(handler)

    # The Upstash client talks HTTP through httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    return True


# Library default: stay silent unless the host configures logging
logging.getLogger("cartkit").addHandler(logging.NullHandler())


@cache
def get_logger(name: str) -> logging.Logger:
    """
    Get or create a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def _escape_log_injection(value: str) -> str:
    """Escape newlines and control characters that could forge log entries."""
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def sanitize_id_for_logging(id_value: int | str | None, max_length: int = 32) -> str:
    """
    Make a caller-supplied item id safe to put in a log line.

    Args:
        id_value: Item id (int, str or None)
        max_length: Maximum length to keep (default: 32)

    Returns:
        Escaped id string, truncated with "..." when long, or "N/A" if None/empty
    """
    if id_value is None or id_value == "":
        return "N/A"
    safe_value = _escape_log_injection(str(id_value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "setup_logging",
    "get_logger",
    "sanitize_id_for_logging",
]
