"""
Logging module - structured logging on top of structlog.
"""

from .setup import configure_logging, console_level, get_logger

__all__ = [
    "configure_logging",
    "console_level",
    "get_logger",
]
