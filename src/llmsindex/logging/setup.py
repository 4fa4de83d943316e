"""
Structured logging configuration.

Two independent pipelines:
1. File (JSON) - if config.file is set. Captures everything (DEBUG+).
2. Console (stderr) - level driven by -v, or by config.level without -v.

Default behavior (no -v): only warnings and errors reach the console, so the
single confirmation line on stdout is all the user sees on success.
With -v: adds INFO. With -vv: adds DEBUG. With --quiet: console is silenced.
"""

import logging
import sys
from pathlib import Path

import structlog

from ..config.schema import LoggingConfig

_LEVEL_NAMES: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(config: LoggingConfig, quiet: bool = False) -> None:
    """Configure structlog and the stdlib handlers behind it.

    Args:
        config: Logging configuration (level, file, verbose)
        quiet: If True, no console handler is installed
    """
    logging.root.handlers.clear()
    structlog.reset_defaults()

    # Root logger captures everything; handlers filter by level
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[],
    )

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    # ── Pipeline 1: JSON file ─────────────────────────────────────────────
    file_handler = None
    if config.file:
        file_path = Path(config.file)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(str(file_path), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.processors.JSONRenderer(),
                foreign_pre_chain=shared_processors,
            )
        )
        logging.root.addHandler(file_handler)

    # ── Pipeline 2: console ───────────────────────────────────────────────
    if not quiet:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level(config))

        if file_handler:
            # Dual pipeline: ProcessorFormatter keeps both outputs consistent
            console_handler.setFormatter(
                structlog.stdlib.ProcessorFormatter(
                    processor=structlog.dev.ConsoleRenderer(
                        colors=sys.stderr.isatty(),
                    ),
                    foreign_pre_chain=shared_processors,
                )
            )

        logging.root.addHandler(console_handler)

    if file_handler:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def console_level(config: LoggingConfig) -> int:
    """Console handler level.

    No -v → config.level (WARNING by default)
    -v    → INFO
    -vv+  → DEBUG
    """
    if config.verbose <= 0:
        return _LEVEL_NAMES[config.level]
    if config.verbose == 1:
        return logging.INFO
    return logging.DEBUG


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structured logger backed by the stdlib logger ``name``.

    Events always go through stdlib logging, so when configure_logging has not
    been called (library use) they follow the stdlib defaults: nothing below
    WARNING is emitted and nothing is written to stdout.

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.wrap_logger(logging.getLogger(name))
