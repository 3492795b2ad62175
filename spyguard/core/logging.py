"""
Structured logging configuration for SpyGuard.

structlog renders events for people on a terminal and as JSON lines otherwise.
Everything goes to stderr: stdout is reserved for scan output, which may be
piped as JSON.
"""

from __future__ import annotations

import logging
import sys
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING

import structlog
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from .config import Config

# Libraries that log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(config: Config | None = None, json_output: bool | None = None) -> None:
    """Configure structlog and standard library logging.

    Safe to call repeatedly; each call replaces the previous configuration.

    Args:
        config: Optional configuration. If None, uses INFO level.
        json_output: Force JSON (True) or console (False) rendering. By default
            JSON is used when stderr is not a terminal.
    """
    log_level = config.log_level if config else "INFO"
    level = getattr(logging, log_level, logging.INFO)
    if json_output is None:
        json_output = not sys.stderr.isatty()

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_path=False,
                rich_tracebacks=True,
                tracebacks_show_locals=log_level == "DEBUG",
            )
        ],
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_output:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured bound logger
    """
    return structlog.get_logger(name)


def log_context(**kwargs: object) -> AbstractContextManager[None]:
    """Bind key-value pairs to every log entry emitted inside the ``with`` block.

    Args:
        **kwargs: Context key-value pairs to bind
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
