"""
Structured logging configuration for nativecheck.

structlog renders the orchestrator's own records (commands, return codes, stage
timings) and hands them to the stdlib root logger, which writes through rich on
stderr. stdout is left to the stage announcements and to the tools themselves.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from .config import Config


def _use_json(log_format: str) -> bool:
    if log_format == "auto":
        return not sys.stderr.isatty()
    return log_format == "json"


def setup_logging(config: Config | None = None) -> None:
    """Configure structured logging for a pipeline run.

    Args:
        config: Optional configuration. If None, logs at INFO and picks the
            renderer from whether stderr is a terminal.
    """
    log_level = config.log_level if config else "INFO"
    log_format = config.log_format if config else "auto"
    level = getattr(logging, log_level, logging.INFO)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=log_level == "DEBUG",
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]
    if _use_json(log_format):
        # One object per line for CI log collectors
        processors += [
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        # RichHandler already prints time and level
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: object) -> None:
    """Bind key-value pairs (e.g. the run id) to every later log entry."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
