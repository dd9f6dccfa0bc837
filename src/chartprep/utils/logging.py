"""
Structlog setup for chartprep.

Events go through the standard library ``logging`` handlers on stderr, so
command output on stdout stays clean for piping.
"""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from chartprep.config.settings import LoggingConfig


def _renderer(json_output: bool) -> list[structlog.types.Processor]:
    if json_output:
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """
    Route structlog events for series loading, merging and slicing.

    Args:
        level: Minimum level name, case-insensitive. Unknown names fall
            back to INFO.
        json_output: Emit one JSON object per event instead of the
            console format.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=numeric_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            *_renderer(json_output),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_from_settings(settings: "LoggingConfig") -> None:
    """Apply the ``logging`` section of a loaded config."""
    configure_logging(level=settings.level, json_output=settings.json_output)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, usually named after the calling module."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """
    Bind fields to every event logged inside a ``with`` block.

    Example:
        with log_context(chart="price-vs-volume", key="datetime"):
            log.info("Merging series")
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
