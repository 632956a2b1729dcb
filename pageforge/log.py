"""Logging setup for the ``pageforge`` logger namespace."""

from __future__ import annotations

import logging

import structlog
from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "pageforge"
PIPELINE_LOGGER_NAME = f"{LOGGER_NAME}.pipeline"

# "silent" sits above CRITICAL so nothing under pageforge.* is emitted
SILENT = logging.CRITICAL + 10

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "silent": SILENT,
}


def json_formatter() -> structlog.stdlib.ProcessorFormatter:
    """Render stdlib records as one JSON object per line."""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(),
        ],
    )


def level_for(name: str) -> int:
    try:
        return _LEVELS[name]
    except KeyError:
        raise ValueError(f"Unknown log level '{name}'; expected one of {sorted(_LEVELS)}") from None


def apply_log_level(name: str) -> logging.Logger:
    """Set the verbosity of every pageforge.* logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level_for(name))
    return logger


def pipeline_logger(level: str | None = None) -> logging.Logger:
    """Logger for one pipeline.

    Without ``level`` it inherits whatever the application set on the
    ``pageforge`` logger. With a level it gets a child logger pinned to that
    level, shared only by pipelines asking for the same level.
    """
    if level is None:
        return logging.getLogger(PIPELINE_LOGGER_NAME)
    logger = logging.getLogger(f"{PIPELINE_LOGGER_NAME}.{level}")
    logger.setLevel(level_for(level))
    return logger


def configure_logging(level: str = "info", fmt: str = "text") -> logging.Logger:
    """Install a single console handler on the pageforge logger.

    Calling again replaces the handler installed by the previous call.
    """
    logger = apply_log_level(level)
    for handler in list(logger.handlers):
        if getattr(handler, "_pageforge", False):
            logger.removeHandler(handler)

    if fmt == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(json_formatter())
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
    handler._pageforge = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
