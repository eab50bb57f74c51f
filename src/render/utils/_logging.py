"""Logging utilities for render.

This module provides a standalone structlog logger factory that writes
text-formatted or JSON-formatted logs to stderr or a log file. Each logger
is self-contained and does not modify global structlog configuration.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TextIO, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]


def _log_level_from_string(level: str) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).

    Returns:
        The logging level as an integer, INFO for unknown names.
    """
    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def _create_logger(
    stream: TextIO,
    *,
    log_level: int = logging.WARNING,
    log_format: LogFormatType = "text",
) -> FilteringBoundLogger:
    """Create a standalone structlog logger writing to `stream`.

    Args:
        stream: Open text stream receiving the log lines.
        log_level: Minimum level to emit.
        log_format: Output format, either "json" or "text".

    Returns:
        A configured FilteringBoundLogger instance.
    """
    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.WriteLoggerFactory(file=stream)(),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
            context_class=dict,
        ),
    )


def create_cli_logger(
    *,
    level: str = "warning",
    log_format: LogFormatType = "text",
    log_file: str = "",
    stream: TextIO | None = None,
) -> FilteringBoundLogger:
    """Create a logger for a render invocation.

    Logs go to `log_file` when given (appending, parent directories created
    as needed), otherwise to `stream`, which defaults to stderr so that
    rendered output on stdout stays clean.

    Args:
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to log file (empty logs to `stream`).
        stream: Stream used when no log file is set.

    Returns:
        A FilteringBoundLogger instance.
    """
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        target: TextIO = log_path.open("a", encoding="utf-8")
    else:
        target = stream if stream is not None else sys.stderr

    return _create_logger(
        target,
        log_level=_log_level_from_string(level),
        log_format=log_format,
    )
