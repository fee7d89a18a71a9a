"""\
Logging
=======

Created on: Tuesday, October 13 2026
Last updated on: Friday, October 16 2026

This module provides logging utilities and configuration helpers for
`makit`. Diagnostic logs are kept apart from the status lines the
materializer prints: they go to standard error (and optionally to a
rotating log file), never to standard output.

It includes formatters for plain, coloured and JSON output with
automatic extra field handling, and a path context that tags every
record emitted while a path is processed with the path itself.
"""

from __future__ import annotations

import functools
import json
import logging
import logging.handlers
import re
import sys
import time
import typing as t
from pathlib import Path

if t.TYPE_CHECKING:
    from makit.core.config import LoggerConfig

__all__: list[str] = [
    "ColouredFormatter",
    "JSONFormatter",
    "MakitFormatter",
    "PathContext",
    "PathFilter",
    "configure",
    "dehumanise",
    "get_logger",
    "perf_logger",
]


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    This formatter outputs log records as one JSON object per line. It
    captures the timestamp, level, logger name, message, module,
    function, line number and any exception information.

    :param extras: Whether to include extra fields in output, defaults
        to `True`.
    """

    def __init__(self, extras: bool = True):
        """Initialise the JSON formatter instance."""
        super().__init__()
        self.extras = extras

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        :param record: The log record to format.
        :return: JSON-formatted log message.
        """
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if self.extras:
            for key, value in record.__dict__.items():
                if (
                    key not in payload
                    and key not in MakitFormatter.LOG_RECORD_ATTRS
                    and not key.startswith("_")
                ):
                    payload[key] = value
        return json.dumps(payload, default=str)


class MakitFormatter(logging.Formatter):
    """Formatter that automatically includes extra fields.

    Extra fields are the attributes of a record that are not part of
    the standard `LogRecord`, such as those passed through `extra=` or
    added by `PathFilter`. They are rendered with `extra_format` and
    made available as `%(extra)s` in the format string.

    :param fmt: The format string for log messages, defaults to `None`.
    :param datefmt: The format string for timestamps, defaults to
        `None`.
    :param extra_format: Format string for individual extra fields.
    :param extra_separator: Separator between multiple extra fields.
    :var LOG_RECORD_ATTRS: Set of standard `LogRecord` attributes.
    """

    LOG_RECORD_ATTRS = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "getMessage",
        "exc_info",
        "exc_text",
        "stack_info",
        "message",
        "asctime",
        "taskName",
        "qualName",
        "extra",
    }

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        extra_format: str = "{key}: {value}",
        extra_separator: str = " ",
    ) -> None:
        """Initialise the custom formatter."""
        super().__init__(fmt, datefmt)
        self.extra = extra_format
        self.extra_separator = extra_separator

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with automatic extra field handling.

        :param record: The log record to format.
        :return: Formatted log message with extra fields.
        """
        clone = logging.makeLogRecord(record.__dict__)
        entries = []
        for key, value in sorted(record.__dict__.items()):
            if key not in self.LOG_RECORD_ATTRS and not key.startswith("_"):
                entries.append(self.extra.format(key=key, value=value))
        clone.extra = self.extra_separator.join(entries)
        if not hasattr(clone, "qualName"):
            clone.qualName = f"{record.name}.{record.funcName}"
        return super().format(clone)


class ColouredFormatter(MakitFormatter):
    """Formatter with qualified function names and level colours.

    Colours are only applied when `is_tty` is set, so log files stay
    free of ANSI escape sequences.

    :var COLORS: Dictionary mapping log levels to ANSI colour codes.
    """

    COLORS = {
        "DEBUG": "\x1b[38;5;14m",
        "INFO": "\x1b[38;5;41m",
        "WARNING": "\x1b[38;5;215m",
        "ERROR": "\x1b[38;5;204m",
        "CRITICAL": "\x1b[38;5;197m",
        "QUALNAME": "\x1b[38;5;140m",
        "RESET": "\x1b[0m",
    }

    is_tty: bool = False

    def format(self, record: logging.LogRecord) -> str:
        """Format log record, with colours only for TTY output.

        :param record: The log record to format.
        :return: Formatted log message.
        """
        clone = logging.makeLogRecord(record.__dict__)
        qualname = f"{record.name}.{record.funcName}"
        if self.is_tty:
            colour = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            clone.levelname = (
                f"{colour}{record.levelname:>8s}{self.COLORS['RESET']}"
            )
            clone.qualName = (
                f"{self.COLORS['QUALNAME']}{qualname}{self.COLORS['RESET']}"
            )
        else:
            clone.levelname = f"{record.levelname:>8s}"
            clone.qualName = qualname
        return super().format(clone)


def configure(config: LoggerConfig, stream: t.TextIO | None = None) -> None:
    """Configure logging based on provided configuration settings.

    Handlers are attached to the `makit` logger rather than the root
    logger, and any handlers from an earlier call are replaced, so this
    function can be called more than once per process.

    :param config: Logging configuration settings.
    :param stream: Stream for console output, defaults to standard
        error.
    """
    logger = logging.getLogger("makit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False
    levels: list[int] = []
    if config.tty.enable:
        levels.append(getattr(logging, config.tty.level.upper()))
    if config.file.enable:
        levels.append(getattr(logging, config.file.level.upper()))
    logger.setLevel(
        min(levels) if levels else getattr(logging, config.level.upper())
    )
    if config.tty.enable:
        tty = logging.StreamHandler(stream or sys.stderr)
        tty.setLevel(getattr(logging, config.tty.level.upper()))
        if config.as_json:
            formatter = JSONFormatter()
        else:
            formatter = ColouredFormatter(
                fmt=config.tty.fmt,
                datefmt=config.datefmt,
                extra_format="[{key}: {value}]",
            )
            isatty = getattr(tty.stream, "isatty", None)
            formatter.is_tty = bool(
                config.tty.colour and isatty is not None and isatty()
            )
        tty.setFormatter(formatter)
        tty.addFilter(PathFilter())
        logger.addHandler(tty)
    if config.file.enable:
        file = Path(config.file.path)
        file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            filename=file,
            maxBytes=dehumanise(config.file.max_size),
            backupCount=config.file.backups,
            encoding=config.file.encoding,
        )
        handler.setLevel(getattr(logging, config.file.level.upper()))
        if config.as_json:
            formatter = JSONFormatter()
        else:
            formatter = ColouredFormatter(
                fmt=config.file.fmt,
                datefmt=config.datefmt,
                extra_format="[{key}: {value}]",
            )
        handler.setFormatter(formatter)
        handler.addFilter(PathFilter())
        logger.addHandler(handler)


def dehumanise(size: str) -> int:
    """Parse size string to bytes.

    :param size: Size string like `10MB`, `1GB`, etc.
    :return: Size in bytes.
    :raises ValueError: If the size string cannot be parsed.
    """
    size = size.upper().strip()
    multipliers = {
        "B": 1,
        "KB": 1024,
        "MB": 1024**2,
        "GB": 1024**3,
        "TB": 1024**4,
    }
    matched = re.match(r"^(\d+(?:\.\d+)?)\s*([KMGT]?B?)$", size)
    if not matched:
        raise ValueError(f"Invalid size format: {size}")
    value, unit = matched.groups()
    if unit and not unit.endswith("B"):
        unit += "B"
    return int(float(value) * multipliers.get(unit or "B", 1))


def get_logger(logger_name: str) -> logging.Logger:
    """Get a logger instance with the specified name.

    :param logger_name: Logger name.
    :return: Logger instance.
    """
    return logging.getLogger(logger_name)


def perf_logger(func: t.Callable[..., t.Any]) -> t.Callable[..., t.Any]:
    """Decorator to log function execution time.

    The elapsed time is logged at debug level on success and at error
    level, with the traceback, when the function raises.

    :param func: Function to wrap.
    :return: Wrapped function with performance logging.
    """

    @functools.wraps(func)
    def wrapper(*args: t.Any, **kwargs: t.Any) -> t.Any:
        """Wrapper function to log execution time."""
        logger = get_logger(func.__module__)
        started = time.perf_counter()
        try:
            result = func(*args, **kwargs)
            elapsed = time.perf_counter() - started
            logger.debug(
                f"Function: {func.__qualname__!r} completed in "
                f"{elapsed:.4f}s",
                extra={"elapsed": round(elapsed, 4)},
            )
            return result
        except Exception as exc:
            elapsed = time.perf_counter() - started
            logger.error(
                f"Function {func.__qualname__!r} failed after "
                f"{elapsed:.4f}s: {exc}",
                extra={"elapsed": round(elapsed, 4)},
                exc_info=True,
            )
            raise

    return wrapper


class PathContext:
    """Context manager for tracking the path being processed.

    Every record logged inside the context is tagged with the path by
    `PathFilter`. Contexts nest, the previous path is restored on exit.

    Example::

        .. code-block:: python

            with PathContext("logs/app.log"):
                logger.debug("Probing")

    :param path: The path being processed.
    :var current: The path of the innermost active context.
    """

    current: str | None = None

    def __init__(self, path: str):
        """Initialise a path context."""
        self.path = path
        self.previous: str | None = None

    def __enter__(self) -> PathContext:
        self.previous = PathContext.current
        PathContext.current = self.path
        return self

    def __exit__(
        self, exc_type: type | None, exc_val: Exception | None, exc_tb: t.Any
    ) -> None:
        PathContext.current = self.previous

    @classmethod
    def get_current(cls) -> str | None:
        """Get the path currently being processed."""
        return cls.current


class PathFilter(logging.Filter):
    """Filter that adds the current path to log records.

    Records logged outside of a `PathContext` are left untouched.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add the current path to the record as `target`.

        :param record: Log record to modify.
        :return: `True` to keep the record.
        """
        current = PathContext.get_current()
        if current is not None and not hasattr(record, "target"):
            record.target = current
        return True
