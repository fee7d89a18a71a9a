"""\
Configurations
==============

Created on: Tuesday, October 13 2026
Last updated on: Friday, October 16 2026

This module provides the configuration objects used throughout `makit`.
The `Options` object carries the flags of a single invocation into the
materializer, while `Config` groups the logging and telemetry settings
of the process.
"""

from __future__ import annotations

import typing as t
from datetime import datetime

from makit.core.error import ConfigValidationError
from makit.core.parsers import DEFAULT_MODE
from makit.core.parsers import MAX_MODE
from makit.core.parsers import parse_mode
from makit.core.parsers import parse_timestamp

if t.TYPE_CHECKING:
    from collections.abc import Iterable

__all__: tuple[str, ...] = (
    "ALLOWED_LOG_LEVELS",
    "Config",
    "ConsoleLoggerConfig",
    "FileLoggerConfig",
    "LoggerConfig",
    "Options",
    "TelemetryConfig",
    "config_property",
)

ALLOWED_LOG_LEVELS: tuple[str, ...] = (
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
)
# NOTE: `qualName` and `extra` are filled in by the formatters in
# `makit.utils.logging`, they are not standard `LogRecord` attributes.
_DEFAULT_LOG_FMT: t.Final[str] = (
    "%(asctime)s %(levelname)s %(qualName)s:%(lineno)d %(extra)s: %(message)s"
)
_DEFAULT_LOG_DATEFMT: t.Final[str] = "%Y-%m-%dT%H:%M:%SZ"


T = t.TypeVar("T")


class config_property(t.Generic[T]):  # noqa: N801
    """Descriptor for configuration properties.

    This descriptor class behaves like Python's built-in `property`
    object, with validation constraints checked on every assignment.

    A frozen property accepts exactly one assignment per instance
    (usually from `__init__`) and rejects every later one. Until it is
    assigned, the default is returned.

    :param default: Value returned until the property is assigned.
    :param frozen: Whether the property is immutable once assigned.
    :param description: Human readable description of the property.
    :param allowed: Iterable of allowed values.
    :param check: Callable that returns `True` for valid values.
    :param between: Inclusive `(minimum, maximum)` range.
    """

    __slots__: tuple[str, ...] = (
        "allowed",
        "between",
        "check",
        "default",
        "description",
        "frozen",
        "property",
        "validate",
    )

    def __init__(
        self,
        default: T,
        *,
        frozen: bool = False,
        description: str | None = None,
        allowed: Iterable[T] | None = None,
        check: t.Callable[[T], bool] | None = None,
        between: tuple[int | float, ...] | None = None,
    ) -> None:
        """Initialise configuration property."""
        self.default = default
        self.frozen = frozen
        self.description = description
        self.allowed = allowed
        self.check = check
        self.between = between
        self.property: str = ""
        self.validate: bool = any([self.between, self.check, self.allowed])

    def __set_name__(self, owner: type, name: str) -> None:
        """Record the storage name and validate the default value.

        :param owner: The class the property is defined on.
        :param name: The attribute name of the property.
        :raises ConfigValidationError: If the default is invalid.
        """
        self.property = f"_{name}"
        if self.default is not None and self.validate:
            try:
                self.__validate__(self.default)
            except ConfigValidationError as error:
                raise ConfigValidationError(
                    f"got invalid value for {name!r}: {error}",
                    attribute=name,
                ) from error

    @t.overload
    def __get__(self, instance: None, owner: type) -> config_property[T]: ...

    @t.overload
    def __get__(self, instance: object, owner: type) -> T: ...

    def __get__(
        self,
        instance: object | None,
        owner: type,
    ) -> config_property[T] | T:
        """Get and return the property value from the instance.

        :param instance: The instance the property is accessed on.
        :param owner: The owner class of the property (not used).
        :return: The assigned value, or the default.
        """
        if instance is None:
            return self
        return instance.__dict__.get(self.property, self.default)

    def __set__(self, instance: object, value: T) -> None:
        """Set the property with validation & immutability checks.

        :param instance: The instance the property is set on.
        :param value: The value to be set for the property.
        :raises ConfigValidationError: If the property is frozen and
            already assigned, or the value is invalid.
        """
        if self.frozen and self.property in instance.__dict__:
            raise ConfigValidationError(
                f"cannot modify frozen property: {self.property[1:]!r}",
                attribute=self.property[1:],
            )
        if self.validate:
            self.__validate__(value)
        instance.__dict__[self.property] = value

    def __validate__(self, value: t.Any) -> None:
        """Validate the property value based on constraints.

        :param value: The value to be validated.
        :raises ConfigValidationError: If the value does not meet the
            validation criteria.
        """
        if self.allowed is not None and value not in self.allowed:
            raise ConfigValidationError(
                f"{value!r} is not one of the allowed values "
                f"({', '.join(str(item) for item in self.allowed)})"
            )
        if self.check is not None:
            try:
                if not self.check(value):
                    raise ConfigValidationError("property validation failed")
            except ConfigValidationError:
                raise
            except Exception as error:
                raise ConfigValidationError(
                    f"property validation failed for {value!r} with "
                    f"message: {error}"
                ) from error
        if self.between is not None and len(self.between) == 2:
            minimum, maximum = self.between
            if not all(
                isinstance(num, int | float) for num in (minimum, maximum)
            ):
                raise ConfigValidationError("must be a tuple of two numbers")
            if not (minimum <= value <= maximum):
                raise ConfigValidationError(
                    f"{value} is not between {minimum} and {maximum}"
                )


def _is_bool(value: t.Any) -> bool:
    return isinstance(value, bool)


def _is_mode(value: t.Any) -> bool:
    if value is None:
        return True
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value <= MAX_MODE
    )


def _is_timestamp(value: t.Any) -> bool:
    return value is None or isinstance(value, datetime)


class FileLoggerConfig:
    """File logger configuration.

    Logging to a file is off unless asked for. When enabled, the log
    file is rotated once it grows past `max_size`.
    """

    enable: config_property[bool] = config_property(False, check=_is_bool)
    level: config_property[str] = config_property(
        "DEBUG",
        allowed=ALLOWED_LOG_LEVELS,
    )
    fmt: config_property[str] = config_property(_DEFAULT_LOG_FMT)
    path: config_property[str] = config_property("makit.log")
    encoding: config_property[str] = config_property("utf-8", frozen=True)
    max_size: config_property[str] = config_property("10MB")
    backups: config_property[int] = config_property(5, check=lambda x: x >= 0)


class ConsoleLoggerConfig:
    """Console logger configuration.

    Console logs go to standard error so that standard output only ever
    carries the status lines of the materializer.
    """

    enable: config_property[bool] = config_property(True, check=_is_bool)
    level: config_property[str] = config_property(
        "WARNING",
        allowed=ALLOWED_LOG_LEVELS,
    )
    fmt: config_property[str] = config_property(_DEFAULT_LOG_FMT)
    colour: config_property[bool] = config_property(True, check=_is_bool)


class LoggerConfig:
    """Logger configuration.

    This class combines the console and file logger configurations with
    the settings they share.
    """

    level: config_property[str] = config_property(
        "WARNING",
        allowed=ALLOWED_LOG_LEVELS,
    )
    datefmt: config_property[str] = config_property(_DEFAULT_LOG_DATEFMT)
    as_json: config_property[bool] = config_property(False, check=_is_bool)

    def __init__(self) -> None:
        """Initialise nested logger configurations."""
        self.file = FileLoggerConfig()
        self.tty = ConsoleLoggerConfig()


class TelemetryConfig:
    """OpenTelemetry configuration.

    Tracing is disabled by default. Spans are then created against a
    provider without processors and exported nowhere.
    """

    enabled: config_property[bool] = config_property(False, check=_is_bool)
    name: config_property[str | None] = config_property(None)


class Config:
    """Configuration.

    This class is the process-wide configuration object. It groups the
    logging and telemetry settings and identifies the service in traces.
    """

    name: config_property[str] = config_property("makit", frozen=True)
    version: config_property[str] = config_property("1.0.0", frozen=True)
    debug: config_property[bool] = config_property(False, check=_is_bool)

    def __init__(self) -> None:
        """Initialise nested configurations."""
        self.logger = LoggerConfig()
        self.telemetry = TelemetryConfig()


class Options:
    """Flags of a single invocation.

    An `Options` value is built once, before any path is processed, and
    handed to the materializer. Every field is frozen after
    construction.

    :param mode: Permission bits to apply to every path, or `None` to
        leave modes alone.
    :param timestamp: Access and modification time to apply to every
        path, or `None` to leave timestamps alone.
    :param no_create: Skip paths that do not exist instead of creating
        them.
    :param verbose: Write progress messages next to the status lines.
    """

    mode: config_property[int | None] = config_property(
        None,
        frozen=True,
        check=_is_mode,
        description="Permission bits applied after creation",
    )
    timestamp: config_property[datetime | None] = config_property(
        None,
        frozen=True,
        check=_is_timestamp,
        description="Access and modification time",
    )
    no_create: config_property[bool] = config_property(
        False,
        frozen=True,
        check=_is_bool,
        description="Skip paths that do not exist",
    )
    verbose: config_property[bool] = config_property(
        False,
        frozen=True,
        check=_is_bool,
        description="Emit progress messages",
    )

    def __init__(
        self,
        mode: int | None = None,
        timestamp: datetime | None = None,
        no_create: bool = False,
        verbose: bool = False,
    ) -> None:
        self.mode = mode
        self.timestamp = timestamp
        self.no_create = no_create
        self.verbose = verbose

    def __repr__(self) -> str:
        mode = None if self.mode is None else f"0o{self.mode:o}"
        return (
            f"Options(mode={mode}, timestamp={self.timestamp!r}, "
            f"no_create={self.no_create}, verbose={self.verbose})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Options):
            return NotImplemented
        return (
            self.mode == other.mode
            and self.timestamp == other.timestamp
            and self.no_create == other.no_create
            and self.verbose == other.verbose
        )

    @classmethod
    def parse(
        cls,
        mode: str = "",
        date: str = "",
        *,
        no_create: bool = False,
        verbose: bool = False,
    ) -> Options:
        """Build options from the textual specs of the command line.

        :param mode: Octal permission spec, empty to leave modes alone.
        :param date: `YYYYMMDDhhmm` timestamp spec, empty to leave
            timestamps alone.
        :param no_create: Skip paths that do not exist.
        :param verbose: Emit progress messages.
        :return: Validated options.
        :raises InvalidModeError: If the mode spec is malformed.
        :raises InvalidTimestampError: If the timestamp spec is
            malformed.
        """
        return cls(
            mode=parse_mode(mode) if mode else None,
            timestamp=parse_timestamp(date),
            no_create=no_create,
            verbose=verbose,
        )

    @property
    def create_mode(self) -> int:
        """Mode used when creating files and directories."""
        return DEFAULT_MODE if self.mode is None else self.mode
