"""\
Error and warnings
==================

Created on: Tuesday, October 13 2026
Last updated on: Thursday, October 15 2026

This module provides the error classes raised throughout `makit`. Parse
errors (`InvalidModeError` and `InvalidTimestampError`) are fatal to a
whole invocation and are raised before any path is touched. The
`MaterializeError` family is raised for a single path and is recovered
from by the materializer, which turns it into a failed outcome and
moves on to the next path.
"""

from __future__ import annotations

import typing as t

__all__: tuple[str, ...] = (
    "AttributeApplyError",
    "ConfigValidationError",
    "DirectoryCreateError",
    "FileCreateError",
    "InvalidModeError",
    "InvalidTimestampError",
    "MakitError",
    "MaterializeError",
    "ValidationError",
)


class MakitError(Exception):
    """Base exception class for all errors raised by `makit`.

    :param message: The error message to be displayed.
    """

    def __init__(self, message: str, *args: t.Any) -> None:
        """Initialise the exception with a message and optional args."""
        super().__init__(message, *args)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        """Return a string representation of the exception."""
        return f"<{type(self).__name__}(message={self.message!r})>"


class ValidationError(MakitError):
    """Errors related to validation check failure.

    :param message: The error message to be displayed.
    :param attribute: Name of the value that failed validation, defaults
        to `None`.
    """

    def __init__(self, message: str, *, attribute: str | None = None) -> None:
        """Initialise the validation error with context."""
        super().__init__(message)
        self.attribute = attribute


class ConfigValidationError(ValidationError):
    """Errors related to configuration validation failure."""


class InvalidModeError(ValidationError):
    """Raised when a permission spec is not a valid octal mode."""

    def __init__(self, spec: str, reason: str) -> None:
        super().__init__(f"invalid mode: {spec!r} {reason}", attribute="mode")
        self.spec = spec


class InvalidTimestampError(ValidationError):
    """Raised when a timestamp spec does not match `YYYYMMDDhhmm`."""

    def __init__(self, spec: str, reason: str) -> None:
        super().__init__(
            f"invalid timestamp format: {spec!r} {reason}",
            attribute="date",
        )
        self.spec = spec


class MaterializeError(MakitError):
    """Errors related to materializing a single path.

    :param message: The error message to be displayed.
    :param path: The path being processed when the error occurred.
    """

    def __init__(self, message: str, *, path: str) -> None:
        """Initialise the error with the offending path."""
        super().__init__(message)
        self.path = path


class DirectoryCreateError(MaterializeError):
    """Errors related to directory creation failure."""


class FileCreateError(MaterializeError):
    """Errors related to file creation failure."""


class AttributeApplyError(MaterializeError):
    """Errors related to applying a mode or timestamp to a path.

    These never change the outcome of a path. They are collected on the
    result and logged.
    """
