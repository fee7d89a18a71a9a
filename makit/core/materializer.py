"""\
Materializer
============

Created on: Tuesday, October 13 2026
Last updated on: Saturday, October 17 2026

This module implements the path materializer, the engine behind the
`makit` command. For every path it decides whether the path names a
file or a directory, creates it when it is missing and then applies the
requested mode and timestamp.

Whether a path names a file or a directory is decided from its name
alone: a final segment containing a `.` is a file, anything else is a
directory. The filesystem is never probed for this, so `archive.` is a
file and `Makefile` is a directory.

Paths are processed one after another, in order. A path that cannot be
created is reported and skipped, it never stops the remaining paths.
"""

from __future__ import annotations

import os
import sys
import typing as t
from dataclasses import dataclass
from dataclasses import field
from enum import Enum

from opentelemetry import trace

from makit.core.error import AttributeApplyError
from makit.core.error import DirectoryCreateError
from makit.core.error import FileCreateError
from makit.core.error import MaterializeError
from makit.utils import filesystem
from makit.utils.logging import PathContext
from makit.utils.logging import get_logger
from makit.utils.logging import perf_logger

if t.TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from makit.core.config import Options

__all__: tuple[str, ...] = (
    "Materializer",
    "Outcome",
    "PathResult",
    "is_directory_candidate",
)

logger = get_logger(__name__)

_SEPARATORS: t.Final[str] = os.sep + (os.altsep or "")
_TIMESTAMP_DISPLAY: t.Final[str] = "%Y-%m-%d %H:%M"


class Outcome(Enum):
    """Outcome of materializing a single path."""

    CREATED_DIRECTORY = "created-directory"
    CREATED_FILE = "created-file"
    EXISTS = "exists"
    SKIPPED = "skipped"
    DIRECTORY_CREATE_FAILED = "directory-create-failed"
    FILE_CREATE_FAILED = "file-create-failed"

    @property
    def failed(self) -> bool:
        """Whether the path could not be created."""
        return self in (
            Outcome.DIRECTORY_CREATE_FAILED,
            Outcome.FILE_CREATE_FAILED,
        )


@dataclass
class PathResult:
    """Result of materializing a single path.

    :param path: The path as given by the caller.
    :param outcome: What happened to the path.
    :param message: The status line reported for the path.
    :param error: The creation error for failed outcomes.
    :param attribute_errors: Failures while applying the mode or the
        timestamp. These never change the outcome.
    """

    path: str
    outcome: Outcome
    message: str
    error: MaterializeError | None = None
    attribute_errors: list[AttributeApplyError] = field(default_factory=list)


def is_directory_candidate(path: str) -> bool:
    """Return `True` if the path names a directory.

    Only the text after the last separator is looked at. A path ending
    in a separator has an empty final segment and is a directory.
    """
    segment = path
    for separator in _SEPARATORS:
        segment = segment.rsplit(separator, 1)[-1]
    return "." not in segment


class Materializer:
    """Ensure that paths exist, creating them when needed.

    :param options: Flags of the invocation.
    :param out: Stream for status and progress lines, defaults to
        standard output at the time of writing.
    :param tracer: OpenTelemetry tracer for run and per-path spans,
        defaults to the globally configured one.
    """

    def __init__(
        self,
        options: Options,
        *,
        out: t.TextIO | None = None,
        tracer: trace.Tracer | None = None,
    ) -> None:
        self.options = options
        self.out = out
        self.tracer = tracer or trace.get_tracer(__name__)

    def emit(self, line: str) -> None:
        """Write a line to the output stream."""
        (self.out or sys.stdout).write(f"{line}\n")

    def progress(self, line: str) -> None:
        """Write a progress line when running verbosely."""
        logger.debug(line)
        if self.options.verbose:
            self.emit(line)

    @perf_logger
    def run(self, paths: Iterable[str]) -> list[PathResult]:
        """Materialize every path, in order.

        :param paths: Paths to materialize.
        :return: One result per path, in input order.
        """
        paths = list(paths)
        options = self.options
        with self.tracer.start_as_current_span(
            "makit.run",
            attributes={
                "makit.paths": len(paths),
                "makit.no_create": options.no_create,
            },
        ):
            if options.verbose:
                self.emit("Starting makit operation in verbose mode.")
            if options.mode is not None:
                self.progress(f"Using mode: {options.mode:04o}")
            if options.timestamp is not None:
                self.progress(
                    "Using timestamp: "
                    f"{options.timestamp.strftime(_TIMESTAMP_DISPLAY)}"
                )
            results = [self.materialize(path) for path in paths]
        failed = sum(1 for result in results if result.outcome.failed)
        if failed:
            logger.info(f"{failed} of {len(results)} path(s) failed")
        return results

    def materialize(self, path: str) -> PathResult:
        """Materialize a single path.

        :param path: Path to materialize.
        :return: The result for the path.
        """
        with (
            PathContext(path),
            self.tracer.start_as_current_span(
                "makit.materialize",
                attributes={"makit.path": path},
            ) as span,
        ):
            result = self._materialize(path)
            span.set_attribute("makit.outcome", result.outcome.value)
            self.emit(result.message)
            if result.outcome in (
                Outcome.CREATED_DIRECTORY,
                Outcome.CREATED_FILE,
                Outcome.EXISTS,
            ):
                result.attribute_errors = self.apply_attributes(path)
            return result

    def _materialize(self, path: str) -> PathResult:
        self.progress(f"Processing path: {path}")
        if filesystem.exists(path):
            return PathResult(path, Outcome.EXISTS, f"Exists: {path}")
        if self.options.no_create:
            return PathResult(
                path, Outcome.SKIPPED, f"Skipped (not created): {path}"
            )
        try:
            if is_directory_candidate(path):
                self.create_directory(path)
                return PathResult(
                    path,
                    Outcome.CREATED_DIRECTORY,
                    f"Created directory: {path}",
                )
            self.create_file(path)
            return PathResult(
                path, Outcome.CREATED_FILE, f"Created file: {path}"
            )
        except DirectoryCreateError as error:
            logger.debug(f"Directory creation failed: {error}")
            return PathResult(
                path,
                Outcome.DIRECTORY_CREATE_FAILED,
                f"Error creating directory: {error}",
                error=error,
            )
        except FileCreateError as error:
            logger.debug(f"File creation failed: {error}")
            return PathResult(
                path,
                Outcome.FILE_CREATE_FAILED,
                f"Error creating file: {error}",
                error=error,
            )

    def create_directory(self, path: str) -> None:
        """Create a directory and its missing ancestors.

        :raises DirectoryCreateError: If the directory cannot be
            created.
        """
        try:
            filesystem.mkdir(path, self.options.create_mode)
        except (OSError, ValueError) as error:
            raise DirectoryCreateError(str(error), path=path) from error

    def create_file(self, path: str) -> None:
        """Create an empty file, creating its parent chain first.

        A parent that cannot be created is only logged. The file
        creation that follows reports the actual problem.

        :raises FileCreateError: If the file cannot be created.
        """
        parent = os.path.dirname(path)
        if parent and parent != os.curdir:
            self.progress(f"Ensuring parent directory: {parent}")
            try:
                filesystem.mkdir(parent, self.options.create_mode)
            except (OSError, ValueError) as error:
                logger.debug(f"Could not create parent {parent!r}: {error}")
        try:
            filesystem.touch(path, self.options.create_mode)
        except (OSError, ValueError) as error:
            raise FileCreateError(str(error), path=path) from error

    def apply_attributes(self, path: str) -> list[AttributeApplyError]:
        """Apply the requested mode and timestamp to a path.

        Both are best effort. Failures are logged and returned, they do
        not change the outcome of the path.

        :param path: An existing path.
        :return: The failures, empty when everything was applied.
        """
        errors: list[AttributeApplyError] = []
        mode = self.options.mode
        timestamp: datetime | None = self.options.timestamp
        if mode is not None:
            self.progress(f"Setting mode {mode:04o} on: {path}")
            try:
                filesystem.chmod(path, mode)
            except OSError as error:
                errors.append(
                    AttributeApplyError(
                        f"cannot set mode {mode:04o}: {error}", path=path
                    )
                )
        if timestamp is not None:
            self.progress(
                f"Setting timestamp {timestamp.strftime(_TIMESTAMP_DISPLAY)} "
                f"on: {path}"
            )
            try:
                filesystem.set_times(path, timestamp)
            except OSError as error:
                errors.append(
                    AttributeApplyError(
                        f"cannot set timestamp: {error}", path=path
                    )
                )
        for error in errors:
            logger.warning(error.message)
        return errors
