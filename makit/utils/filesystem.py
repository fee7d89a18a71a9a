"""\
Filesystem utility objects
==========================

Created on: Tuesday, October 13 2026
Last updated on: Friday, October 16 2026

This module provides the small set of filesystem primitives that the
materializer is built on. Every function here raises the underlying
`OSError` unchanged; deciding what a failure means for a path is left
to the caller.
"""

from __future__ import annotations

import os
import typing as t

if t.TYPE_CHECKING:
    from datetime import datetime

__all__: tuple[str, ...] = (
    "chmod",
    "exists",
    "mkdir",
    "set_times",
    "touch",
)


def exists(path: str) -> bool:
    """Return `True` if the path exists, following symlinks."""
    return os.path.exists(path)


def mkdir(path: str, mode: int = 0o755) -> str:
    """Create a directory and any missing ancestors with `mode`.

    Unlike `os.makedirs`, the mode is applied to every directory that
    gets created, not only the leaf. A directory that already exists is
    not an error. The path is walked as given, `..` components are left
    for the filesystem to resolve.

    :param path: Directory to create.
    :param mode: Permission bits for the created directories, subject to
        the process umask.
    :return: The path, unchanged.
    :raises OSError: If any directory in the chain cannot be created or
        a non-directory is in the way.
    """
    missing: list[str] = []
    current = path
    while current and not os.path.isdir(current):
        missing.append(current)
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    for directory in reversed(missing):
        try:
            os.mkdir(directory, mode)
        except FileExistsError:
            if not os.path.isdir(directory):
                raise
    return path


def touch(path: str, mode: int = 0o755) -> str:
    """Create an empty file if it does not exist.

    The file is opened for writing without truncation and closed
    straight away, so existing content is never touched.

    :param path: File to create.
    :param mode: Permission bits for a newly created file, subject to
        the process umask.
    :return: The path, unchanged.
    """
    descriptor = os.open(path, os.O_CREAT | os.O_WRONLY, mode)
    os.close(descriptor)
    return path


def chmod(path: str, mode: int) -> None:
    """Set the permission bits of a path."""
    os.chmod(path, mode)


def set_times(path: str, timestamp: datetime) -> None:
    """Set both access and modification time of a path."""
    seconds = timestamp.timestamp()
    os.utime(path, (seconds, seconds))
