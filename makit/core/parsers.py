"""\
Parsers
=======

Created on: Tuesday, October 13 2026
Last updated on: Thursday, October 15 2026

This module turns the textual mode and timestamp specs given on the
command line into values the materializer can apply. Both parsers are
pure and raise a `ValidationError` subclass on malformed input, which
ends the invocation before any path is processed.
"""

from __future__ import annotations

import re
import typing as t
from datetime import datetime
from datetime import timezone

from makit.core.error import InvalidModeError
from makit.core.error import InvalidTimestampError

__all__: tuple[str, ...] = (
    "DEFAULT_MODE",
    "MAX_MODE",
    "TIMESTAMP_FORMAT",
    "parse_mode",
    "parse_timestamp",
)

DEFAULT_MODE: t.Final[int] = 0o755
# NOTE: Permission bits plus setuid, setgid and sticky.
MAX_MODE: t.Final[int] = 0o7777
TIMESTAMP_FORMAT: t.Final[str] = "%Y%m%d%H%M"

_OCTAL_RE = re.compile(r"[0-7]+")
_TIMESTAMP_RE = re.compile(r"[0-9]{12}")


def parse_mode(spec: str) -> int:
    """Parse an octal permission spec such as `755` or `0640`.

    An empty spec resolves to `DEFAULT_MODE`. Signs, whitespace and the
    `0o` prefix are rejected.

    :param spec: Textual octal permission spec.
    :return: Numeric file mode.
    :raises InvalidModeError: If the spec is not octal or is out of
        range.
    """
    if not spec:
        return DEFAULT_MODE
    if not _OCTAL_RE.fullmatch(spec):
        raise InvalidModeError(spec, "is not an octal number")
    mode = int(spec, 8)
    if mode > MAX_MODE:
        raise InvalidModeError(spec, f"exceeds maximum mode {MAX_MODE:04o}")
    return mode


def parse_timestamp(spec: str) -> datetime | None:
    """Parse a `YYYYMMDDhhmm` timestamp spec.

    The value is read as UTC with seconds fixed to zero. An empty spec
    means timestamps are left alone and returns `None`.

    :param spec: Twelve digit timestamp spec.
    :return: Timezone-aware datetime, or `None` for an empty spec.
    :raises InvalidTimestampError: If the spec does not match the
        layout or is not a real calendar value.
    """
    if not spec:
        return None
    if not _TIMESTAMP_RE.fullmatch(spec):
        raise InvalidTimestampError(spec, "does not match YYYYMMDDhhmm")
    try:
        parsed = datetime.strptime(spec, TIMESTAMP_FORMAT)
    except ValueError as error:
        raise InvalidTimestampError(spec, f"({error})") from error
    return parsed.replace(tzinfo=timezone.utc)
