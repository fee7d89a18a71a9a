"""\
Core
====

Created on: Tuesday, October 13 2026
Last updated on: Friday, October 16 2026

This module acts as an entry point for combining the core objects of
`makit`: configurations, errors, parsers and the path materializer.
"""

from __future__ import annotations

from .config import *
from .error import *
from .materializer import *
from .parsers import *


__all__: tuple[str, ...] = (
    config.__all__ + error.__all__ + materializer.__all__ + parsers.__all__
)
