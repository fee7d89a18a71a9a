"""\
Utilities
=========

Created on: Tuesday, October 13 2026
Last updated on: Tuesday, October 13 2026

This module acts as an entry point for combining various utilities used
throughout `makit`.
"""

from __future__ import annotations

from .filesystem import *


__all__: tuple[str, ...] = filesystem.__all__
