"""\
makit
=====

Created on: Tuesday, October 13 2026
Last updated on: Saturday, October 17 2026

Make files and directories, with optional mode and timestamp.

`makit` ensures that a list of paths exists. Paths whose final segment
contains a `.` are created as empty files (parent directories
included), all other paths are created as directories. A permission
mode and an access/modification timestamp can be applied to every path,
whether it was just created or already existed.

Example::

    .. code-block:: python

        from makit import Materializer, Options

        options = Options.parse(mode="750", date="202401011030")
        results = Materializer(options).run(["logs/", "logs/app.log"])
"""

from __future__ import annotations

from .core import *
from .utils import *


__all__: tuple[str, ...] = ("__version__",)
__all__ += core.__all__
__all__ += utils.__all__

__version__: str = "1.0.0"
