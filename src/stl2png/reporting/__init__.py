"""Progress and status reporting for stl2png commands.

One reporter is active per process (see :func:`set_reporter`); the CLI
picks it with :func:`create_reporter`.
"""

from __future__ import annotations

import sys
from typing import TextIO

from .base import (
    Reporter,
    TaskStatus,
    get_reporter,
    set_reporter,
    section,
    set_verbosity,
    get_verbosity,
)
from .plain import PlainReporter
from .jsonl import JsonLinesReporter
from .silent import SilentReporter
from .rich_reporter import RichReporter

__all__ = [
    "Reporter",
    "TaskStatus",
    "get_reporter",
    "set_reporter",
    "section",
    "set_verbosity",
    "get_verbosity",
    "create_reporter",
    "PlainReporter",
    "JsonLinesReporter",
    "SilentReporter",
    "RichReporter",
]


def create_reporter(name: str, *, stream: TextIO | None = None) -> Reporter:
    """Build the reporter registered under ``name``.

    ``rich`` degrades to ``plain`` when stderr is not a terminal. ``stream``
    overrides the default destination of the plain and json backends.
    """
    if name == "json":
        return JsonLinesReporter(stream=stream)
    if name == "silent":
        return SilentReporter()
    if name == "rich" and sys.stderr.isatty():
        return RichReporter()
    return PlainReporter(stream=stream)
