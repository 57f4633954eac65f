"""Base name extraction for trailer name fields.

The trailer stores each input's file name behind a one-byte length, so a
name is clipped to ``MAX_NAME_LENGTH`` bytes. Clipping keeps the *trailing*
bytes and drops the leading ones. That keeps the extension intact, and
existing artifacts were produced this way, so it must not be changed to a
prefix-keeping cut.

Only the last ``/`` is treated as a separator. Escaped separators
(``my\\/file.png``) are not recognised and split like any other ``/``.
"""

from __future__ import annotations

import os
from typing import Union

from ..logging import get_logger
from .constants import MAX_NAME_LENGTH, PATH_SEPARATOR
from .errors import W_NAME_TRUNCATED

__all__ = ["normalize", "PathArg"]

PathArg = Union[str, bytes, "os.PathLike[str]", "os.PathLike[bytes]"]


def _display(name: bytes) -> str:
    return name.decode("utf-8", errors="replace")


def normalize(path: PathArg) -> bytes:
    """Return the base name of ``path`` as at most 255 bytes.

    An empty result (``"dir/"``) is returned as-is.
    """
    raw = os.fsencode(path)
    sep = raw.rfind(PATH_SEPARATOR)
    name = raw if sep == -1 else raw[sep + 1 :]
    if len(name) > MAX_NAME_LENGTH:
        truncated = name[-MAX_NAME_LENGTH:]
        get_logger().warning(
            '%s: file name "%s" is more than %d bytes long. '
            'It was truncated to "%s".',
            W_NAME_TRUNCATED,
            _display(name),
            MAX_NAME_LENGTH,
            _display(truncated),
        )
        name = truncated
    return name
