"""stl2png: pack an image and a 3D model into one self-describing artifact."""

from .api import (
    PackOptions,
    PackResult,
    UnpackResult,
    inspect_artifact,
    pack_files,
    unpack_artifact,
)

__version__ = "1.0.0"

__all__ = [
    "PackOptions",
    "PackResult",
    "UnpackResult",
    "inspect_artifact",
    "pack_files",
    "unpack_artifact",
    "__version__",
]
