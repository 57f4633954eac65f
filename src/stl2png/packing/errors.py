"""Error definitions for stl2png."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

E_NEGATIVE_SIZE = "E_NEGATIVE_SIZE"
E_SIZE_OVERFLOW = "E_SIZE_OVERFLOW"
E_TRAILER_TRUNCATED = "E_TRAILER_TRUNCATED"
E_TRAILER_LAYOUT = "E_TRAILER_LAYOUT"
E_OPEN_INPUT = "E_OPEN_INPUT"
E_OPEN_OUTPUT = "E_OPEN_OUTPUT"
E_OUTPUT_EXISTS = "E_OUTPUT_EXISTS"
E_UNSAFE_NAME = "E_UNSAFE_NAME"
E_CONFIG = "E_CONFIG"
E_INTERNAL = "E_INTERNAL"

# Non-fatal; only ever logged.
W_NAME_TRUNCATED = "W_NAME_TRUNCATED"


@dataclass
class Stl2PngError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class SizeError(Stl2PngError):
    pass


class NegativeSizeError(SizeError):
    pass


class SizeOverflowError(SizeError):
    pass


class ContractViolation(Stl2PngError):
    pass


class TrailerFormatError(Stl2PngError):
    pass


class ArtifactIOError(Stl2PngError):
    pass


class ConfigError(Stl2PngError):
    pass


def negative_size(size: int) -> NegativeSizeError:
    return NegativeSizeError(
        code=E_NEGATIVE_SIZE,
        message=(
            "Computed a negative value for the input size; "
            "the input stream is in an inconsistent state"
        ),
        context={"size": size},
    )


def size_overflow(size: int, limit: int) -> SizeOverflowError:
    return SizeOverflowError(
        code=E_SIZE_OVERFLOW,
        message="Input size is too big to fit in an unsigned 32-bit number",
        context={"size": size, "limit": limit},
    )


def contract_violation(
    message: str, context: Optional[Dict[str, Any]] = None
) -> ContractViolation:
    return ContractViolation(code=E_INTERNAL, message=message, context=context)


def trailer_error(
    code: str, message: str, context: Optional[Dict[str, Any]] = None
) -> TrailerFormatError:
    return TrailerFormatError(code=code, message=message, context=context)


def io_error(
    code: str, message: str, context: Optional[Dict[str, Any]] = None
) -> ArtifactIOError:
    return ArtifactIOError(code=code, message=message, context=context)


__all__ = [
    "Stl2PngError",
    "SizeError",
    "NegativeSizeError",
    "SizeOverflowError",
    "ContractViolation",
    "TrailerFormatError",
    "ArtifactIOError",
    "ConfigError",
    "negative_size",
    "size_overflow",
    "contract_violation",
    "trailer_error",
    "io_error",
    "E_NEGATIVE_SIZE",
    "E_SIZE_OVERFLOW",
    "E_TRAILER_TRUNCATED",
    "E_TRAILER_LAYOUT",
    "E_OPEN_INPUT",
    "E_OPEN_OUTPUT",
    "E_OUTPUT_EXISTS",
    "E_UNSAFE_NAME",
    "E_CONFIG",
    "E_INTERNAL",
    "W_NAME_TRUNCATED",
]
