"""Mini README: Exceptions and diagnostics raised by the Waygen core.

Structure:
    * ErrorKind - enumeration of the error categories the core reports.
    * Diagnostic - serialisable notice returned alongside (partial) results.
    * WaygenError and subclasses - exceptions carrying an ``ErrorKind``.

Geometry and configuration errors are raised inside the planners and turned
into ``Diagnostic`` records at the public boundary, because a half-drawn
polygon is an ordinary editing state. Decode failures propagate to callers
with their original cause attached.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class ErrorKind(str, Enum):
    """Categories of problems reported by the planning core."""

    INVALID_GEOMETRY = "invalid_geometry"
    INVALID_CONFIGURATION = "invalid_configuration"
    CODEC_DECODE_FAILURE = "codec_decode_failure"
    CODEC_PARTIAL_RESTORE = "codec_partial_restore"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Non-fatal notice describing why a result is empty or incomplete."""

    kind: ErrorKind
    message: str

    def as_dict(self) -> Dict[str, str]:
        return {"kind": self.kind.value, "message": self.message}


class WaygenError(Exception):
    """Base class for all Waygen errors."""

    kind: ErrorKind = ErrorKind.INVALID_CONFIGURATION

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_diagnostic(self) -> Diagnostic:
        """Convert the exception into a diagnostic record."""

        return Diagnostic(kind=self.kind, message=self.message)


class InvalidGeometryError(WaygenError):
    """Missing, degenerate or zero-area boundary polygon."""

    kind = ErrorKind.INVALID_GEOMETRY


class InvalidConfigurationError(WaygenError):
    """Settings that cannot produce a path (e.g. overlap of 100% or more)."""

    kind = ErrorKind.INVALID_CONFIGURATION


class MissionDecodeError(WaygenError):
    """A mission package could not be read at all."""

    kind = ErrorKind.CODEC_DECODE_FAILURE


class PartialRestoreError(WaygenError):
    """The session block of a package is absent or unreadable."""

    kind = ErrorKind.CODEC_PARTIAL_RESTORE
