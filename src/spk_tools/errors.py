"""Exception types raised by the DAF/SPK reader."""

from __future__ import annotations


class SpkError(Exception):
    """Base class for all kernel reading and query failures."""


class FormatError(SpkError, ValueError):
    """File is not a conforming DAF/SPK (bad header, truncated, unsupported type)."""


class NameResolutionError(SpkError, LookupError):
    """Unknown body or frame name or ID."""


class CoverageError(SpkError, ValueError):
    """No segment or record spans the requested epoch."""


class FrameError(SpkError, ValueError):
    """Requested frame cannot be reached without a non-inertial transform."""


class ChainError(SpkError, RuntimeError):
    """Target and observer share no common ancestor in the loaded kernels."""
