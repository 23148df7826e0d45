"""Reader for NAIF DAF/SPK binary ephemeris kernels.

This package provides:
- DAF container access: file record validation, both byte orders, summary traversal
- SPK segment types 2 and 3: Chebyshev record lookup and evaluation
- JPL DE and IMCCE INPOP binary ephemerides, used where no SPK segment applies
- State queries: center-of-motion chains across loaded kernels, light-time correction
- A command-line tool to inspect kernels and tabulate states

Epochs are TDB seconds past J2000; rms-julian converts UTC strings.
"""

from spk_tools.errors import (
    ChainError,
    CoverageError,
    FormatError,
    FrameError,
    NameResolutionError,
    SpkError,
)
from spk_tools.spk.jpl import JplEphemeris
from spk_tools.spk.context import KernelContext
from spk_tools.spk.index import KernelIndex, State, spk_objects

__all__ = [
    'ChainError',
    'CoverageError',
    'FormatError',
    'FrameError',
    'JplEphemeris',
    'KernelContext',
    'KernelIndex',
    'NameResolutionError',
    'SpkError',
    'State',
    'spk_objects',
]
