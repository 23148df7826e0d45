"""SPK segment summaries and Chebyshev record evaluation (segment types 2 and 3).

A type 2 or type 3 segment is a run of equal-length records followed by a
four-word directory ``[INIT, INTLEN, RSIZE, N]``: the initial epoch, the
length of each record's time interval, the record size in words and the
number of records. Each record is ``[MID, RADIUS, coefficients...]``; the
Chebyshev argument is ``s = (epoch - MID) / RADIUS`` and lies in [-1, 1]
over the record's interval.

Records returned by read_type2/read_type3 carry the record size in front:
``[RSIZE, MID, RADIUS, coefficients...]``.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from spk_tools.constants import SPK_ND, SPK_NI
from spk_tools.daf.file import DafHandle, read_doubles
from spk_tools.daf.summary import unpack_summary
from spk_tools.errors import CoverageError, FormatError

logger = logging.getLogger(__name__)

_DIRECTORY_WORDS = 4


@dataclass(frozen=True)
class SpkSummary:
    """Decoded SPK segment summary (ND=2, NI=6)."""

    start_et: float
    end_et: float
    target: int
    center: int
    frame: int
    data_type: int
    begin: int
    end: int

    @classmethod
    def from_raw(cls, raw: Sequence[float] | np.ndarray) -> SpkSummary:
        """Decode a packed 5-word SPK summary."""
        dc, ic = unpack_summary(raw, SPK_ND, SPK_NI)
        return cls(float(dc[0]), float(dc[1]), *ic)

    def covers(self, et: float) -> bool:
        """True if et lies within the segment's time window (inclusive)."""
        return self.start_et <= et <= self.end_et


def as_spk_summary(summary: SpkSummary | Sequence[float] | np.ndarray) -> SpkSummary:
    """Accept either a decoded summary or the packed words."""
    if isinstance(summary, SpkSummary):
        return summary
    return SpkSummary.from_raw(summary)


def chebyshev_with_derivative(coeffs: np.ndarray, s: float) -> tuple[np.ndarray, np.ndarray]:
    """Evaluate Chebyshev series and their derivatives by Clenshaw's recurrence.

    Parameters:
        coeffs: Array of shape (ncomp, ncoef); row i holds the coefficients
            of component i, lowest degree first.
        s: Chebyshev argument, normally in [-1, 1].

    Returns:
        Tuple (values, d(values)/ds), each of length ncomp.
    """
    ncomp, ncoef = coeffs.shape
    b1 = np.zeros(ncomp)
    b2 = np.zeros(ncomp)
    db1 = np.zeros(ncomp)
    db2 = np.zeros(ncomp)
    s2 = 2.0 * s
    for j in range(ncoef - 1, 0, -1):
        b0 = coeffs[:, j] + s2 * b1 - b2
        db0 = 2.0 * b1 + s2 * db1 - db2
        b1, b2 = b0, b1
        db1, db2 = db0, db1
    values = coeffs[:, 0] + s * b1 - b2
    derivs = b1 + s * db1 - db2
    return values, derivs


def _read_chebyshev_record(
    handle: DafHandle,
    summary: SpkSummary | Sequence[float] | np.ndarray,
    epoch: float,
    ncomp: int,
) -> np.ndarray:
    """Locate and read the record of a type 2/3 segment covering epoch."""
    seg = as_spk_summary(summary)
    if seg.end - seg.begin + 1 < _DIRECTORY_WORDS:
        raise FormatError(f'{handle.path}: segment for body {seg.target} is too short')
    init, intlen, rsize_word, count_word = (
        float(w) for w in read_doubles(handle, seg.end - _DIRECTORY_WORDS + 1, seg.end)
    )
    rsize = int(rsize_word)
    count = int(count_word)
    if (
        not (intlen > 0.0 and rsize_word.is_integer() and count_word.is_integer())
        or rsize < 2 + ncomp
        or (rsize - 2) % ncomp != 0
        or count < 1
        or seg.begin + rsize * count - 1 > seg.end - _DIRECTORY_WORDS
    ):
        raise FormatError(
            f'{handle.path}: corrupt segment directory for body {seg.target} '
            f'(INIT={init}, INTLEN={intlen}, RSIZE={rsize_word}, N={count_word})'
        )
    last = init + intlen * count
    if not init <= epoch <= last:
        raise CoverageError(
            f'Epoch {epoch} outside records of body {seg.target} segment [{init}, {last}]'
        )
    recno = min(math.floor((epoch - init) / intlen), count - 1)
    first = seg.begin + recno * rsize
    data = read_doubles(handle, first, first + rsize - 1)
    record = np.empty(rsize + 1)
    record[0] = float(rsize)
    record[1:] = data
    return record


def read_type2(
    handle: DafHandle, summary: SpkSummary | Sequence[float] | np.ndarray, epoch: float
) -> np.ndarray:
    """Read the type 2 (Chebyshev position) record covering epoch.

    Returns:
        ``[RSIZE, MID, RADIUS, x coefficients, y coefficients, z coefficients]``.

    Raises:
        CoverageError: If epoch lies outside the segment's records.
        FormatError: If the segment directory is inconsistent.
    """
    return _read_chebyshev_record(handle, summary, epoch, 3)


def read_type3(
    handle: DafHandle, summary: SpkSummary | Sequence[float] | np.ndarray, epoch: float
) -> np.ndarray:
    """Read the type 3 (Chebyshev position and velocity) record covering epoch.

    Returns:
        ``[RSIZE, MID, RADIUS, x, y, z, vx, vy, vz coefficient sets]``.
    """
    return _read_chebyshev_record(handle, summary, epoch, 6)


def _record_coefficients(record: Sequence[float] | np.ndarray, ncomp: int) -> tuple[float, float, np.ndarray]:
    rec = np.asarray(record, dtype=np.float64)
    if rec.ndim != 1 or rec.size < 3:
        raise FormatError(f'Chebyshev record too short ({rec.size} words)')
    size = int(rec[0])
    ncoef = (size - 2) // ncomp
    if ncoef < 1 or rec.size < 3 + ncomp * ncoef:
        raise FormatError(f'Chebyshev record of {rec.size} words inconsistent with size {rec[0]}')
    mid = float(rec[1])
    radius = float(rec[2])
    if radius <= 0.0:
        raise FormatError(f'Chebyshev record has non-positive interval radius {radius}')
    coeffs = rec[3 : 3 + ncomp * ncoef].reshape(ncomp, ncoef)
    return mid, radius, coeffs


def evaluate_type2(epoch: float, record: Sequence[float] | np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Evaluate a type 2 record at epoch.

    Position comes from the x/y/z series; velocity is their time derivative
    (d/ds divided by the interval radius).

    Returns:
        Tuple of (position (3,), velocity (3,)).
    """
    mid, radius, coeffs = _record_coefficients(record, 3)
    s = (epoch - mid) / radius
    position, dpds = chebyshev_with_derivative(coeffs, s)
    return position, dpds / radius


def evaluate_type3(epoch: float, record: Sequence[float] | np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Evaluate a type 3 record at epoch.

    Position and velocity come from their own coefficient sets.

    Returns:
        Tuple of (position (3,), velocity (3,)).
    """
    mid, radius, coeffs = _record_coefficients(record, 6)
    s = (epoch - mid) / radius
    values, _ = chebyshev_with_derivative(coeffs, s)
    return values[:3], values[3:]


class SegmentEvaluator(ABC):
    """Reads and evaluates the records of one SPK data type."""

    data_type: int = 0

    @abstractmethod
    def read(self, handle: DafHandle, summary: SpkSummary, epoch: float) -> np.ndarray:
        """Return the record covering epoch."""

    @abstractmethod
    def evaluate(self, epoch: float, record: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Return (position, velocity) from a record."""

    def state(self, handle: DafHandle, summary: SpkSummary, epoch: float) -> np.ndarray:
        """Return the 6-element state relative to the segment's center."""
        position, velocity = self.evaluate(epoch, self.read(handle, summary, epoch))
        return np.concatenate((position, velocity))


class Type2Evaluator(SegmentEvaluator):
    """Chebyshev position only; velocity by differentiation."""

    data_type = 2

    def read(self, handle: DafHandle, summary: SpkSummary, epoch: float) -> np.ndarray:
        return read_type2(handle, summary, epoch)

    def evaluate(self, epoch: float, record: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        return evaluate_type2(epoch, record)


class Type3Evaluator(SegmentEvaluator):
    """Chebyshev position and velocity."""

    data_type = 3

    def read(self, handle: DafHandle, summary: SpkSummary, epoch: float) -> np.ndarray:
        return read_type3(handle, summary, epoch)

    def evaluate(self, epoch: float, record: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        return evaluate_type3(epoch, record)


class UnsupportedEvaluator(SegmentEvaluator):
    """Any data type this reader cannot decode."""

    def __init__(self, data_type: int) -> None:
        self.data_type = data_type

    def read(self, handle: DafHandle, summary: SpkSummary, epoch: float) -> np.ndarray:
        raise FormatError(f'SPK data type {self.data_type} is not supported (only types 2 and 3)')

    def evaluate(self, epoch: float, record: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        raise FormatError(f'SPK data type {self.data_type} is not supported (only types 2 and 3)')


_EVALUATORS: dict[int, SegmentEvaluator] = {
    2: Type2Evaluator(),
    3: Type3Evaluator(),
}


def evaluator_for(data_type: int) -> SegmentEvaluator:
    """Return the evaluator for an SPK data type (UnsupportedEvaluator if unknown)."""
    evaluator = _EVALUATORS.get(data_type)
    if evaluator is None:
        logger.debug('No evaluator for SPK data type %d', data_type)
        return UnsupportedEvaluator(data_type)
    return evaluator
