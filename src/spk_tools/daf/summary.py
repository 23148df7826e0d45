"""Packed DAF array summaries: ND doubles followed by NI integers packed two per double."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from spk_tools.constants import DAF_MAX_SUMMARY_WORDS
from spk_tools.errors import FormatError


def summary_size(nd: int, ni: int) -> int:
    """Number of double-precision words in one packed summary.

    Parameters:
        nd: Number of double components.
        ni: Number of integer components.

    Returns:
        nd + ceil(ni / 2).
    """
    return nd + (ni + 1) // 2


def check_summary_format(nd: int, ni: int) -> None:
    """Raise FormatError unless (nd, ni) describes a summary that fits in a DAF record."""
    if nd < 0 or ni < 2:
        raise FormatError(f'Invalid summary format ND={nd}, NI={ni}')
    if summary_size(nd, ni) > DAF_MAX_SUMMARY_WORDS:
        raise FormatError(
            f'Summary format ND={nd}, NI={ni} needs {summary_size(nd, ni)} words; '
            f'at most {DAF_MAX_SUMMARY_WORDS} fit in a summary record'
        )


def _as_doubles(raw: Sequence[float] | np.ndarray) -> np.ndarray:
    if isinstance(raw, np.ndarray) and raw.dtype.kind == 'f' and raw.dtype.itemsize == 8:
        return raw
    return np.asarray(raw, dtype=np.float64)


def unpack_summary(raw: Sequence[float] | np.ndarray, nd: int, ni: int) -> tuple[np.ndarray, list[int]]:
    """Split a packed summary into its double and integer components.

    Integers occupy the words after the ND doubles, two 32-bit integers per
    word, in the byte order of ``raw``. A numpy array read straight from a
    file keeps the file's byte order in its dtype, so integers come back
    bit-exact for either encoding; plain sequences use native order.

    Parameters:
        raw: Packed summary of length nd + ceil(ni / 2).
        nd: Number of double components.
        ni: Number of integer components.

    Returns:
        Tuple of (doubles as native float64 array of length nd, list of ni ints).

    Raises:
        FormatError: If the length of raw does not match (nd, ni).
    """
    words = _as_doubles(raw)
    expected = summary_size(nd, ni)
    if words.ndim != 1 or words.shape[0] != expected:
        raise FormatError(
            f'Summary has {words.size} words; ND={nd}, NI={ni} requires {expected}'
        )
    byteorder = words.dtype.byteorder
    int_dtype = np.dtype(np.int32).newbyteorder(byteorder) if byteorder in ('<', '>') else np.dtype(np.int32)
    doubles = words[:nd].astype(np.float64)
    packed = np.ascontiguousarray(words[nd:]).tobytes()
    ints = np.frombuffer(packed, dtype=int_dtype)[:ni]
    return doubles, [int(i) for i in ints]


def pack_summary(dc: Sequence[float], ic: Sequence[int], byteorder: str = '=') -> np.ndarray:
    """Pack double and integer components into summary words (inverse of unpack_summary).

    Parameters:
        dc: Double components.
        ic: Integer components (each must fit in a signed 32-bit integer).
        byteorder: '<', '>' or '=' for the returned array's dtype.

    Returns:
        Array of len(dc) + ceil(len(ic) / 2) words; an odd integer count is
        padded with a zero integer.
    """
    nd = len(dc)
    ni = len(ic)
    dtype = np.dtype(np.float64).newbyteorder(byteorder)
    int_dtype = np.dtype(np.int32).newbyteorder(byteorder)
    ints = list(ic) + [0] * (ni % 2)
    words = np.empty(summary_size(nd, ni), dtype=dtype)
    words[:nd] = np.asarray(dc, dtype=np.float64)
    words[nd:] = np.frombuffer(np.asarray(ints, dtype=int_dtype).tobytes(), dtype=dtype)
    return words
