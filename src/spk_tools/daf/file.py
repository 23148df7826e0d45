"""DAF binary files: header validation, byte-order detection, record reads, handle table.

A DAF is a sequence of 1024-byte records. Record 1 (the file record) holds the
ID word, the summary format (ND, NI), the internal file name, the forward and
backward summary record pointers, the first free address and the binary
format of the numeric data. Numbers are IEEE doubles and 32-bit integers in
either big- or little-endian order; the order is detected once at open time
and used for every later read through the handle.
"""

from __future__ import annotations

import contextlib
import logging
import os
import struct
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

import numpy as np

from spk_tools.constants import DAF_IFNAME_LEN, DAF_RECORD_BYTES, DAF_WORD_BYTES
from spk_tools.daf.summary import check_summary_format, summary_size
from spk_tools.errors import FormatError

logger = logging.getLogger(__name__)

# File record field offsets (bytes)
_IDWORD = slice(0, 8)
_NDNI = slice(8, 16)
_IFNAME = slice(16, 16 + DAF_IFNAME_LEN)
_POINTERS = slice(76, 88)
_LOCFMT = slice(88, 96)
_FTPSTR = slice(699, 727)

# FTP validation string; damaged by ASCII-mode transfers.
FTP_VALIDATION = b'FTPSTR:\r:\n:\r\n:\r\x00:\x81:\x10\xce:ENDFTP'

_BYTE_ORDERS = {'BIG-IEEE': '>', 'LTL-IEEE': '<'}


@dataclass
class DafHandle:
    """One open DAF file and its file-record contents.

    Created by open_daf and released by close_daf. Opening the same file
    again returns this object with ``links`` incremented; the file is closed
    when the last link is released.
    """

    handle: int
    path: Path
    idword: str
    nd: int
    ni: int
    ifname: str
    fward: int
    bward: int
    free: int
    byteorder: str
    nrecords: int
    links: int = 1
    _file: BinaryIO | None = field(default=None, repr=False, compare=False)

    @property
    def is_open(self) -> bool:
        """True until the last link is closed."""
        return self._file is not None

    @property
    def double_dtype(self) -> np.dtype:
        """numpy dtype of the file's double-precision words."""
        return np.dtype(np.float64).newbyteorder(self.byteorder)

    @property
    def int_dtype(self) -> np.dtype:
        """numpy dtype of the file's 32-bit integers."""
        return np.dtype(np.int32).newbyteorder(self.byteorder)

    @property
    def summary_size(self) -> int:
        """Words per packed array summary (ND + ceil(NI / 2))."""
        return summary_size(self.nd, self.ni)

    @property
    def kernel_type(self) -> str:
        """Kernel type from the ID word (e.g. 'SPK'); '?' for legacy 'NAIF/DAF' files."""
        if self.idword.startswith('DAF/'):
            return self.idword[4:].strip()
        return '?'


# Process-wide open-handle table.
_handles: dict[int, DafHandle] = {}
_next_handle = 1


def open_handles() -> frozenset[int]:
    """Return the set of currently open handle numbers."""
    return frozenset(_handles)


def is_loaded(path: str | os.PathLike[str]) -> DafHandle | None:
    """Return the open handle for path, or None if the file is not open.

    Parameters:
        path: File path; compared after resolving to a canonical absolute path.
    """
    canonical = Path(path).resolve()
    for handle in _handles.values():
        if handle.path == canonical:
            return handle
    return None


def _plausible_format(nd: int, ni: int) -> bool:
    try:
        check_summary_format(nd, ni)
    except FormatError:
        return False
    return True


def _detect_byteorder(record: bytes, path: Path) -> str:
    """Return '<' or '>' for the file's numeric encoding."""
    locfmt = record[_LOCFMT].decode('latin-1').strip(' \x00')
    if locfmt in _BYTE_ORDERS:
        return _BYTE_ORDERS[locfmt]
    if locfmt:
        raise FormatError(f'{path}: unsupported DAF binary format {locfmt!r}')
    # Legacy files predate the format field; pick the order giving a sane ND/NI.
    candidates = [bo for bo in ('<', '>') if _plausible_format(*struct.unpack(bo + '2i', record[_NDNI]))]
    if not candidates:
        raise FormatError(f'{path}: cannot determine byte order from summary format')
    if len(candidates) > 1:
        native = '<' if np.little_endian else '>'
        logger.debug('%s: ambiguous legacy byte order; assuming native', path)
        return native
    logger.debug('%s: legacy DAF without format field; inferred byte order %r', path, candidates[0])
    return candidates[0]


def _parse_file_record(record: bytes, path: Path, file_size: int) -> dict[str, object]:
    """Validate the file record and return its fields."""
    if len(record) < DAF_RECORD_BYTES:
        raise FormatError(f'{path}: file is shorter than one DAF record ({len(record)} bytes)')
    try:
        idword = record[_IDWORD].decode('ascii')
    except UnicodeDecodeError as e:
        raise FormatError(f'{path}: not a DAF file (binary ID word)') from e
    if not (idword.startswith('DAF/') or idword == 'NAIF/DAF'):
        raise FormatError(f'{path}: not a DAF file (ID word {idword!r})')
    if file_size % DAF_RECORD_BYTES != 0:
        raise FormatError(
            f'{path}: size {file_size} is not a multiple of the {DAF_RECORD_BYTES}-byte record size'
        )
    byteorder = _detect_byteorder(record, path)
    nd, ni = struct.unpack(byteorder + '2i', record[_NDNI])
    check_summary_format(nd, ni)
    fward, bward, free = struct.unpack(byteorder + '3i', record[_POINTERS])
    nrecords = file_size // DAF_RECORD_BYTES
    for label, recno in (('forward', fward), ('backward', bward)):
        if not 2 <= recno <= nrecords:
            raise FormatError(f'{path}: {label} summary pointer {recno} outside records 2..{nrecords}')
    ftp = record[_FTPSTR]
    if ftp.startswith(b'FTPSTR:'):
        if ftp != FTP_VALIDATION:
            raise FormatError(f'{path}: FTP validation string damaged (ASCII-mode transfer?)')
    else:
        logger.debug('%s: no FTP validation string', path)
    ifname = record[_IFNAME].decode('latin-1').rstrip(' \x00')
    return {
        'idword': idword,
        'nd': nd,
        'ni': ni,
        'ifname': ifname,
        'fward': fward,
        'bward': bward,
        'free': free,
        'byteorder': byteorder,
        'nrecords': nrecords,
    }


def open_daf(path: str | os.PathLike[str]) -> DafHandle:
    """Open a DAF for reading and register its handle.

    Parameters:
        path: File path.

    Returns:
        DafHandle; the existing one (with an added link) if already open.

    Raises:
        FormatError: If the file is not a conforming DAF.
        OSError: If the file cannot be opened.
    """
    global _next_handle
    canonical = Path(path).resolve()
    existing = is_loaded(canonical)
    if existing is not None:
        existing.links += 1
        logger.debug('DAF %s already open as handle %d (links=%d)', canonical, existing.handle, existing.links)
        return existing
    f = open(canonical, 'rb')
    try:
        file_size = os.fstat(f.fileno()).st_size
        fields = _parse_file_record(f.read(DAF_RECORD_BYTES), canonical, file_size)
    except BaseException:
        f.close()
        raise
    handle = DafHandle(handle=_next_handle, path=canonical, _file=f, **fields)  # type: ignore[arg-type]
    _next_handle += 1
    _handles[handle.handle] = handle
    logger.debug(
        'Opened DAF %s as handle %d (ND=%d, NI=%d, byte order %r)',
        canonical,
        handle.handle,
        handle.nd,
        handle.ni,
        handle.byteorder,
    )
    return handle


def close_daf(handle: DafHandle) -> None:
    """Release one link to handle; closes the file when no links remain.

    Closing a handle that is no longer open is ignored.
    """
    if _handles.get(handle.handle) is not handle:
        logger.debug('close_daf: handle %d is not open', handle.handle)
        return
    handle.links -= 1
    if handle.links > 0:
        return
    del _handles[handle.handle]
    f = handle._file
    handle._file = None
    if f is not None:
        f.close()
    logger.debug('Closed DAF handle %d (%s)', handle.handle, handle.path)


@contextlib.contextmanager
def daf_opened(path: str | os.PathLike[str]) -> Iterator[DafHandle]:
    """Context manager: open_daf on entry, close_daf on exit (including errors)."""
    handle = open_daf(path)
    try:
        yield handle
    finally:
        close_daf(handle)


def _file_of(handle: DafHandle) -> BinaryIO:
    f = handle._file
    if f is None or _handles.get(handle.handle) is not handle:
        raise ValueError(f'DAF handle {handle.handle} ({handle.path}) is not open')
    return f


def read_record(handle: DafHandle, recno: int) -> bytes:
    """Read one 1024-byte record (1-based record number).

    Raises:
        FormatError: If the record lies outside the file or is truncated.
    """
    f = _file_of(handle)
    if not 1 <= recno <= handle.nrecords:
        raise FormatError(f'{handle.path}: record {recno} outside 1..{handle.nrecords}')
    f.seek((recno - 1) * DAF_RECORD_BYTES)
    data = f.read(DAF_RECORD_BYTES)
    if len(data) != DAF_RECORD_BYTES:
        raise FormatError(f'{handle.path}: record {recno} truncated ({len(data)} bytes)')
    return data


def read_doubles(handle: DafHandle, first: int, last: int) -> np.ndarray:
    """Read the double-precision words at DAF addresses first..last (1-based, inclusive).

    Returns:
        Array in the file's byte order.

    Raises:
        FormatError: If the address range is empty or lies outside the file.
    """
    f = _file_of(handle)
    nwords = last - first + 1
    if first < 1 or nwords < 1 or last * DAF_WORD_BYTES > handle.nrecords * DAF_RECORD_BYTES:
        raise FormatError(f'{handle.path}: invalid address range {first}..{last}')
    f.seek((first - 1) * DAF_WORD_BYTES)
    data = f.read(nwords * DAF_WORD_BYTES)
    if len(data) != nwords * DAF_WORD_BYTES:
        raise FormatError(f'{handle.path}: addresses {first}..{last} truncated')
    return np.frombuffer(data, dtype=handle.double_dtype)
