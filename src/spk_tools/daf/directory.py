"""Traversal of a DAF's doubly linked list of summary records.

Each summary record starts with three control words (next record, previous
record, number of summaries) followed by the packed summaries; the record
right after it holds the matching fixed-width array names. Only the current
summary record and its name record are kept in memory.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import numpy as np

from spk_tools.constants import DAF_CONTROL_WORDS, DAF_MAX_SUMMARY_WORDS, DAF_WORD_BYTES
from spk_tools.daf.file import DafHandle, read_record
from spk_tools.errors import FormatError

logger = logging.getLogger(__name__)


class SegmentDirectory:
    """Restartable cursor over the array summaries of one open DAF.

    Usage mirrors the DAF search routines::

        directory = SegmentDirectory(handle)
        directory.begin_forward_search()
        while directory.find_next_array():
            summary = directory.get_summary_of_array()
            name = directory.get_name_of_array()
    """

    def __init__(self, handle: DafHandle) -> None:
        self._handle = handle
        self._sumsiz = handle.summary_size
        self._namsiz = self._sumsiz * DAF_WORD_BYTES
        self._max_summaries = DAF_MAX_SUMMARY_WORDS // self._sumsiz
        self._recno = 0
        self._summaries: np.ndarray | None = None
        self._next = 0
        self._prev = 0
        self._count = 0
        self._index = 0
        self._names: str | None = None
        self._visited: set[int] = set()
        self._direction = 0

    @property
    def handle(self) -> DafHandle:
        """Handle being searched."""
        return self._handle

    def _load_summary_record(self, recno: int) -> None:
        if recno in self._visited:
            raise FormatError(f'{self._handle.path}: summary record list loops back to record {recno}')
        words = np.frombuffer(read_record(self._handle, recno), dtype=self._handle.double_dtype)
        next_rec, prev_rec, count = (float(w) for w in words[:DAF_CONTROL_WORDS])
        if not (
            next_rec.is_integer() and prev_rec.is_integer() and count.is_integer()
        ) or not 0 <= count <= self._max_summaries:
            raise FormatError(f'{self._handle.path}: corrupt summary record {recno}')
        for pointer in (next_rec, prev_rec):
            if pointer != 0 and not 2 <= pointer <= self._handle.nrecords:
                raise FormatError(
                    f'{self._handle.path}: summary record {recno} links to record {int(pointer)}'
                )
        self._visited.add(recno)
        self._recno = recno
        self._summaries = words
        self._next = int(next_rec)
        self._prev = int(prev_rec)
        self._count = int(count)
        self._names = None

    def _set_direction(self, direction: int) -> None:
        # Loop detection only holds while walking one way.
        if direction != self._direction:
            self._visited = {self._recno}
            self._direction = direction

    def begin_forward_search(self) -> None:
        """Position the cursor before the first array of the file."""
        self._visited = set()
        self._direction = 1
        self._load_summary_record(self._handle.fward)
        self._index = 0

    def begin_backward_search(self) -> None:
        """Position the cursor after the last array of the file."""
        self._visited = set()
        self._direction = -1
        self._load_summary_record(self._handle.bward)
        self._index = self._count + 1

    def find_next_array(self) -> bool:
        """Advance to the next array; False when the list is exhausted."""
        if self._summaries is None:
            raise RuntimeError('find_next_array called before begin_forward_search')
        self._set_direction(1)
        self._index += 1
        while self._index > self._count:
            if self._next == 0:
                self._index = self._count + 1
                return False
            self._load_summary_record(self._next)
            self._index = 1
        return True

    def find_previous_array(self) -> bool:
        """Step back to the previous array; False when the list is exhausted."""
        if self._summaries is None:
            raise RuntimeError('find_previous_array called before begin_backward_search')
        self._set_direction(-1)
        self._index -= 1
        while self._index < 1:
            if self._prev == 0:
                self._index = 0
                return False
            self._load_summary_record(self._prev)
            self._index = self._count
        return True

    def _current_summaries(self) -> np.ndarray:
        """Return the current summary record's words, or raise if there is no current array."""
        summaries = self._summaries
        if summaries is None or self._index == 0:
            raise RuntimeError('No current array: call find_next_array/find_previous_array first')
        if self._index > self._count:
            raise RuntimeError('No current array: search has passed the last array')
        return summaries

    def get_summary_of_array(self) -> np.ndarray:
        """Return the packed summary of the current array, in the file's byte order."""
        summaries = self._current_summaries()
        offset = DAF_CONTROL_WORDS + (self._index - 1) * self._sumsiz
        return summaries[offset : offset + self._sumsiz].copy()

    def get_name_of_array(self) -> str:
        """Return the name of the current array with trailing blanks removed."""
        self._current_summaries()
        if self._names is None:
            self._names = read_record(self._handle, self._recno + 1).decode('latin-1')
        offset = (self._index - 1) * self._namsiz
        return self._names[offset : offset + self._namsiz].rstrip(' \x00')

    def iter_arrays(self, backward: bool = False) -> Iterator[tuple[np.ndarray, str]]:
        """Yield (summary, name) for every array, restarting from the first (or last) one."""
        if backward:
            self.begin_backward_search()
            step = self.find_previous_array
        else:
            self.begin_forward_search()
            step = self.find_next_array
        while step():
            yield self.get_summary_of_array(), self.get_name_of_array()

    def __iter__(self) -> Iterator[tuple[np.ndarray, str]]:
        return self.iter_arrays()
