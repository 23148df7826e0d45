"""Tests for walking the summary record list of a DAF."""

from __future__ import annotations

import struct
from pathlib import Path

import pytest
from spk_writer import EARTH_POLYS, chebyshev_segment, write_spk

from spk_tools.daf.directory import SegmentDirectory
from spk_tools.daf.file import daf_opened
from spk_tools.daf.summary import unpack_summary
from spk_tools.errors import FormatError


def _five_segment_file(tmp_path: Path, byteorder: str = '<') -> Path:
    """Five segments spread over three summary records (two per record)."""
    segments = [
        chebyshev_segment(100 + i, 0, 0.0, 100.0, EARTH_POLYS, name=f'SEGMENT {i}') for i in range(5)
    ]
    return write_spk(tmp_path / 'five.bsp', segments, per_record=2, byteorder=byteorder)


def _targets(directory: SegmentDirectory, backward: bool = False) -> list[int]:
    return [unpack_summary(raw, 2, 6)[1][0] for raw, _ in directory.iter_arrays(backward=backward)]


@pytest.mark.parametrize('byteorder', ['<', '>'])
def test_forward_search_crosses_summary_records(tmp_path: Path, byteorder: str) -> None:
    with daf_opened(_five_segment_file(tmp_path, byteorder)) as handle:
        directory = SegmentDirectory(handle)
        directory.begin_forward_search()
        names = []
        while directory.find_next_array():
            names.append(directory.get_name_of_array())
        assert names == [f'SEGMENT {i}' for i in range(5)]
        assert _targets(directory) == [100, 101, 102, 103, 104]


def test_backward_search_is_reverse_order(tmp_path: Path) -> None:
    with daf_opened(_five_segment_file(tmp_path)) as handle:
        directory = SegmentDirectory(handle)
        assert _targets(directory, backward=True) == [104, 103, 102, 101, 100]


def test_iteration_restarts_each_time(tmp_path: Path) -> None:
    with daf_opened(_five_segment_file(tmp_path)) as handle:
        directory = SegmentDirectory(handle)
        first = [name for _, name in directory]
        second = [name for _, name in directory]
        assert first == second
        assert len(first) == 5


def test_summary_keeps_file_byte_order(tmp_path: Path) -> None:
    with daf_opened(_five_segment_file(tmp_path, '>')) as handle:
        directory = SegmentDirectory(handle)
        directory.begin_forward_search()
        assert directory.find_next_array()
        raw = directory.get_summary_of_array()
        assert raw.dtype == handle.double_dtype
        dc, ic = unpack_summary(raw, 2, 6)
        assert list(dc) == [0.0, 100.0]
        assert ic[:4] == [100, 0, 1, 2]


def test_change_of_direction_mid_search(tmp_path: Path) -> None:
    with daf_opened(_five_segment_file(tmp_path)) as handle:
        directory = SegmentDirectory(handle)
        directory.begin_forward_search()
        for _ in range(3):
            assert directory.find_next_array()
        assert directory.get_name_of_array() == 'SEGMENT 2'
        assert directory.find_previous_array()
        assert directory.get_name_of_array() == 'SEGMENT 1'
        assert directory.find_previous_array()
        assert directory.get_name_of_array() == 'SEGMENT 0'
        assert not directory.find_previous_array()


def test_access_without_current_array_raises(tmp_path: Path) -> None:
    with daf_opened(_five_segment_file(tmp_path)) as handle:
        directory = SegmentDirectory(handle)
        with pytest.raises(RuntimeError):
            directory.find_next_array()
        directory.begin_forward_search()
        with pytest.raises(RuntimeError):
            directory.get_summary_of_array()
        while directory.find_next_array():
            pass
        with pytest.raises(RuntimeError):
            directory.get_name_of_array()
        with pytest.raises(RuntimeError, match='passed the last array'):
            directory.get_summary_of_array()


def test_summary_record_loop_detected(tmp_path: Path) -> None:
    path = _five_segment_file(tmp_path)
    data = bytearray(path.read_bytes())
    # Record 4 (second summary record) links forward to record 2
    data[3 * 1024 : 3 * 1024 + 8] = struct.pack('<d', 2.0)
    path.write_bytes(bytes(data))
    with daf_opened(path) as handle:
        directory = SegmentDirectory(handle)
        with pytest.raises(FormatError, match='loops'):
            list(directory)


def test_summary_count_too_large(tmp_path: Path) -> None:
    path = _five_segment_file(tmp_path)
    data = bytearray(path.read_bytes())
    data[1024 + 16 : 1024 + 24] = struct.pack('<d', 26.0)
    path.write_bytes(bytes(data))
    with daf_opened(path) as handle:
        directory = SegmentDirectory(handle)
        with pytest.raises(FormatError, match='corrupt summary record'):
            directory.begin_forward_search()


def test_link_outside_file(tmp_path: Path) -> None:
    path = _five_segment_file(tmp_path)
    data = bytearray(path.read_bytes())
    data[1024 : 1024 + 8] = struct.pack('<d', 5000.0)
    path.write_bytes(bytes(data))
    with daf_opened(path) as handle:
        with pytest.raises(FormatError, match='links to record 5000'):
            SegmentDirectory(handle).begin_forward_search()
