"""State table generator: target state relative to an observer over a time range."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TextIO

from spk_tools.constants import MAX_TABLE_STEPS
from spk_tools.spk.context import KernelContext
from spk_tools.spk.index import KernelIndex
from spk_tools.spk.names import body_code_to_string, frame_id_to_name, resolve_body, resolve_frame
from spk_tools.time_utils import (
    interval_seconds,
    parse_datetime,
    tai_from_day_sec,
    tdb_from_tai,
    utc_from_et,
)

logger = logging.getLogger(__name__)

# (heading, width) of each column
COLUMNS = (
    ('UTC', 23),
    ('ET', 16),
    ('x (km)', 18),
    ('y (km)', 18),
    ('z (km)', 18),
    ('vx (km/s)', 14),
    ('vy (km/s)', 14),
    ('vz (km/s)', 14),
    ('range (km)', 18),
    ('lt (s)', 14),
)


@dataclass
class TableParams:
    """Parameters for a state table."""

    target: str
    observer: str
    start_time: str
    stop_time: str
    frame: str = 'J2000'
    interval: float = 1.0
    time_unit: str = 'hour'
    aberration: str = 'LT'


class Record:
    """Fixed-width record buffer: append fields with a single blank separator, then write line."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, string: str, width: int) -> None:
        """Append a field right-justified to width."""
        self._parts.append(string.rjust(width))

    def write(self, stream: TextIO) -> None:
        """Write the current record line and clear it."""
        line = ' '.join(self._parts).rstrip()
        if line:
            stream.write(line + '\n')
        self._parts = []


def _time_steps(params: TableParams) -> tuple[float, float, int]:
    """Return (start TAI, step seconds, number of steps)."""
    start_parsed = parse_datetime(params.start_time)
    stop_parsed = parse_datetime(params.stop_time)
    if start_parsed is None or stop_parsed is None:
        raise ValueError('Invalid start or stop time')
    tai1 = tai_from_day_sec(*start_parsed)
    tai2 = tai_from_day_sec(*stop_parsed)
    dsec = interval_seconds(params.interval, params.time_unit)
    ntimes = int((tai2 - tai1) / dsec) + 1
    if ntimes < 2:
        raise ValueError('Time range too short or interval too large')
    if ntimes > MAX_TABLE_STEPS:
        raise ValueError(f'Number of time steps exceeds limit of {MAX_TABLE_STEPS}')
    return tai1, dsec, ntimes


def generate_state_table(context: KernelContext, params: TableParams, output: TextIO) -> int:
    """Write a state table of params.target seen from params.observer.

    Returns:
        Number of rows written (excluding the heading).

    Raises:
        ValueError: If the time range is invalid or has fewer than 2 or more
            than MAX_TABLE_STEPS steps.
        SpkError: If a state cannot be computed from the loaded kernels.
    """
    target_id = resolve_body(params.target)
    observer_id = resolve_body(params.observer)
    frame_id = resolve_frame(params.frame)
    tai1, dsec, ntimes = _time_steps(params)
    index = KernelIndex(context)
    logger.info(
        'State table of %s from %s in %s: %d steps of %g s',
        body_code_to_string(target_id),
        body_code_to_string(observer_id),
        frame_id_to_name(frame_id),
        ntimes,
        dsec,
    )

    rec = Record()
    for heading, width in COLUMNS:
        rec.append(heading, width)
    rec.write(output)

    for irec in range(ntimes):
        et = tdb_from_tai(tai1 + irec * dsec)
        state, lt = index.get_state_relative_to_body(
            target_id, et, frame_id, observer_id, params.aberration
        )
        values = (
            utc_from_et(et),
            f'{et:16.3f}',
            *(f'{v:18.6f}' for v in state.position),
            *(f'{v:14.9f}' for v in state.velocity),
            f'{state.range:18.6f}',
            f'{lt:14.9f}',
        )
        for value, (_, width) in zip(values, COLUMNS):
            rec.append(value, width)
        rec.write(output)
    return ntimes
