"""Tests for the state table generator."""

from __future__ import annotations

import io
from pathlib import Path

import numpy as np
import pytest
from spk_writer import EARTH_POLYS, MOON_POLYS, expected_state

from spk_tools.constants import CLIGHT_KM_S
from spk_tools.ephemeris import COLUMNS, Record, TableParams, generate_state_table
from spk_tools.errors import NameResolutionError
from spk_tools.spk.context import KernelContext
from spk_tools.time_utils import et_from_utc


def _params(**kwargs: object) -> TableParams:
    values: dict[str, object] = {
        'target': 'MOON',
        'observer': 'EARTH',
        'start_time': '2000-01-01 12:00:00',
        'stop_time': '2000-01-01 13:00:00',
        'interval': 30.0,
        'time_unit': 'min',
        'aberration': 'NONE',
    }
    values.update(kwargs)
    return TableParams(**values)  # type: ignore[arg-type]


def test_record_joins_fields() -> None:
    rec = Record()
    rec.append('a', 3)
    rec.append('bc', 4)
    out = io.StringIO()
    rec.write(out)
    rec.write(out)
    assert out.getvalue() == '  a   bc\n'


def test_table_rows(context: KernelContext, planets_spk: Path) -> None:
    context.load_kernel(planets_spk)
    out = io.StringIO()

    nrows = generate_state_table(context, _params(), out)

    lines = out.getvalue().splitlines()
    assert nrows == 3
    assert len(lines) == 4
    assert lines[0].split()[0] == 'UTC'
    assert lines[1].startswith('2000-01-01 12:00:00.000')
    assert lines[3].startswith('2000-01-01 13:00:00.000')

    et = et_from_utc('2000-01-01 12:00:00')
    expected = np.array(expected_state(MOON_POLYS, et)) - np.array(expected_state(EARTH_POLYS, et))
    fields = lines[1].split()
    # Date and time are two whitespace-separated fields
    assert float(fields[2]) == pytest.approx(et, abs=1e-3)
    assert [float(v) for v in fields[3:6]] == pytest.approx(expected[:3], abs=1e-5)
    assert [float(v) for v in fields[6:9]] == pytest.approx(expected[3:], abs=1e-8)
    distance = float(np.linalg.norm(expected[:3]))
    assert float(fields[9]) == pytest.approx(distance, abs=1e-5)
    assert float(fields[10]) == pytest.approx(distance / CLIGHT_KM_S, abs=1e-8)


def test_columns_fit_their_widths(context: KernelContext, planets_spk: Path) -> None:
    context.load_kernel(planets_spk)
    out = io.StringIO()
    generate_state_table(context, _params(aberration='LT'), out)
    lines = out.getvalue().splitlines()
    width = sum(w for _, w in COLUMNS) + len(COLUMNS) - 1
    assert all(len(line) == width for line in lines[1:])


def test_range_too_short(context: KernelContext, planets_spk: Path) -> None:
    context.load_kernel(planets_spk)
    with pytest.raises(ValueError, match='too short'):
        generate_state_table(
            context, _params(stop_time='2000-01-01 12:00:00'), io.StringIO()
        )


def test_too_many_steps(context: KernelContext, planets_spk: Path) -> None:
    context.load_kernel(planets_spk)
    with pytest.raises(ValueError, match='exceeds limit'):
        generate_state_table(
            context,
            _params(stop_time='2000-01-03 12:00:00', interval=1.0, time_unit='sec'),
            io.StringIO(),
        )


def test_bad_inputs(context: KernelContext, planets_spk: Path) -> None:
    context.load_kernel(planets_spk)
    with pytest.raises(ValueError, match='Invalid start or stop'):
        generate_state_table(context, _params(start_time='yesterday'), io.StringIO())
    with pytest.raises(NameResolutionError):
        generate_state_table(context, _params(target='PLANET X'), io.StringIO())
