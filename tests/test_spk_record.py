"""Tests for SPK type 2 and type 3 Chebyshev records."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from numpy.polynomial import chebyshev
from spk_writer import EARTH_POLYS, EMB_POLYS, SegmentSpec, chebyshev_segment, expected_state, write_spk

from spk_tools.daf.directory import SegmentDirectory
from spk_tools.daf.file import DafHandle, daf_opened
from spk_tools.errors import CoverageError, FormatError
from spk_tools.spk.record import (
    SegmentEvaluator,
    SpkSummary,
    Type2Evaluator,
    Type3Evaluator,
    chebyshev_with_derivative,
    evaluate_type2,
    evaluate_type3,
    evaluator_for,
    read_type2,
    read_type3,
)


def _first_summary(handle: DafHandle) -> SpkSummary:
    raw, _ = next(iter(SegmentDirectory(handle)))
    return SpkSummary.from_raw(raw)


def test_type3_reference_record() -> None:
    """Six components of seven coefficients each, evaluated at s = 1/6."""
    coefficients = [1.0, 3.0, 0.5, 1.0, 0.5, -1.0, 1.0] * 6
    record = [44.0, 0.5, 3.0, *coefficients]
    assert len(record) == 45

    position, velocity = evaluate_type3(1.0, record)

    assert position[0] == pytest.approx(-0.340878, abs=1e-7)
    assert velocity[0] == pytest.approx(position[0], abs=1e-15)


def test_clenshaw_matches_numpy_chebyshev() -> None:
    coeffs = np.array([[1.0, -2.0, 0.25, 4.0, -0.5], [0.0, 1.0, 3.0, -1.0, 2.0]])
    for s in (-1.0, -0.3, 0.0, 0.71, 1.0):
        values, derivs = chebyshev_with_derivative(coeffs, s)
        for i in range(2):
            assert values[i] == pytest.approx(chebyshev.chebval(s, coeffs[i]), abs=1e-12)
            assert derivs[i] == pytest.approx(
                chebyshev.chebval(s, chebyshev.chebder(coeffs[i])), abs=1e-12
            )


def test_type2_velocity_is_scaled_derivative() -> None:
    # x = 2 + 3 s, y = s**2 = (T0 + T2) / 2, z = 0 with radius 10
    record = [11.0, 100.0, 10.0, 2.0, 3.0, 0.0, 0.5, 0.0, 0.5, 0.0, 0.0, 0.0]
    position, velocity = evaluate_type2(105.0, record)

    assert position == pytest.approx([3.5, 0.25, 0.0])
    assert velocity == pytest.approx([0.3, 0.1, 0.0])


def test_type2_velocity_matches_finite_difference(planets_spk: Path) -> None:
    with daf_opened(planets_spk) as handle:
        summary = _first_summary(handle)
        et = 1234.5
        h = 1.0
        _, velocity = evaluate_type2(et, read_type2(handle, summary, et))
        plus, _ = evaluate_type2(et + h, read_type2(handle, summary, et + h))
        minus, _ = evaluate_type2(et - h, read_type2(handle, summary, et - h))
        assert velocity == pytest.approx((plus - minus) / (2.0 * h), rel=1e-6)


@pytest.mark.parametrize('et', [-99999.0, -3.0, 0.0, 42.0, 76543.21])
def test_type2_segment_reproduces_polynomials(planets_spk: Path, et: float) -> None:
    with daf_opened(planets_spk) as handle:
        summary = _first_summary(handle)
        assert summary.target == 3
        record = read_type2(handle, summary, et)
        assert record[0] == 11.0
        assert len(record) == 12
        position, velocity = Type2Evaluator().evaluate(et, record)
        expected = expected_state(EMB_POLYS, et)
        assert position == pytest.approx(expected[:3], rel=1e-12, abs=1e-6)
        assert velocity == pytest.approx(expected[3:], rel=1e-9, abs=1e-9)


def test_type3_segment_reproduces_polynomials(tmp_path: Path) -> None:
    path = write_spk(
        tmp_path / 'type3.bsp',
        [chebyshev_segment(399, 3, -500.0, 500.0, EARTH_POLYS, data_type=3, nrecords=5)],
    )
    with daf_opened(path) as handle:
        summary = _first_summary(handle)
        record = read_type3(handle, summary, 123.0)
        assert record[0] == 20.0
        state = Type3Evaluator().state(handle, summary, 123.0)
        assert state == pytest.approx(expected_state(EARTH_POLYS, 123.0), rel=1e-12, abs=1e-9)


def test_records_agree_at_shared_boundary(planets_spk: Path) -> None:
    boundary = -1.0e5 + 5.0e4
    with daf_opened(planets_spk) as handle:
        summary = _first_summary(handle)
        before = read_type2(handle, summary, boundary - 1.0)
        after = read_type2(handle, summary, boundary)
        assert before[1] != after[1]
        pos_a, vel_a = evaluate_type2(boundary, before)
        pos_b, vel_b = evaluate_type2(boundary, after)
        assert pos_a == pytest.approx(pos_b, rel=1e-13, abs=1e-6)
        assert vel_a == pytest.approx(vel_b, rel=1e-12, abs=1e-12)


def test_final_epoch_uses_last_record(planets_spk: Path) -> None:
    with daf_opened(planets_spk) as handle:
        summary = _first_summary(handle)
        record = read_type2(handle, summary, 1.0e5)
        assert record[1] == pytest.approx(1.0e5 - 2.5e4)


def test_epoch_outside_records_raises(planets_spk: Path) -> None:
    with daf_opened(planets_spk) as handle:
        summary = _first_summary(handle)
        with pytest.raises(CoverageError):
            read_type2(handle, summary, 1.0e5 + 1.0)
        with pytest.raises(CoverageError):
            read_type2(handle, summary, -1.0e5 - 1.0)


def test_corrupt_directory_raises(tmp_path: Path) -> None:
    segment = chebyshev_segment(399, 3, 0.0, 100.0, EARTH_POLYS)
    broken = SegmentSpec(
        segment.target, segment.center, segment.frame, 2, 0.0, 100.0, 0.0, 0.0, segment.records
    )
    path = write_spk(tmp_path / 'broken.bsp', [broken])
    with daf_opened(path) as handle:
        with pytest.raises(FormatError, match='corrupt segment directory'):
            read_type2(handle, _first_summary(handle), 50.0)


def test_large_body_ids_decode_exactly(tmp_path: Path) -> None:
    """A comet segment about the Sun; its position norm is preserved."""
    norm = 6.574612289039739e8
    polys = ((0.6 * norm, 0.0, 0.0), (0.8 * norm, 0.0, 0.0), (0.0, 0.0, 0.0))
    path = write_spk(tmp_path / 'comet.bsp', [chebyshev_segment(1000005, 10, 0.0, 86400.0, polys)])
    with daf_opened(path) as handle:
        summary = _first_summary(handle)
        assert (summary.target, summary.center, summary.frame) == (1000005, 10, 1)
        position, _ = evaluate_type2(4.0e4, read_type2(handle, summary, 4.0e4))
        assert float(np.linalg.norm(position)) == pytest.approx(norm, rel=1e-13)


def test_unsupported_type_raises(planets_spk: Path) -> None:
    evaluator = evaluator_for(13)
    with daf_opened(planets_spk) as handle:
        with pytest.raises(FormatError, match='type 13'):
            evaluator.state(handle, _first_summary(handle), 0.0)


def test_short_record_rejected() -> None:
    with pytest.raises(FormatError):
        evaluate_type2(0.0, [11.0, 0.0])
    with pytest.raises(FormatError):
        evaluate_type3(0.0, [20.0, 0.0, 0.0, 1.0])


def test_segment_evaluator_is_abstract() -> None:
    with pytest.raises(TypeError):
        SegmentEvaluator()  # type: ignore[abstract]

    class PositionOnly(SegmentEvaluator):
        def read(self, handle: DafHandle, summary: SpkSummary, epoch: float) -> np.ndarray:
            return np.zeros(5)

    with pytest.raises(TypeError):
        PositionOnly()  # type: ignore[abstract]
