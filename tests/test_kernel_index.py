"""Tests for segment search, center-of-motion chains and light-time correction."""

from __future__ import annotations

import math
from pathlib import Path

import numpy as np
import pytest
from spk_writer import (
    EARTH_POLYS,
    EMB_POLYS,
    END_ET,
    MARS_BARY_POLYS,
    MOON_POLYS,
    chebyshev_segment,
    expected_state,
    write_spk,
)

from spk_tools.constants import CLIGHT_KM_S
from spk_tools.daf.file import open_handles
from spk_tools.errors import ChainError, CoverageError, FormatError, FrameError, NameResolutionError
from spk_tools.spk.context import KernelContext
from spk_tools.spk.frames import rotation_matrix
from spk_tools.spk.index import KernelIndex, spk_coverage, spk_objects, spk_segments


def _sum(*states: list[float]) -> np.ndarray:
    return np.sum([np.asarray(s) for s in states], axis=0)


def test_spk_objects_sorted_and_idempotent(planets_spk: Path) -> None:
    first = spk_objects(planets_spk)
    second = spk_objects(planets_spk)
    assert first == second == [3, 301, 399]
    assert open_handles() == frozenset()


def test_spk_objects_on_loaded_kernel_keeps_it_open(
    context: KernelContext, planets_spk: Path
) -> None:
    handle = context.load_kernel(planets_spk)
    assert spk_objects(planets_spk) == [3, 301, 399]
    assert handle.is_open
    assert handle.links == 1


def test_spk_objects_rejects_non_spk(tmp_path: Path) -> None:
    path = write_spk(tmp_path / 'ck.bc', [], nd=1, ni=6)
    with pytest.raises(FormatError, match='not an SPK'):
        spk_objects(path)
    assert open_handles() == frozenset()


def test_segments_and_coverage(tmp_path: Path) -> None:
    path = write_spk(
        tmp_path / 'windows.bsp',
        [
            chebyshev_segment(399, 3, 0.0, 10.0, EARTH_POLYS),
            chebyshev_segment(399, 3, 10.0, 20.0, EARTH_POLYS),
            chebyshev_segment(301, 3, 0.0, 50.0, MOON_POLYS),
            chebyshev_segment(399, 3, 30.0, 40.0, EARTH_POLYS),
        ],
    )
    infos = spk_segments(path)
    assert [info.summary.target for info in infos] == [399, 399, 301, 399]
    assert infos[2].name == 'BODY 301'
    assert spk_coverage(path, 399) == [(0.0, 20.0), (30.0, 40.0)]
    assert spk_coverage(path, 301) == [(0.0, 50.0)]
    assert spk_coverage(path, 499) == []


def test_search_prefers_newest_file_then_last_segment(
    context: KernelContext, tmp_path: Path
) -> None:
    old = write_spk(tmp_path / 'old.bsp', [chebyshev_segment(399, 3, -10.0, 10.0, EARTH_POLYS)])
    new = write_spk(
        tmp_path / 'new.bsp',
        [
            chebyshev_segment(399, 3, -10.0, 10.0, EARTH_POLYS, name='FIRST'),
            chebyshev_segment(399, 3, -5.0, 5.0, EARTH_POLYS, name='LAST'),
        ],
    )
    context.load_kernel(old)
    context.load_kernel(new)
    index = KernelIndex(context)

    segment = index.search_segment(399, 0.0)
    assert segment is not None
    assert segment.handle.path == new.resolve()
    assert segment.name == 'LAST'

    segment = index.search_segment(399, 7.0)
    assert segment is not None
    assert segment.name == 'FIRST'

    assert index.search_segment(399, 11.0) is None
    assert index.search_segment(499, 0.0) is None


def test_state_relative_to_center_of_motion(context: KernelContext, planets_spk: Path) -> None:
    context.load_kernel(planets_spk)
    index = KernelIndex(context)
    segment = index.search_segment(301, 100.0)
    assert segment is not None

    state, frame_id, center = index.get_state_relative_to_center_of_motion(
        segment.handle, segment.summary, 100.0
    )
    assert (frame_id, center) == (1, 3)
    assert state == pytest.approx(expected_state(MOON_POLYS, 100.0), rel=1e-12, abs=1e-9)


def test_geometric_state_through_common_center(context: KernelContext, planets_spk: Path) -> None:
    context.load_kernel(planets_spk)
    index = KernelIndex(context)
    et = 2500.0

    state, lt = index.get_state_relative_to_body('MOON', et, 'J2000', 'EARTH', aberration='NONE')

    expected = _sum(expected_state(MOON_POLYS, et), -_sum(expected_state(EARTH_POLYS, et)))
    assert state.vector == pytest.approx(expected, rel=1e-10, abs=1e-6)
    assert lt == pytest.approx(state.range / CLIGHT_KM_S)
    assert state.light_time == lt
    assert state.frame_id == 1
    assert state.et == et


def test_chain_across_files(context: KernelContext, planets_spk: Path, mars_spk: Path) -> None:
    context.load_kernel(planets_spk)
    context.load_kernel(mars_spk)
    index = KernelIndex(context)
    et = -1234.0

    state, _ = index.get_state_relative_to_body(4, et, 'J2000', 399, aberration='NONE')

    earth_ssb = _sum(expected_state(EMB_POLYS, et), expected_state(EARTH_POLYS, et))
    expected = _sum(expected_state(MARS_BARY_POLYS, et), -earth_ssb)
    assert state.vector == pytest.approx(expected, rel=1e-10, abs=1e-5)


@pytest.mark.parametrize('body', ['EARTH', 'MOON', 399, '301', 'MARS BARYCENTER', 1000005])
@pytest.mark.parametrize('frame', ['J2000', 'ECLIPJ2000', 'IAU_EARTH'])
def test_same_target_and_observer_is_zero(
    context: KernelContext, planets_spk: Path, body: str | int, frame: str
) -> None:
    context.load_kernel(planets_spk)
    state, lt = KernelIndex(context).get_state_relative_to_body(body, 0.0, frame, body)
    assert lt == 0.0
    assert np.all(state.vector == 0.0)


def test_byte_orders_agree(planets_spk: Path, planets_spk_big: Path) -> None:
    results = []
    for path in (planets_spk, planets_spk_big):
        with KernelContext() as ctx:
            ctx.load_kernel(path)
            index = KernelIndex(ctx)
            results.append(
                [index.get_state_relative_to_body('MOON', et, 'J2000', 'SSB')[0].vector for et in (-9e4, 0.0, 3.3e4)]
            )
    for little, big in zip(*results):
        assert np.max(np.abs(little - big)) <= 1e-10


def test_segment_frames_are_rotated(context: KernelContext, tmp_path: Path) -> None:
    path = write_spk(
        tmp_path / 'ecliptic.bsp',
        [chebyshev_segment(399, 0, -10.0, 10.0, EARTH_POLYS, frame=17)],
    )
    context.load_kernel(path)
    index = KernelIndex(context)

    in_ecliptic, _ = index.get_state_relative_to_body(399, 1.0, 'ECLIPJ2000', 0, 'NONE')
    in_j2000, _ = index.get_state_relative_to_body(399, 1.0, 'J2000', 0, 'NONE')

    assert in_ecliptic.vector == pytest.approx(expected_state(EARTH_POLYS, 1.0), rel=1e-12)
    matrix = rotation_matrix(17, 1)
    assert in_j2000.position == pytest.approx(matrix @ in_ecliptic.position, rel=1e-12)
    assert in_j2000.velocity == pytest.approx(matrix @ in_ecliptic.velocity, rel=1e-12)


def test_non_inertial_segment_frame_raises(context: KernelContext, tmp_path: Path) -> None:
    path = write_spk(
        tmp_path / 'fixed.bsp',
        [chebyshev_segment(-82, 399, -10.0, 10.0, EARTH_POLYS, frame=10013)],
    )
    context.load_kernel(path)
    with pytest.raises(FrameError):
        KernelIndex(context).get_state_relative_to_body(-82, 0.0, 'J2000', 399, 'NONE')


def test_no_common_center_raises(context: KernelContext, planets_spk: Path, tmp_path: Path) -> None:
    path = write_spk(
        tmp_path / 'mars_only.bsp',
        [chebyshev_segment(499, 4, -10.0, 10.0, EARTH_POLYS)],
    )
    context.load_kernel(planets_spk)
    context.load_kernel(path)
    with pytest.raises(ChainError, match='no common center'):
        KernelIndex(context).get_state_relative_to_body('MARS', 0.0, 'J2000', 'EARTH')


def test_center_loop_raises(context: KernelContext, tmp_path: Path) -> None:
    path = write_spk(
        tmp_path / 'loop.bsp',
        [
            chebyshev_segment(1001, 1002, -10.0, 10.0, EARTH_POLYS),
            chebyshev_segment(1002, 1001, -10.0, 10.0, EARTH_POLYS),
        ],
    )
    context.load_kernel(path)
    with pytest.raises(ChainError, match='loops'):
        KernelIndex(context).get_state_relative_to_body(1001, 0.0, 'J2000', 0)


def test_epoch_outside_coverage_raises(context: KernelContext, planets_spk: Path) -> None:
    context.load_kernel(planets_spk)
    index = KernelIndex(context)
    with pytest.raises(CoverageError, match='Insufficient ephemeris data'):
        index.get_state_relative_to_body('MOON', END_ET + 1e6, 'J2000', 'EARTH', 'NONE')
    with pytest.raises(CoverageError):
        index.get_state_relative_to_body('MOON', END_ET + 1e6, 'J2000', 'EARTH', 'LT')


def test_unknown_names_raise(context: KernelContext, planets_spk: Path) -> None:
    context.load_kernel(planets_spk)
    index = KernelIndex(context)
    with pytest.raises(NameResolutionError):
        index.get_state_relative_to_body('NOT A BODY', 0.0, 'J2000', 'EARTH')
    with pytest.raises(NameResolutionError):
        index.get_state_relative_to_body('MOON', 0.0, 'NOT A FRAME', 'EARTH')


def test_names_are_normalized(context: KernelContext, planets_spk: Path) -> None:
    context.load_kernel(planets_spk)
    index = KernelIndex(context)
    exact, _ = index.get_state_relative_to_body('MOON', 10.0, 'J2000', 'EARTH', 'NONE')
    loose, _ = index.get_state_relative_to_body('  moon ', 10.0, 'j2000', 'Earth', 'none')
    assert np.array_equal(exact.vector, loose.vector)


def test_unsupported_data_type_raises(context: KernelContext, tmp_path: Path) -> None:
    segment = chebyshev_segment(-82, 399, -10.0, 10.0, EARTH_POLYS)
    segment.data_type = 13
    path = write_spk(tmp_path / 'type13.bsp', [segment])
    context.load_kernel(path)
    with pytest.raises(FormatError, match='not supported'):
        KernelIndex(context).get_state_relative_to_body(-82, 0.0, 'J2000', 399)


def test_light_time_converges(context: KernelContext, planets_spk: Path, mars_spk: Path) -> None:
    context.load_kernel(planets_spk)
    context.load_kernel(mars_spk)
    index = KernelIndex(context)
    et = 500.0

    state, lt = index.get_state_relative_to_body('MARS BARYCENTER', et, 'J2000', 'EARTH')

    earth_ssb = _sum(expected_state(EMB_POLYS, et), expected_state(EARTH_POLYS, et))
    expected_lt = 0.0
    for _ in range(10):
        mars = np.asarray(expected_state(MARS_BARY_POLYS, et - expected_lt))
        expected_lt = float(np.linalg.norm(mars[:3] - earth_ssb[:3])) / CLIGHT_KM_S
    assert lt == pytest.approx(expected_lt, abs=1e-6)
    mars = np.asarray(expected_state(MARS_BARY_POLYS, et - lt))
    assert state.position == pytest.approx(mars[:3] - earth_ssb[:3], abs=1e-3)
    assert state.range / CLIGHT_KM_S == pytest.approx(lt, abs=1e-6)


def test_light_time_iteration_limit(context: KernelContext, planets_spk: Path, mars_spk: Path) -> None:
    context.load_kernel(planets_spk)
    context.load_kernel(mars_spk)
    one, lt_one = KernelIndex(context, max_iterations=1).get_state_relative_to_body(
        4, 0.0, 'J2000', 399
    )
    many, lt_many = KernelIndex(context, max_iterations=8).get_state_relative_to_body(
        4, 0.0, 'J2000', 399
    )
    assert math.isfinite(lt_one)
    assert lt_one == pytest.approx(lt_many, rel=1e-6)
    assert one.position == pytest.approx(many.position, rel=1e-6)


def test_invalid_aberration_and_settings(context: KernelContext, planets_spk: Path) -> None:
    context.load_kernel(planets_spk)
    with pytest.raises(ValueError, match='Aberration'):
        KernelIndex(context).get_state_relative_to_body('MOON', 0.0, 'J2000', 'EARTH', 'CN+S')
    with pytest.raises(ValueError):
        KernelIndex(context, tolerance=0.0)
    with pytest.raises(ValueError):
        KernelIndex(context, max_iterations=0)


def test_light_time_settings_from_environment(
    context: KernelContext, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv('SPK_LIGHT_TIME_TOLERANCE', '1e-6')
    monkeypatch.setenv('SPK_LIGHT_TIME_MAX_ITERATIONS', '7')
    index = KernelIndex(context)
    assert index.tolerance == 1e-6
    assert index.max_iterations == 7
