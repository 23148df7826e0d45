"""Shared fixtures: synthetic SPK kernels and the open-handle check."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from spk_writer import END_ET, MARS_BARY_POLYS, START_ET, chebyshev_segment, planet_segments, write_spk

from spk_tools.daf import file as daf_file
from spk_tools.spk.context import KernelContext


@pytest.fixture(autouse=True)
def no_open_handles() -> Iterator[None]:
    """Every test must leave the DAF handle table empty."""
    assert daf_file.open_handles() == frozenset()
    yield
    leftover = daf_file.open_handles()
    for handle in list(daf_file._handles.values()):
        handle.links = 1
        daf_file.close_daf(handle)
    assert leftover == frozenset(), f'handles left open: {sorted(leftover)}'


@pytest.fixture
def planets_spk(tmp_path: Path) -> Path:
    """Little-endian SPK: EMB about SSB, Earth and Moon about EMB."""
    return write_spk(tmp_path / 'planets.bsp', planet_segments())


@pytest.fixture
def planets_spk_big(tmp_path: Path) -> Path:
    """Same content as planets_spk, big-endian."""
    return write_spk(tmp_path / 'planets_big.bsp', planet_segments(), byteorder='>')


@pytest.fixture
def mars_spk(tmp_path: Path) -> Path:
    """Type 3 SPK: Mars barycenter about SSB."""
    return write_spk(
        tmp_path / 'mars.bsp',
        [chebyshev_segment(4, 0, START_ET, END_ET, MARS_BARY_POLYS, data_type=3, name='MARS BARY')],
    )


@pytest.fixture
def context() -> Iterator[KernelContext]:
    with KernelContext() as ctx:
        yield ctx
