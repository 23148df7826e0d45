"""Tests for the center-of-motion tree of an SPK file."""

from __future__ import annotations

from pathlib import Path

import pytest
from spk_writer import EARTH_POLYS, START_ET, END_ET, chebyshev_segment, planet_segments, write_spk

from spk_tools.constants import GM_KM3_S2
from spk_tools.spk.bodies import build_body_tree, root_body_id


def test_planets_tree(planets_spk: Path) -> None:
    tree = build_body_tree(planets_spk)

    assert root_body_id(tree) == 0
    assert sorted(tree) == [0, 3, 301, 399]
    root = tree[0]
    assert root.center_id == 0
    assert root.parent is None
    assert root.frame_name == ''
    assert root.name == 'SOLAR SYSTEM BARYCENTER'
    assert [child.body_id for child in root.children] == [3]
    assert [child.body_id for child in tree[3].children] == [301, 399]
    assert tree[301].parent is tree[3]
    assert tree[399].frame_name == 'J2000'


def test_gm(planets_spk: Path) -> None:
    tree = build_body_tree(planets_spk)
    assert tree[399].gm == pytest.approx(398600.435507, rel=1e-12)
    assert tree[0].gm == pytest.approx(sum(GM_KM3_S2[b] for b in (10, 1, 2, 3, 4, 5, 6, 7, 8, 9)))


def test_last_segment_sets_center(tmp_path: Path) -> None:
    path = write_spk(
        tmp_path / 'recentered.bsp',
        planet_segments() + [chebyshev_segment(399, 0, START_ET, END_ET, EARTH_POLYS, frame=17)],
    )
    tree = build_body_tree(path)
    assert tree[399].center_id == 0
    assert tree[399].frame_name == 'ECLIPJ2000'
    assert [child.body_id for child in tree[0].children] == [3, 399]
    assert [child.body_id for child in tree[3].children] == [301]


def test_empty_file(tmp_path: Path) -> None:
    tree = build_body_tree(write_spk(tmp_path / 'empty.bsp', []))
    assert tree == {}
    assert root_body_id(tree) == 0
