"""Rotations between the built-in inertial frames.

Only frames whose relation to J2000 is a fixed sequence of axis rotations are
supported: J2000, B1950, FK4, ECLIPJ2000 and ECLIPB1950. Each is defined by its
parent frame and the rotations (axis, angle in arcseconds) that carry vectors
from the parent into it.
"""

from __future__ import annotations

import math
from functools import lru_cache

import numpy as np

from spk_tools.errors import FrameError
from spk_tools.spk.names import frame_id_to_name, is_inertial

_ARCSEC = math.pi / (180.0 * 3600.0)

# frame ID -> (parent frame ID, ((axis, angle arcsec), ...)), applied first to last.
_INERTIAL_DEFINITIONS: dict[int, tuple[int, tuple[tuple[int, float], ...]]] = {
    2: (1, ((3, 1153.04066200330), (2, -1002.26108439117), (3, 1152.84248596724))),  # B1950
    3: (2, ((3, 0.525),)),  # FK4
    17: (1, ((1, 84381.448),)),  # ECLIPJ2000
    18: (2, ((1, 84404.836),)),  # ECLIPB1950
}


def axis_rotation(angle: float, axis: int) -> np.ndarray:
    """Matrix rotating the coordinate frame by angle (radians) about axis 1, 2 or 3."""
    c = math.cos(angle)
    s = math.sin(angle)
    if axis == 1:
        return np.array([[1.0, 0.0, 0.0], [0.0, c, s], [0.0, -s, c]])
    if axis == 2:
        return np.array([[c, 0.0, -s], [0.0, 1.0, 0.0], [s, 0.0, c]])
    if axis == 3:
        return np.array([[c, s, 0.0], [-s, c, 0.0], [0.0, 0.0, 1.0]])
    raise ValueError(f'Rotation axis must be 1, 2 or 3, got {axis}')


@lru_cache(maxsize=None)
def _from_j2000(frame_id: int) -> np.ndarray:
    if frame_id == 1:
        return np.identity(3)
    parent, rotations = _INERTIAL_DEFINITIONS[frame_id]
    matrix = _from_j2000(parent)
    for axis, arcsec in rotations:
        matrix = axis_rotation(arcsec * _ARCSEC, axis) @ matrix
    return matrix


def can_rotate(from_id: int, to_id: int) -> bool:
    """True if states can be carried from frame from_id to frame to_id."""
    if from_id == to_id:
        return True
    known = (1, *_INERTIAL_DEFINITIONS)
    return from_id in known and to_id in known


def rotation_matrix(from_id: int, to_id: int) -> np.ndarray:
    """Return the 3x3 matrix taking vectors in frame from_id to frame to_id.

    Raises:
        FrameError: If either frame is not inertial or no rotation is tabulated.
    """
    if from_id == to_id:
        return np.identity(3)
    for frame_id in (from_id, to_id):
        if not is_inertial(frame_id):
            name = frame_id_to_name(frame_id) or str(frame_id)
            raise FrameError(f'Frame {name} is not inertial; cannot rotate states into or out of it')
    if not can_rotate(from_id, to_id):
        raise FrameError(
            f'No rotation available from {frame_id_to_name(from_id)} to {frame_id_to_name(to_id)}'
        )
    result: np.ndarray = _from_j2000(to_id) @ _from_j2000(from_id).T
    return result


def rotate_state(state: np.ndarray, from_id: int, to_id: int) -> np.ndarray:
    """Rotate a 6-element state (position, velocity) between inertial frames."""
    if from_id == to_id:
        return state
    matrix = rotation_matrix(from_id, to_id)
    return np.concatenate((matrix @ state[:3], matrix @ state[3:6]))
