"""Segment lookup, center-of-motion chains and light-time corrected states.

States are assembled the way the SPK readers do it: each body's segment gives
its state relative to a center; target and observer are walked up through
their centers until the two chains meet, and the difference of the two
accumulated states is the relative state.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import numpy as np

from spk_tools.config import get_light_time_max_iterations, get_light_time_tolerance
from spk_tools.constants import CLIGHT_KM_S, J2000_FRAME_ID, MAX_CHAIN_LENGTH, SPK_ND, SPK_NI
from spk_tools.daf.directory import SegmentDirectory
from spk_tools.daf.file import DafHandle, daf_opened
from spk_tools.errors import ChainError, CoverageError, FormatError
from spk_tools.spk.context import KernelContext
from spk_tools.spk.frames import rotate_state
from spk_tools.spk.names import body_code_to_string, resolve_body, resolve_frame
from spk_tools.spk.record import SpkSummary, as_spk_summary, evaluator_for

logger = logging.getLogger(__name__)

ABERRATIONS = ('LT', 'NONE')


@dataclass
class State:
    """Position (km) and velocity (km/s) of a target relative to an observer."""

    position: np.ndarray
    velocity: np.ndarray
    et: float
    frame_id: int
    light_time: float = 0.0

    @property
    def vector(self) -> np.ndarray:
        """6-element state [x, y, z, vx, vy, vz]."""
        return np.concatenate((self.position, self.velocity))

    @property
    def range(self) -> float:
        """Distance in km."""
        return float(np.linalg.norm(self.position))


@dataclass(frozen=True)
class Segment:
    """A segment found in one of the loaded kernels."""

    handle: DafHandle
    summary: SpkSummary
    name: str


@dataclass(frozen=True)
class SegmentInfo:
    """Decoded summary and name of one segment of a file."""

    summary: SpkSummary
    name: str


def _check_spk(handle: DafHandle) -> None:
    if (handle.nd, handle.ni) != (SPK_ND, SPK_NI):
        raise FormatError(
            f'{handle.path}: not an SPK file (ND={handle.nd}, NI={handle.ni}; expected 2 and 6)'
        )


def spk_segments(path: str | os.PathLike[str]) -> list[SegmentInfo]:
    """Return every segment of an SPK file, in file order."""
    with daf_opened(path) as handle:
        _check_spk(handle)
        return [
            SegmentInfo(SpkSummary.from_raw(raw), name)
            for raw, name in SegmentDirectory(handle).iter_arrays()
        ]


def spk_objects(path: str | os.PathLike[str]) -> list[int]:
    """Return the distinct target body IDs of an SPK file, ascending.

    The file is opened and closed here; an already loaded file keeps its handle.

    Raises:
        FormatError: If the file is not a valid SPK.
    """
    return sorted({info.summary.target for info in spk_segments(path)})


def spk_coverage(path: str | os.PathLike[str], body: int) -> list[tuple[float, float]]:
    """Return the merged time windows (ET) covered for body in one SPK file."""
    windows = sorted(
        (info.summary.start_et, info.summary.end_et)
        for info in spk_segments(path)
        if info.summary.target == body
    )
    merged: list[tuple[float, float]] = []
    for start, end in windows:
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


class KernelIndex:
    """Answers state queries against the kernels loaded in a KernelContext.

    Parameters:
        context: Loaded kernels; later loads take priority.
        tolerance: Light-time convergence tolerance in seconds (default from config).
        max_iterations: Light-time iteration limit (default from config).
    """

    def __init__(
        self,
        context: KernelContext,
        tolerance: float | None = None,
        max_iterations: int | None = None,
    ) -> None:
        self.context = context
        self.tolerance = get_light_time_tolerance() if tolerance is None else tolerance
        self.max_iterations = (
            get_light_time_max_iterations() if max_iterations is None else max_iterations
        )
        if self.tolerance <= 0.0:
            raise ValueError(f'Light-time tolerance must be positive, got {self.tolerance}')
        if self.max_iterations < 1:
            raise ValueError(f'Light-time iterations must be >= 1, got {self.max_iterations}')

    def search_segment(self, body: int, epoch: float) -> Segment | None:
        """Return the highest-priority segment for body covering epoch, or None.

        Files are searched newest first and each file from its last segment back.
        """
        for handle in self.context.handles():
            directory = SegmentDirectory(handle)
            for raw, name in directory.iter_arrays(backward=True):
                summary = SpkSummary.from_raw(raw)
                if summary.target == body and summary.covers(epoch):
                    logger.debug(
                        'Body %d at ET %.3f: segment %r (center %d, type %d) in %s',
                        body,
                        epoch,
                        name,
                        summary.center,
                        summary.data_type,
                        handle.path.name,
                    )
                    return Segment(handle, summary, name)
        return None

    def get_state_relative_to_center_of_motion(
        self, handle: DafHandle, summary: SpkSummary | np.ndarray, epoch: float
    ) -> tuple[np.ndarray, int, int]:
        """Evaluate one segment.

        Returns:
            Tuple (state, frame ID, center ID); state is [x, y, z, vx, vy, vz]
            relative to the segment's center in the segment's frame.

        Raises:
            FormatError: If the segment's data type is not supported.
        """
        seg = as_spk_summary(summary)
        state = evaluator_for(seg.data_type).state(handle, seg, epoch)
        return state, seg.frame, seg.center

    def _has_data(self, body: int) -> bool:
        """True if any loaded kernel or ephemeris has data for body at some epoch."""
        for handle in self.context.handles():
            for raw, _ in SegmentDirectory(handle).iter_arrays(backward=True):
                if SpkSummary.from_raw(raw).target == body:
                    return True
        return any(ephemeris.has_body(body) for ephemeris in self.context.ephemerides())

    def _link(self, body: int, epoch: float) -> tuple[np.ndarray, int, int] | None:
        """Return (state, frame ID, center ID) of body at epoch, or None if nothing covers it.

        SPK segments are consulted before DE/INPOP ephemerides.
        """
        segment = self.search_segment(body, epoch)
        if segment is not None:
            return self.get_state_relative_to_center_of_motion(segment.handle, segment.summary, epoch)
        for ephemeris in self.context.ephemerides():
            if ephemeris.has_body(body) and ephemeris.covers(epoch):
                logger.debug('Body %d at ET %.3f: ephemeris %s', body, epoch, ephemeris.path.name)
                state, center = ephemeris.state(body, epoch)
                return state, J2000_FRAME_ID, center
        return None

    def _chain(self, body: int, epoch: float, frame_id: int) -> list[tuple[int, np.ndarray]]:
        """Return [(ancestor, state of body relative to ancestor), ...] starting at body itself.

        Raises:
            CoverageError: If a body on the chain has data, but none at epoch.
            ChainError: If the chain loops or grows past MAX_CHAIN_LENGTH links.
        """
        chain = [(body, np.zeros(6))]
        seen = {body}
        current = body
        while True:
            link = self._link(current, epoch)
            if link is None:
                if self._has_data(current):
                    raise CoverageError(
                        f'Insufficient ephemeris data: no segment for {body_code_to_string(current)} '
                        f'covers ET {epoch}'
                    )
                return chain
            state, seg_frame, center = link
            if center in seen:
                raise ChainError(
                    f'Center-of-motion chain of {body_code_to_string(body)} loops back to '
                    f'{body_code_to_string(center)}'
                )
            if len(chain) > MAX_CHAIN_LENGTH:
                raise ChainError(
                    f'Center-of-motion chain of {body_code_to_string(body)} exceeds '
                    f'{MAX_CHAIN_LENGTH} links'
                )
            state = rotate_state(state, seg_frame, frame_id)
            seen.add(center)
            chain.append((center, chain[-1][1] + state))
            current = center

    @staticmethod
    def _difference(
        target_chain: list[tuple[int, np.ndarray]],
        observer_chain: list[tuple[int, np.ndarray]],
        epoch: float,
        nearest: bool,
    ) -> np.ndarray:
        """Subtract the chains at their nearest (or farthest) common ancestor."""
        observer_index = {body: i for i, (body, _) in enumerate(observer_chain)}
        common = [i for i, (body, _) in enumerate(target_chain) if body in observer_index]
        if not common:
            target = target_chain[0][0]
            observer = observer_chain[0][0]
            raise ChainError(
                f'Insufficient ephemeris data: no common center for {body_code_to_string(target)} '
                f'and {body_code_to_string(observer)} at ET {epoch}'
            )
        i = common[0] if nearest else common[-1]
        ancestor, target_state = target_chain[i]
        observer_state = observer_chain[observer_index[ancestor]][1]
        return target_state - observer_state

    def get_state_relative_to_body(
        self,
        target: str | int,
        epoch: float,
        frame: str | int,
        observer: str | int,
        aberration: str = 'LT',
    ) -> tuple[State, float]:
        """Return the state of target relative to observer at epoch.

        Parameters:
            target: Target body name, integer string or NAIF code.
            epoch: Observation epoch, TDB seconds past J2000.
            frame: Output frame name or ID.
            observer: Observer body name, integer string or NAIF code.
            aberration: 'LT' for a light-time corrected (apparent) target
                position, 'NONE' for the geometric state.

        Returns:
            Tuple (State, one-way light time in seconds).

        Raises:
            NameResolutionError: If a body or frame name is unknown.
            CoverageError: If a body with data in the loaded kernels has none at epoch.
            ChainError: If target and observer have no common center in the
                loaded kernels.
            FrameError: If a segment frame cannot be rotated to the requested frame.
            FormatError: If a needed segment is corrupt or of an unsupported type.
        """
        target_id = resolve_body(target)
        observer_id = resolve_body(observer)
        frame_id = resolve_frame(frame)
        correction = aberration.strip().upper()
        if correction not in ABERRATIONS:
            raise ValueError(f'Aberration must be one of {ABERRATIONS}, got {aberration!r}')

        if target_id == observer_id:
            return State(np.zeros(3), np.zeros(3), epoch, frame_id, 0.0), 0.0

        observer_chain = self._chain(observer_id, epoch, frame_id)
        target_chain = self._chain(target_id, epoch, frame_id)
        if correction == 'NONE':
            state = self._difference(target_chain, observer_chain, epoch, nearest=True)
            light_time = float(np.linalg.norm(state[:3])) / CLIGHT_KM_S
        else:
            state = self._difference(target_chain, observer_chain, epoch, nearest=False)
            light_time = float(np.linalg.norm(state[:3])) / CLIGHT_KM_S
            for iteration in range(1, self.max_iterations + 1):
                target_chain = self._chain(target_id, epoch - light_time, frame_id)
                state = self._difference(target_chain, observer_chain, epoch, nearest=False)
                previous = light_time
                light_time = float(np.linalg.norm(state[:3])) / CLIGHT_KM_S
                logger.debug(
                    'Light time iteration %d: %.12f s (change %.3e s)',
                    iteration,
                    light_time,
                    light_time - previous,
                )
                if abs(light_time - previous) <= self.tolerance:
                    break
            else:
                logger.debug(
                    'Light time not converged to %g s after %d iterations',
                    self.tolerance,
                    self.max_iterations,
                )
        return State(state[:3].copy(), state[3:].copy(), epoch, frame_id, light_time), light_time

    def coverage(self, path: str | os.PathLike[str], body: str | int) -> list[tuple[float, float]]:
        """Return the merged coverage windows of body in one file."""
        return spk_coverage(path, resolve_body(body))

    def segments(self, path: str | os.PathLike[str]) -> list[SegmentInfo]:
        """Return the decoded segments of one file."""
        return spk_segments(path)
