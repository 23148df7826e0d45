"""SPK ephemeris kernels and DE/INPOP binaries: segment records, kernel context, state queries and name tables."""

from spk_tools.spk.bodies import BodyNode, build_body_tree, root_body_id
from spk_tools.spk.context import KernelContext
from spk_tools.spk.index import (
    KernelIndex,
    Segment,
    SegmentInfo,
    State,
    spk_coverage,
    spk_objects,
    spk_segments,
)
from spk_tools.spk.jpl import JplEphemeris
from spk_tools.spk.names import (
    body_code_to_name,
    body_name_to_code,
    frame_id_to_name,
    frame_name_to_id,
    resolve_body,
    resolve_frame,
)
from spk_tools.spk.record import SpkSummary, evaluate_type2, evaluate_type3, read_type2, read_type3

__all__ = [
    'BodyNode',
    'JplEphemeris',
    'KernelContext',
    'KernelIndex',
    'Segment',
    'SegmentInfo',
    'SpkSummary',
    'State',
    'body_code_to_name',
    'body_name_to_code',
    'build_body_tree',
    'evaluate_type2',
    'evaluate_type3',
    'frame_id_to_name',
    'frame_name_to_id',
    'read_type2',
    'read_type3',
    'resolve_body',
    'resolve_frame',
    'root_body_id',
    'spk_coverage',
    'spk_objects',
    'spk_segments',
]
