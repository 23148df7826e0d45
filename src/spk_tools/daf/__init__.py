"""DAF container access: files and handles, summary directory traversal, summary packing."""

from spk_tools.daf.directory import SegmentDirectory
from spk_tools.daf.file import (
    DafHandle,
    close_daf,
    daf_opened,
    is_loaded,
    open_daf,
    open_handles,
    read_doubles,
    read_record,
)
from spk_tools.daf.summary import pack_summary, summary_size, unpack_summary

__all__ = [
    'DafHandle',
    'SegmentDirectory',
    'close_daf',
    'daf_opened',
    'is_loaded',
    'open_daf',
    'open_handles',
    'pack_summary',
    'read_doubles',
    'read_record',
    'summary_size',
    'unpack_summary',
]
