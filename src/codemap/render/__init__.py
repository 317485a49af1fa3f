"""Report renderers."""

from .compact import render_compact, type_heading
from .output import ReportWriteError, atomic_write_text, render_flat
from .serialize import dumps_tree, folder_from_dict, folder_to_dict, loads_tree

__all__ = [
    "ReportWriteError",
    "atomic_write_text",
    "dumps_tree",
    "folder_from_dict",
    "folder_to_dict",
    "loads_tree",
    "render_compact",
    "render_flat",
    "type_heading",
]
