"""Domain model for the snapshot index.

This package contains non-UI index primitives:
- snapshot entry, suite and folder-node datatypes
- common and per-suite CSS resolution
- snapshot file loading and per-file suite extraction
- folder-tree construction over synthetic suite keys
"""

from __future__ import annotations

from .types import (
    EMPTY_INDEX,
    ROOT_FOLDER_PATH,
    FolderNode,
    SnapshotEntry,
    SnapshotIndex,
    SnapshotSuite,
)
from .css import cascade_css, css_path_for_suite, resolve_common_css, resolve_suite_css
from .loader import HTML_PREVIEW_SEPARATOR, load_snapshot_file
from .suite import SnapshotLoader, extract_suite, split_preview
from .folders import build_folder_dict, iter_folder_depth_first

__all__ = [
    "EMPTY_INDEX",
    "ROOT_FOLDER_PATH",
    "FolderNode",
    "SnapshotEntry",
    "SnapshotIndex",
    "SnapshotSuite",
    "cascade_css",
    "css_path_for_suite",
    "resolve_common_css",
    "resolve_suite_css",
    "HTML_PREVIEW_SEPARATOR",
    "load_snapshot_file",
    "SnapshotLoader",
    "extract_suite",
    "split_preview",
    "build_folder_dict",
    "iter_folder_depth_first",
]
