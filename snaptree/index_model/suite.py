"""Per-file suite extraction: raw snapshots plus CSS cascade into entries."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from .css import cascade_css, resolve_suite_css
from .loader import HTML_PREVIEW_SEPARATOR, load_snapshot_file
from .types import SnapshotEntry, SnapshotSuite

logger = logging.getLogger(__name__)

SnapshotLoader = Callable[[Path], Mapping[str, str]]


def split_preview(raw: str) -> tuple[str, str | None]:
    """Split raw content into ``(snap, html)``; ``html`` is ``None`` without a separator."""
    parts = raw.split(HTML_PREVIEW_SEPARATOR)
    if len(parts) == 1:
        return parts[0], None
    return parts[0], parts[1]


def extract_suite(
    file_path: Path,
    common_css: Sequence[str],
    *,
    file_key: str,
    folder_path: str,
    loader: SnapshotLoader = load_snapshot_file,
) -> SnapshotSuite:
    """Build the suite for one snapshot file.

    Every entry shares the same cascade: ``common_css`` followed by the
    file's sibling stylesheet when one exists.
    """
    file_path = Path(file_path)
    logger.info("Processing %s...", file_path)
    css = cascade_css(common_css, resolve_suite_css(file_path))
    raw_snapshots = loader(file_path.resolve())

    entries: dict[str, SnapshotEntry] = {}
    for snapshot_id, raw in raw_snapshots.items():
        snap, html = split_preview(raw)
        entries[snapshot_id] = SnapshotEntry(id=snapshot_id, snap=snap, html=html, css=css)
    logger.debug("Found %d snapshots", len(entries))
    return SnapshotSuite(file_path=file_key, folder_path=folder_path, entries=entries)


__all__ = [
    "SnapshotLoader",
    "split_preview",
    "extract_suite",
]
