"""Exception types raised while building the snapshot index."""

from __future__ import annotations


class SnaptreeError(Exception):
    """Base class for snaptree failures."""


class SnapshotLoadError(SnaptreeError):
    """A snapshot file could not be parsed into id/content pairs."""


class FolderTreeError(SnaptreeError):
    """Folder-tree construction hit an internal invariant violation."""


class PatternError(SnaptreeError):
    """A glob pattern points outside the snapshot root."""


__all__ = [
    "SnaptreeError",
    "SnapshotLoadError",
    "FolderTreeError",
    "PatternError",
]
