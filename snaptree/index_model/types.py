"""Domain datatypes for snapshot suites and the synthetic folder hierarchy."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

ROOT_FOLDER_PATH = "-"


@dataclass(frozen=True)
class SnapshotEntry:
    """One rendered snapshot unit plus the CSS cascade that applies to it."""

    id: str
    snap: str
    html: str | None = None
    css: tuple[str, ...] = ()


@dataclass(frozen=True)
class SnapshotSuite(Mapping[str, SnapshotEntry]):
    """Entries extracted from one snapshot file, keyed by snapshot id."""

    file_path: str
    folder_path: str
    entries: Mapping[str, SnapshotEntry] = field(default_factory=dict)

    def __getitem__(self, snapshot_id: str) -> SnapshotEntry:
        return self.entries[snapshot_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class FolderNode:
    """One registered folder of the hierarchy.

    ``parent_folder_path`` names the nearest ancestor that exists in the tree,
    which is not necessarily the filesystem parent.
    """

    folder_path: str
    file_paths: tuple[str, ...] = ()
    parent_folder_path: str | None = None
    children_folder_paths: tuple[str, ...] = ()


@dataclass(frozen=True)
class SnapshotIndex:
    """Suite and folder dictionaries installed together after a refresh."""

    suites: Mapping[str, SnapshotSuite] = field(default_factory=dict)
    folders: Mapping[str, FolderNode] = field(default_factory=dict)

    def folder(self, folder_path: str) -> FolderNode | None:
        return self.folders.get(folder_path)

    def suite(self, file_path: str) -> SnapshotSuite | None:
        return self.suites.get(file_path)


EMPTY_INDEX = SnapshotIndex()


__all__ = [
    "ROOT_FOLDER_PATH",
    "SnapshotEntry",
    "SnapshotSuite",
    "FolderNode",
    "SnapshotIndex",
    "EMPTY_INDEX",
]
