"""Folder hierarchy construction over synthetic suite keys.

Suite keys look like ``-/src/components/Button.js.snap``. Only folders that
directly contain at least one suite get a node; empty intermediate
directories are skipped, and a node's parent is the nearest registered
ancestor.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from ..errors import FolderTreeError
from .types import ROOT_FOLDER_PATH, FolderNode

logger = logging.getLogger(__name__)


@dataclass
class _FolderDraft:
    """Mutable node used while the tree is being assembled."""

    folder_path: str
    parent_folder_path: str | None
    file_paths: list[str] = field(default_factory=list)
    children_folder_paths: list[str] = field(default_factory=list)

    def freeze(self) -> FolderNode:
        return FolderNode(
            folder_path=self.folder_path,
            file_paths=tuple(self.file_paths),
            parent_folder_path=self.parent_folder_path,
            children_folder_paths=tuple(self.children_folder_paths),
        )


def _nearest_registered_ancestor(folder_path: str, drafts: dict[str, _FolderDraft]) -> str:
    """Walk up from ``folder_path`` until a registered folder is found."""
    candidate = folder_path
    while candidate != ROOT_FOLDER_PATH:
        parent = posixpath.dirname(candidate)
        if parent == candidate or not parent:
            break
        candidate = parent
        if candidate in drafts:
            return candidate
    raise FolderTreeError(f"Error building path tree: no registered ancestor for {folder_path!r}")


def build_folder_dict(file_paths: Iterable[str]) -> dict[str, FolderNode]:
    """Build ``{folder_path: FolderNode}`` for the given suite keys.

    Keys are processed in sorted order so files of one folder arrive together
    and the cursor fast path covers most of them. A folder revisited after one
    of its subfolders (``-/a/b/a`` then ``-/a/b/c/y`` then ``-/a/b/z``) reuses
    its existing node.

    A new node's parent is the nearest ancestor already registered when the
    node is created. A folder whose descendant sorts first can therefore be
    attached higher: ``-/src/components/B.snap`` and ``-/src/index.snap`` give
    ``-/src/components`` the parent ``-``, not ``-/src``.
    """
    logger.debug("Building folder tree...")
    root = _FolderDraft(folder_path=ROOT_FOLDER_PATH, parent_folder_path=None)
    drafts: dict[str, _FolderDraft] = {ROOT_FOLDER_PATH: root}
    current = root

    for file_path in sorted(file_paths):
        folder_path = posixpath.dirname(file_path)
        if folder_path == current.folder_path:
            current.file_paths.append(file_path)
            continue

        existing = drafts.get(folder_path)
        if existing is not None:
            existing.file_paths.append(file_path)
            current = existing
            continue

        parent_folder_path = _nearest_registered_ancestor(folder_path, drafts)
        drafts[parent_folder_path].children_folder_paths.append(folder_path)
        current = _FolderDraft(
            folder_path=folder_path,
            parent_folder_path=parent_folder_path,
            file_paths=[file_path],
        )
        drafts[folder_path] = current

    return {folder_path: draft.freeze() for folder_path, draft in drafts.items()}


def iter_folder_depth_first(
    folders: Mapping[str, FolderNode],
    start: str = ROOT_FOLDER_PATH,
) -> Iterator[tuple[int, FolderNode]]:
    """Yield ``(depth, node)`` pairs walking children links from ``start``."""
    node = folders.get(start)
    if node is None:
        return
    stack: list[tuple[int, FolderNode]] = [(0, node)]
    while stack:
        depth, node = stack.pop()
        yield depth, node
        for child_path in reversed(node.children_folder_paths):
            child = folders.get(child_path)
            if child is not None:
                stack.append((depth + 1, child))


__all__ = [
    "build_folder_dict",
    "iter_folder_depth_first",
]
