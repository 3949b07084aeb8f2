"""Glob-pattern file discovery relative to a project root.

Patterns are evaluated in order. A pattern starting with ``!`` removes any
file it matches from the overall result, wherever it appears in the list.
Dotfiles and files under dot-directories are only matched when the pattern
itself names a dot segment (``.storybook/*.css``, ``**/.*.snap``).
"""

from __future__ import annotations

from collections.abc import Iterable
from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath, PureWindowsPath

from .errors import PatternError

NEGATION_PREFIX = "!"


def _dot_segments(pattern: str) -> tuple[str, ...]:
    """Return pattern segments that explicitly start with ``.``."""
    return tuple(segment for segment in pattern.split("/") if segment.startswith(".") and segment not in {".", ".."})


def _is_hidden_match(rel_path: str, dot_segments: tuple[str, ...]) -> bool:
    """Return whether ``rel_path`` has a dot segment the pattern did not name."""
    for segment in rel_path.split("/"):
        if not segment.startswith("."):
            continue
        if not any(fnmatchcase(segment, dot_segment) for dot_segment in dot_segments):
            return True
    return False


def _glob_files(root: Path, pattern: str) -> list[str]:
    """Return sorted relative POSIX paths of regular files matching ``pattern``."""
    dot_segments = _dot_segments(pattern)
    matches: list[str] = []
    for candidate in root.glob(pattern):
        if not candidate.is_file():
            continue
        rel_path = candidate.relative_to(root).as_posix()
        if _is_hidden_match(rel_path, dot_segments):
            continue
        matches.append(rel_path)
    matches.sort()
    return matches


def check_pattern(pattern: str) -> str:
    """Return ``pattern`` when it stays inside the root, else raise ``PatternError``."""
    if PurePosixPath(pattern).is_absolute() or PureWindowsPath(pattern).is_absolute():
        raise PatternError(f"pattern must be relative to the snapshot root: {pattern!r}")
    if ".." in PurePosixPath(pattern.replace("\\", "/")).parts:
        raise PatternError(f"pattern must not leave the snapshot root: {pattern!r}")
    return pattern


def split_patterns(patterns: Iterable[str]) -> tuple[list[str], list[str]]:
    """Split patterns into ``(positive, negated)`` lists, dropping blanks.

    Raises ``PatternError`` for absolute patterns or patterns using ``..``.
    """
    positive: list[str] = []
    negated: list[str] = []
    for raw in patterns:
        pattern = raw.strip()
        if not pattern:
            continue
        if pattern.startswith(NEGATION_PREFIX):
            stripped = pattern[len(NEGATION_PREFIX) :].strip()
            if stripped:
                negated.append(check_pattern(stripped))
            continue
        positive.append(check_pattern(pattern))
    return positive, negated


def match_patterns(patterns: Iterable[str], root: Path) -> list[str]:
    """Return files under ``root`` matching ``patterns`` in pattern-match order.

    Paths are relative to ``root`` and use ``/`` separators. Each file appears
    once, at the position of the first positive pattern that matched it.
    Raises ``OSError`` when ``root`` is not a readable directory.
    """
    root = Path(root)
    if not root.is_dir():
        raise NotADirectoryError(f"snapshot root is not a directory: {root}")

    positive, negated = split_patterns(patterns)
    excluded: set[str] = set()
    for pattern in negated:
        excluded.update(_glob_files(root, pattern))

    seen: set[str] = set()
    out: list[str] = []
    for pattern in positive:
        for rel_path in _glob_files(root, pattern):
            if rel_path in excluded or rel_path in seen:
                continue
            seen.add(rel_path)
            out.append(rel_path)
    return out


__all__ = [
    "NEGATION_PREFIX",
    "check_pattern",
    "split_patterns",
    "match_patterns",
]
