"""Snapshot file loading.

Reads Jest snapshot files (``exports[`id`] = `content`;`` statements) and
plain JSON objects of strings. Files are re-read on every call so a refresh
always sees current content.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from ..errors import SnapshotLoadError

HTML_PREVIEW_SEPARATOR = "\n\n------------------ HTML PREVIEW ------------------\n\n"
JSON_SUFFIX = ".json"

_EXPORT_RE = re.compile(
    r"exports\[`(?P<id>(?:\\.|[^`\\])*)`\]\s*=\s*`(?P<content>(?:\\.|[^`\\])*)`\s*;",
    re.DOTALL,
)
_ESCAPE_RE = re.compile(r"\\(\\|`|\$\{)")
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)


def unescape_template_literal(text: str) -> str:
    """Undo the backslash escaping Jest applies inside template literals."""
    return _ESCAPE_RE.sub(r"\1", text)


def _check_gap(gap: str, path: Path) -> None:
    """Reject anything between exports other than whitespace and comments."""
    gap = _BLOCK_COMMENT_RE.sub("", gap)
    for line in gap.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("//"):
            continue
        raise SnapshotLoadError(f"unexpected content in {path}: {stripped[:60]!r}")


def parse_jest_snapshots(source: str, path: Path) -> dict[str, str]:
    """Parse Jest snapshot source into ``{snapshot_id: raw_content}``."""
    out: dict[str, str] = {}
    cursor = 0
    for match in _EXPORT_RE.finditer(source):
        _check_gap(source[cursor : match.start()], path)
        cursor = match.end()
        out[unescape_template_literal(match.group("id"))] = unescape_template_literal(
            match.group("content")
        )
    _check_gap(source[cursor:], path)
    return out


def parse_json_snapshots(source: str, path: Path) -> dict[str, str]:
    """Parse a JSON object whose values are raw snapshot strings."""
    try:
        data = json.loads(source)
    except ValueError as exc:
        raise SnapshotLoadError(f"invalid JSON snapshot file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SnapshotLoadError(f"JSON snapshot file {path} is not an object")
    out: dict[str, str] = {}
    for key, value in data.items():
        if not isinstance(value, str):
            raise SnapshotLoadError(f"snapshot {key!r} in {path} is not a string")
        out[str(key)] = value
    return out


def load_snapshot_file(path: Path) -> dict[str, str]:
    """Load ``{snapshot_id: raw_content}`` from ``path``.

    Raises ``OSError`` when the file cannot be read and ``SnapshotLoadError``
    when it cannot be decoded or parsed.
    """
    path = Path(path)
    try:
        source = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SnapshotLoadError(f"snapshot file {path} is not valid UTF-8") from exc
    if path.suffix.lower() == JSON_SUFFIX:
        return parse_json_snapshots(source, path)
    return parse_jest_snapshots(source, path)


__all__ = [
    "HTML_PREVIEW_SEPARATOR",
    "unescape_template_literal",
    "parse_jest_snapshots",
    "parse_json_snapshots",
    "load_snapshot_file",
]
