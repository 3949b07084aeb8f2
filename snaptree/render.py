"""Terminal rendering of folder trees and snapshot suites.

Tree rows use a small ANSI palette; snapshot bodies are highlighted with
Pygments. Terminal control bytes in snapshot content are escaped first.
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from functools import lru_cache

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import HtmlLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .index_model import ROOT_FOLDER_PATH, FolderNode, SnapshotIndex, SnapshotSuite, iter_folder_depth_first

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


@dataclass(frozen=True)
class TreePalette:
    """ANSI sequences used for tree and suite rows."""

    reset: str
    tree_marker: str
    tree_dir: str
    tree_file: str
    count: str
    heading: str
    dim: str


DEFAULT_PALETTE = TreePalette(
    reset="\033[0m",
    tree_marker="\033[38;5;44m",
    tree_dir="\033[1;34m",
    tree_file="\033[38;5;252m",
    count="\033[38;5;109m",
    heading="\033[1;38;5;81m",
    dim="\033[2;38;5;250m",
)

PLAIN_PALETTE = TreePalette(reset="", tree_marker="", tree_dir="", tree_file="", count="", heading="", dim="")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def _normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


@lru_cache(maxsize=16)
def _formatter_for_style(style: str) -> TerminalFormatter:
    return TerminalFormatter(style=style)


def colorize_markup(source: str, style: str = DEFAULT_STYLE) -> str:
    """Highlight snapshot markup for the terminal."""
    formatter = _formatter_for_style(_normalize_style(style))
    return highlight(sanitize_terminal_text(source), HtmlLexer(), formatter)


def _folder_label(node: FolderNode) -> str:
    if node.parent_folder_path is None:
        return node.folder_path
    return posixpath.relpath(node.folder_path, node.parent_folder_path) + "/"


def render_folder_tree(
    index: SnapshotIndex,
    start: str = ROOT_FOLDER_PATH,
    *,
    no_color: bool = False,
) -> str:
    """Render folders under ``start`` with their suites and entry counts.

    Folder rows show the path relative to their parent node, so skipped empty
    directories stay visible (``a/b/c/``); the full key is shown for ``start``.
    """
    palette = PLAIN_PALETTE if no_color else DEFAULT_PALETTE
    lines: list[str] = []
    for depth, node in iter_folder_depth_first(index.folders, start):
        indent = "  " * depth
        label = node.folder_path if depth == 0 else _folder_label(node)
        lines.append(f"{indent}{palette.tree_marker}▾ {palette.reset}{palette.tree_dir}{label}{palette.reset}")
        for file_path in node.file_paths:
            suite = index.suite(file_path)
            count = len(suite) if suite is not None else 0
            name = posixpath.basename(file_path)
            lines.append(
                f"{indent}    {palette.tree_file}{name}{palette.reset}"
                f"{palette.count} [{count}]{palette.reset}"
            )
    return "\n".join(lines) + ("\n" if lines else "")


def render_suite(
    suite: SnapshotSuite,
    *,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
) -> str:
    """Render every entry of ``suite`` in sorted id order."""
    palette = PLAIN_PALETTE if no_color else DEFAULT_PALETTE
    out: list[str] = [f"{palette.heading}{suite.file_path}{palette.reset}\n"]
    for snapshot_id in sorted(suite):
        entry = suite[snapshot_id]
        out.append(f"\n{palette.heading}● {sanitize_terminal_text(entry.id)}{palette.reset}")
        out.append(f"{palette.dim}  ({len(entry.css)} CSS sources){palette.reset}\n")
        body = entry.snap.strip("\n")
        out.append(sanitize_terminal_text(body) + "\n" if no_color else colorize_markup(body, style))
        if entry.html is not None:
            out.append(f"{palette.dim}  -- HTML preview --{palette.reset}\n")
            html = entry.html.strip("\n")
            out.append(sanitize_terminal_text(html) + "\n" if no_color else colorize_markup(html, style))
    return "".join(out)


__all__ = [
    "DEFAULT_STYLE",
    "TreePalette",
    "DEFAULT_PALETTE",
    "PLAIN_PALETTE",
    "sanitize_terminal_text",
    "colorize_markup",
    "render_folder_tree",
    "render_suite",
]
