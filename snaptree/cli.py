"""Command-line front door for snaptree.

Builds the snapshot index for a project directory and prints the folder
tree, one folder, or one highlighted suite. With ``--watch`` the output is
re-printed after every refresh until interrupted.
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from pathlib import Path

from .broadcast import SignalBroadcaster
from .config import IndexerConfig, load_user_defaults, merge_config, save_user_defaults
from .errors import SnaptreeError
from .index_model import ROOT_FOLDER_PATH
from .indexer import SnapshotIndexer
from .render import DEFAULT_STYLE, render_folder_tree, render_suite

KEY_OPTIONS = ("--folder", "--show")


def _positive_float(value: str) -> float:
    """argparse type for positive float values."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Index snapshot files into a folder tree and print it."
    )
    parser.add_argument("root", nargs="?", default=None, help="Project directory. Defaults to current directory.")
    parser.add_argument(
        "--snapshots",
        metavar="PATTERN",
        nargs="+",
        default=None,
        help="Snapshot glob patterns; prefix with ! to exclude.",
    )
    parser.add_argument("--css", metavar="PATTERN", nargs="+", default=None, help="Common CSS glob patterns.")
    parser.add_argument(
        "--folder",
        metavar="KEY",
        default=None,
        help="Print only the tree under folder KEY (the -/ prefix is optional).",
    )
    parser.add_argument(
        "--show",
        metavar="FILE_KEY",
        default=None,
        help="Print the snapshots of one suite (the -/ prefix is optional).",
    )
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for --show.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--watch", action="store_true", default=None, help="Keep running and re-print on changes.")
    parser.add_argument("--poll", type=_positive_float, default=None, help="Watch poll interval in seconds.")
    parser.add_argument("--save-defaults", action="store_true", help="Persist patterns and watch settings.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def normalize_key(key: str) -> str:
    """Map ``src/a.snap``, ``/src/a.snap`` or ``-/src/a.snap`` to the synthetic key."""
    stripped = key.strip()
    if stripped == ROOT_FOLDER_PATH or stripped.startswith(ROOT_FOLDER_PATH + "/"):
        stripped = stripped[len(ROOT_FOLDER_PATH) :]
    stripped = stripped.strip("/")
    if not stripped:
        return ROOT_FOLDER_PATH
    return f"{ROOT_FOLDER_PATH}/{stripped}"


def _is_root_key(value: str) -> bool:
    return value == ROOT_FOLDER_PATH or value.startswith(ROOT_FOLDER_PATH + "/")


def attach_key_values(argv: list[str]) -> list[str]:
    """Join ``--folder``/``--show`` with a following ``-`` or ``-/...`` key.

    argparse treats a separate ``-/src`` token as an option, so it is rewritten
    to ``--folder=-/src`` before parsing.
    """
    out: list[str] = []
    idx = 0
    while idx < len(argv):
        arg = argv[idx]
        if arg in KEY_OPTIONS and idx + 1 < len(argv) and _is_root_key(argv[idx + 1]):
            out.append(f"{arg}={argv[idx + 1]}")
            idx += 2
            continue
        out.append(arg)
        idx += 1
    return out


def _render(indexer: SnapshotIndexer, args: argparse.Namespace, no_color: bool) -> str:
    index = indexer.current_index()
    if args.show is not None:
        file_key = normalize_key(args.show)
        suite = index.suite(file_key)
        if suite is None:
            raise SystemExit(f"Suite not found: {file_key}")
        return render_suite(suite, style=args.style, no_color=no_color)
    folder = normalize_key(args.folder or ROOT_FOLDER_PATH)
    if index.folder(folder) is None:
        raise SystemExit(f"Folder not found: {folder}")
    return render_folder_tree(index, folder, no_color=no_color)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, build the index and print the requested view."""
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(attach_key_values(list(argv)))
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    root = Path(args.root) if args.root is not None else Path.cwd()
    if not root.is_dir():
        raise SystemExit(f"Directory not found: {root}")

    config = merge_config(IndexerConfig(), **load_user_defaults())
    config = merge_config(
        config,
        root_dir=root,
        snapshot_patterns=args.snapshots,
        css_patterns=args.css,
        watch=args.watch,
        poll_seconds=args.poll,
    )
    if args.save_defaults:
        save_user_defaults(config)

    no_color = args.no_color or not sys.stdout.isatty()
    broadcaster = SignalBroadcaster()
    refreshed = threading.Event()
    broadcaster.subscribe(lambda _signal: refreshed.set())
    config = merge_config(config, broadcaster=broadcaster)

    with SnapshotIndexer(config) as indexer:
        try:
            indexer.start()
        except (OSError, ValueError, SnaptreeError) as exc:
            raise SystemExit(f"Failed to index snapshots: {exc}") from exc
        refreshed.clear()
        sys.stdout.write(_render(indexer, args, no_color))
        sys.stdout.flush()
        if not config.watch:
            return

        try:
            while True:
                if not refreshed.wait(timeout=0.5):
                    continue
                refreshed.clear()
                sys.stdout.write("\n" + _render(indexer, args, no_color))
                sys.stdout.flush()
        except KeyboardInterrupt:
            pass


if __name__ == "__main__":
    main()
