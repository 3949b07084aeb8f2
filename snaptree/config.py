"""Indexer configuration plus persisted JSON user defaults.

Stores default snapshot/CSS patterns, watch preference and poll interval.
All access to the persisted file is defensive: malformed or missing config
falls back to built-in defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "snaptree"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_SNAPSHOT_PATTERNS = ("**/*.snap", "!node_modules/**/*")
DEFAULT_CSS_PATTERNS = ("css/**/*.css", "!node_modules/**/*")
DEFAULT_POLL_SECONDS = 0.5


@dataclass(frozen=True)
class IndexerConfig:
    """Settings for one indexer; replaced wholesale by ``merge_config``."""

    snapshot_patterns: tuple[str, ...] = DEFAULT_SNAPSHOT_PATTERNS
    css_patterns: tuple[str, ...] = DEFAULT_CSS_PATTERNS
    watch: bool = False
    broadcaster: object | None = None
    root_dir: Path = Path(".")
    poll_seconds: float = DEFAULT_POLL_SECONDS


def merge_config(config: IndexerConfig, **changes: object) -> IndexerConfig:
    """Return ``config`` with ``changes`` applied; ``None`` values are ignored.

    Pattern lists are normalized to tuples and ``root_dir`` to ``Path``.
    """
    updates: dict[str, object] = {}
    for key, value in changes.items():
        if value is None:
            continue
        if key in {"snapshot_patterns", "css_patterns"}:
            if isinstance(value, str):
                value = (value,)
            value = tuple(str(pattern) for pattern in value)
        elif key == "root_dir":
            value = Path(value)
        updates[key] = value
    return replace(config, **updates)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored; failing to write user
    defaults never breaks indexing.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _load_patterns(data: dict[str, object], key: str) -> tuple[str, ...] | None:
    """Read a non-empty list of pattern strings, dropping non-string items."""
    value = data.get(key)
    if not isinstance(value, list):
        return None
    patterns = tuple(item.strip() for item in value if isinstance(item, str) and item.strip())
    return patterns or None


def load_user_defaults() -> dict[str, object]:
    """Return validated persisted overrides suitable for ``merge_config``.

    Only explicit booleans are accepted for ``watch`` and only positive
    numbers for ``poll_seconds``.
    """
    data = load_config()
    out: dict[str, object] = {}
    for key in ("snapshot_patterns", "css_patterns"):
        patterns = _load_patterns(data, key)
        if patterns is not None:
            out[key] = patterns

    watch = data.get("watch")
    if isinstance(watch, bool):
        out["watch"] = watch

    poll_seconds = data.get("poll_seconds")
    if isinstance(poll_seconds, (int, float)) and not isinstance(poll_seconds, bool) and poll_seconds > 0:
        out["poll_seconds"] = float(poll_seconds)
    return out


def save_user_defaults(config: IndexerConfig) -> None:
    """Persist pattern lists, watch flag and poll interval from ``config``."""
    data = load_config()
    data["snapshot_patterns"] = list(config.snapshot_patterns)
    data["css_patterns"] = list(config.css_patterns)
    data["watch"] = bool(config.watch)
    data["poll_seconds"] = float(config.poll_seconds)
    save_config(data)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_SNAPSHOT_PATTERNS",
    "DEFAULT_CSS_PATTERNS",
    "DEFAULT_POLL_SECONDS",
    "IndexerConfig",
    "merge_config",
    "load_config",
    "save_config",
    "load_user_defaults",
    "save_user_defaults",
]
