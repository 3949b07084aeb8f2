"""Poll-based file watching over glob patterns.

Each poll re-matches the patterns, stats the matched files and diffs the
result against the previous poll to produce ``add``/``change``/``delete``
events.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from .patterns import match_patterns

logger = logging.getLogger(__name__)

WATCH_EVENT_ADD = "add"
WATCH_EVENT_CHANGE = "change"
WATCH_EVENT_DELETE = "delete"

StatSignature = tuple[str, int, int, int]


@dataclass(frozen=True)
class WatchEvent:
    """One observed change to a watched file (path relative to the root)."""

    kind: str
    path: str


def _path_stat_signature(path: Path) -> StatSignature:
    """Return a stable stat tuple describing ``path`` existence and metadata."""
    try:
        st = path.stat()
    except FileNotFoundError:
        return ("missing", 0, 0, 0)
    except OSError:
        return ("error", 0, 0, 0)
    return ("ok", st.st_mtime_ns, st.st_size, st.st_mode)


def collect_watch_state(patterns: Iterable[str], root: Path) -> dict[str, StatSignature]:
    """Map each file matching ``patterns`` to its current stat signature."""
    root = Path(root)
    return {rel_path: _path_stat_signature(root / rel_path) for rel_path in match_patterns(patterns, root)}


def diff_watch_states(
    previous: Mapping[str, StatSignature],
    current: Mapping[str, StatSignature],
) -> list[WatchEvent]:
    """Return events turning ``previous`` into ``current``, sorted by path."""
    events: list[WatchEvent] = []
    for path in sorted(set(previous) | set(current)):
        if path not in current:
            events.append(WatchEvent(WATCH_EVENT_DELETE, path))
        elif path not in previous:
            events.append(WatchEvent(WATCH_EVENT_ADD, path))
        elif previous[path] != current[path]:
            events.append(WatchEvent(WATCH_EVENT_CHANGE, path))
    return events


class PollingWatcher:
    """Background watcher that reports batches of file events.

    ``on_events`` runs on the watcher thread once per poll that observed at
    least one event.
    """

    def __init__(
        self,
        patterns: Iterable[str],
        root: Path,
        on_events: Callable[[list[WatchEvent]], None],
        *,
        poll_seconds: float = 0.5,
    ) -> None:
        self._patterns = tuple(patterns)
        self._root = Path(root)
        self._on_events = on_events
        self._poll_seconds = max(0.01, float(poll_seconds))
        self._state: dict[str, StatSignature] = {}
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Record the baseline state and start polling; no-op when running."""
        if self._thread is not None:
            return
        self._state = collect_watch_state(self._patterns, self._root)
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run,
            name="snaptree-watch",
            daemon=True,
        )
        self._thread.start()

    def poll_once(self) -> list[WatchEvent]:
        """Poll now, dispatch any events and return them."""
        current = collect_watch_state(self._patterns, self._root)
        events = diff_watch_states(self._state, current)
        self._state = current
        if events and not self._stop.is_set():
            self._on_events(events)
        return events

    def _run(self) -> None:
        while not self._stop.wait(self._poll_seconds):
            try:
                self.poll_once()
            except Exception:
                logger.exception("Watch poll failed under %s", self._root)

    def close(self, timeout: float | None = 2.0) -> None:
        """Stop polling; no further events are dispatched after this returns."""
        self._stop.set()
        thread = self._thread
        self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)


__all__ = [
    "WATCH_EVENT_ADD",
    "WATCH_EVENT_CHANGE",
    "WATCH_EVENT_DELETE",
    "WatchEvent",
    "collect_watch_state",
    "diff_watch_states",
    "PollingWatcher",
]
