"""Refresh orchestration and query surface for the snapshot index.

``SnapshotIndexer`` owns the current index, the shared CSS layer, the
configuration and the watch subscription. Every refresh rebuilds the whole
index and installs it with a single reference swap, so readers never see a
folder dictionary from one refresh paired with suites from another.
"""

from __future__ import annotations

import logging
import posixpath
import threading
from pathlib import Path

from .broadcast import REFRESH_SIGNAL
from .config import IndexerConfig, merge_config
from .index_model import (
    EMPTY_INDEX,
    ROOT_FOLDER_PATH,
    FolderNode,
    SnapshotIndex,
    SnapshotLoader,
    SnapshotSuite,
    build_folder_dict,
    extract_suite,
    load_snapshot_file,
    resolve_common_css,
)
from .patterns import match_patterns
from .watch import PollingWatcher, WatchEvent

logger = logging.getLogger(__name__)


def suite_key_for(rel_path: str) -> str:
    """Return the synthetic key for a snapshot path relative to the root."""
    return f"{ROOT_FOLDER_PATH}/{rel_path}"


class SnapshotIndexer:
    """Builds, holds and serves the snapshot index.

    Initial state is an empty index with no watcher. ``close`` releases the
    watcher. Refreshes are serialized; queries never block on them.
    """

    def __init__(
        self,
        config: IndexerConfig | None = None,
        *,
        loader: SnapshotLoader = load_snapshot_file,
    ) -> None:
        self._config = config or IndexerConfig()
        self._loader = loader
        self._index: SnapshotIndex = EMPTY_INDEX
        self._common_css: tuple[str, ...] = ()
        self._refresh_lock = threading.Lock()
        self._watch_lock = threading.Lock()
        self._watcher: PollingWatcher | None = None

    @property
    def config(self) -> IndexerConfig:
        return self._config

    @property
    def common_css(self) -> tuple[str, ...]:
        return self._common_css

    @property
    def watching(self) -> bool:
        return self._watcher is not None

    def configure(self, **changes: object) -> IndexerConfig:
        """Merge a partial update over the current configuration."""
        self._config = merge_config(self._config, **changes)
        return self._config

    def start(self) -> None:
        """Run the initial refresh, then start watching when configured."""
        self.refresh()
        if self._config.watch:
            self.watch_start()

    def close(self) -> None:
        self.watch_stop()

    def __enter__(self) -> SnapshotIndexer:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    # Queries

    def current_index(self) -> SnapshotIndex:
        return self._index

    def get_folder(self, folder_path: str) -> FolderNode | None:
        return self._index.folder(folder_path)

    def get_snapshot_suite(self, file_path: str) -> SnapshotSuite | None:
        return self._index.suite(file_path)

    # Refresh

    def refresh(self) -> SnapshotIndex:
        """Rebuild the index from disk and install it.

        Any failure propagates and leaves the previously installed index in
        place.
        """
        with self._refresh_lock:
            config = self._config
            root = Path(config.root_dir)
            logger.info("Refreshing snapshots under %s", root)

            self._common_css = resolve_common_css(config.css_patterns, root)
            common_css = self._common_css

            logger.info("Reading snapshot files...")
            suites: dict[str, SnapshotSuite] = {}
            for rel_path in sorted(match_patterns(config.snapshot_patterns, root)):
                file_key = suite_key_for(rel_path)
                suites[file_key] = extract_suite(
                    root / rel_path,
                    common_css,
                    file_key=file_key,
                    folder_path=posixpath.dirname(file_key),
                    loader=self._loader,
                )

            logger.info("Building tree...")
            folders = build_folder_dict(suites)
            index = SnapshotIndex(suites=suites, folders=folders)
            self._index = index
            logger.debug("Snapshot tree has %d folders, %d suites", len(folders), len(suites))

        self._broadcast_refresh(config)
        return index

    def _broadcast_refresh(self, config: IndexerConfig) -> None:
        broadcaster = config.broadcaster
        if broadcaster is None:
            return
        try:
            broadcaster.emit(REFRESH_SIGNAL)
        except Exception:
            logger.exception("Failed to broadcast %s", REFRESH_SIGNAL)

    # Watching

    def watch_start(self) -> None:
        """Start polling snapshot and CSS patterns; no-op when already watching."""
        with self._watch_lock:
            if self._watcher is not None:
                return
            config = self._config
            patterns = (*config.snapshot_patterns, *config.css_patterns)
            watcher = PollingWatcher(
                patterns,
                Path(config.root_dir),
                self._on_watch_events,
                poll_seconds=config.poll_seconds,
            )
            watcher.start()
            self._watcher = watcher
        logger.info("Started watching over snapshot and CSS files")

    def watch_stop(self) -> None:
        """Stop polling; no refresh is triggered by the watcher afterwards."""
        with self._watch_lock:
            watcher = self._watcher
            self._watcher = None
        if watcher is None:
            return
        watcher.close()
        logger.info("Stopped file watcher")

    def _on_watch_events(self, events: list[WatchEvent]) -> None:
        logger.debug("Watch events: %s", ", ".join(f"{event.kind}:{event.path}" for event in events))
        try:
            self.refresh()
        except Exception:
            logger.exception("Refresh triggered by file changes failed")


__all__ = [
    "suite_key_for",
    "SnapshotIndexer",
]
