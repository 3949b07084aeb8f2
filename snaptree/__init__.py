"""Public package surface for snaptree.

Exports the indexer and its configuration plus ``main`` for programmatic CLI
invocation. The indexer is imported eagerly; the CLI and the Pygments-based
renderer load only when ``main`` is called.
"""

from __future__ import annotations

from .config import IndexerConfig
from .indexer import SnapshotIndexer


def main(*args, **kwargs):
    """Lazily import the CLI entrypoint so Pygments is not loaded on package import."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["IndexerConfig", "SnapshotIndexer", "main"]
