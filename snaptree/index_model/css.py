"""CSS sources for snapshot suites: the shared layer plus per-suite overrides."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from ..patterns import match_patterns

logger = logging.getLogger(__name__)

CSS_SUFFIX = ".css"


def resolve_common_css(css_patterns: Iterable[str], root: Path) -> tuple[str, ...]:
    """Read every CSS file matching ``css_patterns`` in pattern-match order.

    Any discovery or read failure propagates so the caller can abort without
    installing a partial common layer.
    """
    logger.info("Extracting common CSS...")
    out: list[str] = []
    for rel_path in match_patterns(css_patterns, root):
        logger.info("Processing %s...", rel_path)
        out.append((Path(root) / rel_path).read_text(encoding="utf-8"))
    return tuple(out)


def css_path_for_suite(suite_path: Path) -> Path:
    """Return the sibling stylesheet path for a snapshot file."""
    return suite_path.with_suffix(CSS_SUFFIX)


def resolve_suite_css(suite_path: Path) -> str | None:
    """Return the suite's own stylesheet, or ``None`` when there is none.

    Every failure to read the sibling file counts as "no override", not just
    a missing file.
    """
    css_path = css_path_for_suite(Path(suite_path))
    logger.debug("Trying to read %s...", css_path)
    try:
        css = css_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    logger.info("Found custom CSS in %s", css_path)
    return css


def cascade_css(common_css: Sequence[str], suite_css: str | None) -> tuple[str, ...]:
    """Return the cascade for one suite: shared sources first, override last."""
    if suite_css is None:
        return tuple(common_css)
    return (*common_css, suite_css)


__all__ = [
    "CSS_SUFFIX",
    "resolve_common_css",
    "css_path_for_suite",
    "resolve_suite_css",
    "cascade_css",
]
