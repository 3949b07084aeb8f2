"""Tests for common and per-suite CSS resolution."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from snaptree.index_model import cascade_css, css_path_for_suite, resolve_common_css, resolve_suite_css


class CommonCssTests(unittest.TestCase):
    def test_reads_matches_in_pattern_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "css").mkdir()
            (root / "css" / "base.css").write_text("body {}", encoding="utf-8")
            (root / "css" / "theme.css").write_text(".theme {}", encoding="utf-8")
            (root / "extra.css").write_text(".extra {}", encoding="utf-8")

            common = resolve_common_css(["extra.css", "css/**/*.css"], root)

            self.assertEqual(common, (".extra {}", "body {}", ".theme {}"))

    def test_no_matches_yields_empty_layer(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(resolve_common_css(["css/**/*.css"], Path(tmp)), ())

    def test_unreadable_match_propagates(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "bad.css").write_bytes(b"\xff\xfe\xfa")

            with self.assertRaises(UnicodeDecodeError):
                resolve_common_css(["*.css"], root)

    def test_missing_root_propagates(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(OSError):
                resolve_common_css(["*.css"], Path(tmp) / "missing")


class SuiteCssTests(unittest.TestCase):
    def test_sibling_path_replaces_last_extension(self) -> None:
        self.assertEqual(
            css_path_for_suite(Path("src/__snapshots__/Button.js.snap")),
            Path("src/__snapshots__/Button.js.css"),
        )

    def test_reads_sibling_stylesheet(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            suite_path = Path(tmp) / "Button.js.snap"
            suite_path.write_text("", encoding="utf-8")
            (Path(tmp) / "Button.js.css").write_text(".button {}", encoding="utf-8")

            self.assertEqual(resolve_suite_css(suite_path), ".button {}")

    def test_missing_sibling_is_absent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertIsNone(resolve_suite_css(Path(tmp) / "Button.js.snap"))

    def test_unreadable_sibling_is_absent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / "Button.js.css").mkdir()
            (Path(tmp) / "Other.js.css").write_bytes(b"\xff\xfe\xfa")

            self.assertIsNone(resolve_suite_css(Path(tmp) / "Button.js.snap"))
            self.assertIsNone(resolve_suite_css(Path(tmp) / "Other.js.snap"))


class CascadeCssTests(unittest.TestCase):
    def test_override_is_appended_last(self) -> None:
        self.assertEqual(cascade_css(["g1", "g2"], "s"), ("g1", "g2", "s"))

    def test_without_override_returns_common_layer(self) -> None:
        self.assertEqual(cascade_css(["g1", "g2"], None), ("g1", "g2"))

    def test_empty_override_still_counts(self) -> None:
        self.assertEqual(cascade_css([], ""), ("",))


if __name__ == "__main__":
    unittest.main()
