"""Tests for indexer config merging and persisted user defaults.

Validates partial-update merging and pattern normalization.
Ensures malformed persisted data is safely dropped on load.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from snaptree import config


class MergeConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        defaults = config.IndexerConfig()

        self.assertEqual(defaults.snapshot_patterns, ("**/*.snap", "!node_modules/**/*"))
        self.assertEqual(defaults.css_patterns, ("css/**/*.css", "!node_modules/**/*"))
        self.assertFalse(defaults.watch)
        self.assertIsNone(defaults.broadcaster)

    def test_none_values_are_ignored_and_patterns_normalized(self) -> None:
        merged = config.merge_config(
            config.IndexerConfig(),
            snapshot_patterns=["a/*.snap"],
            css_patterns="theme.css",
            root_dir="/tmp/project",
            watch=None,
        )

        self.assertEqual(merged.snapshot_patterns, ("a/*.snap",))
        self.assertEqual(merged.css_patterns, ("theme.css",))
        self.assertEqual(merged.root_dir, Path("/tmp/project"))
        self.assertFalse(merged.watch)

    def test_unknown_keys_are_rejected(self) -> None:
        with self.assertRaises(TypeError):
            config.merge_config(config.IndexerConfig(), socket=object())


class UserDefaultsTests(unittest.TestCase):
    def test_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("snaptree.config.CONFIG_PATH", config_path):
                config.save_user_defaults(
                    config.IndexerConfig(snapshot_patterns=("src/**/*.snap",), watch=True, poll_seconds=2)
                )
                loaded = config.load_user_defaults()

        self.assertEqual(
            loaded,
            {
                "snapshot_patterns": ("src/**/*.snap",),
                "css_patterns": config.DEFAULT_CSS_PATTERNS,
                "watch": True,
                "poll_seconds": 2.0,
            },
        )

    def test_malformed_values_are_dropped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("snaptree.config.CONFIG_PATH", config_path):
                config.save_config(
                    {
                        "snapshot_patterns": ["ok/*.snap", 3, " "],
                        "css_patterns": [],
                        "watch": "yes",
                        "poll_seconds": True,
                    }
                )
                loaded = config.load_user_defaults()

        self.assertEqual(loaded, {"snapshot_patterns": ("ok/*.snap",)})

    def test_missing_or_broken_file_loads_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("snaptree.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                config_path.write_text("[1, 2]", encoding="utf-8")
                self.assertEqual(config.load_config(), {})
                config_path.write_text("{", encoding="utf-8")
                self.assertEqual(config.load_user_defaults(), {})


if __name__ == "__main__":
    unittest.main()
