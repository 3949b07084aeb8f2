"""Tests for what ``import snaptree`` pulls in."""

from __future__ import annotations

import subprocess
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[3]


class PackageImportTests(unittest.TestCase):
    def _loaded_after_import(self, module_name: str) -> str:
        code = f"import snaptree, sys; print({module_name!r} in sys.modules)"
        result = subprocess.run(
            [sys.executable, "-c", code],
            cwd=PROJECT_ROOT,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()

    def test_package_import_does_not_load_pygments(self) -> None:
        self.assertEqual(self._loaded_after_import("pygments"), "False")

    def test_package_import_does_not_load_cli(self) -> None:
        self.assertEqual(self._loaded_after_import("snaptree.cli"), "False")

    def test_package_exports_indexer(self) -> None:
        self.assertEqual(self._loaded_after_import("snaptree.indexer"), "True")


if __name__ == "__main__":
    unittest.main()
