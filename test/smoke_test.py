"""Smoke test for CatalogQuery CLI.

Run:
  python test/smoke_test.py

This script runs an ad-hoc query against the bundled sample catalog with each
parser variant and validates that the listing is rendered to the console.
"""

from __future__ import annotations

import sys
from pathlib import Path

from click.testing import CliRunner


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
sys.path.insert(0, str(SRC_DIR))


def main() -> int:
    from CatalogQuery.cli import cli

    runner = CliRunner()
    for parser_name in ("declarative", "tree", "streaming"):
        result = runner.invoke(
            cli,
            [
                "--config",
                str(REPO_ROOT / "config" / "default.yml"),
                "query",
                "--parser",
                parser_name,
                "--source",
                str(REPO_ROOT / "data" / "catalog.xml"),
                "--set",
                "author=corets",
            ],
            catch_exceptions=False,
        )

        output = result.output
        assert result.exit_code == 0, output
        assert "Matched 2 records" in output, output
        assert "Oberon's Legacy" in output, output
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
