"""Tests for config override behavior with defaults."""

import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from CatalogQuery.config import load_config_with_defaults


_BASE_YAML = """
log:
  level: INFO
  to_file: false
  dir: log

catalog:
  source: data/catalog.xml
  root: catalog
  record: book
  heading: Book
  fields:
    - {name: author, browsable: true}
    - {name: title, browsable: true}
    - {name: price, kind: number}

query:
  parser: declarative

queries:
  - NAME: base
    author: corets

output:
  base_dir: output
  formats: [console]
"""


class TestConfigOverride(unittest.TestCase):
    def _load(self, override_yaml: str):
        with tempfile.TemporaryDirectory() as tmp:
            default_path = Path(tmp) / "default.yml"
            default_path.write_text(_BASE_YAML, encoding="utf-8")
            override_path = Path(tmp) / "override.yml"
            override_path.write_text(override_yaml, encoding="utf-8")
            return load_config_with_defaults(override_path, default_path=default_path)

    def test_override_merges_with_defaults(self) -> None:
        cfg = self._load(
            """
log:
  level: DEBUG

query:
  parser: streaming

queries:
  - NAME: override
    price_to: 10
"""
        )

        self.assertEqual(cfg.runtime.level, "DEBUG")
        self.assertEqual(cfg.runtime.dir, "log")
        self.assertEqual(cfg.query.parser, "streaming")
        self.assertEqual(cfg.catalog.schema.record, "book")
        self.assertEqual(cfg.output.formats, ("console",))
        self.assertEqual(len(cfg.query.queries), 1)
        self.assertEqual(cfg.query.queries[0].name, "override")
        self.assertEqual(dict(cfg.query.queries[0].settings), {"price_to": "10"})

    def test_override_replaces_field_list(self) -> None:
        cfg = self._load(
            """
catalog:
  fields:
    - {name: title, browsable: true}

queries:
  - NAME: titles
"""
        )

        self.assertEqual(cfg.catalog.source, "data/catalog.xml")
        self.assertEqual(cfg.catalog.schema.field_names, ("title",))

    def test_empty_override_uses_defaults(self) -> None:
        cfg = self._load("{}")

        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.query.parser, "declarative")
        self.assertEqual(len(cfg.query.queries), 1)
        self.assertEqual(cfg.query.queries[0].name, "base")

    def test_env_source_wins_over_both_files(self) -> None:
        with patch.dict(os.environ, {"BOOKS_XML": "/data/books.xml"}):
            cfg = self._load(
                """
catalog:
  source: other.xml
  source_env: BOOKS_XML
"""
            )

        self.assertEqual(cfg.catalog.source, "/data/books.xml")
        self.assertEqual(cfg.catalog.source_env, "BOOKS_XML")


if __name__ == "__main__":
    unittest.main()
