"""Tests for QuerySession filter edits, reloads, and parser switching."""

import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from CatalogQuery.core.errors import LoadError, NotLoadedError, UnknownFieldError
from CatalogQuery.core.models import BOOK_CATALOG
from CatalogQuery.services import QuerySession

_CATALOG = """<catalog>
<book><author>Corets, Eva</author><title>Maeve Ascendant</title><description>x</description>
<genre>Fantasy</genre><price>5.95</price><publishYear>2000</publishYear></book>
<book><author>Ralls, Kim</author><title>Midnight Rain</title><description>x</description>
<genre>Fantasy</genre><price>5.95</price><publishYear>1999</publishYear></book>
<book><author>Randall, Cynthia</author><title>Lover Birds</title><description>x</description>
<genre>Romance</genre><price>4.95</price><publishYear>2010</publishYear></book>
</catalog>
"""


class TestQuerySession(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.source = Path(tmp.name) / "catalog.xml"
        self.source.write_text(_CATALOG, encoding="utf-8")

    def _open(self, parser_name: str = "declarative") -> QuerySession:
        session = QuerySession.open(BOOK_CATALOG, self.source, parser_name)
        self.addCleanup(session.close)
        return session

    def test_open_failure_raises_load_error(self) -> None:
        with self.assertRaises(LoadError):
            QuerySession.open(BOOK_CATALOG, self.source.with_name("missing.xml"), "tree")

    def test_apply_and_reset(self) -> None:
        session = self._open()
        session.apply({"genre": "fantasy", "yearFrom": "2000"})
        self.assertEqual(session.run().values_for("author"), ("Corets, Eva",))

        session.reset()
        self.assertEqual(session.filter.as_dict(), {})
        self.assertEqual(session.run().count, 3)

    def test_set_field_unknown_name(self) -> None:
        with self.assertRaises(UnknownFieldError):
            self._open().set_field("isbn", "1")

    def test_reload_picks_up_source_changes(self) -> None:
        session = self._open("tree")
        self.source.write_text(_CATALOG.replace("Lover Birds", "Lover Birds II"), encoding="utf-8")
        self.assertNotIn("Lover Birds II", session.run().text)
        session.reload()
        self.assertIn("Lover Birds II", session.run().text)

    def test_reload_rearms_streaming_cursor(self) -> None:
        session = self._open("streaming")
        self.assertEqual(session.run().count, 3)
        self.assertEqual(session.run().count, 0)
        session.reload()
        self.assertEqual(session.run().count, 3)

    def test_switch_parser_keeps_filter(self) -> None:
        session = self._open("declarative")
        session.set_field("genre", "romance")
        expected = session.run()
        old_parser = session.parser

        session.switch_parser("streaming")
        self.assertEqual(session.parser.name, "streaming")
        self.assertEqual(session.run(), expected)
        with self.assertRaises(NotLoadedError):
            old_parser.filter_by(session.filter)

    def test_failed_switch_keeps_active_parser(self) -> None:
        session = self._open("tree")
        self.source.write_text("<library/>", encoding="utf-8")
        with self.assertRaises(LoadError):
            session.switch_parser("declarative")
        self.assertEqual(session.parser.name, "tree")
        self.assertEqual(session.run().count, 3)

    def test_unknown_parser_name(self) -> None:
        with self.assertRaises(ValueError):
            self._open().switch_parser("sax")

    def test_context_manager_closes_parser(self) -> None:
        with QuerySession.open(BOOK_CATALOG, self.source, "declarative") as session:
            parser = session.parser
        with self.assertRaises(NotLoadedError):
            parser.filter_by(session.filter)


if __name__ == "__main__":
    unittest.main()
