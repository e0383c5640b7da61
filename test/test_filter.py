"""Tests for filter input normalization and record matching."""

import math
import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from CatalogQuery.core.errors import FilterConversionError, RecordValueError, UnknownFieldError
from CatalogQuery.core.filter import Filter, normalize_key, parse_number
from CatalogQuery.core.models import BOOK_CATALOG, CatalogSchema, FieldKind, FieldSpec, Record


def _record(**overrides: str) -> Record:
    values = {
        "author": "J. Smithson",
        "title": "Rivers of London",
        "description": "A police procedural with magic.",
        "genre": "Fantasy",
        "price": "9.99",
        "year": "2011",
    }
    values.update(overrides)
    return Record(values)


class TestParseNumber(unittest.TestCase):
    def test_plain_and_signed_decimals(self) -> None:
        self.assertEqual(parse_number("12.5"), 12.5)
        self.assertEqual(parse_number("-3"), -3.0)
        self.assertEqual(parse_number(" +.5 "), 0.5)
        self.assertEqual(parse_number("1e3"), 1000.0)

    def test_empty_input_is_flagged_empty(self) -> None:
        with self.assertRaises(FilterConversionError) as ctx:
            parse_number("   ")
        self.assertTrue(ctx.exception.empty)

    def test_comma_decimal_is_rejected(self) -> None:
        with self.assertRaises(FilterConversionError) as ctx:
            parse_number("12,5")
        self.assertFalse(ctx.exception.empty)

    def test_python_only_spellings_are_rejected(self) -> None:
        for raw in ("inf", "nan", "1_000", "0x10", "abc"):
            with self.subTest(raw=raw):
                with self.assertRaises(FilterConversionError):
                    parse_number(raw)


class TestFilterSetField(unittest.TestCase):
    def test_default_filter_matches_everything(self) -> None:
        self.assertTrue(Filter(BOOK_CATALOG).is_match(_record()))

    def test_text_is_trimmed_and_casefolded(self) -> None:
        query = Filter(BOOK_CATALOG)
        query.set_field("author", "  SMITH ")
        self.assertEqual(query.fragment("author"), "smith")

    def test_substring_match_is_case_insensitive(self) -> None:
        query = Filter(BOOK_CATALOG)
        query.set_field("author", "SMITH")
        self.assertTrue(query.is_match(_record(author="J. Smithson")))
        self.assertFalse(query.is_match(_record(author="Smyth")))

    def test_special_characters_match_literally(self) -> None:
        query = Filter(BOOK_CATALOG)
        query.set_field("title", "c++ [2nd ed.]")
        self.assertTrue(query.is_match(_record(title="Learning C++ [2nd Ed.]")))
        self.assertFalse(query.is_match(_record(title="Learning C [2nd Ed]")))

    def test_invalid_from_bound_fails_closed(self) -> None:
        query = Filter(BOOK_CATALOG)
        query.set_field("yearFrom", "abc")
        self.assertEqual(query.bounds("year")[0], math.inf)
        for year in ("1", "1999", "2011", "99999"):
            with self.subTest(year=year):
                self.assertFalse(query.is_match(_record(year=year)))

    def test_invalid_to_bound_fails_closed(self) -> None:
        query = Filter(BOOK_CATALOG)
        query.set_field("price_to", "cheap")
        self.assertEqual(query.bounds("price")[1], -math.inf)
        self.assertFalse(query.is_match(_record(price="0")))

    def test_empty_bound_is_unconstrained(self) -> None:
        query = Filter(BOOK_CATALOG)
        query.set_field("priceTo", "5")
        self.assertFalse(query.is_match(_record(price="9.99")))
        query.set_field("priceTo", "")
        self.assertEqual(query.bounds("price"), (-math.inf, math.inf))
        self.assertTrue(query.is_match(_record(price="9.99")))

    def test_none_value_is_treated_as_empty(self) -> None:
        query = Filter(BOOK_CATALOG)
        query.set_field("year_from", None)
        self.assertEqual(query.bounds("year")[0], -math.inf)

    def test_range_is_inclusive(self) -> None:
        query = Filter(BOOK_CATALOG)
        query.set_field("year_from", "2000")
        query.set_field("year_to", "2010")
        self.assertTrue(query.is_match(_record(year="2000")))
        self.assertTrue(query.is_match(_record(year="2010")))
        self.assertFalse(query.is_match(_record(year="1999")))
        self.assertFalse(query.is_match(_record(year="2010.5")))

    def test_unknown_field_raises(self) -> None:
        with self.assertRaises(UnknownFieldError):
            Filter(BOOK_CATALOG).set_field("publisher", "x")

    def test_number_field_itself_is_not_a_key(self) -> None:
        with self.assertRaises(UnknownFieldError):
            Filter(BOOK_CATALOG).set_field("year", "2000")

    def test_keys_follow_schema_order(self) -> None:
        self.assertEqual(
            Filter(BOOK_CATALOG).keys,
            ("author", "title", "description", "genre", "price_from", "price_to", "year_from", "year_to"),
        )

    def test_colliding_filter_keys_raise(self) -> None:
        schema = CatalogSchema(
            root="catalog",
            record="book",
            heading="Book",
            fields=(
                FieldSpec("price_from", "origin", "From"),
                FieldSpec("price", "price", "Price", FieldKind.NUMBER),
            ),
        )
        with self.assertRaisesRegex(ValueError, "price_from"):
            Filter(schema)

    def test_normalize_key(self) -> None:
        self.assertEqual(normalize_key("yearFrom"), "year_from")
        self.assertEqual(normalize_key("PriceTo"), "price_to")
        self.assertEqual(normalize_key(" author "), "author")

    def test_as_dict_reports_active_settings_only(self) -> None:
        query = Filter(BOOK_CATALOG)
        query.set_field("genre", "Fantasy")
        query.set_field("year_to", "2005")
        self.assertEqual(query.as_dict(), {"genre": "fantasy", "year_to": 2005.0})


class TestFilterRecordValues(unittest.TestCase):
    def test_unparsable_record_number_propagates(self) -> None:
        with self.assertRaises(RecordValueError) as ctx:
            Filter(BOOK_CATALOG).is_match(_record(price="n/a"))
        self.assertEqual(ctx.exception.field, "price")

    def test_text_mismatch_short_circuits_before_numbers(self) -> None:
        query = Filter(BOOK_CATALOG)
        query.set_field("genre", "romance")
        self.assertFalse(query.is_match(_record(price="n/a")))

    def test_is_match_does_not_mutate_filter(self) -> None:
        query = Filter(BOOK_CATALOG)
        query.set_field("title", "rivers")
        before = query.as_dict()
        query.is_match(_record())
        self.assertEqual(query.as_dict(), before)


if __name__ == "__main__":
    unittest.main()
