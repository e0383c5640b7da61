"""Error taxonomy for catalog loading and querying."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for all CatalogQuery domain errors."""


class LoadError(CatalogError):
    """Source is missing, unreadable, or not a well-formed catalog."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Cannot load catalog {source}: {reason}")
        self.source = source
        self.reason = reason


class MalformedRecordError(CatalogError):
    """A record element lacks one or more required fields."""

    def __init__(self, ordinal: int, missing: tuple[str, ...]) -> None:
        super().__init__(f"Record #{ordinal} is missing fields: {', '.join(missing)}")
        self.ordinal = ordinal
        self.missing = missing


class NotLoadedError(CatalogError, RuntimeError):
    """Query issued before any successful load."""


class FilterConversionError(CatalogError, ValueError):
    """Raw filter text cannot be converted to a number.

    Only raised by the low-level converter; `Filter.set_field` absorbs it.
    """

    def __init__(self, raw: str, *, empty: bool) -> None:
        super().__init__("empty numeric input" if empty else f"not a number: {raw!r}")
        self.raw = raw
        self.empty = empty


class RecordValueError(CatalogError, ValueError):
    """A record's numeric field text cannot be compared as a number."""

    def __init__(self, field: str, raw: str) -> None:
        super().__init__(f"Record field {field!r} is not a number: {raw!r}")
        self.field = field
        self.raw = raw


class UnknownFieldError(CatalogError, KeyError):
    """Filter field name is not part of the catalog schema."""

    def __str__(self) -> str:
        return f"Unknown filter field: {self.args[0]}"
