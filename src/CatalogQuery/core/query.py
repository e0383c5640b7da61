from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True, slots=True)
class SavedQuery:
    """Named set of raw filter inputs, replayed through `Filter.set_field`.

    Attributes:
        name: Optional query name for display.
        settings: Filter key to raw input text, in the order they are applied.
            Keys are text field names or ``<number field>_from`` / ``_to``.
    """

    name: str | None
    settings: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "settings", MappingProxyType(dict(self.settings)))
