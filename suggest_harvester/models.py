from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

SuggestionSet = List[str]


@dataclass(slots=True)
class KeywordRow:
    """A single data row of a weekday sheet."""

    row_index: int  # zero-based index inside the sheet (header included)
    keyword: Optional[str]
    longest: Optional[str] = None
    shortest: Optional[str] = None

    @property
    def search_text(self) -> str:
        return (self.keyword or "").strip()


@dataclass(slots=True, frozen=True)
class ResultPair:
    """Longest and shortest suggestion computed for one keyword."""

    longest: str
    shortest: str


@dataclass(slots=True)
class RunSummary:
    rows_visited: int = 0
    skipped_empty: int = 0
    no_suggestions: int = 0
    written: int = 0
