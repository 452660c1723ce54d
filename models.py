"""Data models for isogram entries, search settings, and search results."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

SEARCH_MODES = ("classic", "split", "high-low")

# camelCase config keys and the field names they map to.
_SETTINGS_KEYS = {
    "minLen": "min_len",
    "maxLen": "max_len",
    "topN": "top_n",
    "searchMode": "search_mode",
    "startSize": "start_size",
    "highLowTopPercent": "high_low_top_percent",
    "highLowBottomPercent": "high_low_bottom_percent",
}


def char_slice(word: str, n: int, from_end: bool = False) -> str:
    """Return the first (or last) ``n`` characters of ``word``, or all of it when shorter."""
    chars = list(word)
    if from_end:
        return "".join(chars[max(0, len(chars) - n):])
    return "".join(chars[:n])


@dataclass(frozen=True, slots=True)
class Entry:
    """A single isogram word together with its precomputed slices."""

    word: str
    length: int
    chars: frozenset[str]
    prefix2: str
    prefix3: str
    suffix2: str
    suffix3: str

    def __post_init__(self) -> None:
        if self.length < 1:
            raise ValueError("Entry word must not be empty")
        if len(self.chars) != self.length:
            raise ValueError(f"Entry word is not an isogram: {self.word!r}")

    @classmethod
    def from_word(cls, word: str) -> Entry:
        return cls(
            word=word,
            length=len(word),
            chars=frozenset(word),
            prefix2=char_slice(word, 2),
            prefix3=char_slice(word, 3),
            suffix2=char_slice(word, 2, from_end=True),
            suffix3=char_slice(word, 3, from_end=True),
        )


@dataclass(frozen=True, slots=True)
class SearchSettings:
    """Bounds and strategy for one search invocation."""

    min_len: int = 10
    max_len: int = 0
    top_n: int = 10
    search_mode: str = "classic"
    start_size: int = 40
    high_low_top_percent: int = 20
    high_low_bottom_percent: int = 30

    def __post_init__(self) -> None:
        for name in ("min_len", "max_len", "top_n", "start_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
        for name in ("high_low_top_percent", "high_low_bottom_percent"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 100:
                raise ValueError(f"{name} must be between 0 and 100, got {value!r}")
        if self.search_mode not in SEARCH_MODES:
            raise ValueError(f"Unknown search mode: {self.search_mode!r}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SearchSettings:
        """Build settings from a snake_case or camelCase dict, ignoring unknown keys."""
        known = set(cls.__dataclass_fields__)
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _SETTINGS_KEYS.get(key, key)
            if name in known:
                values[name] = value
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.__dataclass_fields__}


@dataclass(frozen=True, slots=True)
class Solution:
    """A qualifying combination of character-disjoint entries."""

    words: tuple[Entry, ...]
    length: int
    score: float

    @property
    def text(self) -> str:
        return "".join(entry.word for entry in self.words)

    @property
    def display(self) -> str:
        return " + ".join(entry.word for entry in self.words)


@dataclass(slots=True)
class ProgressState:
    """Live counters and best-so-far candidates of a running search."""

    longest: Solution | None = None
    best_score: Solution | None = None
    solutions_found: int = 0
    words_scanned: int = 0

    def snapshot(self) -> ProgressState:
        return replace(self)


class SearchState(Enum):
    """Lifecycle of a search session."""

    IDLE = "idle"
    SEARCHING = "searching"
    DONE = "done"
    CANCELLED = "cancelled"
    ERRORED = "errored"


@dataclass(frozen=True, slots=True)
class SearchEvent:
    """Outbound notification from a search session to its consumer."""

    kind: str
    payload: Any = field(default=None)
