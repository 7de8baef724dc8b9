"""Data models used throughout newsthreads."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import NamedTuple

OTHER_CATEGORY = "other"


class Language(IntEnum):
    """Languages the pipeline knows about. UNKNOWN is the detector's fallback."""
    UNKNOWN = 0
    ENGLISH = 1
    RUSSIAN = 2

    @property
    def code(self) -> str:
        return _LANGUAGE_CODES[self]

    @classmethod
    def from_code(cls, code: str) -> "Language":
        for lang, c in _LANGUAGE_CODES.items():
            if c == code:
                return lang
        raise ValueError(f"Unknown language code: {code!r}")


_LANGUAGE_CODES = {
    Language.UNKNOWN: "",
    Language.ENGLISH: "en",
    Language.RUSSIAN: "ru",
}


class DateTriple(NamedTuple):
    """A recognised date. year == 0 means the year was not found in the text."""
    day: int
    month: int
    year: int

    @property
    def has_year(self) -> bool:
        return self.year != 0


@dataclass(frozen=True)
class Document:
    """A parsed article. Stages return updated copies via dataclasses.replace."""
    doc_id: str
    tokens: tuple[str, ...]
    title: str = ""
    language: Language = Language.UNKNOWN
    dates: tuple[DateTriple, ...] = ()
    category: str | None = None
    thread_id: str | None = None
    entities: tuple[str, ...] = ()


@dataclass
class Thread:
    """A group of near-duplicate articles. members[0] is always the seed."""
    seed: str
    members: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.members)


@dataclass
class RankedThread:
    """A thread with its relevance components."""
    thread: Thread
    freq_component: float
    fresh_component: float

    @property
    def score(self) -> float:
        return self.freq_component + self.fresh_component
