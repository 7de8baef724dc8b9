"""Heuristic day/month/year recognition around month names."""

import re
from typing import Sequence

from ..models import DateTriple, Language
from ..resources import LanguageResources
from ..embeddings.embedder import Lemmatizer

_LEADING_DIGITS = re.compile(r"\d+")

# Mask roles: D(ay), M(onth), Y(ear), X (wildcard, any token)
ROLES = "DMYX"


class DateExtractor:
    """Finds date triples in token sequences.

    Every token that names a month opens a three-token window around it. Each
    slot of the window is classified as day, month and/or plausible year, and
    the language's masks are tried in order; the first mask whose every role
    is satisfied produces a date.
    """

    def __init__(self, resources: dict[Language, LanguageResources], current_year: int):
        self.resources = resources
        self.current_year = current_year
        self._lemmatizers = {
            lang: Lemmatizer(res.lemmas, res.lemma_suffix) for lang, res in resources.items()
        }
        for res in resources.values():
            for mask in res.date_masks:
                _check_mask(mask)

    def find_dates(self, tokens: Sequence[str], language: Language) -> list[DateTriple]:
        res = self.resources.get(language)
        if res is None or not res.month_names or not res.date_masks:
            return []

        dates = []
        i = 0
        n = len(tokens)
        while i < n:
            if self._month(tokens[i], res, language) is not None:
                window = (
                    tokens[i - 1] if i > 0 else "",
                    tokens[i],
                    tokens[i + 1] if i < n - 1 else "",
                )
                date = self.match_window(window, language)
                if date is not None:
                    dates.append(date)
                    i += 2
            i += 1
        return dates

    def match_window(self, window: Sequence[str], language: Language) -> DateTriple | None:
        """Try the language's masks in order against a three-token window."""
        res = self.resources[language]
        slots = [self.classify(token, res, language) for token in window]
        for mask in res.date_masks:
            if all(role == "X" or slot[role] is not None for role, slot in zip(mask, slots)):
                found = {"D": 0, "M": 0, "Y": 0}
                for role, slot in zip(mask, slots):
                    if role != "X":
                        found[role] = slot[role]
                return DateTriple(found["D"], found["M"], found["Y"])
        return None

    def classify(self, token: str, res: LanguageResources, language: Language) -> dict[str, int | None]:
        """Day, month and year readings of one token (None where it doesn't fit)."""
        folded = token.lower()
        return {
            "D": res.day_names.get(folded),
            "M": self._month(token, res, language),
            "Y": self.plausible_year(token),
        }

    def plausible_year(self, token: str) -> int | None:
        """Year value of a numeric token within a year of now, two-digit years expanded."""
        m = _LEADING_DIGITS.match(token)
        if m is None:
            return None
        year = int(m.group())
        if year < 100:
            year += (self.current_year // 100) * 100
        if self.current_year - 1 <= year <= self.current_year + 1:
            return year
        return None

    def _month(self, token: str, res: LanguageResources, language: Language) -> int | None:
        folded = token.lower()
        month = res.month_names.get(folded)
        if month is None:
            lemma = self._lemmatizers[language].lemma(folded)
            if lemma is not None:
                month = res.month_names.get(lemma.lower())
        return month


def _check_mask(mask: str) -> None:
    if len(mask) != 3 or any(role not in ROLES for role in mask):
        raise ValueError(f"Invalid date mask {mask!r}: expected three of {ROLES}")
