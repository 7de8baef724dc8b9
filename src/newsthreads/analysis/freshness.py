"""News/not-news classification from extracted dates."""

from datetime import date
from typing import Iterable, Sequence

from ..models import DateTriple


def date_distance(d: DateTriple, today: date) -> int:
    """Approximate distance in days: |days| + 30*|months| (+ 365*|years| when the year is known)."""
    distance = abs(d.day - today.day) + 30 * abs(d.month - today.month)
    if d.has_year:
        distance += 365 * abs(d.year - today.year)
    return distance


def mean_distance(dates: Iterable[DateTriple], today: date) -> float | None:
    """Mean date_distance, or None when there are no dates."""
    distances = [date_distance(d, today) for d in dates]
    if not distances:
        return None
    return sum(distances) / len(distances)


def is_news(dates: Sequence[DateTriple], today: date, freshness_days: float) -> bool:
    """True iff the document's dates are on average closer than freshness_days."""
    distance = mean_distance(dates, today)
    if distance is None:
        return False
    return distance < freshness_days
