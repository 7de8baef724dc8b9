"""Rank threads by size and freshness."""

from datetime import date
from typing import Mapping, Sequence

from ..analysis.freshness import mean_distance
from ..models import DateTriple, RankedThread, Thread


def rank_threads(
    threads: Sequence[Thread],
    dates_by_doc: Mapping[str, Sequence[DateTriple]],
    today: date,
) -> list[RankedThread]:
    """Order threads by freq_component + fresh_component, both in [0, 1].

    freq_component is the member count over the largest thread's count.
    fresh_component is 1 - (mean date distance over the largest mean
    distance); threads without any dates get 0. Ties keep input order.
    """
    if not threads:
        return []

    freqs = [len(t.members) for t in threads]
    distances = [
        mean_distance([d for m in t.members for d in dates_by_doc.get(m, ())], today)
        for t in threads
    ]

    max_freq = max(freqs)
    known = [d for d in distances if d is not None]
    max_distance = max(known) if known else 0.0

    ranked = []
    for thread, freq, distance in zip(threads, freqs, distances):
        freq_component = freq / max_freq if max_freq > 0 else 0.0
        if distance is None:
            fresh_component = 0.0
        elif max_distance > 0:
            fresh_component = 1.0 - distance / max_distance
        else:
            fresh_component = 1.0
        ranked.append(RankedThread(thread, freq_component, fresh_component))

    ranked.sort(key=lambda r: r.score, reverse=True)
    return ranked
