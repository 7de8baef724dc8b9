"""Tests for date triple extraction."""

import pytest

from newsthreads.analysis.dates import DateExtractor
from newsthreads.models import DateTriple, Language


@pytest.fixture
def extractor(resources):
    return DateExtractor(resources, current_year=2024)


def test_day_month_year(extractor):
    assert extractor.find_dates(["15", "January", "2024"], Language.ENGLISH) == [DateTriple(15, 1, 2024)]


def test_month_day_without_year(extractor):
    dates = extractor.find_dates("Published March 3 by staff".split(), Language.ENGLISH)
    assert dates == [DateTriple(3, 3, 0)]
    assert not dates[0].has_year


def test_no_month_no_dates(extractor):
    assert extractor.find_dates("nothing to see 15 2024 here".split(), Language.ENGLISH) == []


def test_month_at_boundaries(extractor):
    assert extractor.find_dates(["Jan", "1"], Language.ENGLISH) == [DateTriple(1, 1, 0)]
    assert extractor.find_dates(["on", "1", "Feb"], Language.ENGLISH) == [DateTriple(1, 2, 0)]
    assert extractor.find_dates(["June"], Language.ENGLISH) == []


def test_consumed_window_is_skipped(extractor):
    # Without skipping, the second "May" would also match "2024 May 5"
    dates = extractor.find_dates(["1", "May", "2024", "May", "5"], Language.ENGLISH)
    assert dates == [DateTriple(1, 5, 2024)]


def test_duplicates_kept_in_order(extractor):
    tokens = "on 2 March 2024 and again 2 March 2024 then 9 April".split()
    assert extractor.find_dates(tokens, Language.ENGLISH) == [
        DateTriple(2, 3, 2024), DateTriple(2, 3, 2024), DateTriple(9, 4, 0),
    ]


def test_idempotent(extractor):
    tokens = "Posted 15 January 2024 updated January 16".split()
    assert extractor.find_dates(tokens, Language.ENGLISH) == extractor.find_dates(tokens, Language.ENGLISH)


def test_implausible_year_falls_back_to_wildcard(extractor):
    assert extractor.find_dates(["15", "January", "1999"], Language.ENGLISH) == [DateTriple(15, 1, 0)]


def test_plausible_year(extractor):
    assert extractor.plausible_year("2024") == 2024
    assert extractor.plausible_year("2025") == 2025
    assert extractor.plausible_year("24") == 2024
    assert extractor.plausible_year("23rd") == 2023
    assert extractor.plausible_year("2030") is None
    assert extractor.plausible_year("") is None
    assert extractor.plausible_year("year") is None


def test_russian_masks(extractor):
    assert extractor.find_dates("5 мая 2024 года".split(), Language.RUSSIAN) == [DateTriple(5, 5, 2024)]


def test_unknown_language(extractor):
    assert extractor.find_dates(["15", "January", "2024"], Language.UNKNOWN) == []


def test_invalid_mask_rejected(resources):
    resources[Language.ENGLISH].date_masks = ["DMQ"]
    with pytest.raises(ValueError):
        DateExtractor(resources, current_year=2024)
