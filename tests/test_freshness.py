"""Tests for news/not-news classification."""

from datetime import date

from newsthreads.analysis.freshness import date_distance, is_news, mean_distance
from newsthreads.models import DateTriple

TODAY = date(2024, 1, 15)


def test_date_distance():
    assert date_distance(DateTriple(15, 1, 2024), TODAY) == 0
    assert date_distance(DateTriple(10, 1, 2024), TODAY) == 5
    assert date_distance(DateTriple(15, 2, 2024), TODAY) == 30
    assert date_distance(DateTriple(15, 1, 2023), TODAY) == 365


def test_unknown_year_ignores_year_term():
    assert date_distance(DateTriple(12, 1, 0), TODAY) == 3


def test_today_is_news():
    for days in (1, 2, 30, 1000):
        assert is_news([DateTriple(15, 1, 2024)], TODAY, days)


def test_no_dates_is_not_news():
    for days in (0, 1, 10**9):
        assert not is_news([], TODAY, days)
    assert mean_distance([], TODAY) is None


def test_mean_distance_threshold_is_strict():
    dates = [DateTriple(15, 1, 2024), DateTriple(5, 1, 2024)]
    assert mean_distance(dates, TODAY) == 5.0
    assert not is_news(dates, TODAY, 5)
    assert is_news(dates, TODAY, 6)


def test_old_article_not_news():
    assert not is_news([DateTriple(1, 6, 2023)], TODAY, 30)
