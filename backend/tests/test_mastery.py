"""Unit tests for mastery classification."""

import pytest

from vocab_tutor.srs.mastery import classify_mastery, success_ratio
from vocab_tutor.srs.scheduler import CardState


def test_unreviewed_word_is_new():
    assert classify_mastery(CardState()) == "new"
    assert success_ratio(CardState()) is None


@pytest.mark.parametrize(
    "interval_days,total_success,total_fail,expected",
    [
        (21, 8, 2, "mastered"),
        (60, 10, 0, "mastered"),
        (21, 7, 3, "learning"),  # long interval but ratio below 0.8
        (20, 10, 0, "learning"),  # high ratio but interval below 21
        (7, 6, 4, "learning"),
        (6, 10, 0, "struggling"),
        (30, 5, 5, "struggling"),
        (1, 0, 1, "struggling"),
    ],
)
def test_levels(interval_days, total_success, total_fail, expected):
    state = CardState(interval_days=interval_days, total_success=total_success, total_fail=total_fail)
    assert classify_mastery(state) == expected


def test_success_ratio():
    assert success_ratio(CardState(total_success=3, total_fail=1)) == 0.75
