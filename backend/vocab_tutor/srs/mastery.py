"""Mastery classification for a student's words.

A word's level is derived from its learning state only:
- no reviews yet → "new"
- interval >= 21 days and >= 80% successful reviews → "mastered"
- interval >= 7 days and >= 60% successful reviews → "learning"
- otherwise → "struggling"
"""

from __future__ import annotations

from typing import Literal

from .scheduler import CardState


MasteryLevel = Literal["new", "learning", "mastered", "struggling"]

MASTERED_MIN_INTERVAL_DAYS = 21
MASTERED_MIN_SUCCESS_RATIO = 0.8
LEARNING_MIN_INTERVAL_DAYS = 7
LEARNING_MIN_SUCCESS_RATIO = 0.6


def success_ratio(state: CardState) -> float | None:
    total = state.total_success + state.total_fail
    if total == 0:
        return None
    return state.total_success / total


def classify_mastery(state: CardState) -> MasteryLevel:
    ratio = success_ratio(state)
    if ratio is None:
        return "new"
    if state.interval_days >= MASTERED_MIN_INTERVAL_DAYS and ratio >= MASTERED_MIN_SUCCESS_RATIO:
        return "mastered"
    if state.interval_days >= LEARNING_MIN_INTERVAL_DAYS and ratio >= LEARNING_MIN_SUCCESS_RATIO:
        return "learning"
    return "struggling"
