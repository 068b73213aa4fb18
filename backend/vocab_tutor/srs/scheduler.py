"""Spaced-repetition scheduler for review cards.

Pure function of (state, grade, now). It never reads the clock and never
mutates its input; callers inject ``now`` and persist the returned state.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Literal


Grade = Literal["again", "hard", "good"]

GRADES: tuple[str, ...] = ("again", "hard", "good")

DEFAULT_EASE = 2.5
MIN_EASE = 1.3
MAX_EASE = 3.2
# A lapse can never leave ease at the ceiling reachable by successes.
MAX_EASE_AFTER_LAPSE = 3.0

LAPSE_EASE_PENALTY = 0.2
EASE_STEP = 0.05

FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 3
LAPSE_INTERVAL_DAYS = 1

# Accepted keys per field: storage (snake_case) and API (camelCase) names.
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "ease": ("ease",),
    "interval_days": ("interval_days", "intervalDays"),
    "repetitions": ("repetitions",),
    "due_at": ("due_at", "dueAt"),
    "total_success": ("total_success", "totalSuccess"),
    "total_fail": ("total_fail", "totalFail"),
}


class InvalidGradeError(ValueError):
    """Raised when a grade is not one of ``again``, ``hard`` or ``good``."""

    def __init__(self, grade: Any):
        self.grade = grade
        super().__init__(f"Invalid grade: {grade!r} (expected one of {', '.join(GRADES)})")


@dataclass(frozen=True)
class CardState:
    ease: float = DEFAULT_EASE
    interval_days: int = 0
    repetitions: int = 0
    due_at: datetime | None = None
    total_success: int = 0
    total_fail: int = 0

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "CardState":
        """Build a fully populated state from a loosely typed record.

        Missing or null fields fall back to the defaults of a new card. Counts
        stored as floats (e.g. a numeric column read back as 2.7) are rounded
        half up, not truncated.
        """
        values: dict[str, Any] = {}
        for field_name, keys in _FIELD_ALIASES.items():
            for key in keys:
                if record.get(key) is not None:
                    values[field_name] = record[key]
                    break

        return cls(
            ease=float(values.get("ease", DEFAULT_EASE)),
            interval_days=round_half_up(float(values.get("interval_days", 0))),
            repetitions=round_half_up(float(values.get("repetitions", 0))),
            due_at=values.get("due_at"),
            total_success=round_half_up(float(values.get("total_success", 0))),
            total_fail=round_half_up(float(values.get("total_fail", 0))),
        )


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def validate_grade(grade: Any) -> Grade:
    if not isinstance(grade, str) or grade not in GRADES:
        raise InvalidGradeError(grade)
    return grade  # type: ignore[return-value]


def compute_next_state(
    current: CardState | Mapping[str, Any] | None,
    grade: Grade,
    now: datetime,
) -> CardState:
    """Compute a card's next learning state after one graded review.

    Rules:
    - again: ease - 0.2 (clamped to [1.3, 3.0]), repetitions = 0,
      interval = 1 day, total_fail + 1
    - hard/good: ease -/+ 0.05 (clamped to [1.3, 3.2]), repetitions + 1,
      interval = 1 on the first success, 3 on the second, otherwise
      round(previous interval * new ease); total_success + 1
    - due_at = now + interval days (time of day kept)

    Args:
        current: Current state, or a raw record with optional fields
        grade: The reviewer's grade
        now: Review timestamp

    Returns:
        A new CardState with every field recomputed

    Raises:
        InvalidGradeError: If grade is not one of again/hard/good
    """
    grade = validate_grade(grade)

    if current is None:
        state = CardState()
    elif isinstance(current, CardState):
        state = current
    else:
        state = CardState.from_record(current)

    if grade == "again":
        ease = clamp(state.ease - LAPSE_EASE_PENALTY, MIN_EASE, MAX_EASE_AFTER_LAPSE)
        repetitions = 0
        interval_days = LAPSE_INTERVAL_DAYS
        total_success = state.total_success
        total_fail = state.total_fail + 1
    else:
        step = EASE_STEP if grade == "good" else -EASE_STEP
        ease = clamp(state.ease + step, MIN_EASE, MAX_EASE)
        repetitions = state.repetitions + 1
        if repetitions == 1:
            interval_days = FIRST_INTERVAL_DAYS
        elif repetitions == 2:
            interval_days = SECOND_INTERVAL_DAYS
        else:
            # Previous interval grown by the freshly updated ease.
            interval_days = round_half_up(state.interval_days * ease)
        total_success = state.total_success + 1
        total_fail = state.total_fail

    return CardState(
        ease=ease,
        interval_days=interval_days,
        repetitions=repetitions,
        due_at=now + timedelta(days=interval_days),
        total_success=total_success,
        total_fail=total_fail,
    )
