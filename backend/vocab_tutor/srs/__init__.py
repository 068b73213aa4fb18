"""SRS helpers (review scheduler, mastery levels, UTC time)."""

from .scheduler import (
    GRADES,
    CardState,
    Grade,
    InvalidGradeError,
    compute_next_state,
)
from .mastery import MasteryLevel, classify_mastery, success_ratio
from .time import (
    utc_now,
    utc_now_iso,
    utc_datetime_to_iso_z,
    parse_iso_z,
)

__all__ = [
    "GRADES",
    "CardState",
    "Grade",
    "InvalidGradeError",
    "compute_next_state",
    "MasteryLevel",
    "classify_mastery",
    "success_ratio",
    "utc_now",
    "utc_now_iso",
    "utc_datetime_to_iso_z",
    "parse_iso_z",
]
