"""Models module for Pydantic schemas."""

from .word import (
    LessonWord,
    LessonWordBase,
    LessonWordCreate,
    LessonWordResponse,
    LessonWordListResponse,
)
from .lesson import (
    Lesson,
    LessonCreate,
    LessonResponse,
    LessonListResponse,
    default_lesson_title,
)
from .card import (
    ReviewCard,
    ReviewCardResponse,
    ReviewCardListResponse,
    DueCountResponse,
    ReviewRequest,
    ReviewResponse,
    WordStatsResponse,
    WordLibraryResponse,
)

__all__ = [
    "Lesson",
    "LessonCreate",
    "LessonResponse",
    "LessonListResponse",
    "default_lesson_title",
    "LessonWord",
    "LessonWordBase",
    "LessonWordCreate",
    "LessonWordResponse",
    "LessonWordListResponse",
    "ReviewCard",
    "ReviewCardResponse",
    "ReviewCardListResponse",
    "DueCountResponse",
    "ReviewRequest",
    "ReviewResponse",
    "WordStatsResponse",
    "WordLibraryResponse",
]
