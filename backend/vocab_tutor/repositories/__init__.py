"""Repositories module for data access layer."""

from .lesson_repository import (
    LessonRepository,
    LessonNotFoundError,
    get_lesson_repository,
)
from .word_repository import (
    LessonWordRepository,
    LessonWordNotFoundError,
    get_word_repository,
)
from .card_repository import (
    ReviewCardRepository,
    ReviewCardNotFoundError,
    get_card_repository,
)

__all__ = [
    "LessonRepository",
    "LessonNotFoundError",
    "get_lesson_repository",
    "LessonWordRepository",
    "LessonWordNotFoundError",
    "get_word_repository",
    "ReviewCardRepository",
    "ReviewCardNotFoundError",
    "get_card_repository",
]
