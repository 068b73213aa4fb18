"""Repository for lesson words."""

from azure.cosmos import ContainerProxy
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from vocab_tutor.db import get_words_container
from vocab_tutor.models import LessonWord, LessonWordCreate


class LessonWordNotFoundError(Exception):
    """Raised when a lesson word is not found."""

    pass


class LessonWordRepository:
    """Repository for LessonWord database operations."""

    def __init__(self, container: ContainerProxy | None = None):
        """Initialize the repository with an optional container."""
        self._container = container

    @property
    def container(self) -> ContainerProxy:
        """Get the container, lazily initializing if needed."""
        if self._container is None:
            self._container = get_words_container()
        return self._container

    def create(self, lesson_id: str, teacher_id: str, word_create: LessonWordCreate) -> LessonWord:
        """Log a new word in a lesson."""
        word = LessonWord(
            lessonId=lesson_id,
            teacherId=teacher_id,
            studentId=word_create.studentId,
            term=word_create.term,
            translation=word_create.translation,
            note=word_create.note,
        )
        created_item = self.container.create_item(body=word.model_dump())
        return LessonWord(**created_item)

    def get_by_id(self, word_id: str, lesson_id: str) -> LessonWord:
        """Get a lesson word by ID."""
        try:
            item = self.container.read_item(item=word_id, partition_key=lesson_id)
            return LessonWord(**item)
        except CosmosResourceNotFoundError:
            raise LessonWordNotFoundError(f"Lesson word with ID {word_id} not found")

    def list_by_lesson(self, lesson_id: str) -> list[LessonWord]:
        """List the words of a lesson, newest first."""
        query = "SELECT * FROM c WHERE c.lessonId = @lessonId ORDER BY c.createdAt DESC"
        parameters = [{"name": "@lessonId", "value": lesson_id}]

        items = list(
            self.container.query_items(
                query=query,
                parameters=parameters,
                partition_key=lesson_id,
            )
        )
        return [LessonWord(**item) for item in items]

    def count_by_lesson(self, lesson_id: str) -> int:
        """Count the words logged in a lesson."""
        query = "SELECT VALUE COUNT(1) FROM c WHERE c.lessonId = @lessonId"
        parameters = [{"name": "@lessonId", "value": lesson_id}]

        items = list(
            self.container.query_items(
                query=query,
                parameters=parameters,
                partition_key=lesson_id,
            )
        )
        return items[0] if items else 0


# Singleton instance
_word_repository: LessonWordRepository | None = None


def get_word_repository() -> LessonWordRepository:
    """Get the lesson word repository singleton."""
    global _word_repository
    if _word_repository is None:
        _word_repository = LessonWordRepository()
    return _word_repository
