"""Repository for review cards (the card store)."""

from azure.cosmos import ContainerProxy
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from vocab_tutor.db import get_cards_container
from vocab_tutor.models import LessonWord, ReviewCard
from vocab_tutor.models.word import now_iso


class ReviewCardNotFoundError(Exception):
    """Raised when a review card is not found."""

    pass


class ReviewCardRepository:
    """Repository for ReviewCard database operations.

    Cards are partitioned by student. Writes are full-document replaces,
    so concurrent reviews of the same card resolve as last write wins.
    """

    def __init__(self, container: ContainerProxy | None = None):
        """Initialize the repository with an optional container."""
        self._container = container

    @property
    def container(self) -> ContainerProxy:
        """Get the container, lazily initializing if needed."""
        if self._container is None:
            self._container = get_cards_container()
        return self._container

    def _query(self, query: str, parameters: list[dict], student_id: str) -> list:
        return list(
            self.container.query_items(
                query=query,
                parameters=parameters,
                partition_key=student_id,
            )
        )

    def get_by_id(self, card_id: str, student_id: str) -> ReviewCard:
        """Get a card by ID and student ID."""
        try:
            item = self.container.read_item(item=card_id, partition_key=student_id)
            return ReviewCard(**item)
        except CosmosResourceNotFoundError:
            raise ReviewCardNotFoundError(f"Review card with ID {card_id} not found")

    def create_for_word(self, word: LessonWord) -> ReviewCard:
        """Create the student's review card for a newly logged word, due now."""
        card = ReviewCard(
            lessonWordId=word.id,
            lessonId=word.lessonId,
            studentId=word.studentId,
            term=word.term,
            translation=word.translation,
            note=word.note,
        )
        created_item = self.container.create_item(body=card.model_dump())
        return ReviewCard(**created_item)

    def list_by_student(self, student_id: str) -> list[ReviewCard]:
        """List all of a student's cards, earliest due first."""
        query = "SELECT * FROM c WHERE c.studentId = @studentId ORDER BY c.dueAt ASC"
        parameters = [{"name": "@studentId", "value": student_id}]
        return [ReviewCard(**item) for item in self._query(query, parameters, student_id)]

    def list_due(
        self,
        student_id: str,
        now_iso: str,
        lesson_id: str | None = None,
        limit: int = 100,
    ) -> list[ReviewCard]:
        """List cards due at or before now_iso, earliest due first.

        Args:
            student_id: The student ID
            now_iso: Current timestamp in ISO format
            lesson_id: Restrict to cards of one lesson
            limit: Maximum number of cards returned

        Returns:
            Due cards ordered by dueAt ascending
        """
        filters = "c.studentId = @studentId AND c.dueAt <= @nowIso"
        parameters = [
            {"name": "@limit", "value": limit},
            {"name": "@studentId", "value": student_id},
            {"name": "@nowIso", "value": now_iso},
        ]
        if lesson_id is not None:
            filters += " AND c.lessonId = @lessonId"
            parameters.append({"name": "@lessonId", "value": lesson_id})

        query = f"SELECT TOP @limit * FROM c WHERE {filters} ORDER BY c.dueAt ASC"
        return [ReviewCard(**item) for item in self._query(query, parameters, student_id)]

    def count_due(self, student_id: str, now_iso: str) -> int:
        """Count the number of cards currently due for a student."""
        query = (
            "SELECT VALUE COUNT(1) FROM c "
            "WHERE c.studentId = @studentId AND c.dueAt <= @nowIso"
        )
        parameters = [
            {"name": "@studentId", "value": student_id},
            {"name": "@nowIso", "value": now_iso},
        ]
        result = self._query(query, parameters, student_id)
        return result[0] if result else 0

    def get_next_due_at(self, student_id: str) -> str | None:
        """Return the earliest dueAt across the student's cards (or None if no cards)."""
        query = (
            "SELECT TOP 1 VALUE c.dueAt FROM c "
            "WHERE c.studentId = @studentId AND IS_DEFINED(c.dueAt) "
            "ORDER BY c.dueAt ASC"
        )
        parameters = [{"name": "@studentId", "value": student_id}]
        items = self._query(query, parameters, student_id)
        if not items:
            return None
        return items[0]

    def replace(self, card: ReviewCard) -> ReviewCard:
        """Replace (persist) a full card document."""
        card.updatedAt = now_iso()
        updated_item = self.container.replace_item(
            item=card.id,
            body=card.model_dump(),
        )
        return ReviewCard(**updated_item)

    def delete_by_word(self, word_id: str, student_id: str) -> int:
        """Delete the student's cards for a lesson word. Returns count of deleted cards.

        The lesson word itself is left in place; it belongs to the teacher's lesson.
        """
        query = "SELECT c.id FROM c WHERE c.studentId = @studentId AND c.lessonWordId = @wordId"
        parameters = [
            {"name": "@studentId", "value": student_id},
            {"name": "@wordId", "value": word_id},
        ]
        items = self._query(query, parameters, student_id)
        if not items:
            raise ReviewCardNotFoundError(f"No review card for lesson word {word_id}")
        for item in items:
            self.container.delete_item(item=item["id"], partition_key=student_id)
        return len(items)


# Singleton instance
_card_repository: ReviewCardRepository | None = None


def get_card_repository() -> ReviewCardRepository:
    """Get the review card repository singleton."""
    global _card_repository
    if _card_repository is None:
        _card_repository = ReviewCardRepository()
    return _card_repository
