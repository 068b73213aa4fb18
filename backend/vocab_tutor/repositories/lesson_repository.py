"""Repository for Lesson CRUD operations."""

from azure.cosmos import ContainerProxy
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from vocab_tutor.db import get_lessons_container
from vocab_tutor.models import Lesson, LessonCreate, default_lesson_title
from vocab_tutor.models.word import now_iso


class LessonNotFoundError(Exception):
    """Raised when a lesson is not found."""

    pass


class LessonRepository:
    """Repository for Lesson database operations.

    Lessons are partitioned by student, so both the student's own list and a
    teacher's view of one student are single-partition queries.
    """

    def __init__(self, container: ContainerProxy | None = None):
        """Initialize the repository with an optional container."""
        self._container = container

    @property
    def container(self) -> ContainerProxy:
        """Get the container, lazily initializing if needed."""
        if self._container is None:
            self._container = get_lessons_container()
        return self._container

    def create(self, teacher_id: str, lesson_create: LessonCreate) -> Lesson:
        """Start a new lesson, titled "Lesson <date>" when no title is given."""
        started_at = now_iso()
        lesson = Lesson(
            studentId=lesson_create.studentId,
            teacherId=teacher_id,
            title=lesson_create.title or default_lesson_title(started_at),
            startedAt=started_at,
        )
        created_item = self.container.create_item(body=lesson.model_dump())
        return Lesson(**created_item)

    def get_by_id(self, lesson_id: str, student_id: str) -> Lesson:
        """Get a lesson by ID and student ID."""
        try:
            item = self.container.read_item(item=lesson_id, partition_key=student_id)
            return Lesson(**item)
        except CosmosResourceNotFoundError:
            raise LessonNotFoundError(f"Lesson with ID {lesson_id} not found")

    def list_for_student(self, student_id: str, teacher_id: str | None = None) -> list[Lesson]:
        """List a student's lessons, newest first.

        Args:
            student_id: The student ID
            teacher_id: Only lessons given by this teacher

        Returns:
            Lessons ordered by startedAt descending
        """
        query = "SELECT * FROM c WHERE c.studentId = @studentId"
        parameters = [{"name": "@studentId", "value": student_id}]
        if teacher_id is not None:
            query += " AND c.teacherId = @teacherId"
            parameters.append({"name": "@teacherId", "value": teacher_id})
        query += " ORDER BY c.startedAt DESC"

        items = list(
            self.container.query_items(
                query=query,
                parameters=parameters,
                partition_key=student_id,
            )
        )
        return [Lesson(**item) for item in items]


# Singleton instance
_lesson_repository: LessonRepository | None = None


def get_lesson_repository() -> LessonRepository:
    """Get the lesson repository singleton."""
    global _lesson_repository
    if _lesson_repository is None:
        _lesson_repository = LessonRepository()
    return _lesson_repository
