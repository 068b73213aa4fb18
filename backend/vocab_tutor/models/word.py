"""Lesson word models for API requests and responses."""

from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from vocab_tutor.srs.time import utc_now_iso


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid4())


def now_iso() -> str:
    """Get current UTC timestamp in ISO format.

    Second precision like dueAt, so stored timestamps compare correctly as strings.
    """
    return utc_now_iso()


class LessonWordBase(BaseModel):
    """Base lesson word model with common fields."""

    term: str = Field(..., min_length=1, max_length=200, description="Word or phrase the student got wrong")
    translation: str | None = Field(None, max_length=500, description="Translation of the term")
    note: str | None = Field(None, max_length=2000, description="Teacher's note on usage or context")

    @field_validator("term")
    @classmethod
    def _strip_term(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("term must not be blank")
        return value

    @field_validator("translation", "note")
    @classmethod
    def _strip_optional(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class LessonWordCreate(LessonWordBase):
    """Model for logging a new word during a lesson."""

    studentId: str = Field(..., min_length=1, description="Student who receives the review card")


class LessonWord(LessonWordBase):
    """Full lesson word model as stored in the database."""

    id: str = Field(default_factory=generate_uuid, description="Unique identifier")
    lessonId: str = Field(..., description="Parent lesson ID (partition key)")
    studentId: str = Field(..., description="Student the word was logged for")
    teacherId: str = Field(..., description="Teacher who logged the word")
    createdAt: str = Field(default_factory=now_iso, description="Creation timestamp")

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174001",
                "lessonId": "123e4567-e89b-12d3-a456-426614174000",
                "studentId": "student-001",
                "teacherId": "teacher-001",
                "term": "der Schlüssel",
                "translation": "the key",
                "note": "Masculine; plural die Schlüssel",
                "createdAt": "2025-01-01T00:00:00Z",
            }
        }


class LessonWordResponse(LessonWordBase):
    """Lesson word response model returned by API."""

    id: str
    lessonId: str
    studentId: str
    teacherId: str
    createdAt: str


class LessonWordListResponse(BaseModel):
    """Response containing the words logged in a lesson."""

    words: list[LessonWordResponse]
    count: int
