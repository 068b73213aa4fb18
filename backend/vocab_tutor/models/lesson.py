"""Lesson models for API requests and responses."""

from pydantic import BaseModel, Field, field_validator

from vocab_tutor.models.word import generate_uuid, now_iso
from vocab_tutor.srs.time import parse_iso_z


class LessonCreate(BaseModel):
    """Model for starting a lesson with a student."""

    studentId: str = Field(..., min_length=1, description="Student taking the lesson")
    title: str | None = Field(None, max_length=200, description="Optional title; defaults to the lesson date")

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class Lesson(BaseModel):
    """Full lesson model as stored in the database."""

    id: str = Field(default_factory=generate_uuid, description="Unique identifier")
    studentId: str = Field(..., description="Student taking the lesson (partition key)")
    teacherId: str = Field(..., description="Teacher giving the lesson")
    title: str = Field(..., description="Lesson title")
    startedAt: str = Field(default_factory=now_iso, description="Start timestamp (UTC ISO Z)")

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "studentId": "student-001",
                "teacherId": "teacher-001",
                "title": "Lesson 2025-01-01",
                "startedAt": "2025-01-01T10:00:00Z",
            }
        }


def default_lesson_title(started_at: str) -> str:
    """Title used when the teacher gives none: "Lesson <date>"."""
    return f"Lesson {parse_iso_z(started_at).date().isoformat()}"


class LessonResponse(BaseModel):
    """Lesson response model returned by API."""

    id: str
    studentId: str
    teacherId: str
    title: str
    startedAt: str
    wordCount: int = Field(0, description="Number of words logged in the lesson")


class LessonListResponse(BaseModel):
    """Response containing a list of lessons."""

    lessons: list[LessonResponse]
    count: int
