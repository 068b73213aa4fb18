"""Review card models for API requests and responses."""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from vocab_tutor.models.word import generate_uuid, now_iso
from vocab_tutor.srs.mastery import MasteryLevel, classify_mastery
from vocab_tutor.srs.scheduler import DEFAULT_EASE, CardState, Grade
from vocab_tutor.srs.time import parse_iso_z, utc_datetime_to_iso_z, utc_now_iso


# Learning-state fields that may be stored as null and fall back to defaults.
_STATE_FIELDS = ("ease", "intervalDays", "repetitions", "dueAt", "totalSuccess", "totalFail")


class ReviewCard(BaseModel):
    """Full review card model as stored in the database."""

    id: str = Field(default_factory=generate_uuid, description="Unique identifier")
    lessonWordId: str = Field(..., description="Lesson word this card reviews")
    lessonId: str = Field(..., description="Lesson the word was logged in")
    studentId: str = Field(..., description="Owner student ID (partition key)")
    term: str = Field(..., description="Prompt shown to the student")
    translation: str | None = Field(None, description="Expected answer")
    note: str | None = Field(None, description="Teacher's note")
    createdAt: str = Field(default_factory=now_iso, description="Creation timestamp")
    updatedAt: str = Field(default_factory=now_iso, description="Last update timestamp")

    # Learning state (persisted)
    ease: float = Field(DEFAULT_EASE, description="Interval growth multiplier (1.3-3.2)")
    intervalDays: int = Field(0, description="Days until next due date")
    repetitions: int = Field(0, description="Consecutive successful reviews since last lapse")
    dueAt: str = Field(default_factory=utc_now_iso, description="Next due timestamp (UTC ISO Z)")
    totalSuccess: int = Field(0, description="Lifetime count of successful reviews")
    totalFail: int = Field(0, description="Lifetime count of failed reviews")
    lastGrade: Grade | None = Field(None, description="Most recent grade applied to this card")
    lastReviewedAt: str | None = Field(None, description="Last review timestamp (UTC ISO Z)")

    @model_validator(mode="before")
    @classmethod
    def _drop_null_state(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if not (k in _STATE_FIELDS and v is None)}
        return data

    def to_state(self) -> CardState:
        """Return the card's learning state."""
        return CardState(
            ease=self.ease,
            interval_days=self.intervalDays,
            repetitions=self.repetitions,
            due_at=parse_iso_z(self.dueAt),
            total_success=self.totalSuccess,
            total_fail=self.totalFail,
        )

    def apply_state(self, state: CardState) -> None:
        """Copy a scheduler result onto the card."""
        self.ease = state.ease
        self.intervalDays = state.interval_days
        self.repetitions = state.repetitions
        if state.due_at is not None:
            self.dueAt = utc_datetime_to_iso_z(state.due_at)
        self.totalSuccess = state.total_success
        self.totalFail = state.total_fail


class ReviewCardResponse(BaseModel):
    """Review card response model returned by API."""

    id: str
    lessonWordId: str
    lessonId: str
    studentId: str
    term: str
    translation: str | None
    note: str | None
    createdAt: str
    updatedAt: str

    ease: float
    intervalDays: int
    repetitions: int
    dueAt: str
    totalSuccess: int
    totalFail: int
    lastGrade: Grade | None
    lastReviewedAt: str | None


class ReviewCardListResponse(BaseModel):
    """Response containing a list of review cards."""

    cards: list[ReviewCardResponse]
    count: int


class DueCountResponse(BaseModel):
    """Response for GET /review/count."""

    dueCount: int = Field(..., description="Number of cards due now")
    nextDueAt: str | None = Field(None, description="Earliest dueAt across all of the student's cards")


class ReviewRequest(BaseModel):
    """Request body for grading a card."""

    grade: Grade = Field(..., description="Recall quality: again, hard or good")


class ReviewResponse(BaseModel):
    """Response for POST /review/cards/{card_id}."""

    card: ReviewCardResponse
    mastery: MasteryLevel


class WordStatsResponse(BaseModel):
    """One entry of the student's word library."""

    cardId: str
    lessonWordId: str
    lessonId: str
    term: str
    translation: str | None
    note: str | None
    ease: float
    intervalDays: int
    repetitions: int
    dueAt: str
    totalSuccess: int
    totalFail: int
    mastery: MasteryLevel
    lessonTitle: str | None = None

    @classmethod
    def from_card(cls, card: ReviewCard, lesson_title: str | None = None) -> "WordStatsResponse":
        """Build a library entry from a card, classifying its mastery."""
        return cls(
            cardId=card.id,
            lessonWordId=card.lessonWordId,
            lessonId=card.lessonId,
            term=card.term,
            translation=card.translation,
            note=card.note,
            ease=card.ease,
            intervalDays=card.intervalDays,
            repetitions=card.repetitions,
            dueAt=card.dueAt,
            totalSuccess=card.totalSuccess,
            totalFail=card.totalFail,
            mastery=classify_mastery(card.to_state()),
            lessonTitle=lesson_title,
        )


class WordLibraryResponse(BaseModel):
    """A list of word library entries."""

    words: list[WordStatsResponse]
    count: int
