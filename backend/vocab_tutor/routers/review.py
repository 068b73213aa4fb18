"""Review session API router."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Header, HTTPException, Query, status

from vocab_tutor.config import get_app_settings
from vocab_tutor.models import (
    DueCountResponse,
    ReviewCard,
    ReviewCardListResponse,
    ReviewCardResponse,
    ReviewRequest,
    ReviewResponse,
    WordLibraryResponse,
    WordStatsResponse,
)
from vocab_tutor.repositories import ReviewCardNotFoundError, get_card_repository
from vocab_tutor.srs.mastery import classify_mastery
from vocab_tutor.srs.scheduler import Grade, compute_next_state
from vocab_tutor.srs.time import utc_datetime_to_iso_z, utc_now

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/review", tags=["review"])


def apply_review_grade(card: ReviewCard, grade: Grade, now: datetime) -> ReviewCard:
    """Apply a review grade to a card and update its learning state.

    Updates:
    - Learning state (ease, intervalDays, repetitions, dueAt, totals)
    - Grade tracking (lastGrade, lastReviewedAt)

    Args:
        card: The ReviewCard to update (mutated in place)
        grade: The grade to apply
        now: Review timestamp

    Returns:
        The updated card (same reference)

    Raises:
        InvalidGradeError: If grade is not again/hard/good
    """
    next_state = compute_next_state(card.to_state(), grade, now)
    card.apply_state(next_state)
    card.lastGrade = grade
    card.lastReviewedAt = utc_datetime_to_iso_z(now)
    return card


@router.get("/due", response_model=ReviewCardListResponse)
async def list_due_cards(
    lessonId: str | None = Query(None, description="Only cards from this lesson"),
    x_user_id: str = Header(...),
) -> ReviewCardListResponse:
    """List the student's cards that are due now, earliest first."""
    card_repo = get_card_repository()
    now_iso = utc_datetime_to_iso_z(utc_now())
    limit = get_app_settings().review_batch_limit

    cards = card_repo.list_due(x_user_id, now_iso, lesson_id=lessonId, limit=limit)
    return ReviewCardListResponse(
        cards=[ReviewCardResponse(**card.model_dump()) for card in cards],
        count=len(cards),
    )


@router.get("/count", response_model=DueCountResponse)
async def count_due_cards(x_user_id: str = Header(...)) -> DueCountResponse:
    """Return how many cards are due now and when the next one is due."""
    card_repo = get_card_repository()
    now_iso = utc_datetime_to_iso_z(utc_now())

    return DueCountResponse(
        dueCount=card_repo.count_due(x_user_id, now_iso),
        nextDueAt=card_repo.get_next_due_at(x_user_id),
    )


@router.post("/cards/{card_id}", response_model=ReviewResponse)
async def review_card(
    card_id: str, review: ReviewRequest, x_user_id: str = Header(...)
) -> ReviewResponse:
    """Grade a card and schedule its next review."""
    card_repo = get_card_repository()
    try:
        card = card_repo.get_by_id(card_id, x_user_id)
    except ReviewCardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Review card with ID {card_id} not found",
        )

    # ReviewRequest has already restricted grade to again/hard/good.
    apply_review_grade(card, review.grade, utc_now())

    updated = card_repo.replace(card)

    logger.info(
        "Review graded: student=%s, card=%s, grade=%s, interval_days=%d, new_due_at=%s",
        x_user_id,
        card_id,
        review.grade,
        updated.intervalDays,
        updated.dueAt,
    )

    return ReviewResponse(
        card=ReviewCardResponse(**updated.model_dump()),
        mastery=classify_mastery(updated.to_state()),
    )


@router.get("/words", response_model=WordLibraryResponse)
async def list_words(x_user_id: str = Header(...)) -> WordLibraryResponse:
    """List all of the student's words with review stats and mastery level."""
    card_repo = get_card_repository()
    cards = card_repo.list_by_student(x_user_id)
    words = [WordStatsResponse.from_card(card) for card in cards]
    return WordLibraryResponse(words=words, count=len(words))


@router.delete("/words/{word_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_word(word_id: str, x_user_id: str = Header(...)) -> None:
    """Remove a word from the student's reviews."""
    card_repo = get_card_repository()
    try:
        card_repo.delete_by_word(word_id, x_user_id)
    except ReviewCardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No review card for lesson word {word_id}",
        )
