"""Lessons API router."""

import logging

from fastapi import APIRouter, Header, HTTPException, Query, status

from vocab_tutor.models import (
    LessonCreate,
    LessonListResponse,
    LessonResponse,
    LessonWordCreate,
    LessonWordListResponse,
    LessonWordResponse,
    WordLibraryResponse,
    WordStatsResponse,
)
from vocab_tutor.repositories import (
    LessonNotFoundError,
    LessonWordNotFoundError,
    get_card_repository,
    get_lesson_repository,
    get_word_repository,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/lessons", tags=["lessons"])


@router.post("", response_model=LessonResponse, status_code=status.HTTP_201_CREATED)
async def create_lesson(lesson_create: LessonCreate, x_user_id: str = Header(...)) -> LessonResponse:
    """Start a lesson with a student; the caller is the teacher."""
    lesson_repo = get_lesson_repository()
    lesson = lesson_repo.create(x_user_id, lesson_create)
    logger.info(
        "Lesson started: lesson=%s, teacher=%s, student=%s",
        lesson.id,
        x_user_id,
        lesson.studentId,
    )
    return LessonResponse(**lesson.model_dump(), wordCount=0)


@router.get("", response_model=LessonListResponse)
async def list_lessons(
    studentId: str | None = Query(None, description="Student whose lessons to list"),
    x_user_id: str = Header(...),
) -> LessonListResponse:
    """List lessons with their word counts.

    Without studentId (or with the caller's own ID) this is the caller's
    lessons as a student. With another student's ID, only the lessons the
    caller gave that student are returned.
    """
    lesson_repo = get_lesson_repository()
    word_repo = get_word_repository()

    if studentId is None or studentId == x_user_id:
        lessons = lesson_repo.list_for_student(x_user_id)
    else:
        lessons = lesson_repo.list_for_student(studentId, teacher_id=x_user_id)

    items = [
        LessonResponse(**lesson.model_dump(), wordCount=word_repo.count_by_lesson(lesson.id))
        for lesson in lessons
    ]
    return LessonListResponse(lessons=items, count=len(items))


@router.get("/students/{student_id}/words", response_model=WordLibraryResponse)
async def list_student_words(student_id: str, x_user_id: str = Header(...)) -> WordLibraryResponse:
    """List a student's words from the caller's lessons with stats and mastery."""
    lesson_repo = get_lesson_repository()
    card_repo = get_card_repository()

    titles = {
        lesson.id: lesson.title
        for lesson in lesson_repo.list_for_student(student_id, teacher_id=x_user_id)
    }
    words = [
        WordStatsResponse.from_card(card, lesson_title=titles[card.lessonId])
        for card in card_repo.list_by_student(student_id)
        if card.lessonId in titles
    ]
    return WordLibraryResponse(words=words, count=len(words))


@router.get("/{lesson_id}/words", response_model=LessonWordListResponse)
async def list_words(lesson_id: str, x_user_id: str = Header(...)) -> LessonWordListResponse:  # noqa: ARG001
    """List the words logged in a lesson."""
    repo = get_word_repository()
    words = repo.list_by_lesson(lesson_id)
    return LessonWordListResponse(
        words=[LessonWordResponse(**word.model_dump()) for word in words],
        count=len(words),
    )


@router.post("/{lesson_id}/words", response_model=LessonWordResponse, status_code=status.HTTP_201_CREATED)
async def log_word(
    lesson_id: str, word_create: LessonWordCreate, x_user_id: str = Header(...)
) -> LessonWordResponse:
    """Log a word during a lesson and give the student a review card for it."""
    lesson_repo = get_lesson_repository()
    word_repo = get_word_repository()
    card_repo = get_card_repository()

    try:
        lesson = lesson_repo.get_by_id(lesson_id, word_create.studentId)
    except LessonNotFoundError:
        lesson = None
    # Another teacher's lesson is reported the same way as a missing one.
    if lesson is None or lesson.teacherId != x_user_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Lesson with ID {lesson_id} not found",
        )

    word = word_repo.create(lesson_id, x_user_id, word_create)
    card = card_repo.create_for_word(word)

    logger.info(
        "Word logged: lesson=%s, teacher=%s, student=%s, word=%s, card=%s",
        lesson_id,
        x_user_id,
        word.studentId,
        word.id,
        card.id,
    )
    return LessonWordResponse(**word.model_dump())


@router.get("/{lesson_id}/words/{word_id}", response_model=LessonWordResponse)
async def get_word(lesson_id: str, word_id: str, x_user_id: str = Header(...)) -> LessonWordResponse:  # noqa: ARG001
    """Get a single word logged in a lesson."""
    repo = get_word_repository()
    try:
        word = repo.get_by_id(word_id, lesson_id)
    except LessonWordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Lesson word with ID {word_id} not found",
        )
    return LessonWordResponse(**word.model_dump())
