"""Tests for the Cosmos-backed repositories using a mocked container."""

import re
from unittest.mock import MagicMock

import pytest
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from vocab_tutor.models import LessonCreate, LessonWord, LessonWordCreate, ReviewCard
from vocab_tutor.repositories import (
    LessonNotFoundError,
    LessonRepository,
    LessonWordNotFoundError,
    LessonWordRepository,
    ReviewCardNotFoundError,
    ReviewCardRepository,
)


def card_item(card_id="c1", **overrides):
    item = {
        "id": card_id,
        "lessonWordId": "w1",
        "lessonId": "l1",
        "studentId": "s1",
        "term": "la llave",
        "dueAt": "2024-01-01T00:00:00Z",
    }
    item.update(overrides)
    return item


@pytest.fixture
def container():
    return MagicMock()


class TestReviewCardRepository:
    def test_get_by_id(self, container):
        container.read_item.return_value = card_item(ease=None)
        card = ReviewCardRepository(container).get_by_id("c1", "s1")

        container.read_item.assert_called_once_with(item="c1", partition_key="s1")
        assert card.id == "c1"
        assert card.ease == 2.5

    def test_get_by_id_not_found(self, container):
        container.read_item.side_effect = CosmosResourceNotFoundError(message="missing")
        with pytest.raises(ReviewCardNotFoundError):
            ReviewCardRepository(container).get_by_id("c1", "s1")

    def test_create_for_word_uses_new_card_defaults(self, container):
        container.create_item.side_effect = lambda body: body
        word = LessonWord(lessonId="l1", studentId="s1", teacherId="t1", term="la llave")

        card = ReviewCardRepository(container).create_for_word(word)

        body = container.create_item.call_args.kwargs["body"]
        assert body["lessonWordId"] == word.id
        assert body["studentId"] == "s1"
        assert (body["ease"], body["intervalDays"], body["repetitions"]) == (2.5, 0, 0)
        assert (body["totalSuccess"], body["totalFail"]) == (0, 0)
        assert card.term == "la llave"

    def test_list_due_query(self, container):
        container.query_items.return_value = [card_item()]
        cards = ReviewCardRepository(container).list_due("s1", "2024-01-02T00:00:00Z", limit=25)

        kwargs = container.query_items.call_args.kwargs
        assert "c.dueAt <= @nowIso" in kwargs["query"]
        assert "ORDER BY c.dueAt ASC" in kwargs["query"]
        assert "lessonId" not in kwargs["query"]
        assert {"name": "@limit", "value": 25} in kwargs["parameters"]
        assert kwargs["partition_key"] == "s1"
        assert [c.id for c in cards] == ["c1"]

    def test_list_due_by_lesson(self, container):
        container.query_items.return_value = []
        ReviewCardRepository(container).list_due("s1", "2024-01-02T00:00:00Z", lesson_id="l9")

        kwargs = container.query_items.call_args.kwargs
        assert "c.lessonId = @lessonId" in kwargs["query"]
        assert {"name": "@lessonId", "value": "l9"} in kwargs["parameters"]

    def test_count_due(self, container):
        container.query_items.return_value = [4]
        assert ReviewCardRepository(container).count_due("s1", "2024-01-02T00:00:00Z") == 4

    def test_next_due_at_empty(self, container):
        container.query_items.return_value = []
        assert ReviewCardRepository(container).get_next_due_at("s1") is None

    def test_replace_touches_updated_at(self, container):
        container.replace_item.side_effect = lambda item, body: body
        original = card_item(updatedAt="2000-01-01T00:00:00Z")

        updated = ReviewCardRepository(container).replace(ReviewCard(**original))

        assert updated.updatedAt != "2000-01-01T00:00:00Z"
        assert re.fullmatch(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\dZ", updated.updatedAt)
        assert container.replace_item.call_args.kwargs["item"] == "c1"

    def test_delete_by_word(self, container):
        container.query_items.return_value = [{"id": "c1"}, {"id": "c2"}]
        deleted = ReviewCardRepository(container).delete_by_word("w1", "s1")

        assert deleted == 2
        assert container.delete_item.call_count == 2
        container.delete_item.assert_any_call(item="c2", partition_key="s1")

    def test_delete_by_word_missing(self, container):
        container.query_items.return_value = []
        with pytest.raises(ReviewCardNotFoundError):
            ReviewCardRepository(container).delete_by_word("w1", "s1")
        container.delete_item.assert_not_called()


class TestLessonWordRepository:
    def test_create(self, container):
        container.create_item.side_effect = lambda body: body
        word = LessonWordRepository(container).create(
            "l1", "t1", LessonWordCreate(term="el puente", studentId="s1")
        )
        assert word.lessonId == "l1"
        assert word.teacherId == "t1"
        assert word.studentId == "s1"

    def test_get_by_id_not_found(self, container):
        container.read_item.side_effect = CosmosResourceNotFoundError(message="missing")
        with pytest.raises(LessonWordNotFoundError):
            LessonWordRepository(container).get_by_id("w1", "l1")

    def test_list_by_lesson(self, container):
        container.query_items.return_value = [
            {"id": "w1", "lessonId": "l1", "studentId": "s1", "teacherId": "t1", "term": "uno"}
        ]
        words = LessonWordRepository(container).list_by_lesson("l1")
        assert [w.term for w in words] == ["uno"]
        assert container.query_items.call_args.kwargs["partition_key"] == "l1"

    def test_get_by_id(self, container):
        container.read_item.return_value = {
            "id": "w1", "lessonId": "l1", "studentId": "s1", "teacherId": "t1", "term": "uno"
        }
        word = LessonWordRepository(container).get_by_id("w1", "l1")

        container.read_item.assert_called_once_with(item="w1", partition_key="l1")
        assert word.term == "uno"

    def test_count_by_lesson(self, container):
        container.query_items.return_value = [3]
        assert LessonWordRepository(container).count_by_lesson("l1") == 3

        kwargs = container.query_items.call_args.kwargs
        assert "COUNT(1)" in kwargs["query"]
        assert kwargs["partition_key"] == "l1"


def lesson_item(lesson_id="l1", **overrides):
    item = {
        "id": lesson_id,
        "studentId": "s1",
        "teacherId": "t1",
        "title": "Lesson 2024-01-01",
        "startedAt": "2024-01-01T10:00:00Z",
    }
    item.update(overrides)
    return item


class TestLessonRepository:
    def test_create_with_default_title(self, container):
        container.create_item.side_effect = lambda body: body

        lesson = LessonRepository(container).create("t1", LessonCreate(studentId="s1"))

        body = container.create_item.call_args.kwargs["body"]
        assert body["studentId"] == "s1"
        assert body["teacherId"] == "t1"
        assert re.fullmatch(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\dZ", lesson.startedAt)
        assert lesson.title == f"Lesson {lesson.startedAt[:10]}"

    def test_create_with_title(self, container):
        container.create_item.side_effect = lambda body: body

        lesson = LessonRepository(container).create("t1", LessonCreate(studentId="s1", title="Numbers"))

        assert lesson.title == "Numbers"

    def test_get_by_id_uses_student_partition(self, container):
        container.read_item.return_value = lesson_item()

        lesson = LessonRepository(container).get_by_id("l1", "s1")

        container.read_item.assert_called_once_with(item="l1", partition_key="s1")
        assert lesson.teacherId == "t1"

    def test_get_by_id_not_found(self, container):
        container.read_item.side_effect = CosmosResourceNotFoundError(message="missing")
        with pytest.raises(LessonNotFoundError):
            LessonRepository(container).get_by_id("l1", "s1")

    def test_list_for_student(self, container):
        container.query_items.return_value = [lesson_item("l2"), lesson_item("l1")]

        lessons = LessonRepository(container).list_for_student("s1")

        assert [lesson.id for lesson in lessons] == ["l2", "l1"]
        kwargs = container.query_items.call_args.kwargs
        assert "teacherId" not in kwargs["query"]
        assert kwargs["query"].endswith("ORDER BY c.startedAt DESC")
        assert kwargs["partition_key"] == "s1"

    def test_list_for_student_by_teacher(self, container):
        container.query_items.return_value = []

        LessonRepository(container).list_for_student("s1", teacher_id="t1")

        kwargs = container.query_items.call_args.kwargs
        assert "c.teacherId = @teacherId" in kwargs["query"]
        assert {"name": "@teacherId", "value": "t1"} in kwargs["parameters"]
