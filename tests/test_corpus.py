"""Tests for corpus loading."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from stackit.index.corpus import (
    load_questions,
    load_sample_questions,
    parse_questions,
    question_from_dict,
)
from stackit.models import Question


class TestQuestionFromDict:
    """Test question_from_dict function."""

    def test_camel_case_keys(self) -> None:
        question = question_from_dict(
            {
                "id": 7,
                "title": "React hooks",
                "tags": ["react", "hooks"],
                "timeAgo": "2 hours ago",
                "createdAt": "2025-07-12T10:00:00Z",
            }
        )

        assert question.id == 7
        assert question.tags == ("react", "hooks")
        assert question.time_ago == "2 hours ago"
        assert question.created_at == datetime(2025, 7, 12, 10, 0, tzinfo=timezone.utc)

    def test_snake_case_keys(self) -> None:
        question = question_from_dict(
            {"id": "q-1", "title": "SQL", "time_ago": "now", "created_at": "2025-01-01T00:00:00"}
        )

        assert question.id == "q-1"
        assert question.time_ago == "now"
        assert question.created_at == datetime(2025, 1, 1)

    def test_defaults_for_missing_fields(self) -> None:
        question = question_from_dict({"id": 1, "title": "Only a title", "description": None})

        assert question == Question(id=1, title="Only a title")

    def test_tags_as_string(self) -> None:
        question = question_from_dict({"id": 1, "title": "t", "tags": "sql database"})

        assert question.tags == ("sql", "database")

    def test_missing_title(self) -> None:
        with pytest.raises(ValueError, match="#3"):
            question_from_dict({"id": 1, "title": ""}, index=3)

    def test_missing_id(self) -> None:
        with pytest.raises(ValueError, match="'id'"):
            question_from_dict({"title": "No id"})

    def test_invalid_timestamp(self) -> None:
        with pytest.raises(ValueError, match="invalid timestamp"):
            question_from_dict({"id": 1, "title": "t", "createdAt": "yesterday"})

    @pytest.mark.parametrize("record", [1, "identity", None, ["id", "title"]])
    def test_non_object_record(self, record: object) -> None:
        with pytest.raises(ValueError, match="#2: expected an object"):
            question_from_dict(record, index=2)  # type: ignore[arg-type]

    def test_non_integer_count(self) -> None:
        with pytest.raises(ValueError, match="#0: 'votes' must be an integer"):
            question_from_dict({"id": 1, "title": "t", "votes": "many"})

    def test_numeric_strings_accepted(self) -> None:
        question = question_from_dict({"id": 1, "title": "t", "views": "42"})

        assert question.views == 42

    def test_invalid_tags(self) -> None:
        with pytest.raises(ValueError, match="'tags'"):
            question_from_dict({"id": 1, "title": "t", "tags": 5})


class TestParseQuestions:
    """Test parse_questions function."""

    def test_list_payload(self) -> None:
        questions = parse_questions([{"id": 1, "title": "a"}, {"id": 2, "title": "b"}])

        assert [q.id for q in questions] == [1, 2]

    def test_wrapped_payload(self) -> None:
        questions = parse_questions({"questions": [{"id": 1, "title": "a"}]})

        assert len(questions) == 1

    def test_invalid_payload(self) -> None:
        with pytest.raises(ValueError, match="JSON array"):
            parse_questions({"items": []})

    def test_bad_record_names_index(self) -> None:
        with pytest.raises(ValueError, match="#1"):
            parse_questions([{"id": 1, "title": "a"}, "identity"])


class TestLoadQuestions:
    """Test loading corpora from disk."""

    def test_load_file(self, tmp_path: Path) -> None:
        path = tmp_path / "questions.json"
        path.write_text(json.dumps([{"id": 1, "title": "Docker volumes"}]), encoding="utf-8")

        questions = load_questions(path)

        assert questions == [Question(id=1, title="Docker volumes")]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_questions(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON"):
            load_questions(path)


class TestLoadSampleQuestions:
    """Test the bundled sample corpus."""

    def test_sample_corpus(self) -> None:
        questions = load_sample_questions()

        assert len(questions) == 6
        assert questions[0].title.startswith("How to join 2 columns")
        assert all(q.created_at is not None for q in questions)
        assert all(isinstance(q.tags, tuple) for q in questions)
        assert len({q.id for q in questions}) == len(questions)
