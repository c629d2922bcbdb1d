"""Load question corpora from JSON."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from importlib.resources import files
from pathlib import Path
from typing import Any, List, Mapping

from stackit.models import Question

LOGGER = logging.getLogger(__name__)


def _parse_timestamp(value: Any, index: int) -> datetime | None:
    if value in (None, ""):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value)
        except (OverflowError, OSError, ValueError) as exc:
            raise ValueError(f"Question #{index}: invalid timestamp {value!r}") from exc
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValueError(f"Question #{index}: invalid timestamp {value!r}") from exc


def _count(data: Mapping[str, Any], key: str, index: int) -> int:
    value = data.get(key) or 0
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Question #{index}: '{key}' must be an integer, got {value!r}") from exc


def question_from_dict(data: Mapping[str, Any], index: int = 0) -> Question:
    """Build a :class:`Question` from a JSON object.

    Accepts both snake_case keys and the camelCase keys of the browser
    front-end (``timeAgo``, ``createdAt``).
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"Question #{index}: expected an object, got {type(data).__name__}")
    if "id" not in data or not data.get("title"):
        raise ValueError(f"Question #{index}: 'id' and a non-empty 'title' are required")

    tags = data.get("tags") or ()
    if isinstance(tags, str):
        tags = tags.split()
    elif not isinstance(tags, (list, tuple)):
        raise ValueError(f"Question #{index}: 'tags' must be a list of strings")

    return Question(
        id=data["id"],
        title=str(data["title"]),
        description=data.get("description") or "",
        tags=tuple(str(tag) for tag in tags),
        votes=_count(data, "votes", index),
        answers=_count(data, "answers", index),
        views=_count(data, "views", index),
        user=data.get("user") or "",
        time_ago=data.get("timeAgo", data.get("time_ago")) or "",
        created_at=_parse_timestamp(data.get("createdAt", data.get("created_at")), index),
    )


def parse_questions(payload: Any) -> List[Question]:
    """Convert decoded JSON (a list, or ``{"questions": [...]}``) into questions."""
    if isinstance(payload, Mapping):
        payload = payload.get("questions")
    if not isinstance(payload, list):
        raise ValueError("Corpus must be a JSON array of questions")
    return [question_from_dict(item, index) for index, item in enumerate(payload)]


def load_questions(path: Path) -> List[Question]:
    """Read a question corpus from a JSON file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Corpus not found: {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

    questions = parse_questions(payload)
    LOGGER.info("Loaded %d questions from %s", len(questions), path)
    return questions


def load_sample_questions() -> List[Question]:
    """Return the sample corpus bundled with the package."""
    resource = files("stackit.data").joinpath("questions.json")
    questions = parse_questions(json.loads(resource.read_text(encoding="utf-8")))
    LOGGER.debug("Loaded %d bundled sample questions", len(questions))
    return questions
