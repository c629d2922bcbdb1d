"""Core StackIt data models."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Dict, Tuple, Union

QuestionId = Union[int, str]


@dataclass(frozen=True, slots=True)
class Question:
    """A question record as supplied by the caller."""

    id: QuestionId
    title: str
    description: str = ""
    tags: Tuple[str, ...] = ()
    votes: int = 0
    answers: int = 0
    views: int = 0
    user: str = ""
    time_ago: str = ""
    created_at: datetime | None = None

    def base_fields(self) -> Dict[str, Any]:
        """Return the plain question attributes, without computed scores."""
        return {f.name: getattr(self, f.name) for f in fields(Question)}

    def as_question(self) -> Question:
        """Return a plain Question with the same attributes and no scores."""
        return Question(**self.base_fields())


@dataclass(frozen=True, slots=True)
class SearchResult(Question):
    """Question ranked against a free-text query."""

    search_score: float = 0.0
    title_score: float = 0.0
    desc_score: float = 0.0
    tag_score: float = 0.0
    keyword_matches: int = 0

    @property
    def match_percent(self) -> int:
        """Search score as a rounded percentage, for display."""
        return round(self.search_score * 100)


@dataclass(frozen=True, slots=True)
class SimilarQuestion(Question):
    """Question scored against another question."""

    similarity: float = 0.0
    title_similarity: float = 0.0
    desc_similarity: float = 0.0
    tag_similarity: float = 0.0
