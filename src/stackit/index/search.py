"""Question search, ranking, suggestions and browse ordering."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence

from stackit.index.similarity import cosine_similarity, tag_similarity
from stackit.models import Question, QuestionId, SearchResult, SimilarQuestion
from stackit.utils.text import extract_keywords, word_ngrams

LOGGER = logging.getLogger(__name__)

TITLE_WEIGHT = 0.4
DESCRIPTION_WEIGHT = 0.3
TAG_WEIGHT = 0.2
KEYWORD_WEIGHT = 0.1

SIMILAR_TITLE_WEIGHT = 0.5
SIMILAR_DESCRIPTION_WEIGHT = 0.3
SIMILAR_TAG_WEIGHT = 0.2

QUERY_KEYWORDS = 5
QUESTION_KEYWORDS = 10

# camelCase keys used by the browser front-end.
_OPTION_ALIASES = {
    "includeAnswered": "include_answered",
    "includeTags": "include_tags",
    "minScore": "min_score",
    "maxResults": "max_results",
}
_OPTION_NAMES = frozenset(_OPTION_ALIASES.values())


@dataclass(frozen=True, slots=True)
class SearchOptions:
    """Knobs for :func:`search_questions`.

    ``include_answered=False`` drops every question that already has an
    answer; it does not control whether answer bodies are searched.
    """

    include_answered: bool = True
    include_tags: bool = True
    min_score: float = 0.1
    max_results: int = 20

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> SearchOptions:
        """Build options from a loose mapping, ignoring unknown keys.

        Values are coerced to the field types; a value that cannot be
        converted raises ``ValueError``.
        """
        if not options:
            return cls()
        values: Dict[str, Any] = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name in _OPTION_NAMES and value is not None:
                values[name] = _OPTION_COERCERS[name](name, value)
        return cls(**values)


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off", ""):
            return False
        raise ValueError(f"Option {name!r} must be a boolean, got {value!r}")
    return bool(value)


def _as_number(convert: Any) -> Any:
    def coerce(name: str, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError(f"Option {name!r} must be a number, got {value!r}")
        try:
            return convert(float(value)) if convert is int else convert(value)
        except (TypeError, ValueError, OverflowError) as exc:
            raise ValueError(f"Option {name!r} must be a number, got {value!r}") from exc

    return coerce


_OPTION_COERCERS = {
    "include_answered": _as_bool,
    "include_tags": _as_bool,
    "min_score": _as_number(float),
    "max_results": _as_number(int),
}


def _resolve_options(options: SearchOptions | Mapping[str, Any] | None) -> SearchOptions:
    if isinstance(options, SearchOptions):
        return options
    return SearchOptions.from_mapping(options)


def _recency_key(question: Question) -> float:
    # Most recent first; questions without a timestamp go last.
    if question.created_at is None:
        return math.inf
    return -question.created_at.timestamp()


def _score_question(
    query: str,
    query_keywords: Sequence[str],
    question: Question,
    include_tags: bool,
) -> SearchResult:
    title_score = cosine_similarity(query, question.title) * TITLE_WEIGHT
    desc_score = cosine_similarity(query, question.description or "") * DESCRIPTION_WEIGHT
    tag_score = 0.0
    if include_tags and question.tags:
        tag_score = cosine_similarity(query, " ".join(question.tags)) * TAG_WEIGHT

    question_keywords = extract_keywords(
        f"{question.title} {question.description or ''}", QUESTION_KEYWORDS
    )
    keyword_matches = sum(
        1
        for keyword in query_keywords
        if any(keyword in other or other in keyword for other in question_keywords)
    )
    keyword_bonus = keyword_matches / max(len(query_keywords), 1) * KEYWORD_WEIGHT

    return SearchResult(
        **question.base_fields(),
        search_score=title_score + desc_score + tag_score + keyword_bonus,
        title_score=title_score,
        desc_score=desc_score,
        tag_score=tag_score,
        keyword_matches=keyword_matches,
    )


def search_questions(
    query: str,
    questions: Sequence[Question],
    options: SearchOptions | Mapping[str, Any] | None = None,
) -> List[Question]:
    """Rank ``questions`` against a free-text query.

    An empty query returns the first ``max_results`` questions untouched.
    Otherwise every question is scored and the matches above ``min_score``
    are returned as :class:`SearchResult` records, best first.
    """
    opts = _resolve_options(options)
    if not query.strip():
        return list(questions[: max(opts.max_results, 0)])

    query_keywords = extract_keywords(query, QUERY_KEYWORDS)
    candidates = [
        question
        for question in questions
        if opts.include_answered or question.answers <= 0
    ]
    scored = [
        _score_question(query, query_keywords, question, opts.include_tags)
        for question in candidates
    ]
    matches = [result for result in scored if result.search_score >= opts.min_score]
    matches.sort(key=lambda r: (-r.search_score, -r.votes, _recency_key(r)))

    LOGGER.debug(
        "Query %r matched %d of %d questions (keywords: %s)",
        query,
        len(matches),
        len(candidates),
        query_keywords,
    )
    return matches[: max(opts.max_results, 0)]


def find_similar_questions(
    target: Question,
    questions: Sequence[Question],
    threshold: float = 0.3,
    max_results: int = 5,
) -> List[SimilarQuestion]:
    """Return the questions most similar to ``target``, excluding itself."""
    results: List[SimilarQuestion] = []
    for question in questions:
        if question.id == target.id:
            continue
        title_sim = cosine_similarity(target.title, question.title)
        desc_sim = cosine_similarity(target.description or "", question.description or "")
        tag_sim = tag_similarity(target.tags or (), question.tags or ())
        overall = (
            title_sim * SIMILAR_TITLE_WEIGHT
            + desc_sim * SIMILAR_DESCRIPTION_WEIGHT
            + tag_sim * SIMILAR_TAG_WEIGHT
        )
        if overall < threshold:
            continue
        results.append(
            SimilarQuestion(
                **question.base_fields(),
                similarity=overall,
                title_similarity=title_sim,
                desc_similarity=desc_sim,
                tag_similarity=tag_sim,
            )
        )

    results.sort(key=lambda r: -r.similarity)
    return results[: max(max_results, 0)]


def get_search_suggestions(
    partial_query: str,
    questions: Sequence[Question],
    max_suggestions: int = 5,
) -> List[str]:
    """Autocomplete phrases from question titles and tags."""
    if len(partial_query) < 2:
        return []

    query = partial_query.lower()
    suggestions: Dict[str, str] = {}
    for question in questions:
        for phrase in word_ngrams(question.title.lower().split()):
            if query in phrase and len(phrase) > len(query):
                suggestions.setdefault(phrase, phrase)
        for tag in question.tags or ():
            if query in tag.lower():
                suggestions.setdefault(tag.lower(), tag)

    ordered = sorted(suggestions.values(), key=len)
    return ordered[: max(max_suggestions, 0)]


class SortOrder(str, enum.Enum):
    """Browse orderings offered by the question list."""

    NEWEST = "newest"
    UNANSWERED = "unanswered"
    MOST_VOTED = "most-voted"
    MOST_VIEWED = "most-viewed"


def sort_questions(
    questions: Sequence[Question], sort_by: SortOrder | str = SortOrder.NEWEST
) -> List[Question]:
    """Order questions for browsing; ``unanswered`` also filters."""
    try:
        order = SortOrder(sort_by)
    except ValueError:
        choices = ", ".join(item.value for item in SortOrder)
        raise ValueError(f"Unknown sort order {sort_by!r}, expected one of: {choices}") from None

    if order is SortOrder.MOST_VOTED:
        return sorted(questions, key=lambda q: -q.votes)
    if order is SortOrder.MOST_VIEWED:
        return sorted(questions, key=lambda q: -q.views)
    if order is SortOrder.UNANSWERED:
        questions = [question for question in questions if question.answers == 0]
    return sorted(questions, key=_recency_key)


class Searcher:
    """High-level API over an immutable snapshot of the corpus."""

    def __init__(self, questions: Sequence[Question]) -> None:
        self.questions = tuple(questions)

    def __len__(self) -> int:
        return len(self.questions)

    def get(self, question_id: QuestionId) -> Question | None:
        wanted = str(question_id)
        for question in self.questions:
            if str(question.id) == wanted:
                return question
        return None

    def search(
        self, query: str, options: SearchOptions | Mapping[str, Any] | None = None
    ) -> List[Question]:
        return search_questions(query, self.questions, options)

    def similar(
        self, target: Question, *, threshold: float = 0.3, max_results: int = 5
    ) -> List[SimilarQuestion]:
        return find_similar_questions(target, self.questions, threshold, max_results)

    def suggest(self, partial_query: str, *, max_suggestions: int = 5) -> List[str]:
        return get_search_suggestions(partial_query, self.questions, max_suggestions)

    def browse(self, sort_by: SortOrder | str = SortOrder.NEWEST) -> List[Question]:
        return sort_questions(self.questions, sort_by)
