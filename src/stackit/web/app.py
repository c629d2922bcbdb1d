"""FastAPI application exposing StackIt search as a JSON API."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from stackit.config import AppConfig
from stackit.index.corpus import load_sample_questions
from stackit.index.search import Searcher, SearchOptions
from stackit.models import Question

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="StackIt Search", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class SearchPayload(BaseModel):
    query: str
    include_answered: bool = True
    include_tags: bool = True
    min_score: float = AppConfig().min_score
    max_results: int = AppConfig().max_results


def _get_searcher() -> Searcher:
    searcher = getattr(app.state, "searcher", None)
    if searcher is None:
        searcher = Searcher(load_sample_questions())
        app.state.searcher = searcher
        LOGGER.info("Serving bundled sample corpus (%d questions)", len(searcher))
    return searcher


def _serialize(questions: List[Question]) -> List[dict[str, Any]]:
    return [asdict(question) for question in questions]


def _get_question(searcher: Searcher, question_id: str) -> Question:
    question = searcher.get(question_id)
    if question is None:
        raise HTTPException(status_code=404, detail=f"Question {question_id} not found")
    return question


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.post("/search")
async def search_questions(payload: SearchPayload) -> dict[str, Any]:
    options = SearchOptions(
        include_answered=payload.include_answered,
        include_tags=payload.include_tags,
        min_score=payload.min_score,
        max_results=max(1, min(payload.max_results, 100)),
    )
    searcher = _get_searcher()
    results = searcher.search(payload.query, options)
    suggestions = searcher.suggest(payload.query.strip(), max_suggestions=AppConfig().max_suggestions)
    return {"results": _serialize(results), "suggestions": suggestions}


@app.get("/questions")
async def list_questions(sort: str = "newest") -> dict[str, Any]:
    """List questions in browse order."""
    try:
        questions = _get_searcher().browse(sort)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"questions": _serialize(questions)}


@app.get("/questions/{question_id}")
async def get_question(question_id: str) -> dict[str, Any]:
    return asdict(_get_question(_get_searcher(), question_id))


@app.get("/questions/{question_id}/similar")
async def similar_questions(
    question_id: str,
    threshold: float = AppConfig().similar_threshold,
    max_results: int = AppConfig().max_similar,
) -> dict[str, Any]:
    """Questions related to the one being viewed."""
    searcher = _get_searcher()
    target = _get_question(searcher, question_id)
    results = searcher.similar(target, threshold=threshold, max_results=max_results)
    return {"results": _serialize(results)}


@app.get("/suggestions")
async def suggestions(q: str = "", max_suggestions: int = AppConfig().max_suggestions) -> dict[str, Any]:
    return {"suggestions": _get_searcher().suggest(q, max_suggestions=max_suggestions)}
