"""Command line interface for StackIt search."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from stackit.config import AppConfig
from stackit.index.corpus import load_questions, load_sample_questions
from stackit.index.search import Searcher, SearchOptions, SortOrder
from stackit.models import Question, SearchResult
from stackit.web.app import app as web_app


console = Console()
app = typer.Typer(help="StackIt - rank and explore Q&A questions")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_searcher(data: Path | None) -> Searcher:
    resolved = AppConfig(data_path=data).resolve_data_path(Path.cwd())
    if resolved is None:
        return Searcher(load_sample_questions())
    try:
        return Searcher(load_questions(resolved))
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc


def _question_table() -> Table:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID")
    table.add_column("Votes")
    table.add_column("Answers")
    table.add_column("Views")
    table.add_column("Title")
    table.add_column("Tags")
    return table


def _question_row(question: Question) -> list[str]:
    return [
        str(question.id),
        str(question.votes),
        str(question.answers),
        str(question.views),
        question.title,
        ", ".join(question.tags),
    ]


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    data: Path = typer.Option(None, "--data", help="JSON question corpus"),
    max_results: int = typer.Option(AppConfig().max_results, help="Number of results to display"),
    min_score: float = typer.Option(AppConfig().min_score, help="Minimum search score"),
    no_tags: bool = typer.Option(False, "--no-tags", help="Ignore tags when scoring"),
    exclude_answered: bool = typer.Option(
        False, "--exclude-answered", help="Drop questions that already have answers"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Rank questions against a free-text query."""
    _setup_logging(verbose)
    searcher = _load_searcher(data)
    options = SearchOptions(
        include_answered=not exclude_answered,
        include_tags=not no_tags,
        min_score=min_score,
        max_results=max_results,
    )

    results = searcher.search(query, options)
    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = _question_table()
    table.add_column("Match")
    for result in results:
        match = f"{result.match_percent}%" if isinstance(result, SearchResult) else "-"
        table.add_row(*_question_row(result), match)
    console.print(table)


@app.command()
def similar(
    question_id: str = typer.Argument(..., help="ID of the question to compare against"),
    data: Path = typer.Option(None, "--data", help="JSON question corpus"),
    threshold: float = typer.Option(AppConfig().similar_threshold, help="Minimum similarity"),
    max_results: int = typer.Option(AppConfig().max_similar, help="Number of results to display"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show questions similar to an existing one."""
    _setup_logging(verbose)
    searcher = _load_searcher(data)
    target = searcher.get(question_id)
    if target is None:
        console.print(f"[yellow]Question {question_id} not found.[/yellow]")
        raise typer.Exit(code=1)

    results = searcher.similar(target, threshold=threshold, max_results=max_results)
    if not results:
        console.print("[yellow]No similar questions found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Similarity")
    table.add_column("Title sim")
    table.add_column("Desc sim")
    table.add_column("Tag sim")
    table.add_column("ID")
    table.add_column("Question")
    for result in results:
        table.add_row(
            f"{result.similarity:.4f}",
            f"{result.title_similarity:.2f}",
            f"{result.desc_similarity:.2f}",
            f"{result.tag_similarity:.2f}",
            str(result.id),
            result.title,
        )
    console.print(f"Similar to [bold]{target.title}[/bold]:")
    console.print(table)


@app.command()
def suggest(
    partial: str = typer.Argument(..., help="Partial query"),
    data: Path = typer.Option(None, "--data", help="JSON question corpus"),
    max_suggestions: int = typer.Option(
        AppConfig().max_suggestions, "--max", help="Number of suggestions"
    ),
) -> None:
    """Autocomplete a partial query from titles and tags."""
    searcher = _load_searcher(data)
    suggestions = searcher.suggest(partial, max_suggestions=max_suggestions)
    if not suggestions:
        console.print("[yellow]No suggestions.[/yellow]")
        return
    for suggestion in suggestions:
        console.print(suggestion)


@app.command(name="list")
def list_questions(
    sort: SortOrder = typer.Option(SortOrder.NEWEST, "--sort", help="Browse order"),
    data: Path = typer.Option(None, "--data", help="JSON question corpus"),
) -> None:
    """List questions in browse order."""
    searcher = _load_searcher(data)
    questions = searcher.browse(sort)
    console.print(f"{len(questions)} questions")
    if not questions:
        return

    table = _question_table()
    table.add_column("Asked")
    for question in questions:
        table.add_row(*_question_row(question), question.time_ago)
    console.print(table)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    data: Optional[Path] = typer.Option(None, "--data", help="JSON question corpus"),
) -> None:
    """Start the JSON web API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    # Fail fast on a bad corpus before the server starts.
    searcher = _load_searcher(data)
    web_app.state.searcher = searcher

    console.print(
        f"Starting web interface on http://{host}:{port} ({len(searcher)} questions)"
    )
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
