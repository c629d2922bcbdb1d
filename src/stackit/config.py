"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from stackit.index.search import SearchOptions


@dataclass(slots=True)
class AppConfig:
    # None selects the sample corpus bundled with the package.
    data_path: Path | None = None
    max_results: int = 20
    min_score: float = 0.1
    include_tags: bool = True
    similar_threshold: float = 0.3
    max_similar: int = 5
    max_suggestions: int = 5

    def resolve_data_path(self, base_dir: Path | None = None) -> Path | None:
        if self.data_path is None:
            return None
        if Path(self.data_path).is_absolute() or base_dir is None:
            return Path(self.data_path)
        return base_dir / self.data_path

    def search_options(self, *, include_answered: bool = True) -> SearchOptions:
        return SearchOptions(
            include_answered=include_answered,
            include_tags=self.include_tags,
            min_score=self.min_score,
            max_results=self.max_results,
        )
