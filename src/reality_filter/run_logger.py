"""Per-analysis JSON run logs.

One file per ``analyze_article`` call, holding every step's input, output
and timing. Handy when tuning prompts or chasing a surprising score.
"""

import dataclasses
import enum
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from reality_filter.data import Article, ArticleStatus, FlagType, article_to_dict, utc_now


class StepRecord(BaseModel):
    step: str
    component: str
    input: Any = None
    output: Any = None
    finished_at: datetime
    seconds: float


class AnalysisRun(BaseModel):
    """Everything recorded while analyzing one article."""

    run_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    article_id: str
    started_at: datetime = Field(default_factory=utc_now)
    finished_at: datetime | None = None
    steps: list[StepRecord] = Field(default_factory=list)
    status: ArticleStatus | None = None
    score: float | None = None
    flags: list[FlagType] = Field(default_factory=list)
    error: str | None = None


def to_jsonable(value: Any) -> Any:
    """Reduce step inputs and outputs to JSON-friendly values."""
    if isinstance(value, Article):
        return article_to_dict(value, json_safe=True)
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(to_jsonable(k)): to_jsonable(v) for k, v in value.items()}
    return value


class RunLogger:
    """Collects step records for one analysis and writes them as JSON.

    Args:
        log_dir: Where run files go. None turns every method into a no-op.
    """

    def __init__(self, log_dir: Path | None) -> None:
        self._log_dir = log_dir
        self._run: AnalysisRun | None = None
        self._last_path: Path | None = None

    @property
    def enabled(self) -> bool:
        return self._log_dir is not None

    @property
    def last_path(self) -> Path | None:
        return self._last_path

    def start(self, article: Article) -> None:
        if self.enabled:
            self._run = AnalysisRun(article_id=article.id)

    def record_step(
        self, step: str, component: str, input_data: Any, output: Any, seconds: float
    ) -> None:
        """Add one step; ``component`` is the adapter class that ran it."""
        if self._run is None:
            return
        self._run.steps.append(
            StepRecord(
                step=step,
                component=component,
                input=to_jsonable(input_data),
                output=to_jsonable(output),
                finished_at=utc_now(),
                seconds=round(seconds, 4),
            )
        )

    def finish(self, article: Article, error: BaseException | None = None) -> Path | None:
        """Close the run with the article's final state and write it out.

        Returns:
            The file written, or None when disabled or never started.
        """
        run, self._run = self._run, None
        if run is None or self._log_dir is None:
            return None

        run.finished_at = utc_now()
        run.status = article.status
        run.score = article.score
        run.flags = [f.type for f in article.flags]
        if error is not None:
            run.error = str(error)

        self._log_dir.mkdir(parents=True, exist_ok=True)
        name = f"run_{run.started_at:%Y%m%dT%H%M%S}_{article.id[:8]}_{run.run_id}.json"
        path = self._log_dir / name
        path.write_text(run.model_dump_json(indent=2))
        self._last_path = path
        return path
