"""Exception types raised by Reality Filter services."""


class RealityFilterError(Exception):
    """Base class for service errors."""


class ArticleNotFoundError(RealityFilterError):
    """No article exists with the requested id."""

    def __init__(self, article_id: str) -> None:
        super().__init__(f"article not found: {article_id}")
        self.article_id = article_id


class AnalysisError(RealityFilterError):
    """An analysis step failed; nothing was persisted."""

    def __init__(self, step: str, cause: BaseException) -> None:
        super().__init__(f"failed to {step}: {cause}")
        self.step = step


class InvalidRequestError(RealityFilterError, ValueError):
    """Caller-supplied input, such as a time range, was rejected."""
