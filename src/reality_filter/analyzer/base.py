from typing import Protocol

from reality_filter.data import Entity, Flag


class ContentAnalyzer(Protocol):
    """Interface for content analysis services."""

    async def analyze_sentiment(self, text: str) -> float:
        """Return sentiment in [0, 1], where 0.5 is neutral."""
        ...

    async def extract_entities(self, text: str) -> list[Entity]:
        """Return the named entities mentioned in the text."""
        ...

    async def detect_bias(self, text: str) -> list[Flag]:
        """Return flags for biased or manipulative language."""
        ...

    async def detect_language(self, text: str) -> str:
        """Return an ISO 639-1 language code."""
        ...
