"""No-op content analyzer that reports every text as neutral and clean."""

from reality_filter.data import Entity, Flag

NEUTRAL_SENTIMENT = 0.5


class NoOpContentAnalyzer:
    """Content analyzer that makes no external calls.

    Sentiment is always neutral, no entities or bias are found, and the
    language is reported as ``default_language``. Useful as a default
    while no analysis backend is configured, and in tests.

    Args:
        default_language: Language code reported for every text.
    """

    def __init__(self, default_language: str = "en") -> None:
        self._language = default_language

    async def analyze_sentiment(self, text: str) -> float:
        return NEUTRAL_SENTIMENT

    async def extract_entities(self, text: str) -> list[Entity]:
        return []

    async def detect_bias(self, text: str) -> list[Flag]:
        return []

    async def detect_language(self, text: str) -> str:
        return self._language
