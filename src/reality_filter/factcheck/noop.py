"""No-op fact checker with a fixed source reputation."""

from reality_filter.data import Article, Flag

DEFAULT_REPUTATION = 0.8


class NoOpFactChecker:
    """Fact checker that never flags anything.

    Every source gets the same reputation score.

    Args:
        reputation: Score returned for every source.
    """

    def __init__(self, reputation: float = DEFAULT_REPUTATION) -> None:
        self._reputation = reputation

    async def check_facts(self, article: Article) -> list[Flag]:
        return []

    async def get_source_reputation(self, source: str) -> float:
        return self._reputation
