"""Claude-based fact checker with a static source reputation table."""

import json
import logging
import os

import anthropic

from reality_filter.analyzer.claude import parse_flags, reply_text, strip_fences
from reality_filter.data import Article, Flag, FlagType
from reality_filter.url import extract_domain

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are a meticulous fact checker. Read the news article provided and \
identify claims that are false, unsupported or misleading. Respond ONLY \
with a JSON array (no markdown fences, no commentary). Each element is an \
object with:
- "type": one of FACTUAL_ERROR (the claim is demonstrably false), \
UNVERIFIED (the claim cannot be verified from known sources), MISLEADING \
(technically true but framed to mislead)
- "confidence": float 0.0-1.0
- "details": one sentence naming the claim and the problem

Return an empty array if every claim checks out.\
"""

_FACT_TYPES = {FlagType.FACTUAL_ERROR, FlagType.UNVERIFIED, FlagType.MISLEADING}


def _format_article(article: Article) -> str:
    parts = [f"Title: {article.title}", f"Source: {article.source}"]
    if article.author:
        parts.append(f"Author: {article.author}")
    parts.append("")
    parts.append(article.content)
    return "\n".join(parts)


class ClaudeFactChecker:
    """Check article claims with Claude.

    Source reputation does not call the API: sources are reduced to their
    domain and looked up in ``reputations``.

    Args:
        model: Anthropic model to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        reputations: Domain to reputation score in [0, 1].
        default_reputation: Score for domains missing from the table.
        max_chars: Article content beyond this many characters is truncated.
    """

    def __init__(
        self,
        model: str = "claude-haiku-4-5-20251001",
        api_key: str | None = None,
        reputations: dict[str, float] | None = None,
        default_reputation: float = 0.5,
        max_chars: int = 20000,
    ) -> None:
        resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
        self._client = anthropic.AsyncAnthropic(api_key=resolved_key)
        self._model = model
        self._reputations = {extract_domain(k): v for k, v in (reputations or {}).items()}
        self._default_reputation = default_reputation
        self._max_chars = max_chars

    async def check_facts(self, article: Article) -> list[Flag]:
        response = await self._client.messages.create(
            model=self._model,
            max_tokens=2048,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": _format_article(article)[: self._max_chars]}],
        )

        try:
            parsed = json.loads(strip_fences(reply_text(response)))
        except json.JSONDecodeError:
            logger.warning("Failed to parse fact check JSON for article %s", article.id)
            return []

        return list(parse_flags(parsed, _FACT_TYPES))

    async def get_source_reputation(self, source: str) -> float:
        return self._reputations.get(extract_domain(source), self._default_reputation)
