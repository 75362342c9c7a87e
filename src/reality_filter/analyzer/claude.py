"""Claude-based content analyzer using structured JSON output."""

import hashlib
import json
import logging
import os
from collections import OrderedDict
from dataclasses import dataclass

import anthropic

from reality_filter.data import Entity, EntityType, Flag, FlagType

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are a news content analyst. Analyze the article text provided and \
respond ONLY with a JSON object (no markdown fences, no commentary) with \
these fields:
- "sentiment": float 0.0-1.0 where 0.0 is strongly negative, 0.5 is \
neutral and 1.0 is strongly positive
- "language": ISO 639-1 code of the text's language (e.g. "en", "de")
- "entities": array of objects with "type" (one of: PERSON, PLACE, DATE, \
ORGANIZATION, PRODUCT) and "value" (the entity as written)
- "bias": array of objects describing biased or manipulative language, \
each with "type" (one of: CLICKBAIT, MISLEADING, BIASED, HATE_SPEECH, SPAM), \
"confidence" (float 0.0-1.0) and "details" (one sentence quoting or \
describing the problem). Use an empty array if the text is balanced.\
"""

_BIAS_TYPES = {
    FlagType.CLICKBAIT,
    FlagType.MISLEADING,
    FlagType.BIASED,
    FlagType.HATE_SPEECH,
    FlagType.SPAM,
}


@dataclass(frozen=True)
class ContentAnalysis:
    """Everything a single analysis call extracts from a text."""

    sentiment: float = 0.5
    language: str = "en"
    entities: tuple[Entity, ...] = ()
    bias_flags: tuple[Flag, ...] = ()


def strip_fences(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = [line for line in cleaned.split("\n") if not line.strip().startswith("```")]
        cleaned = "\n".join(lines)
    return cleaned


def reply_text(response) -> str:
    """Concatenate the text blocks of a Messages API response."""
    return "".join(block.text for block in response.content if hasattr(block, "text"))


def _clamp(value: object, default: float) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return max(0.0, min(1.0, float(value)))
    return default


def _parse_entities(raw: object) -> tuple[Entity, ...]:
    entities: list[Entity] = []
    if not isinstance(raw, list):
        return ()
    for item in raw:
        if not isinstance(item, dict):
            continue
        try:
            entity_type = EntityType(str(item.get("type", "")).upper())
        except ValueError:
            continue
        value = str(item.get("value", "")).strip()
        if value:
            entities.append(Entity(type=entity_type, value=value))
    return tuple(entities)


def parse_flags(raw: object, allowed: set[FlagType] | None = None) -> tuple[Flag, ...]:
    """Parse a JSON array of flag objects, skipping malformed entries.

    Args:
        raw: Decoded JSON value expected to be a list of dicts.
        allowed: If given, flag types outside this set are dropped.

    Returns:
        Parsed flags without a detector name.
    """
    flags: list[Flag] = []
    if not isinstance(raw, list):
        return ()
    for item in raw:
        if not isinstance(item, dict):
            continue
        try:
            flag_type = FlagType(str(item.get("type", "")).upper())
        except ValueError:
            continue
        if allowed is not None and flag_type not in allowed:
            continue
        flags.append(
            Flag(
                type=flag_type,
                confidence=_clamp(item.get("confidence"), 0.5),
                details=str(item.get("details", "")),
            )
        )
    return tuple(flags)


def parse_analysis(text: str) -> ContentAnalysis:
    """Parse Claude's JSON reply, falling back to neutral defaults."""
    try:
        parsed = json.loads(strip_fences(text))
    except json.JSONDecodeError:
        logger.warning("Failed to parse content analysis JSON, using defaults")
        return ContentAnalysis()

    if not isinstance(parsed, dict):
        logger.warning("Content analysis response is not an object, using defaults")
        return ContentAnalysis()

    language = str(parsed.get("language") or "en").strip().lower() or "en"
    return ContentAnalysis(
        sentiment=_clamp(parsed.get("sentiment"), 0.5),
        language=language,
        entities=_parse_entities(parsed.get("entities")),
        bias_flags=parse_flags(parsed.get("bias"), _BIAS_TYPES),
    )


class ClaudeContentAnalyzer:
    """Analyze article text with Claude.

    One API call answers all four analyzer questions for a text; results
    are memoised by content hash so the analyzer service's sequential calls
    cost a single request.

    Args:
        model: Anthropic model to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        max_chars: Text beyond this many characters is truncated.
        memo_size: Number of distinct texts whose analysis is retained.
    """

    def __init__(
        self,
        model: str = "claude-haiku-4-5-20251001",
        api_key: str | None = None,
        max_chars: int = 20000,
        memo_size: int = 128,
    ) -> None:
        resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
        self._client = anthropic.AsyncAnthropic(api_key=resolved_key)
        self._model = model
        self._max_chars = max_chars
        self._memo_size = memo_size
        self._memo: OrderedDict[str, ContentAnalysis] = OrderedDict()

    async def analyze_sentiment(self, text: str) -> float:
        return (await self._analyze(text)).sentiment

    async def extract_entities(self, text: str) -> list[Entity]:
        return list((await self._analyze(text)).entities)

    async def detect_bias(self, text: str) -> list[Flag]:
        return list((await self._analyze(text)).bias_flags)

    async def detect_language(self, text: str) -> str:
        return (await self._analyze(text)).language

    async def _analyze(self, text: str) -> ContentAnalysis:
        key = hashlib.sha256(text.encode()).hexdigest()
        cached = self._memo.get(key)
        if cached is not None:
            self._memo.move_to_end(key)
            return cached

        response = await self._client.messages.create(
            model=self._model,
            max_tokens=2048,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": text[: self._max_chars]}],
        )
        logger.debug(
            "Content analysis used %d input / %d output tokens",
            response.usage.input_tokens,
            response.usage.output_tokens,
        )

        analysis = parse_analysis(reply_text(response))
        self._memo[key] = analysis
        while len(self._memo) > self._memo_size:
            self._memo.popitem(last=False)
        return analysis
