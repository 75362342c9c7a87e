"""Credibility scoring."""

SOURCE_WEIGHT = 0.4
SENTIMENT_WEIGHT = 0.2
FLAG_WEIGHT = 0.4

# Number of flags at which the flag component bottoms out at zero
MAX_FLAGS = 5


def calculate_credibility_score(
    source_reputation: float, sentiment: float, flag_count: int
) -> float:
    """Combine reputation, sentiment neutrality and flag count into one score.

    Neutral sentiment (0.5) earns the full sentiment component; either
    extreme earns none. Each flag removes a fifth of the flag component.

    Args:
        source_reputation: Reputation of the article source in [0, 1].
        sentiment: Sentiment in [0, 1] where 0.5 is neutral.
        flag_count: Number of flags attached to the article.

    Returns:
        Credibility score clamped to [0, 1].
    """
    sentiment_score = 1.0 - abs(sentiment - 0.5) * 2
    flag_penalty = max(0.0, 1.0 - flag_count / MAX_FLAGS)
    score = (
        source_reputation * SOURCE_WEIGHT
        + sentiment_score * SENTIMENT_WEIGHT
        + flag_penalty * FLAG_WEIGHT
    )
    return max(0.0, min(1.0, score))
