from reality_filter.factcheck.base import FactChecker
from reality_filter.factcheck.claude import ClaudeFactChecker
from reality_filter.factcheck.noop import NoOpFactChecker

__all__ = [
    "ClaudeFactChecker",
    "FactChecker",
    "NoOpFactChecker",
]
