from reality_filter.analyzer.base import ContentAnalyzer
from reality_filter.analyzer.claude import ClaudeContentAnalyzer
from reality_filter.analyzer.noop import NoOpContentAnalyzer

__all__ = [
    "ClaudeContentAnalyzer",
    "ContentAnalyzer",
    "NoOpContentAnalyzer",
]
