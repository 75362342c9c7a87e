"""Tests for source domain extraction."""

import pytest

from reality_filter.url import extract_domain


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("https://www.bbc.co.uk/news/world", "bbc.co.uk"),
        ("http://Reuters.com", "reuters.com"),
        ("www.apnews.com", "apnews.com"),
        ("apnews.com/article/1", "apnews.com"),
        ("  The Daily Planet ", "the daily planet"),
        ("", "unknown"),
        ("   ", "unknown"),
    ],
)
def test_extract_domain(source: str, expected: str) -> None:
    assert extract_domain(source) == expected
