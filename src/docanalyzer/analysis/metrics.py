"""Word count and reading time for extracted text."""

import math

from ..models import DocumentMetrics

WORDS_PER_MINUTE = 200


def count_words(text: str) -> int:
    """Number of whitespace-delimited tokens in the text."""
    return len(text.split())


def reading_time(word_count: int) -> int:
    """Estimated reading time in whole minutes, rounded up."""
    return math.ceil(word_count / WORDS_PER_MINUTE)


def compute_metrics(
    text: str, page_count: int | None = None, sentiment: str = "neutral"
) -> DocumentMetrics:
    """Build the metrics block for a document."""
    word_count = count_words(text)
    return DocumentMetrics(
        word_count=word_count,
        page_count=page_count,
        reading_time=reading_time(word_count),
        sentiment=sentiment,
    )
