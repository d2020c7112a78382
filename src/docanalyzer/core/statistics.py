"""Aggregate statistics over the document collection."""

from collections import Counter
from dataclasses import dataclass, field

from ..models import AnalyzedDocument

POPULAR_TAG_LIMIT = 10


@dataclass
class CollectionStats:
    """Summary of the stored collection."""

    total_documents: int = 0
    type_distribution: dict[str, int] = field(default_factory=dict)
    sentiment_distribution: dict[str, int] = field(default_factory=dict)
    total_words: int = 0
    total_pages: int = 0
    average_reading_time: int = 0
    popular_tags: list[tuple[str, int]] = field(default_factory=list)


def compute_collection_stats(documents: list[AnalyzedDocument]) -> CollectionStats:
    """
    Compute collection statistics.

    Documents without a page count count as one page.
    """
    if not documents:
        return CollectionStats()

    total_reading_time = sum(doc.metadata.reading_time for doc in documents)
    tag_counts = Counter(tag for doc in documents for tag in doc.tags)

    return CollectionStats(
        total_documents=len(documents),
        type_distribution=dict(Counter(doc.type for doc in documents)),
        sentiment_distribution=dict(Counter(doc.metadata.sentiment for doc in documents)),
        total_words=sum(doc.metadata.word_count for doc in documents),
        total_pages=sum(doc.metadata.page_count or 1 for doc in documents),
        average_reading_time=round(total_reading_time / len(documents)),
        popular_tags=tag_counts.most_common(POPULAR_TAG_LIMIT),
    )
