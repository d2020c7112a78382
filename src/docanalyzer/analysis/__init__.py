"""Analysis module: metrics and language-model classification."""

from .client import (
    AnalysisResult,
    ChatCompletionClient,
    DocumentAnalysisClient,
    fallback_analysis,
)
from .metrics import compute_metrics, count_words, reading_time

__all__ = [
    "AnalysisResult",
    "ChatCompletionClient",
    "DocumentAnalysisClient",
    "fallback_analysis",
    "compute_metrics",
    "count_words",
    "reading_time",
]
