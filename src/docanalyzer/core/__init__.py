"""Core module containing the processing orchestrator."""

from .processor import DocumentProcessor, Operation, ProcessingResult
from .statistics import CollectionStats, compute_collection_stats

__all__ = [
    "DocumentProcessor",
    "Operation",
    "ProcessingResult",
    "CollectionStats",
    "compute_collection_stats",
]
