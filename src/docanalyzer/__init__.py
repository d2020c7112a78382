"""
DocAnalyzer - document upload and AI analysis.

Extracts text from PDF, Word, plain-text and zip files, computes simple
statistics, classifies and summarizes the text with a hosted language model,
and keeps the results in a local collection with printable reports.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .config import get_config
from .database import get_database
from .utils.logging import get_logger

from .analysis import AnalysisResult, DocumentAnalysisClient
from .core import DocumentProcessor, ProcessingResult
from .database import DocumentStore
from .extraction import ExtractionDispatcher, ExtractionResult, SourceFile, extract_text
from .models import AnalyzedDocument, DocumentMetrics
from .report import ReportRenderer

__all__ = [
    "get_config",
    "get_database",
    "get_logger",
    # Extraction
    "SourceFile",
    "ExtractionResult",
    "ExtractionDispatcher",
    "extract_text",
    # Analysis
    "DocumentAnalysisClient",
    "AnalysisResult",
    # Records and storage
    "AnalyzedDocument",
    "DocumentMetrics",
    "DocumentStore",
    # Orchestration
    "DocumentProcessor",
    "ProcessingResult",
    # Reports
    "ReportRenderer",
]
