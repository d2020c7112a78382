"""Extraction module: turns uploaded files into plain text."""

from .archive import ENTRY_ERROR_MARKER, ArchiveExtractor, EntryOutcome
from .dispatcher import ExtractionDispatcher, extract_text
from .extractors import (
    BaseExtractor,
    DOCXExtractor,
    ExtractionResult,
    PDFExtractor,
    PlainTextExtractor,
    get_extractor,
    get_supported_extensions,
)
from .formats import SourceFile, SourceFormat, detect_format, file_extension

__all__ = [
    "SourceFile",
    "SourceFormat",
    "detect_format",
    "file_extension",
    "ExtractionResult",
    "BaseExtractor",
    "PlainTextExtractor",
    "PDFExtractor",
    "DOCXExtractor",
    "ArchiveExtractor",
    "EntryOutcome",
    "ENTRY_ERROR_MARKER",
    "ExtractionDispatcher",
    "extract_text",
    "get_extractor",
    "get_supported_extensions",
]
