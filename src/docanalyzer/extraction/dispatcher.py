"""Routes a source file to the extractor for its format."""

from ..errors import EmptyContentError, UnsupportedFormatError
from ..utils.logging import get_logger
from .archive import ArchiveExtractor
from .extractors import (
    BaseExtractor,
    DOCXExtractor,
    ExtractionResult,
    PDFExtractor,
    PlainTextExtractor,
)
from .formats import SourceFile, SourceFormat

logger = get_logger(__name__)


class ExtractionDispatcher:
    """
    Chooses an extractor from a file's canonical format and runs it.

    The format comes from SourceFile.format, which prefers the declared
    media type and falls back to the file extension.
    """

    def __init__(self, extractors: list[BaseExtractor] | None = None):
        """
        Initialize the dispatcher.

        Args:
            extractors: Extractors to route to (defaults to plain text, PDF,
                Word and archive)
        """
        if extractors is None:
            extractors = [PlainTextExtractor(), PDFExtractor(), DOCXExtractor(), ArchiveExtractor()]
        self.extractors: dict[SourceFormat, BaseExtractor] = {
            extractor.format: extractor for extractor in extractors
        }

    def get_extractor(self, source: SourceFile) -> BaseExtractor:
        """Return the extractor for a source, or raise UnsupportedFormatError."""
        source_format = source.format
        extractor = self.extractors.get(source_format)
        if extractor is None:
            raise UnsupportedFormatError(
                f"Unsupported file type: {source.name} ({source.media_type or 'unknown type'})"
            )
        return extractor

    def extract(self, source: SourceFile) -> ExtractionResult:
        """
        Extract text from a source file.

        Raises:
            UnsupportedFormatError: No extractor matches the file
            EmptyContentError: The extracted text is blank
            ExtractionError: The extractor itself failed
        """
        extractor = self.get_extractor(source)
        logger.debug(f"Extracting {source.name} as {extractor.format.value}")

        result = extractor.extract(source.data)

        if not result.text or not result.text.strip():
            raise EmptyContentError("No text content found in the document")

        logger.info(
            f"Extracted {len(result.text)} chars from {source.name}"
            + (f" ({result.page_count} pages)" if result.page_count is not None else "")
        )
        return result


_default_dispatcher: ExtractionDispatcher | None = None


def extract_text(source: SourceFile) -> ExtractionResult:
    """Extract text from a source file with the default dispatcher."""
    global _default_dispatcher
    if _default_dispatcher is None:
        _default_dispatcher = ExtractionDispatcher()
    return _default_dispatcher.extract(source)
