"""Text extractors for single-format byte buffers."""

import io
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..errors import ExtractionError, MalformedDocumentError, MalformedPdfError
from ..utils.logging import get_logger
from .formats import SourceFormat, file_extension

logger = get_logger(__name__)


@dataclass
class ExtractionResult:
    """Text extracted from a source; page_count is only set for PDFs."""

    text: str
    page_count: int | None = None


class BaseExtractor(ABC):
    """Base class for text extractors."""

    format: SourceFormat

    @property
    @abstractmethod
    def supported_extensions(self) -> set[str]:
        """Return set of supported file extensions (lowercase, with dot)."""
        pass

    @abstractmethod
    def extract(self, data: bytes) -> ExtractionResult:
        """
        Extract text content from a byte buffer.

        Args:
            data: Raw file contents

        Returns:
            ExtractionResult with the extracted text

        Raises:
            ExtractionError: If extraction fails
        """
        pass

    def can_handle(self, name: str) -> bool:
        """Check if this extractor can handle a file with the given name."""
        return file_extension(name) in self.supported_extensions


class PlainTextExtractor(BaseExtractor):
    """Extractor for plain text files."""

    format = SourceFormat.PLAIN_TEXT
    ENCODINGS = ["utf-8-sig", "cp1252", "latin-1"]

    @property
    def supported_extensions(self) -> set[str]:
        return {".txt"}

    def decode(self, data: bytes) -> str:
        """Decode bytes, trying UTF-8 first and then legacy encodings."""
        for encoding in self.ENCODINGS:
            try:
                content = data.decode(encoding)
                logger.debug(f"Decoded {len(data)} bytes of text using {encoding}")
                return content
            except UnicodeDecodeError:
                continue

        raise ExtractionError("Could not decode text with any supported encoding")

    def extract(self, data: bytes) -> ExtractionResult:
        return ExtractionResult(text=self.decode(data))


class PDFExtractor(BaseExtractor):
    """Extractor for PDF files using PyMuPDF (fitz)."""

    format = SourceFormat.PDF

    @property
    def supported_extensions(self) -> set[str]:
        return {".pdf"}

    def extract(self, data: bytes) -> ExtractionResult:
        """
        Extract text from a PDF, page by page in document order.

        The words of each page are joined with single spaces and pages are
        separated by a blank line.
        """
        try:
            import fitz  # PyMuPDF
        except ImportError:
            raise ExtractionError(
                "PyMuPDF (fitz) is not installed. Install with: pip install pymupdf"
            )

        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            raise MalformedPdfError(f"Failed to parse PDF file: {e}") from e

        try:
            if doc.needs_pass:
                raise MalformedPdfError("Failed to parse PDF file: document is password protected")

            page_count = doc.page_count
            page_texts: list[str] = []

            for page_index in range(page_count):
                page = doc.load_page(page_index)
                words = page.get_text("words")
                page_texts.append(" ".join(word[4] for word in words))
                logger.debug(f"Extracted {len(words)} words from page {page_index + 1}")

        except MalformedPdfError:
            raise
        except Exception as e:
            raise MalformedPdfError(f"Failed to parse PDF file: {e}") from e
        finally:
            doc.close()

        full_text = "\n\n".join(page_texts).strip()
        logger.debug(f"Extracted {len(full_text)} total chars from {page_count}-page PDF")

        return ExtractionResult(text=full_text, page_count=page_count)


class DOCXExtractor(BaseExtractor):
    """Extractor for Word documents using python-docx."""

    format = SourceFormat.WORD_DOCUMENT

    @property
    def supported_extensions(self) -> set[str]:
        return {".docx"}

    def extract(self, data: bytes) -> ExtractionResult:
        """Extract the raw text of a Word document without normalizing it."""
        try:
            from docx import Document
        except ImportError:
            raise ExtractionError(
                "python-docx is not installed. Install with: pip install python-docx"
            )

        try:
            doc = Document(io.BytesIO(data))
            text_parts = [paragraph.text for paragraph in doc.paragraphs]

            for table in doc.tables:
                for row in table.rows:
                    row_text = " | ".join(cell.text.strip() for cell in row.cells if cell.text.strip())
                    if row_text:
                        text_parts.append(row_text)

        except Exception as e:
            raise MalformedDocumentError(f"Failed to parse DOCX file: {e}") from e

        full_text = "\n\n".join(text_parts)
        logger.debug(f"Extracted {len(full_text)} chars from DOCX")

        return ExtractionResult(text=full_text)


# Single-format extractors, also used for archive entries
EXTRACTORS: list[BaseExtractor] = [
    PlainTextExtractor(),
    PDFExtractor(),
    DOCXExtractor(),
]


def get_extractor(name: str) -> BaseExtractor | None:
    """Get the single-format extractor for a file name, if any."""
    for extractor in EXTRACTORS:
        if extractor.can_handle(name):
            return extractor
    return None


def get_supported_extensions() -> set[str]:
    """Get all extensions handled by the single-format extractors."""
    extensions: set[str] = set()
    for extractor in EXTRACTORS:
        extensions.update(extractor.supported_extensions)
    return extensions
