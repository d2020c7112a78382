"""Extractor for zip archives bundling several supported documents."""

import io
import zipfile
from dataclasses import dataclass

from ..errors import MalformedArchiveError, NoSupportedEntriesError
from ..utils.logging import get_logger
from .extractors import BaseExtractor, ExtractionResult, get_extractor
from .formats import SourceFormat

logger = get_logger(__name__)

ENTRY_ERROR_MARKER = "[Error processing file]"


@dataclass
class EntryOutcome:
    """Result of extracting one archive entry: either text or an error."""

    name: str
    text: str | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    def render(self) -> str:
        """Render the labeled block for this entry."""
        body = self.text if self.success else ENTRY_ERROR_MARKER
        return f"\n\n--- {self.name} ---\n{body}"


class ArchiveExtractor(BaseExtractor):
    """
    Extracts text from every supported entry of a zip archive.

    Entries are visited in archive order. Directories and entries with an
    unsupported extension (nested archives included) are skipped. A failing
    entry is recorded as an error block and does not fail the archive.
    Archives never report a page count.
    """

    format = SourceFormat.ARCHIVE

    @property
    def supported_extensions(self) -> set[str]:
        return {".zip"}

    def extract_entries(self, data: bytes) -> list[EntryOutcome]:
        """Extract every supported entry and collect per-entry outcomes."""
        try:
            archive = zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as e:
            raise MalformedArchiveError(f"Failed to parse ZIP file: {e}") from e

        outcomes: list[EntryOutcome] = []
        with archive:
            for info in archive.infolist():
                if info.is_dir():
                    continue

                extractor = get_extractor(info.filename)
                if extractor is None:
                    logger.debug(f"Skipping unsupported archive entry: {info.filename}")
                    continue

                try:
                    result = extractor.extract(archive.read(info))
                    outcomes.append(EntryOutcome(name=info.filename, text=result.text))
                except Exception as e:
                    logger.warning(f"Failed to process {info.filename}: {e}")
                    outcomes.append(EntryOutcome(name=info.filename, error=str(e)))

        return outcomes

    def extract(self, data: bytes) -> ExtractionResult:
        outcomes = self.extract_entries(data)
        combined_text = "".join(outcome.render() for outcome in outcomes)

        if not combined_text.strip():
            raise NoSupportedEntriesError("No supported text files found in ZIP archive")

        failed = sum(1 for outcome in outcomes if not outcome.success)
        logger.info(f"Extracted {len(outcomes)} archive entries ({failed} failed)")

        return ExtractionResult(text=combined_text.strip())
