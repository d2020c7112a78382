"""Upload, reprocess and delete orchestration for the document collection."""

import datetime
import threading
from dataclasses import dataclass
from enum import Enum

from ..analysis import AnalysisResult, DocumentAnalysisClient, compute_metrics
from ..config.models import DocAnalyzerConfig
from ..database import DocumentStore, get_database
from ..errors import DocAnalyzerError, FileTooLargeError, ProcessingBusyError
from ..extraction import ExtractionDispatcher, SourceFile
from ..models import AnalyzedDocument
from ..utils.logging import get_logger

logger = get_logger(__name__)


class Operation(str, Enum):
    """Kinds of collection operations."""

    UPLOAD = "upload"
    REPROCESS = "reprocess"
    DELETE = "delete"


@dataclass
class ProcessingResult:
    """Outcome of one operation, ready to show to the user."""

    operation: Operation
    name: str

    document: AnalyzedDocument | None = None
    used_fallback_analysis: bool = False

    success: bool = False
    error_message: str | None = None
    error_type: str | None = None


class DocumentProcessor:
    """
    Orchestrates the document pipeline.

    Pipeline: source file -> extract -> metrics -> analyze -> store

    Failures never escape: each operation returns a ProcessingResult and
    leaves the processor idle and ready for the next one. Only one upload or
    reprocess runs at a time.
    """

    def __init__(
        self,
        config: DocAnalyzerConfig | None = None,
        store: DocumentStore | None = None,
        dispatcher: ExtractionDispatcher | None = None,
        analysis_client: DocumentAnalysisClient | None = None,
    ):
        """
        Initialize the document processor.

        Args:
            config: DocAnalyzer configuration
            store: Document collection (defaults to the configured database)
            dispatcher: Extraction dispatcher
            analysis_client: Client for the analysis service
        """
        self.config = config or DocAnalyzerConfig()
        self.store = store or DocumentStore(
            get_database(self.config.storage.path), key=self.config.storage.collection_key
        )
        self.dispatcher = dispatcher or ExtractionDispatcher()
        self.analysis_client = analysis_client or DocumentAnalysisClient(self.config.analysis)
        self._in_flight = threading.Lock()

    @property
    def is_busy(self) -> bool:
        """Whether an upload or reprocess is currently running."""
        return self._in_flight.locked()

    def _check_size(self, source: SourceFile):
        settings = self.config.processing
        if not settings.enforce_size_limit:
            return
        max_bytes = settings.max_file_size_mb * 1024 * 1024
        if source.size_bytes > max_bytes:
            raise FileTooLargeError(
                f"File too large: {source.size_bytes / 1024 / 1024:.1f}MB exceeds limit of "
                f"{settings.max_file_size_mb:g}MB"
            )

    def _run(self, operation: Operation, name: str, action) -> ProcessingResult:
        """Run an action in the single in-flight slot, converting errors to results."""
        result = ProcessingResult(operation=operation, name=name)

        if not self._in_flight.acquire(blocking=False):
            error = ProcessingBusyError("Another document is still being processed")
            result.error_message = str(error)
            result.error_type = type(error).__name__
            return result

        try:
            action(result)
            result.success = True
        except DocAnalyzerError as e:
            logger.error(f"{operation.value.capitalize()} failed for {name}: {e}")
            result.error_message = str(e)
            result.error_type = type(e).__name__
        except Exception as e:
            logger.exception(f"Unexpected error during {operation.value} of {name}")
            result.error_message = f"Unexpected error: {e}"
            result.error_type = type(e).__name__
        finally:
            self._in_flight.release()

        return result

    @staticmethod
    def _apply_analysis(document: AnalyzedDocument, analysis: AnalysisResult) -> AnalyzedDocument:
        metadata = document.metadata.model_copy(update={"sentiment": analysis.sentiment})
        return document.model_copy(
            update={
                "type": analysis.classification,
                "tags": list(analysis.tags),
                "summary": analysis.summary,
                "insights": analysis.insights,
                "graphs": list(analysis.graphs),
                "date": datetime.date.today().isoformat(),
                "metadata": metadata,
            }
        )

    def upload(self, source: SourceFile) -> ProcessingResult:
        """
        Extract, analyze and store a new document.

        Nothing is stored when extraction fails or the analysis service is
        unavailable. An unparseable analysis reply still stores the document
        with the fallback analysis.
        """

        def action(result: ProcessingResult):
            self._check_size(source)
            extraction = self.dispatcher.extract(source)
            analysis = self.analysis_client.analyze(extraction.text)

            document = AnalyzedDocument(
                name=source.name,
                full_text=extraction.text,
                metadata=compute_metrics(extraction.text, extraction.page_count),
            )
            document = self._apply_analysis(document, analysis)
            self.store.add(document)

            result.document = document
            result.used_fallback_analysis = analysis.is_fallback
            logger.info(f"Stored {source.name} as {document.id} ({document.type})")

        return self._run(Operation.UPLOAD, source.name, action)

    def reprocess(self, doc_id: str) -> ProcessingResult:
        """
        Re-run the analysis on a stored document's text.

        The id, name, text and text metrics are kept; the analysis fields
        and date are replaced.
        """
        try:
            name = self.store.get(doc_id).name
        except DocAnalyzerError:
            name = doc_id

        def action(result: ProcessingResult):
            existing = self.store.get(doc_id)
            analysis = self.analysis_client.analyze(existing.full_text)
            updated = self._apply_analysis(existing, analysis)
            self.store.replace(updated)

            result.document = updated
            result.used_fallback_analysis = analysis.is_fallback

        return self._run(Operation.REPROCESS, name, action)

    def delete(self, doc_id: str) -> ProcessingResult:
        """Remove a document from the collection."""
        result = ProcessingResult(operation=Operation.DELETE, name=doc_id)
        try:
            document = self.store.get(doc_id)
            self.store.delete(doc_id)
            result.name = document.name
            result.document = document
            result.success = True
        except DocAnalyzerError as e:
            result.error_message = str(e)
            result.error_type = type(e).__name__
        return result

    def list_documents(self) -> list[AnalyzedDocument]:
        return self.store.load()
