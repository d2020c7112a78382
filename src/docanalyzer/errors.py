"""Exception hierarchy for DocAnalyzer."""


class DocAnalyzerError(Exception):
    """Base class for all DocAnalyzer errors."""

    pass


class ExtractionError(DocAnalyzerError):
    """Raised when text extraction fails."""

    pass


class UnsupportedFormatError(ExtractionError):
    """The file matches none of the supported formats."""

    pass


class EmptyContentError(ExtractionError):
    """Extraction succeeded but produced no usable text."""

    pass


class MalformedPdfError(ExtractionError):
    """The PDF reader could not open or read the buffer."""

    pass


class MalformedDocumentError(ExtractionError):
    """The Word document could not be parsed."""

    pass


class MalformedArchiveError(ExtractionError):
    """The buffer is not a readable zip archive."""

    pass


class NoSupportedEntriesError(ExtractionError):
    """The archive contained no processable entries."""

    pass


class FileTooLargeError(ExtractionError):
    """The file exceeds the configured size ceiling."""

    pass


class AnalysisServiceUnavailableError(DocAnalyzerError):
    """The analysis service could not be reached or returned an error status."""

    pass


class DocumentNotFoundError(DocAnalyzerError):
    """No stored document has the requested id."""

    pass


class ProcessingBusyError(DocAnalyzerError):
    """Another upload or reprocess is already in flight."""

    pass
