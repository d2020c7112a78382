"""Source file model and media type / extension normalization."""

import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

PLAIN_TEXT_MIME = "text/plain"
PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
ZIP_MIMES = {"application/zip", "application/x-zip-compressed", "application/x-zip"}


class SourceFormat(str, Enum):
    """Canonical format tag chosen before any extractor runs."""

    PLAIN_TEXT = "plain-text"
    PDF = "pdf"
    WORD_DOCUMENT = "word-document"
    ARCHIVE = "archive"
    UNRECOGNIZED = "unrecognized"


MEDIA_TYPE_FORMATS: dict[str, SourceFormat] = {
    PLAIN_TEXT_MIME: SourceFormat.PLAIN_TEXT,
    PDF_MIME: SourceFormat.PDF,
    DOCX_MIME: SourceFormat.WORD_DOCUMENT,
    **{mime: SourceFormat.ARCHIVE for mime in ZIP_MIMES},
}

EXTENSION_FORMATS: dict[str, SourceFormat] = {
    ".txt": SourceFormat.PLAIN_TEXT,
    ".pdf": SourceFormat.PDF,
    ".docx": SourceFormat.WORD_DOCUMENT,
    ".zip": SourceFormat.ARCHIVE,
}


def file_extension(name: str) -> str:
    """Return the lowercase extension of a name (including the dot), or ''."""
    # Archive entry names use '/' regardless of platform
    basename = name.replace("\\", "/").rsplit("/", 1)[-1]
    dot = basename.rfind(".")
    if dot == -1:
        return ""
    return basename[dot:].lower()


def detect_format(media_type: str | None, name: str) -> SourceFormat:
    """
    Normalize a declared media type and file name into one format tag.

    The declared media type wins when it is one we recognize; a missing,
    generic or unknown media type falls back to the file extension.
    """
    if media_type:
        base_type = media_type.split(";", 1)[0].strip().lower()
        detected = MEDIA_TYPE_FORMATS.get(base_type)
        if detected is not None:
            return detected

    return EXTENSION_FORMATS.get(file_extension(name), SourceFormat.UNRECOGNIZED)


@dataclass(frozen=True)
class SourceFile:
    """An uploaded file: raw bytes, a display name and the declared media type."""

    data: bytes = field(repr=False)
    name: str
    media_type: str | None = None

    @property
    def format(self) -> SourceFormat:
        """Canonical format of this file."""
        return detect_format(self.media_type, self.name)

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: Path, media_type: str | None = None) -> "SourceFile":
        """
        Read a file from disk.

        When no media type is given it is guessed from the file name, the way
        a browser declares one for an upload.
        """
        path = Path(path)
        if media_type is None:
            media_type, _ = mimetypes.guess_type(path.name)
        return cls(data=path.read_bytes(), name=path.name, media_type=media_type)
