"""Tests for source format normalization."""

from docanalyzer.extraction import SourceFile, SourceFormat, detect_format, file_extension
from docanalyzer.extraction.formats import DOCX_MIME


class TestFileExtension:
    """Tests for file_extension."""

    def test_lowercases_extension(self):
        assert file_extension("Report.PDF") == ".pdf"

    def test_uses_last_dot(self):
        assert file_extension("archive.tar.zip") == ".zip"

    def test_no_extension(self):
        assert file_extension("README") == ""

    def test_ignores_dots_in_folders(self):
        """Test that a dot in a parent folder is not an extension."""
        assert file_extension("v1.2/notes") == ""
        assert file_extension("v1.2/notes.txt") == ".txt"


class TestDetectFormat:
    """Tests for detect_format."""

    def test_media_types(self):
        """Test that each recognized media type maps to its format."""
        assert detect_format("text/plain", "x") == SourceFormat.PLAIN_TEXT
        assert detect_format("application/pdf", "x") == SourceFormat.PDF
        assert detect_format(DOCX_MIME, "x") == SourceFormat.WORD_DOCUMENT
        assert detect_format("application/zip", "x") == SourceFormat.ARCHIVE
        assert detect_format("application/x-zip-compressed", "x") == SourceFormat.ARCHIVE

    def test_media_type_parameters_ignored(self):
        assert detect_format("text/plain; charset=utf-8", "x") == SourceFormat.PLAIN_TEXT

    def test_media_type_wins_over_extension(self):
        """Test that a recognized media type is trusted over the name."""
        assert detect_format("application/pdf", "scan.txt") == SourceFormat.PDF

    def test_missing_media_type_falls_back_to_extension(self):
        assert detect_format(None, "bundle.zip") == SourceFormat.ARCHIVE
        assert detect_format("", "letter.docx") == SourceFormat.WORD_DOCUMENT

    def test_generic_media_type_falls_back_to_extension(self):
        assert detect_format("application/octet-stream", "bundle.ZIP") == SourceFormat.ARCHIVE

    def test_unrecognized(self):
        assert detect_format("image/png", "photo.png") == SourceFormat.UNRECOGNIZED
        assert detect_format(None, "notes") == SourceFormat.UNRECOGNIZED


class TestSourceFile:
    """Tests for SourceFile."""

    def test_format_property(self):
        source = SourceFile(data=b"hello", name="a.txt", media_type="text/plain")
        assert source.format == SourceFormat.PLAIN_TEXT
        assert source.size_bytes == 5

    def test_from_path_guesses_media_type(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello")

        source = SourceFile.from_path(path)

        assert source.name == "notes.txt"
        assert source.media_type == "text/plain"
        assert source.data == b"hello"

    def test_from_path_explicit_media_type(self, tmp_path):
        path = tmp_path / "upload.bin"
        path.write_bytes(b"hello")

        source = SourceFile.from_path(path, media_type="text/plain")

        assert source.format == SourceFormat.PLAIN_TEXT
