"""Tests for the single-format and archive extractors."""

import pytest

from conftest import make_docx, make_pdf, make_zip
from docanalyzer.errors import (
    MalformedArchiveError,
    MalformedDocumentError,
    MalformedPdfError,
    NoSupportedEntriesError,
)
from docanalyzer.extraction import (
    ENTRY_ERROR_MARKER,
    ArchiveExtractor,
    DOCXExtractor,
    PDFExtractor,
    PlainTextExtractor,
    get_extractor,
    get_supported_extensions,
)


class TestPlainTextExtractor:
    """Tests for PlainTextExtractor."""

    def test_extract_utf8(self):
        result = PlainTextExtractor().extract("Hello, World!\nCafé".encode("utf-8"))
        assert result.text == "Hello, World!\nCafé"
        assert result.page_count is None

    def test_strips_byte_order_mark(self):
        result = PlainTextExtractor().extract("\ufeffHello".encode("utf-8"))
        assert result.text == "Hello"

    def test_falls_back_to_legacy_encoding(self):
        """Test that non-UTF-8 text is still decoded."""
        result = PlainTextExtractor().extract("naïve résumé".encode("cp1252"))
        assert result.text == "naïve résumé"

    def test_text_returned_verbatim(self):
        result = PlainTextExtractor().extract(b"  padded  \n")
        assert result.text == "  padded  \n"


class TestPDFExtractor:
    """Tests for PDFExtractor."""

    def test_pages_in_order(self):
        """Test that page text is concatenated in page order."""
        pages = ["ALPHA-ONE first", "BRAVO-TWO second", "CHARLIE-THREE third"]

        result = PDFExtractor().extract(make_pdf(pages))

        assert result.text == "\n\n".join(pages)
        assert result.page_count == 3

    def test_words_joined_with_single_space(self):
        result = PDFExtractor().extract(make_pdf(["spaced    out   words"]))
        assert result.text == "spaced out words"

    def test_page_count_reported_for_blank_pages(self):
        result = PDFExtractor().extract(make_pdf(["", ""]))
        assert result.text == ""
        assert result.page_count == 2

    def test_malformed_pdf(self):
        with pytest.raises(MalformedPdfError):
            PDFExtractor().extract(b"this is not a pdf")

    def test_empty_buffer(self):
        with pytest.raises(MalformedPdfError):
            PDFExtractor().extract(b"")


class TestDOCXExtractor:
    """Tests for DOCXExtractor."""

    def test_extract_paragraphs(self):
        result = DOCXExtractor().extract(make_docx(["First paragraph", "Second paragraph"]))

        assert result.text.strip() == "First paragraph\n\nSecond paragraph"
        assert result.page_count is None

    def test_malformed_document(self):
        with pytest.raises(MalformedDocumentError):
            DOCXExtractor().extract(b"PK\x03\x04 definitely not a docx")

    def test_not_a_zip(self):
        with pytest.raises(MalformedDocumentError):
            DOCXExtractor().extract(b"plain bytes")


class TestArchiveExtractor:
    """Tests for ArchiveExtractor."""

    def test_entries_labeled_in_order(self):
        """Test that entries keep archive order and are labeled."""
        archive = make_zip([("b.txt", b"Beta"), ("a.txt", b"Alpha")])

        result = ArchiveExtractor().extract(archive)

        assert result.text == "--- b.txt ---\nBeta\n\n--- a.txt ---\nAlpha"

    def test_mixed_formats(self):
        archive = make_zip(
            [
                ("notes.txt", b"Plain notes"),
                ("paper.pdf", make_pdf(["PDF-BODY"])),
                ("letter.docx", make_docx(["Dear reader"])),
            ]
        )

        text = ArchiveExtractor().extract(archive).text

        assert "--- notes.txt ---\nPlain notes" in text
        assert "--- paper.pdf ---\nPDF-BODY" in text
        assert "--- letter.docx ---\n" in text
        assert "Dear reader" in text
        assert text.index("notes.txt") < text.index("paper.pdf") < text.index("letter.docx")

    def test_never_reports_page_count(self):
        archive = make_zip([("paper.pdf", make_pdf(["one", "two"]))])
        assert ArchiveExtractor().extract(archive).page_count is None

    def test_corrupted_entry_does_not_fail_archive(self):
        """Test that a broken entry becomes an error block."""
        archive = make_zip([("good.txt", b"Valid text"), ("broken.pdf", b"not a pdf at all")])

        result = ArchiveExtractor().extract(archive)

        assert "--- good.txt ---\nValid text" in result.text
        assert f"--- broken.pdf ---\n{ENTRY_ERROR_MARKER}" in result.text

    def test_skips_directories_and_unsupported_entries(self):
        archive = make_zip(
            [
                ("docs/", b""),
                ("docs/readme.txt", b"Inside folder"),
                ("docs/photo.jpg", b"\xff\xd8\xff"),
                ("nested.zip", make_zip([("inner.txt", b"hidden")])),
            ]
        )

        result = ArchiveExtractor().extract(archive)

        assert result.text == "--- docs/readme.txt ---\nInside folder"

    def test_extension_match_is_case_insensitive(self):
        archive = make_zip([("SHOUT.TXT", b"loud")])
        assert ArchiveExtractor().extract(archive).text == "--- SHOUT.TXT ---\nloud"

    def test_no_supported_entries(self):
        archive = make_zip([("a.jpg", b"\xff\xd8"), ("b.jpg", b"\xff\xd8")])
        with pytest.raises(NoSupportedEntriesError):
            ArchiveExtractor().extract(archive)

    def test_empty_archive(self):
        with pytest.raises(NoSupportedEntriesError):
            ArchiveExtractor().extract(make_zip([]))

    def test_malformed_archive(self):
        with pytest.raises(MalformedArchiveError):
            ArchiveExtractor().extract(b"not a zip file")

    def test_extract_entries_outcomes(self):
        archive = make_zip([("ok.txt", b"fine"), ("bad.docx", b"junk")])

        outcomes = ArchiveExtractor().extract_entries(archive)

        assert [o.name for o in outcomes] == ["ok.txt", "bad.docx"]
        assert outcomes[0].success and outcomes[0].text == "fine"
        assert not outcomes[1].success
        assert outcomes[1].error


class TestGetExtractor:
    """Tests for get_extractor and get_supported_extensions."""

    def test_lookup_by_name(self):
        assert isinstance(get_extractor("a.txt"), PlainTextExtractor)
        assert isinstance(get_extractor("A.PDF"), PDFExtractor)
        assert isinstance(get_extractor("b.docx"), DOCXExtractor)

    def test_unsupported(self):
        assert get_extractor("photo.jpg") is None
        assert get_extractor("bundle.zip") is None

    def test_supported_extensions(self):
        assert get_supported_extensions() == {".txt", ".pdf", ".docx"}
