"""Shared fixtures and in-memory document builders."""

import io
import zipfile

import fitz  # PyMuPDF
import pytest
from docx import Document

from docanalyzer.database import Database, DocumentStore
from docanalyzer.models import AnalyzedDocument, DocumentMetrics


def make_pdf(pages: list[str]) -> bytes:
    """Build a PDF with one line of text per page."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text, fontsize=12)
    data = doc.tobytes()
    doc.close()
    return data


def make_docx(paragraphs: list[str]) -> bytes:
    """Build a Word document with the given paragraphs."""
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def make_zip(entries: list[tuple[str, bytes]]) -> bytes:
    """Build a zip archive; names ending in '/' become directory entries."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, data in entries:
            archive.writestr(name, data)
    return buffer.getvalue()


@pytest.fixture
def database(tmp_path):
    """A fresh SQLite database."""
    db = Database(tmp_path / "test.db")
    yield db
    db.close()


@pytest.fixture
def store(database):
    """An empty document store."""
    return DocumentStore(database)


@pytest.fixture
def sample_document():
    """A stored-looking analyzed document."""
    return AnalyzedDocument(
        name="contract.pdf",
        type="Legal Agreement",
        tags=["contract", "lease", "property"],
        summary="A residential lease agreement.",
        full_text="This lease is made between the landlord and the tenant.",
        date="2024-05-01",
        metadata=DocumentMetrics(word_count=10, page_count=2, reading_time=1, sentiment="neutral"),
        insights="Standard twelve month term.",
    )
