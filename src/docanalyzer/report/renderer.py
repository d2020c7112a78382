"""Printable PDF reports for analyzed documents, written with PyMuPDF."""

import datetime
import re
from dataclasses import dataclass
from pathlib import Path

import fitz  # PyMuPDF

from ..models import AnalyzedDocument
from ..utils.logging import get_logger

logger = get_logger(__name__)

TRUNCATION_NOTICE = "...\n\n[Content truncated for PDF export]"
MM = 72 / 25.4


@dataclass
class ReportBlock:
    """A run of text set in one font size and weight."""

    text: str
    font_size: float = 12
    bold: bool = False
    space_after: float = 0


def truncate_text(text: str, limit: int) -> str:
    """Cut text to limit characters, appending the truncation notice if cut."""
    if len(text) > limit:
        return text[:limit] + TRUNCATION_NOTICE
    return text


def report_filename(document: AnalyzedDocument, on: datetime.date | None = None) -> str:
    """File name for a document's report, e.g. AI_Analysis_contract_2024-05-01.pdf."""
    stem = re.sub(r"\.[^/.]+$", "", document.name)
    day = (on or datetime.date.today()).isoformat()
    return f"AI_Analysis_{stem}_{day}.pdf"


def build_report_blocks(document: AnalyzedDocument, max_text_chars: int = 2000) -> list[ReportBlock]:
    """Lay out the report content in reading order."""
    section_gap = 10 * MM
    metrics = document.metadata

    blocks = [
        ReportBlock(f"AI Analysis Report: {document.name}", 18, bold=True, space_after=section_gap),
        ReportBlock("Document Information", 14, bold=True),
        ReportBlock(f"Type: {document.type}"),
        ReportBlock(f"Date: {document.date}"),
        ReportBlock(f"Word Count: {metrics.word_count}"),
        ReportBlock(f"Reading Time: {metrics.reading_time} minutes"),
        ReportBlock(f"Sentiment: {metrics.sentiment}"),
    ]
    if metrics.page_count:
        blocks.append(ReportBlock(f"Page Count: {metrics.page_count}"))
    blocks[-1].space_after = section_gap

    blocks += [
        ReportBlock("Tags", 14, bold=True),
        ReportBlock(", ".join(document.tags), space_after=section_gap),
        ReportBlock("Summary", 14, bold=True),
        ReportBlock(document.summary, space_after=section_gap),
    ]

    if document.insights:
        blocks += [
            ReportBlock("AI Insights", 14, bold=True),
            ReportBlock(document.insights, space_after=section_gap),
        ]

    blocks += [
        ReportBlock("Document Content", 14, bold=True),
        ReportBlock(truncate_text(document.full_text, max_text_chars), 10),
    ]
    return blocks


class ReportRenderer:
    """
    Renders report blocks onto pages.

    Text is word-wrapped to the printable width; a new page starts whenever
    the next line would cross the bottom margin.
    """

    REGULAR_FONT = "helv"
    BOLD_FONT = "hebo"
    # Built-in CJK font; also covers Latin, used for text Helvetica cannot encode
    UNICODE_FONT = "china-s"
    LINE_SPACING = 1.25
    BLOCK_SPACING = 5 * MM

    def __init__(self, paper: str = "a4", margin: float = 20 * MM, max_text_chars: int = 2000):
        """
        Initialize the renderer.

        Args:
            paper: Paper size name understood by PyMuPDF
            margin: Page margin in points
            max_text_chars: Characters of extracted text to include
        """
        self.page_width, self.page_height = fitz.paper_size(paper)
        self.margin = margin
        self.max_text_chars = max_text_chars
        self.max_width = self.page_width - 2 * margin

    def font_for(self, block: ReportBlock) -> str:
        """Pick a font able to draw every character of the block."""
        if any(ord(char) > 0xFF for char in block.text):
            return self.UNICODE_FONT
        return self.BOLD_FONT if block.bold else self.REGULAR_FONT

    def wrap(self, text: str, font_size: float, fontname: str) -> list[str]:
        """Split text into lines that fit the printable width."""

        def width(s: str) -> float:
            return fitz.get_text_length(s, fontname=fontname, fontsize=font_size)

        lines: list[str] = []
        for paragraph in text.split("\n"):
            current = ""
            for word in paragraph.split():
                candidate = f"{current} {word}" if current else word
                if width(candidate) <= self.max_width:
                    current = candidate
                    continue
                if current:
                    lines.append(current)
                # Hard-break words wider than a whole line
                while width(word) > self.max_width:
                    cut = len(word) - 1
                    while cut > 1 and width(word[:cut]) > self.max_width:
                        cut -= 1
                    lines.append(word[:cut])
                    word = word[cut:]
                current = word
            lines.append(current)
        return lines

    def render(self, document: AnalyzedDocument) -> bytes:
        """Render a document's report and return the PDF bytes."""
        pdf = fitz.open()
        page = pdf.new_page(width=self.page_width, height=self.page_height)
        y = self.margin

        for block in build_report_blocks(document, self.max_text_chars):
            fontname = self.font_for(block)
            line_height = block.font_size * self.LINE_SPACING

            for line in self.wrap(block.text, block.font_size, fontname):
                if y + line_height > self.page_height - self.margin:
                    page = pdf.new_page(width=self.page_width, height=self.page_height)
                    y = self.margin
                y += line_height
                if line:
                    page.insert_text(
                        (self.margin, y), line, fontsize=block.font_size, fontname=fontname
                    )

            y += self.BLOCK_SPACING + block.space_after

        data = pdf.tobytes()
        logger.debug(f"Rendered {pdf.page_count}-page report for {document.name}")
        pdf.close()
        return data

    def write(self, document: AnalyzedDocument, output_dir: Path) -> Path:
        """Render a report into output_dir and return its path."""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        path = output_dir / report_filename(document)
        path.write_bytes(self.render(document))
        logger.info(f"Wrote report for {document.name} to {path}")
        return path
