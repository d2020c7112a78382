"""Report module for printable analysis reports."""

from .renderer import (
    TRUNCATION_NOTICE,
    ReportBlock,
    ReportRenderer,
    build_report_blocks,
    report_filename,
    truncate_text,
)

__all__ = [
    "ReportRenderer",
    "ReportBlock",
    "build_report_blocks",
    "report_filename",
    "truncate_text",
    "TRUNCATION_NOTICE",
]
