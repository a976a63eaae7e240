"""Output generation for schedules (PDF, text)."""

from shiftplanner.output.pdf_generator import PDFGenerator
from shiftplanner.output.text_report import TextReportGenerator

__all__ = [
    "PDFGenerator",
    "TextReportGenerator",
]
