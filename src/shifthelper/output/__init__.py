"""Output generators for schedules."""

from shifthelper.output.pdf_generator import PDFGenerator
from shifthelper.output.report_generator import ReportGenerator

__all__ = ["PDFGenerator", "ReportGenerator"]
