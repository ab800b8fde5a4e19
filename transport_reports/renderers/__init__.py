"""Output adapters for transport reports."""

from transport_reports.renderers.base import (
    OutputTarget,
    ReportRenderer,
    opened,
    render_report,
)
from transport_reports.renderers.dict_renderer import DictRenderer
from transport_reports.renderers.pdf import PdfRenderer
from transport_reports.renderers.spreadsheet import SpreadsheetRenderer

RENDERERS: dict[str, type[ReportRenderer]] = {
    "json": DictRenderer,
    "pdf": PdfRenderer,
    "xlsx": SpreadsheetRenderer,
}

__all__ = [
    "OutputTarget",
    "ReportRenderer",
    "opened",
    "render_report",
    "DictRenderer",
    "PdfRenderer",
    "SpreadsheetRenderer",
    "RENDERERS",
]
