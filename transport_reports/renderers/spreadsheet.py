"""XLSX export of transport reports via openpyxl."""

from __future__ import annotations

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.worksheet.worksheet import Worksheet

from transport_reports.config import RGB, color_to_hex
from transport_reports.models import (
    ColumnAlign,
    DetailSection,
    DistributionSection,
    ReportMetadata,
    SectionLayout,
    SummarySection,
)
from transport_reports.renderers.base import OutputTarget, ReportRenderer

DETAIL_SHEET = "Transport Entries"
SUMMARY_SHEET = "Summary"


def _fill(rgb: RGB) -> PatternFill:
    argb = "FF" + color_to_hex(rgb).lstrip("#").upper()
    return PatternFill(start_color=argb, end_color=argb, fill_type="solid")


def _font_color(rgb: RGB) -> str:
    return "FF" + color_to_hex(rgb).lstrip("#").upper()


def _write_header(ws: Worksheet, row: int, headers: tuple[str, ...], layout: SectionLayout) -> None:
    for col, header in enumerate(headers, start=1):
        cell = ws.cell(row=row, column=col, value=header)
        cell.font = Font(bold=True, color=_font_color(layout.header_text_color))
        cell.fill = _fill(layout.header_fill_color)


class SpreadsheetRenderer(ReportRenderer):
    """
    Flat tabular export.

    The first sheet holds the detail rows exactly as printed (header row
    plus one row per entry); a second sheet holds the summary and status
    distribution tables.
    """

    name = "xlsx"
    extension = "xlsx"

    def __init__(self, target: OutputTarget):
        super().__init__(target)
        self._workbook: Workbook | None = None
        self._summary_row = 1

    def open(self, metadata: ReportMetadata) -> None:
        self._acquire()
        self._workbook = Workbook()
        detail = self._workbook.active
        detail.title = DETAIL_SHEET
        summary = self._workbook.create_sheet(SUMMARY_SHEET)
        summary.cell(row=1, column=1, value=metadata.title).font = Font(bold=True, size=12)
        summary.cell(row=2, column=1, value=metadata.period_label)
        self._summary_row = 4

    def _section_title(self, ws: Worksheet, layout: SectionLayout) -> None:
        ws.cell(row=self._summary_row, column=1, value=layout.title).font = Font(
            bold=True, color=_font_color(layout.title_color),
        )
        self._summary_row += 1

    def write_summary(self, section: SummarySection) -> None:
        ws = self._workbook[SUMMARY_SHEET]
        self._section_title(ws, section.layout)
        _write_header(ws, self._summary_row, section.headers, section.layout)
        for metric in section.metrics:
            self._summary_row += 1
            label = ws.cell(row=self._summary_row, column=1, value=metric.label)
            value = ws.cell(row=self._summary_row, column=2, value=metric.display)
            if metric.highlighted:
                emphasis = Font(bold=True, color=_font_color(section.highlight_color))
                label.font = emphasis
                value.font = emphasis
        self._summary_row += 2

    def write_distribution(self, section: DistributionSection) -> None:
        ws = self._workbook[SUMMARY_SHEET]
        self._section_title(ws, section.layout)
        _write_header(ws, self._summary_row, section.headers, section.layout)
        for row in section.rows:
            self._summary_row += 1
            ws.cell(row=self._summary_row, column=1, value=row.status)
            ws.cell(row=self._summary_row, column=2, value=row.count)
            ws.cell(row=self._summary_row, column=3, value=row.display)
        self._summary_row += 2

    def write_detail(self, section: DetailSection) -> None:
        ws = self._workbook[DETAIL_SHEET]
        table = section.as_table()
        _write_header(ws, 1, table[0], section.layout)
        right = Alignment(horizontal="right")
        for row_index, cells in enumerate(table[1:], start=2):
            for col_index, (column, text) in enumerate(zip(section.columns, cells), start=1):
                cell = ws.cell(row=row_index, column=col_index, value=text)
                if column.align == ColumnAlign.RIGHT:
                    cell.alignment = right

    def close(self, *, completed: bool = True) -> None:
        saved = False
        try:
            if completed and self._workbook is not None and self._handle is not None:
                self._workbook.save(self._handle)
                saved = True
        finally:
            self._workbook = None
            super().close(completed=saved)
