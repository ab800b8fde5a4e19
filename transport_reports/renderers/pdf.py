"""
Printable PDF output for transport reports.

Thin adapter over reportlab's platypus layer: each report section becomes
a heading paragraph plus a grid table styled from the section's layout
hints.  Pagination, font metrics and the binary layout stay inside
reportlab.
"""

from __future__ import annotations

from pathlib import Path

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from transport_reports.config import RGB
from transport_reports.formatting import RUPEE_SYMBOL, RUPEE_TEXT_PREFIX
from transport_reports.models import (
    ColumnAlign,
    DetailSection,
    DistributionSection,
    ReportMetadata,
    SectionLayout,
    SummarySection,
)
from transport_reports.renderers.base import OutputTarget, ReportRenderer

MARGIN = 10 * mm
GRID_COLOR = colors.HexColor("#9ca3af")
PERIOD_TEXT_COLOR = colors.Color(80 / 255, 80 / 255, 80 / 255)
BODY_TEXT_COLOR = colors.Color(60 / 255, 60 / 255, 60 / 255)

BASE_FONT = "Helvetica"
BASE_BOLD_FONT = "Helvetica-Bold"

# Glyphs missing from the standard Type 1 fonts, with their text stand-ins
BASE_FONT_SUBSTITUTES = {RUPEE_SYMBOL: RUPEE_TEXT_PREFIX}


def _color(rgb: RGB) -> colors.Color:
    return colors.Color(rgb[0] / 255, rgb[1] / 255, rgb[2] / 255)


class PdfRenderer(ReportRenderer):
    """
    Builds an A4 landscape document on a completed close.

    Text is set in Helvetica unless ``font_path`` names a TrueType font,
    which is registered with reportlab and used for every paragraph and
    cell.  Helvetica has no rupee glyph, so under the base font ``₹`` is
    written as the ``Rs. `` text prefix instead.
    """

    name = "pdf"
    extension = "pdf"

    def __init__(self, target: OutputTarget, *, font_path: str | Path | None = None):
        super().__init__(target)
        self._font_path = font_path
        self._font = BASE_FONT
        self._bold_font = BASE_BOLD_FONT
        self._styles = getSampleStyleSheet()
        self._story: list = []
        self._doc: SimpleDocTemplate | None = None

    # -- helpers ---------------------------------------------------------

    def _register_font(self) -> None:
        if self._font_path is None:
            return
        font_name = f"transport-{Path(self._font_path).stem}"
        if font_name not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(TTFont(font_name, str(self._font_path)))
        self._font = self._bold_font = font_name

    def _text(self, value: str) -> str:
        if self._font != BASE_FONT:
            return value
        for glyph, stand_in in BASE_FONT_SUBSTITUTES.items():
            value = value.replace(glyph, stand_in)
        return value

    def _heading(self, layout: SectionLayout) -> None:
        style = ParagraphStyle(
            f"section-{layout.title}",
            parent=self._styles["Heading2"],
            fontName=self._bold_font,
            fontSize=layout.title_font_size,
            leading=layout.title_font_size + 4,
            textColor=_color(layout.title_color),
        )
        self._story.append(Spacer(1, 5 * mm))
        self._story.append(Paragraph(self._text(layout.title), style))

    def _base_style(self, layout: SectionLayout) -> list[tuple]:
        return [
            ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
            ("BACKGROUND", (0, 0), (-1, 0), _color(layout.header_fill_color)),
            ("TEXTCOLOR", (0, 0), (-1, 0), _color(layout.header_text_color)),
            ("FONTNAME", (0, 0), (-1, -1), self._font),
            ("FONTNAME", (0, 0), (-1, 0), self._bold_font),
            ("FONTSIZE", (0, 0), (-1, 0), layout.header_font_size),
            ("FONTSIZE", (0, 1), (-1, -1), layout.body_font_size),
            ("TEXTCOLOR", (0, 1), (-1, -1), BODY_TEXT_COLOR),
            ("TOPPADDING", (0, 0), (-1, -1), 3),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ]

    def _split_width(self, layout: SectionLayout, columns: int) -> list[float] | None:
        if layout.table_width is None:
            return None
        return [layout.table_width * mm / columns] * columns

    def _cells(self, headers, rows) -> list[list[str]]:
        data = [[self._text(cell) for cell in headers]]
        data.extend([self._text(cell) for cell in row] for row in rows)
        return data

    def _table(self, headers, rows, style: list[tuple], **kwargs) -> Table:
        table = Table(self._cells(headers, rows), hAlign="LEFT", **kwargs)
        table.setStyle(TableStyle(style))
        return table

    # -- lifecycle -------------------------------------------------------

    def open(self, metadata: ReportMetadata) -> None:
        handle = self._acquire()
        self._register_font()
        self._doc = SimpleDocTemplate(
            handle,
            pagesize=landscape(A4),
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=MARGIN,
            title=metadata.title,
        )
        title_style = ParagraphStyle(
            "report-title",
            parent=self._styles["Title"],
            fontName=self._bold_font,
            fontSize=metadata.title_font_size,
            leading=metadata.title_font_size + 4,
            alignment=0,
            textColor=_color(metadata.title_color),
        )
        period_style = ParagraphStyle(
            "report-period",
            parent=self._styles["Normal"],
            fontName=self._font,
            fontSize=12,
            textColor=PERIOD_TEXT_COLOR,
        )
        self._story = [
            Paragraph(self._text(metadata.title), title_style),
            Paragraph(self._text(metadata.period_label), period_style),
        ]

    def write_summary(self, section: SummarySection) -> None:
        layout = section.layout
        self._heading(layout)
        style = self._base_style(layout)
        for index, metric in enumerate(section.metrics, start=1):
            if metric.highlighted:
                style.append(("TEXTCOLOR", (0, index), (-1, index), _color(section.highlight_color)))
                style.append(("FONTNAME", (0, index), (-1, index), self._bold_font))
        rows = [(metric.label, metric.display) for metric in section.metrics]
        self._story.append(
            self._table(section.headers, rows, style, colWidths=self._split_width(layout, 2))
        )

    def write_distribution(self, section: DistributionSection) -> None:
        layout = section.layout
        self._heading(layout)
        style = self._base_style(layout)
        for index, (_, status_style) in enumerate(section.status_styles, start=1):
            style.append(("BACKGROUND", (0, index), (0, index), _color(status_style.fill_color)))
            style.append(("TEXTCOLOR", (0, index), (0, index), _color(status_style.text_color)))
        rows = [(row.status, str(row.count), row.display) for row in section.rows]
        self._story.append(
            self._table(section.headers, rows, style, colWidths=self._split_width(layout, 3))
        )

    def write_detail(self, section: DetailSection) -> None:
        layout = section.layout
        self._heading(layout)
        style = self._base_style(layout)
        style.append(("TOPPADDING", (0, 0), (-1, -1), 2))
        style.append(("BOTTOMPADDING", (0, 0), (-1, -1), 2))
        for index, column in enumerate(section.columns):
            if column.align == ColumnAlign.RIGHT:
                style.append(("ALIGN", (index, 0), (index, -1), "RIGHT"))
        widths = [column.width * mm if column.width else None for column in section.columns]
        rows = [row.cells(section.columns) for row in section.rows]
        self._story.append(
            self._table(section.headers, rows, style, colWidths=widths, repeatRows=1)
        )

    def close(self, *, completed: bool = True) -> None:
        built = False
        try:
            if completed and self._doc is not None:
                self._doc.build(self._story)
                built = True
        finally:
            self._story = []
            self._doc = None
            super().close(completed=built)
