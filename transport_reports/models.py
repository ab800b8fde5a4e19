"""
Transport Report Domain Models (``transport_reports.models``).

Responsibility
--------------
Frozen dataclass value objects representing a synthesized transport
report: entry statistics, the three report sections (summary, status
distribution, itemized detail), their layout hints, and report metadata.

Architecture position
---------------------
Pure data definitions with ZERO I/O.  Produced by the functions in
``statements.py`` and consumed by renderers.

Invariants enforced
-------------------
* All models are ``frozen=True`` and hold tuples, never lists, so a
  report is immutable once returned.
* All monetary fields use ``Decimal`` -- NEVER ``float``.
* Layout hints (colours, widths, font sizes) never feed back into any
  computed figure.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from transport_reports.config import RGB, StatusStyle


# =========================================================================
# Enums
# =========================================================================


class SectionKind(str, Enum):
    """Tag of a report section."""

    SUMMARY = "summary"
    DISTRIBUTION = "distribution"
    DETAIL = "detail"


class ColumnAlign(str, Enum):
    LEFT = "left"
    RIGHT = "right"


# =========================================================================
# Computation results
# =========================================================================


@dataclass(frozen=True)
class EntryStatistics:
    """Scalar statistics over an entry collection."""

    total_entries: int
    total_amount: Decimal
    paid_amount: Decimal
    unpaid_amount: Decimal  # Sum of outstanding balances, may be negative
    average_amount: Decimal
    unique_vehicles: int
    unique_weights: int


# =========================================================================
# Layout hints (renderer-facing, presentation only)
# =========================================================================


@dataclass(frozen=True)
class SectionLayout:
    """
    Styling hints for one section table.

    ``table_width`` of None means the renderer sizes the table itself.
    """

    title: str
    header_fill_color: RGB
    header_text_color: RGB
    title_color: RGB
    title_font_size: int
    header_font_size: int
    body_font_size: int
    table_width: float | None = None


# =========================================================================
# Sections
# =========================================================================


@dataclass(frozen=True)
class SummaryMetric:
    """One row of the summary table."""

    label: str
    value: Decimal | int
    display: str
    highlighted: bool = False


@dataclass(frozen=True)
class SummarySection:
    metrics: tuple[SummaryMetric, ...]
    layout: SectionLayout
    highlight_color: RGB
    headers: tuple[str, ...] = ("Metric", "Value")
    kind: SectionKind = SectionKind.SUMMARY


@dataclass(frozen=True)
class DistributionRow:
    """Count and share of entries with one balance status."""

    status: str
    count: int
    percentage: Decimal
    display: str


@dataclass(frozen=True)
class DistributionSection:
    rows: tuple[DistributionRow, ...]
    layout: SectionLayout
    # Colour per status present in ``rows``, same order
    status_styles: tuple[tuple[str, StatusStyle], ...] = ()
    headers: tuple[str, ...] = ("Status", "Count", "Percentage")
    kind: SectionKind = SectionKind.DISTRIBUTION


@dataclass(frozen=True)
class DetailColumn:
    """Column metadata; alignment applies to every row of the column."""

    key: str
    header: str
    align: ColumnAlign = ColumnAlign.LEFT
    width: float | None = None


@dataclass(frozen=True)
class DetailRow:
    """Display-ready fields for a single ledger entry."""

    entry_id: str
    date: str
    vehicle: str
    weight: str
    transport: str
    place: str
    rent: str
    advance: str
    balance: str
    status: str
    paid_date: str
    balance_amount: Decimal

    def cells(self, columns: tuple[DetailColumn, ...]) -> tuple[str, ...]:
        """Cell strings in column order."""
        return tuple(getattr(self, column.key) for column in columns)


@dataclass(frozen=True)
class DetailSection:
    rows: tuple[DetailRow, ...]
    columns: tuple[DetailColumn, ...]
    layout: SectionLayout
    kind: SectionKind = SectionKind.DETAIL

    @property
    def headers(self) -> tuple[str, ...]:
        return tuple(column.header for column in self.columns)

    def as_table(self) -> tuple[tuple[str, ...], ...]:
        """Flat tabular form: header row followed by one row per entry."""
        return (self.headers, *(row.cells(self.columns) for row in self.rows))


ReportSection = SummarySection | DistributionSection | DetailSection


# =========================================================================
# Report
# =========================================================================


@dataclass(frozen=True)
class ReportMetadata:
    """Metadata attached to every transport report."""

    title: str
    period_start: date
    period_end: date
    period_label: str
    generated_at: datetime
    filename_stem: str  # e.g. "transport-report-2024-03-31"
    title_color: RGB = (102, 51, 153)
    title_font_size: int = 20


@dataclass(frozen=True)
class TransportReport:
    """Complete report: metadata plus Summary, Distribution, Detail sections."""

    metadata: ReportMetadata
    statistics: EntryStatistics
    summary: SummarySection
    distribution: DistributionSection
    detail: DetailSection

    @property
    def sections(self) -> tuple[ReportSection, ...]:
        return (self.summary, self.distribution, self.detail)
