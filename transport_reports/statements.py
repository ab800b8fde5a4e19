"""
Pure transport report transformation functions.

These functions transform a collection of ledger entries into the
sections of a transport report. ZERO I/O. ZERO side effects.

All monetary values are Decimal. All outputs are frozen dataclasses.

Functions in this module follow the domain purity convention:
- No file I/O
- No clock access (the generation timestamp is passed in)
- No filtering: the report covers exactly the entries it is given
- Deterministic: same inputs always produce same outputs
- Never raises for well-typed input, including an empty collection

Rounding: ROUND_HALF_UP for percentages (to ``percentage_precision``
places) and for the displayed average (to whole currency units).
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence
from datetime import date, datetime
from decimal import Decimal, localcontext
from enum import Enum

from transport_kernel.domain.entry import ZERO, LedgerEntry, exact_context
from transport_reports.config import PresentationConfig, ReportingConfig
from transport_reports.formatting import (
    format_date,
    format_percentage,
    format_period,
    round_half_up,
)
from transport_reports.models import (
    ColumnAlign,
    DetailColumn,
    DetailRow,
    DetailSection,
    DistributionRow,
    DistributionSection,
    EntryStatistics,
    ReportMetadata,
    SectionLayout,
    SummaryMetric,
    SummarySection,
    TransportReport,
)

HUNDRED = Decimal("100")
WHITE = (255, 255, 255)

SUMMARY_TITLE = "Summary Statistics"
DISTRIBUTION_TITLE = "Status Distribution"
DETAIL_TITLE = "Detailed Entries"

FILENAME_PREFIX = "transport-report"

# Label of the one summary row marked for emphasis
HIGHLIGHTED_METRIC = "Unpaid Amount"


# =========================================================================
# 1. ENTRY AGGREGATOR
# =========================================================================


def compute_entry_statistics(entries: Sequence[LedgerEntry]) -> EntryStatistics:
    """
    Scalar statistics over the entries.

    ``unpaid_amount`` sums the outstanding balance (rent - advance) of every
    entry not marked PAID, so advances already received are excluded.
    """
    count = len(entries)
    amounts = [e.rent_amount for e in entries]
    amounts.extend(e.advance_amount for e in entries if e.advance_amount is not None)
    with localcontext(exact_context(amounts)):
        total = sum((e.rent_amount for e in entries), ZERO)
        paid = sum((e.rent_amount for e in entries if e.is_paid), ZERO)
        unpaid = sum((e.balance for e in entries if not e.is_paid), ZERO)
        average = total / count if count else ZERO

    return EntryStatistics(
        total_entries=count,
        total_amount=total,
        paid_amount=paid,
        unpaid_amount=unpaid,
        average_amount=average,
        unique_vehicles=len({e.vehicle_number for e in entries}),
        unique_weights=len({e.weight for e in entries if e.weight}),
    )


# =========================================================================
# 2. DISTRIBUTION CALCULATOR
# =========================================================================


def compute_status_distribution(
    entries: Sequence[LedgerEntry],
    percentage_precision: int = 0,
) -> tuple[DistributionRow, ...]:
    """
    Count entries per balance status, in first-seen order.

    Any status string is tallied, not only the known kinds.  Percentages
    are rounded half-up to ``percentage_precision`` places, so three equal
    thirds give 33/33/33 at the default precision.  An empty collection
    yields no rows.
    """
    total = len(entries)
    if total == 0:
        return ()

    counts: dict[str, int] = {}
    for entry in entries:
        counts[entry.balance_status] = counts.get(entry.balance_status, 0) + 1

    rows: list[DistributionRow] = []
    for status, count in counts.items():
        percentage = round_half_up(
            Decimal(count) * HUNDRED / Decimal(total), percentage_precision,
        )
        rows.append(
            DistributionRow(
                status=status,
                count=count,
                percentage=percentage,
                display=format_percentage(percentage, percentage_precision),
            )
        )
    return tuple(rows)


# =========================================================================
# 3. DETAIL ROW FORMATTER
# =========================================================================


def detail_columns(presentation: PresentationConfig) -> tuple[DetailColumn, ...]:
    """Detail table columns; the three money columns are right-aligned."""
    money_width = presentation.money_column_width if presentation.is_fixed_width else None
    return (
        DetailColumn("date", "Date"),
        DetailColumn("vehicle", "Vehicle"),
        DetailColumn("weight", "Weight"),
        DetailColumn("transport", "Transport"),
        DetailColumn("place", "Place"),
        DetailColumn("rent", "Rent", ColumnAlign.RIGHT, money_width),
        DetailColumn("advance", "Advance", ColumnAlign.RIGHT, money_width),
        DetailColumn("balance", "Balance", ColumnAlign.RIGHT, money_width),
        DetailColumn("status", "Status"),
        DetailColumn("paid_date", "Paid Date"),
    )


def format_detail_row(entry: LedgerEntry, config: ReportingConfig) -> DetailRow:
    """Display fields for one entry, with placeholders for empty values."""
    money = config.formatter()
    dash = config.placeholder
    balance = entry.balance

    return DetailRow(
        entry_id=entry.id,
        date=format_date(entry.date),
        vehicle=entry.vehicle_number or dash,
        weight=entry.weight or dash,
        transport=entry.transport_name or dash,
        place=entry.place or dash,
        rent=money(entry.rent_amount),
        advance=money(entry.advance_amount) if entry.advance_amount else dash,
        balance=money(balance),
        status=entry.balance_status or dash,
        paid_date=format_date(entry.balance_date) if entry.balance_date else dash,
        balance_amount=balance,
    )


def format_detail_rows(
    entries: Iterable[LedgerEntry],
    config: ReportingConfig,
) -> tuple[DetailRow, ...]:
    """One row per entry, in input order."""
    return tuple(format_detail_row(entry, config) for entry in entries)


# =========================================================================
# 4. REPORT ASSEMBLER
# =========================================================================


def _section_layout(
    title: str,
    presentation: PresentationConfig,
    *,
    header_font_size: int,
    body_font_size: int,
    fixed_width: bool,
) -> SectionLayout:
    return SectionLayout(
        title=title,
        header_fill_color=presentation.accent_color,
        header_text_color=WHITE,
        title_color=presentation.accent_color,
        title_font_size=presentation.section_font_size,
        header_font_size=header_font_size,
        body_font_size=body_font_size,
        table_width=presentation.fixed_table_width if fixed_width else None,
    )


def build_summary_section(
    stats: EntryStatistics,
    config: ReportingConfig,
) -> SummarySection:
    """Seven metrics in fixed order; only Unpaid Amount is highlighted."""
    money = config.formatter()
    average = round_half_up(stats.average_amount)

    figures: tuple[tuple[str, Decimal | int, str], ...] = (
        ("Total Entries", stats.total_entries, str(stats.total_entries)),
        ("Total Amount", stats.total_amount, money(stats.total_amount)),
        ("Paid Amount", stats.paid_amount, money(stats.paid_amount)),
        ("Unpaid Amount", stats.unpaid_amount, money(stats.unpaid_amount)),
        ("Average Amount", average, money(average)),
        ("Unique Vehicles", stats.unique_vehicles, str(stats.unique_vehicles)),
        ("Unique Weights", stats.unique_weights, str(stats.unique_weights)),
    )
    presentation = config.presentation
    return SummarySection(
        metrics=tuple(
            SummaryMetric(
                label=label,
                value=value,
                display=display,
                highlighted=(label == HIGHLIGHTED_METRIC),
            )
            for label, value, display in figures
        ),
        layout=_section_layout(
            SUMMARY_TITLE,
            presentation,
            header_font_size=10,
            body_font_size=presentation.body_font_size,
            fixed_width=presentation.is_fixed_width,
        ),
        highlight_color=presentation.highlight_color,
    )


def build_distribution_section(
    rows: tuple[DistributionRow, ...],
    config: ReportingConfig,
) -> DistributionSection:
    presentation = config.presentation
    return DistributionSection(
        rows=rows,
        layout=_section_layout(
            DISTRIBUTION_TITLE,
            presentation,
            header_font_size=10,
            body_font_size=presentation.body_font_size,
            fixed_width=presentation.is_fixed_width,
        ),
        status_styles=tuple(
            (row.status, presentation.status_style(row.status)) for row in rows
        ),
    )


def build_detail_section(
    rows: tuple[DetailRow, ...],
    config: ReportingConfig,
) -> DetailSection:
    presentation = config.presentation
    return DetailSection(
        rows=rows,
        columns=detail_columns(presentation),
        # The detail table always spans the page; only money columns are fixed
        layout=_section_layout(
            DETAIL_TITLE,
            presentation,
            header_font_size=presentation.detail_font_size,
            body_font_size=presentation.detail_font_size,
            fixed_width=False,
        ),
    )


def report_filename_stem(generated_at: datetime) -> str:
    """``transport-report-<yyyy-MM-dd>`` for the generation date."""
    return f"{FILENAME_PREFIX}-{generated_at:%Y-%m-%d}"


def build_metadata(
    start_date: date,
    end_date: date,
    generated_at: datetime,
    config: ReportingConfig,
) -> ReportMetadata:
    return ReportMetadata(
        title=config.title,
        period_start=start_date,
        period_end=end_date,
        period_label=format_period(start_date, end_date),
        generated_at=generated_at,
        filename_stem=report_filename_stem(generated_at),
        title_color=config.presentation.accent_color,
        title_font_size=config.presentation.title_font_size,
    )


def assemble_report(
    entries: Sequence[LedgerEntry],
    start_date: date,
    end_date: date,
    generated_at: datetime,
    config: ReportingConfig,
) -> TransportReport:
    """
    Aggregate -> Distribute -> FormatRows -> Assemble.

    The period is a display label only; every entry given is reported.
    """
    entries = tuple(entries)
    stats = compute_entry_statistics(entries)
    distribution = compute_status_distribution(entries, config.percentage_precision)
    rows = format_detail_rows(entries, config)

    return TransportReport(
        metadata=build_metadata(start_date, end_date, generated_at, config),
        statistics=stats,
        summary=build_summary_section(stats, config),
        distribution=build_distribution_section(distribution, config),
        detail=build_detail_section(rows, config),
    )


# =========================================================================
# 5. RENDERER (dict/JSON output)
# =========================================================================


def _json_leaf(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        # Positional notation: 1E+30 is written with all of its digits
        return format(value, "f")
    if isinstance(value, date):
        return value.isoformat()
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def render_to_dict(obj: object) -> object:
    """
    JSON-ready structure for a report, one of its sections, or any value inside.

    Dataclasses become dicts keyed by field name, tuples (status style
    pairs, RGB colors) become lists, and leaves are converted by
    ``_json_leaf``: enum tags to their value, amounts to exact decimal
    strings, dates to ISO 8601.
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            field.name: render_to_dict(getattr(obj, field.name))
            for field in dataclasses.fields(obj)
        }
    if isinstance(obj, dict):
        return {str(key): render_to_dict(value) for key, value in obj.items()}
    if isinstance(obj, (tuple, list)):
        return [render_to_dict(item) for item in obj]
    return _json_leaf(obj)
