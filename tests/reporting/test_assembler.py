"""
Report assembly: section order, summary metrics, layout hints, metadata.

Pure function tests via assemble_report and the build_* helpers.
"""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from tests.conftest import make_entry
from transport_reports.config import (
    FALLBACK_STATUS_STYLE,
    PresentationConfig,
    ReportingConfig,
    StatusStyle,
    TableWidthMode,
)
from transport_reports.models import SectionKind
from transport_reports.statements import (
    DETAIL_TITLE,
    DISTRIBUTION_TITLE,
    SUMMARY_TITLE,
    assemble_report,
    render_to_dict,
    report_filename_stem,
)

GENERATED_AT = datetime(2024, 4, 2, 9, 15, tzinfo=timezone.utc)
MARCH = (date(2024, 3, 1), date(2024, 3, 31))


def _assemble(entries, config=None):
    return assemble_report(entries, *MARCH, GENERATED_AT, config or ReportingConfig())


def _metrics(report) -> dict[str, str]:
    return {m.label: m.display for m in report.summary.metrics}


class TestSectionOrder:
    def test_summary_distribution_detail(self, scenario_entries):
        report = _assemble(scenario_entries)
        assert [s.kind for s in report.sections] == [
            SectionKind.SUMMARY, SectionKind.DISTRIBUTION, SectionKind.DETAIL,
        ]
        assert [s.layout.title for s in report.sections] == [
            SUMMARY_TITLE, DISTRIBUTION_TITLE, DETAIL_TITLE,
        ]


class TestSummarySection:
    def test_reference_scenario(self, scenario_entries):
        report = _assemble(scenario_entries)
        assert _metrics(report) == {
            "Total Entries": "3",
            "Total Amount": "Rs. 2,300",
            "Paid Amount": "Rs. 1,000",
            "Unpaid Amount": "Rs. 1,000",
            "Average Amount": "Rs. 767",
            "Unique Vehicles": "2",
            "Unique Weights": "2",
        }

    def test_metric_order_and_headers(self, scenario_entries):
        summary = _assemble(scenario_entries).summary
        assert summary.headers == ("Metric", "Value")
        assert [m.label for m in summary.metrics] == [
            "Total Entries", "Total Amount", "Paid Amount", "Unpaid Amount",
            "Average Amount", "Unique Vehicles", "Unique Weights",
        ]

    def test_only_unpaid_highlighted(self, scenario_entries):
        summary = _assemble(scenario_entries).summary
        assert [m.label for m in summary.metrics if m.highlighted] == ["Unpaid Amount"]
        assert summary.highlight_color == (220, 38, 38)

    def test_average_value_rounded_statistics_exact(self, scenario_entries):
        report = _assemble(scenario_entries)
        average = next(m for m in report.summary.metrics if m.label == "Average Amount")
        assert average.value == Decimal("767")
        assert report.statistics.average_amount != Decimal("767")

    def test_negative_unpaid_shown_with_sign(self):
        report = _assemble([make_entry(500, 800, "UNPAID")])
        assert _metrics(report)["Unpaid Amount"] == "Rs. -300"

    def test_thirty_one_digit_rent(self):
        report = _assemble([make_entry("1e30", None, "UNPAID")])
        metrics = _metrics(report)
        assert metrics["Total Amount"] == "Rs. 1" + ",000" * 10
        assert metrics["Average Amount"] == metrics["Total Amount"]
        assert report.detail.rows[0].balance == "Rs. 1" + ",000" * 10


class TestEmptyInput:
    def test_all_zero_summary_and_empty_tables(self):
        report = _assemble([])
        assert _metrics(report) == {
            "Total Entries": "0",
            "Total Amount": "Rs. 0",
            "Paid Amount": "Rs. 0",
            "Unpaid Amount": "Rs. 0",
            "Average Amount": "Rs. 0",
            "Unique Vehicles": "0",
            "Unique Weights": "0",
        }
        assert report.distribution.rows == ()
        assert report.distribution.status_styles == ()
        assert report.detail.rows == ()
        assert report.detail.as_table() == (report.detail.headers,)


class TestLayoutHints:
    def test_fixed_width_defaults(self, scenario_entries):
        report = _assemble(scenario_entries)
        assert report.summary.layout.table_width == 180.0
        assert report.distribution.layout.table_width == 180.0
        assert report.detail.layout.table_width is None
        assert report.summary.layout.header_fill_color == (102, 51, 153)
        assert report.summary.layout.header_text_color == (255, 255, 255)
        assert report.summary.layout.title_font_size == 16

    def test_auto_fit_has_no_widths(self, scenario_entries):
        config = ReportingConfig(
            presentation=PresentationConfig(table_width_mode=TableWidthMode.AUTO_FIT),
        )
        report = _assemble(scenario_entries, config)
        assert all(s.layout.table_width is None for s in report.sections)
        assert all(c.width is None for c in report.detail.columns)

    def test_detail_fonts(self, scenario_entries):
        layout = _assemble(scenario_entries).detail.layout
        assert layout.header_font_size == 8
        assert layout.body_font_size == 8

    def test_status_styles_follow_rows(self):
        report = _assemble([make_entry(status="UNPAID"), make_entry(status="DISPUTED")])
        styles = dict(report.distribution.status_styles)
        assert list(styles) == ["UNPAID", "DISPUTED"]
        assert styles["UNPAID"] == StatusStyle((254, 226, 226), (153, 27, 27))
        assert styles["DISPUTED"] == FALLBACK_STATUS_STYLE

    def test_presentation_never_changes_figures(self, scenario_entries):
        plain = _assemble(scenario_entries)
        styled = _assemble(
            scenario_entries,
            ReportingConfig(
                currency_prefix="₹",
                presentation=PresentationConfig(
                    accent_color="#2563eb", table_width_mode="auto-fit",
                ),
            ),
        )
        assert styled.statistics == plain.statistics
        assert [m.value for m in styled.summary.metrics] == [m.value for m in plain.summary.metrics]
        assert _metrics(styled)["Total Amount"] == "₹2,300"


class TestMetadata:
    def test_fields(self, scenario_entries):
        metadata = _assemble(scenario_entries).metadata
        assert metadata.title == "Transport Entries Report"
        assert metadata.period_label == "Period: 01 Mar 2024 - 31 Mar 2024"
        assert metadata.generated_at == GENERATED_AT
        assert metadata.filename_stem == "transport-report-2024-04-02"
        assert metadata.title_color == (102, 51, 153)
        assert metadata.title_font_size == 20

    def test_period_does_not_filter(self):
        outside = make_entry(on=date(2023, 7, 1))
        report = _assemble([outside])
        assert report.statistics.total_entries == 1
        assert len(report.detail.rows) == 1

    @pytest.mark.parametrize(
        ("generated_at", "stem"),
        [
            (datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc), "transport-report-2024-01-01"),
            (datetime(2025, 12, 9), "transport-report-2025-12-09"),
        ],
    )
    def test_filename_stem(self, generated_at, stem):
        assert report_filename_stem(generated_at) == stem


class TestRenderToDict:
    def test_json_serializable(self, scenario_entries):
        data = render_to_dict(_assemble(scenario_entries))
        text = json.dumps(data)
        assert '"Unpaid Amount"' in text

    def test_decimal_and_enum_values(self, scenario_entries):
        data = render_to_dict(_assemble(scenario_entries))
        assert data["statistics"]["total_amount"] == "2300"
        assert data["summary"]["kind"] == "summary"
        assert data["metadata"]["period_start"] == "2024-03-01"
        assert data["detail"]["rows"][0]["advance"] == "Rs. 200"

    def test_large_amounts_written_positionally(self):
        data = render_to_dict(_assemble([make_entry("1e30", None, "UNPAID")]))
        assert data["statistics"]["total_amount"] == "1" + "0" * 30

    def test_status_styles_become_nested_lists(self):
        data = render_to_dict(_assemble([make_entry(status="PAID")]))
        status, style = data["distribution"]["status_styles"][0]
        assert status == "PAID"
        assert len(style["fill_color"]) == 3
