"""
Tests for EntrySelector: search, status filter, sort, overview.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from tests.conftest import make_entry
from transport_kernel.selectors.entry_selector import (
    ALL_STATUSES,
    EntrySelector,
    SortField,
    SortOrder,
)


@pytest.fixture
def selector() -> EntrySelector:
    return EntrySelector([
        make_entry(1000, 200, "PAID", vehicle="MH12AB1234", place="Pune",
                   transport="Sharma Roadways", on=date(2024, 3, 5), entry_id="a"),
        make_entry(500, None, "UNPAID", vehicle="KA01CD5678", place="Bengaluru",
                   transport="Kaveri Carriers", weight="4 tons",
                   on=date(2024, 2, 28), entry_id="b"),
        make_entry(800, 300, "PARTIAL", vehicle="GJ05EF9012", place="Surat",
                   transport="Sharma Roadways", weight="12 tons",
                   on=date(2024, 3, 18), entry_id="c"),
        make_entry(200, 900, "UNPAID", vehicle="MH14GH3456", place="Nashik",
                   transport="Deccan Movers", on=date(2024, 3, 18), entry_id="d"),
    ])


def _ids(entries) -> list[str]:
    return [e.id for e in entries]


class TestSearch:
    def test_empty_term_returns_everything(self, selector):
        assert selector.search("") == selector.entries
        assert selector.search(None) == selector.entries

    def test_case_insensitive_vehicle(self, selector):
        assert _ids(selector.search("ka01")) == ["b"]

    def test_matches_transport_and_place(self, selector):
        assert _ids(selector.search("sharma")) == ["a", "c"]
        assert _ids(selector.search("SURAT")) == ["c"]

    def test_matches_weight(self, selector):
        assert _ids(selector.search("12 t")) == ["c"]

    def test_no_match(self, selector):
        assert selector.search("zzz") == ()


class TestFilterByStatus:
    def test_all_keeps_everything(self, selector):
        assert selector.filter_by_status(ALL_STATUSES) == selector.entries
        assert selector.filter_by_status(None) == selector.entries

    def test_exact_status(self, selector):
        assert _ids(selector.filter_by_status("UNPAID")) == ["b", "d"]

    def test_unknown_status_matches_nothing(self, selector):
        assert selector.filter_by_status("SETTLED") == ()


class TestSort:
    def test_date_desc_is_stable(self, selector):
        # c and d share a date and keep their original order
        assert _ids(selector.sort(SortField.DATE, SortOrder.DESC)) == ["c", "d", "a", "b"]

    def test_date_asc(self, selector):
        assert _ids(selector.sort("date", "asc")) == ["b", "a", "c", "d"]

    def test_amount(self, selector):
        assert _ids(selector.sort(SortField.AMOUNT, SortOrder.ASC)) == ["d", "b", "c", "a"]

    def test_balance_includes_negative(self, selector):
        # balances: a=800, b=500, c=500, d=-700
        assert _ids(selector.sort(SortField.BALANCE, SortOrder.ASC)) == ["d", "b", "c", "a"]

    def test_invalid_sort_field(self, selector):
        with pytest.raises(ValueError):
            selector.sort("weight")


class TestSelect:
    def test_search_then_filter_then_sort(self, selector):
        result = selector.select(term="mh", status="UNPAID", by=SortField.AMOUNT)
        assert _ids(result) == ["d"]

    def test_defaults(self, selector):
        assert _ids(selector.select()) == ["c", "d", "a", "b"]

    def test_source_untouched(self, selector):
        before = selector.entries
        selector.select(term="sharma", status="PAID", order=SortOrder.ASC)
        assert selector.entries is before


class TestOverview:
    def test_figures(self, selector):
        overview = selector.overview(date(2024, 3, 31))
        assert overview.total_entries == 4
        assert overview.unpaid_entries == 3
        assert overview.this_month_entries == 3
        # 500 + 500 + (-700)
        assert overview.remaining_balance == Decimal("300")

    def test_month_needs_same_year(self, selector):
        assert selector.overview(date(2023, 3, 1)).this_month_entries == 0

    def test_empty(self):
        overview = EntrySelector([]).overview(date(2024, 3, 31))
        assert overview.total_entries == 0
        assert overview.remaining_balance == Decimal("0")
