"""
Module: transport_kernel.selectors.entry_selector
Responsibility: Read-only selection over an in-memory ledger -- free-text
    search, status filter, sorting -- and the overview figures shown above
    the entries list.  Callers use it to decide which subset of entries a
    report covers; the report functions themselves never filter.

Invariants enforced:
    - Read-only: the source collection is never mutated; every query
      returns a new tuple.
    - Sorting is stable, so entries that compare equal keep their
      original relative order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, localcontext
from enum import Enum

from transport_kernel.domain.entry import ZERO, LedgerEntry, exact_context
from transport_kernel.logging_config import get_logger

logger = get_logger("selectors.entry")

ALL_STATUSES = "ALL"


class SortField(str, Enum):
    """Sort keys offered by the entries list."""

    DATE = "date"
    AMOUNT = "amount"
    BALANCE = "balance"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


_SORT_KEYS = {
    SortField.DATE: lambda e: e.date,
    SortField.AMOUNT: lambda e: e.rent_amount,
    SortField.BALANCE: lambda e: e.balance,
}


@dataclass(frozen=True)
class LedgerOverview:
    """Headline figures for the entries list."""

    total_entries: int
    unpaid_entries: int
    this_month_entries: int
    remaining_balance: Decimal


class EntrySelector:
    """
    Query helper over a fixed collection of ledger entries.

    Contract:
        Accepts any iterable of ``LedgerEntry``; it is materialized once
        into a tuple so repeated queries see the same data.
    """

    def __init__(self, entries: Iterable[LedgerEntry]):
        self.entries: tuple[LedgerEntry, ...] = tuple(entries)

    def search(self, term: str | None) -> tuple[LedgerEntry, ...]:
        """Case-insensitive substring match on vehicle, weight, place, transport."""
        if not term:
            return self.entries
        needle = term.lower()
        return tuple(
            e for e in self.entries
            if needle in e.vehicle_number.lower()
            or needle in e.weight.lower()
            or needle in e.place.lower()
            or needle in e.transport_name.lower()
        )

    def filter_by_status(
        self,
        status: str | None,
        entries: Iterable[LedgerEntry] | None = None,
    ) -> tuple[LedgerEntry, ...]:
        """Keep entries with exactly ``status``; ``ALL`` (or None) keeps everything."""
        source = self.entries if entries is None else tuple(entries)
        if status is None or status == ALL_STATUSES:
            return source
        return tuple(e for e in source if e.balance_status == status)

    def sort(
        self,
        by: SortField | str = SortField.DATE,
        order: SortOrder | str = SortOrder.DESC,
        entries: Iterable[LedgerEntry] | None = None,
    ) -> tuple[LedgerEntry, ...]:
        """Sort by date, rent amount or balance."""
        source = self.entries if entries is None else tuple(entries)
        key = _SORT_KEYS[SortField(by)]
        return tuple(
            sorted(source, key=key, reverse=SortOrder(order) == SortOrder.DESC)
        )

    def select(
        self,
        term: str | None = None,
        status: str | None = ALL_STATUSES,
        by: SortField | str = SortField.DATE,
        order: SortOrder | str = SortOrder.DESC,
    ) -> tuple[LedgerEntry, ...]:
        """Search, then filter by status, then sort."""
        matched = self.filter_by_status(status, self.search(term))
        result = self.sort(by, order, matched)
        logger.debug(
            "entries_selected",
            extra={
                "source_count": len(self.entries),
                "selected_count": len(result),
                "status_filter": status,
                "sort_by": SortField(by).value,
            },
        )
        return result

    def overview(self, today: date) -> LedgerOverview:
        """Totals over the whole collection; "this month" is relative to ``today``."""
        unpaid = [e for e in self.entries if not e.is_paid]
        amounts = [e.rent_amount for e in unpaid]
        amounts.extend(e.advance_amount for e in unpaid if e.advance_amount is not None)
        with localcontext(exact_context(amounts)):
            remaining = sum((e.balance for e in unpaid), ZERO)
        return LedgerOverview(
            total_entries=len(self.entries),
            unpaid_entries=len(unpaid),
            this_month_entries=sum(
                1 for e in self.entries
                if e.date.month == today.month and e.date.year == today.year
            ),
            remaining_balance=remaining,
        )
