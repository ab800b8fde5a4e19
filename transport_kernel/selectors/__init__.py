"""Read-only selectors over ledger entries."""

from transport_kernel.selectors.entry_selector import (
    ALL_STATUSES,
    EntrySelector,
    LedgerOverview,
    SortField,
    SortOrder,
)

__all__ = [
    "ALL_STATUSES",
    "EntrySelector",
    "LedgerOverview",
    "SortField",
    "SortOrder",
]
