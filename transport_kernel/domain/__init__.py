"""
Pure domain layer.

This module contains the ledger entry type and the clock abstraction
with NO dependencies on:
- Rendering libraries
- File system
- Time (except through the injected Clock)

All domain objects are immutable and deterministic.
"""

from transport_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from transport_kernel.domain.entry import (
    PAID,
    PARTIAL,
    UNPAID,
    BalanceStatus,
    LedgerEntry,
    StatusKind,
    compute_balance,
    entries_from_records,
    entry_from_dict,
)

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "BalanceStatus",
    "LedgerEntry",
    "StatusKind",
    "PAID",
    "UNPAID",
    "PARTIAL",
    "compute_balance",
    "entry_from_dict",
    "entries_from_records",
]
