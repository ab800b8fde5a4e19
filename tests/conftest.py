"""
Pytest fixtures for the transport ledger test suite.

Provides:
- Deterministic clock
- Ledger entry factory
- The three-entry reference scenario (PAID / UNPAID / PARTIAL)
- Logging reset between tests
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from transport_kernel.domain.clock import DeterministicClock
from transport_kernel.domain.entry import BalanceStatus, LedgerEntry
from transport_kernel.logging_config import LogContext, reset_logging
from transport_reports.config import ReportingConfig

FIXED_NOW = datetime(2024, 3, 31, 18, 30, 0, tzinfo=timezone.utc)

_counter = {"next": 0}


def make_entry(
    rent: str | int = "1000",
    advance: str | int | None = None,
    status: str = "PAID",
    *,
    vehicle: str = "MH12AB1234",
    weight: str = "10 tons",
    transport: str = "Sharma Roadways",
    place: str = "Pune",
    on: date = date(2024, 3, 5),
    balance_date: date | None = None,
    entry_id: str | None = None,
) -> LedgerEntry:
    """Factory for LedgerEntry used across tests."""
    if entry_id is None:
        _counter["next"] += 1
        entry_id = f"entry-{_counter['next']}"
    return LedgerEntry(
        id=entry_id,
        date=on,
        vehicle_number=vehicle,
        weight=weight,
        transport_name=transport,
        place=place,
        rent_amount=Decimal(str(rent)),
        advance_amount=None if advance is None else Decimal(str(advance)),
        balance_status=BalanceStatus(status),
        balance_date=balance_date,
    )


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    return DeterministicClock(FIXED_NOW)


@pytest.fixture
def reporting_config() -> ReportingConfig:
    """Standard reporting configuration for tests."""
    return ReportingConfig.with_defaults()


@pytest.fixture
def scenario_entries() -> tuple[LedgerEntry, ...]:
    """rent 1000/500/800, advance 200/0/300, PAID/UNPAID/PARTIAL."""
    return (
        make_entry(1000, 200, "PAID", vehicle="MH12AB1234", weight="10 tons",
                   balance_date=date(2024, 3, 20), entry_id="e1"),
        make_entry(500, 0, "UNPAID", vehicle="KA01CD5678", weight="4 tons",
                   on=date(2024, 3, 11), entry_id="e2"),
        make_entry(800, 300, "PARTIAL", vehicle="MH12AB1234", weight="",
                   on=date(2024, 3, 18), entry_id="e3"),
    )
