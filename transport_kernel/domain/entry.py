"""
Ledger entry domain type (``transport_kernel.domain.entry``).

Responsibility
--------------
Defines the immutable ``LedgerEntry`` record -- one billable goods-transport
job -- and the derived ``balance`` quantity.  Also converts plain mapping
records (JSON / YAML documents, ISO date strings) into entries.

Invariants enforced
-------------------
* ``LedgerEntry`` is ``frozen=True``; entries are read-only inputs.
* All monetary fields are ``Decimal`` -- NEVER ``float``.
* ``balance = rent_amount - (advance_amount or 0)`` is computed on demand,
  never stored, and never clamped: an advance larger than the rent yields a
  negative balance, which is a valid state.
* ``balance_status`` is an open string label.  Only colouring relies on
  the closed set of ``StatusKind`` values.

Failure modes
-------------
* ``entry_from_dict`` raises ``EntryFormatError`` when a required field is
  missing or a date / amount cannot be parsed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Context, Decimal, InvalidOperation, getcontext, localcontext
from enum import Enum
from typing import Any, NewType

from transport_kernel.exceptions import EntryFormatError

BalanceStatus = NewType("BalanceStatus", str)

ZERO = Decimal("0")


class StatusKind(str, Enum):
    """Balance status values the presentation layer knows how to style."""

    PAID = "PAID"
    UNPAID = "UNPAID"
    PARTIAL = "PARTIAL"

    @classmethod
    def of(cls, status: str | None) -> StatusKind | None:
        """Return the known kind for a status label, or None if unrecognized."""
        try:
            return cls(status)
        except ValueError:
            return None


PAID = BalanceStatus(StatusKind.PAID.value)
UNPAID = BalanceStatus(StatusKind.UNPAID.value)
PARTIAL = BalanceStatus(StatusKind.PARTIAL.value)


def exact_context(amounts: Iterable[Decimal]) -> Context:
    """
    Decimal context in which adding up ``amounts`` rounds nothing.

    The default 28-digit context silently rounds sums of very large or very
    finely divided amounts; this widens the precision to cover the span
    between the largest and the finest digit, plus headroom for the count
    and for a further division (averages).
    """
    context = getcontext().copy()
    finite = [a for a in amounts if a.is_finite()]
    if finite:
        highest = max(a.adjusted() for a in finite)
        lowest = min(a.as_tuple().exponent for a in finite)
        span = highest - lowest + 1 + len(str(len(finite)))
        context.prec += span
    return context


def compute_balance(rent_amount: Decimal, advance_amount: Decimal | None) -> Decimal:
    """Outstanding amount: rent minus advance (absent advance counts as zero)."""
    advance = advance_amount or ZERO
    with localcontext(exact_context((rent_amount, advance))):
        return rent_amount - advance


@dataclass(frozen=True)
class LedgerEntry:
    """A single transport billing entry."""

    id: str
    date: date
    vehicle_number: str
    rent_amount: Decimal
    balance_status: BalanceStatus
    weight: str = ""
    transport_name: str = ""
    place: str = ""
    advance_amount: Decimal | None = None
    balance_date: date | None = None

    @property
    def balance(self) -> Decimal:
        return compute_balance(self.rent_amount, self.advance_amount)

    @property
    def is_paid(self) -> bool:
        return self.balance_status == PAID


# =========================================================================
# Record conversion
# =========================================================================

# camelCase keys used by the web client's JSON export
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "date": ("date",),
    "vehicle_number": ("vehicle_number", "vehicleNumber"),
    "weight": ("weight",),
    "transport_name": ("transport_name", "transportName"),
    "place": ("place",),
    "rent_amount": ("rent_amount", "rentAmount"),
    "advance_amount": ("advance_amount", "advanceAmount"),
    "balance_status": ("balance_status", "balanceStatus"),
    "balance_date": ("balance_date", "balanceDate"),
}


def _lookup(record: Mapping[str, Any], field_name: str) -> Any:
    for key in _FIELD_ALIASES[field_name]:
        if key in record:
            return record[key]
    return None


def _parse_date(value: Any, field_name: str, index: int | None) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            # Accept full ISO timestamps ("2024-03-05T00:00:00.000Z")
            return date.fromisoformat(value[:10])
        except ValueError:
            pass
    raise EntryFormatError(field_name, index, f"is not an ISO date: {value!r}")


def _parse_amount(value: Any, field_name: str, index: int | None) -> Decimal | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise EntryFormatError(field_name, index, f"is not an amount: {value!r}")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise EntryFormatError(field_name, index, f"is not an amount: {value!r}") from None
    if not amount.is_finite():
        raise EntryFormatError(field_name, index, f"is not a finite amount: {value!r}")
    return amount


def entry_from_dict(record: Mapping[str, Any], index: int | None = None) -> LedgerEntry:
    """
    Build a LedgerEntry from a plain mapping.

    Accepts snake_case or camelCase keys.  ``id``, ``date``, ``rent_amount``
    and ``balance_status`` are required; text fields default to ``""``.
    """
    raw_id = _lookup(record, "id")
    if raw_id is None or raw_id == "":
        raise EntryFormatError("id", index, "is required")

    entry_date = _parse_date(_lookup(record, "date"), "date", index)
    if entry_date is None:
        raise EntryFormatError("date", index, "is required")

    rent = _parse_amount(_lookup(record, "rent_amount"), "rent_amount", index)
    if rent is None:
        raise EntryFormatError("rent_amount", index, "is required")

    status = _lookup(record, "balance_status")
    if status is None:
        raise EntryFormatError("balance_status", index, "is required")

    return LedgerEntry(
        id=str(raw_id),
        date=entry_date,
        vehicle_number=str(_lookup(record, "vehicle_number") or ""),
        weight=str(_lookup(record, "weight") or ""),
        transport_name=str(_lookup(record, "transport_name") or ""),
        place=str(_lookup(record, "place") or ""),
        rent_amount=rent,
        advance_amount=_parse_amount(
            _lookup(record, "advance_amount"), "advance_amount", index,
        ),
        balance_status=BalanceStatus(str(status)),
        balance_date=_parse_date(_lookup(record, "balance_date"), "balance_date", index),
    )


def entries_from_records(records: Iterable[Mapping[str, Any]]) -> tuple[LedgerEntry, ...]:
    """Convert a sequence of mappings, preserving order."""
    return tuple(entry_from_dict(record, index) for index, record in enumerate(records))
