"""
Transport Kernel

Domain types and read-side helpers for the goods-transport billing ledger:
- Immutable ledger entries with derived balances
- Open-ended balance status labels over a closed set of known kinds
- Read-only entry selection (search, status filter, sort, overview)
- Structured JSON logging and typed exceptions
"""

__version__ = "0.1.0"
