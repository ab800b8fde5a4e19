"""
Command-line report export.

Usage:
    transport-report entries.json --start 2024-03-01 --end 2024-03-31
    transport-report entries.yaml --start 2024-03-01 --end 2024-03-31 \\
        --format xlsx --skin ledger --status UNPAID --output out/

Entries are read from a JSON or YAML file holding either a list of
records or ``{"entries": [...]}``.  Search / status options narrow the
entries before the report is built, the same way the entries list does.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from datetime import date
from pathlib import Path
from typing import Any
from uuid import uuid4

import yaml

from transport_kernel.domain.clock import SystemClock
from transport_kernel.domain.entry import LedgerEntry, entries_from_records
from transport_kernel.exceptions import TransportLedgerError
from transport_kernel.logging_config import LogContext, configure_logging, get_logger
from transport_kernel.selectors.entry_selector import ALL_STATUSES, EntrySelector, SortField
from transport_reports.config import ReportingConfig
from transport_reports.formatting import group_digits
from transport_reports.renderers import RENDERERS
from transport_reports.service import ReportingService
from transport_reports.skins import BUILTIN_SKINS, DEFAULT_SKIN, get_skin, load_skins

logger = get_logger("reports.cli")


def load_entries(path: Path) -> tuple[LedgerEntry, ...]:
    """Read ledger entries from a JSON or YAML file."""
    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            document: Any = json.load(f)
        else:
            document = yaml.safe_load(f)
    if isinstance(document, dict):
        document = document.get("entries", [])
    if not isinstance(document, list):
        raise ValueError(f"{path}: expected a list of entries")
    return entries_from_records(document)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transport-report",
        description="Build a transport entries report (PDF, XLSX or JSON).",
    )
    parser.add_argument("entries_file", type=Path, help="JSON or YAML file of ledger entries")
    parser.add_argument("--start", type=_parse_date, required=True, help="period start (YYYY-MM-DD)")
    parser.add_argument("--end", type=_parse_date, required=True, help="period end (YYYY-MM-DD)")
    parser.add_argument("--format", choices=sorted(RENDERERS), default="pdf")
    parser.add_argument("--skin", default=DEFAULT_SKIN, help="presentation skin name")
    parser.add_argument("--skins-file", type=Path, help="YAML file with extra skins")
    parser.add_argument("--output", type=Path, default=Path("."), help="output directory")
    parser.add_argument("--search", help="keep entries matching this text")
    parser.add_argument("--status", default=ALL_STATUSES, help="keep entries with this status")
    parser.add_argument(
        "--percentage-precision", type=int, default=0,
        help="decimal places for status percentages",
    )
    parser.add_argument(
        "--pdf-font", type=Path,
        help="TrueType font for PDF text (keeps the rupee sign)",
    )
    parser.add_argument("--overview", action="store_true", help="print list overview to stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="log to stderr at DEBUG")
    return parser


def _print_overview(service: ReportingService, entries: Sequence[LedgerEntry]) -> None:
    overview = service.overview(entries)
    money = service.config.formatter()
    print(f"  Total entries:      {overview.total_entries}")
    print(f"  Unpaid entries:     {overview.unpaid_entries}")
    print(f"  This month:         {overview.this_month_entries}")
    print(f"  Remaining balance:  {money(overview.remaining_balance)}")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=logging.DEBUG if args.verbose else logging.WARNING)
    with LogContext.bind(correlation_id=uuid4().hex):
        return _run(args)


def _run(args: argparse.Namespace) -> int:
    try:
        skins = load_skins(args.skins_file) if args.skins_file else BUILTIN_SKINS
        skin = get_skin(args.skin, skins)
        config = skin.apply(ReportingConfig(percentage_precision=args.percentage_precision))
        entries = load_entries(args.entries_file)
    except (OSError, ValueError, yaml.YAMLError, TransportLedgerError) as exc:
        logger.error("report_inputs_rejected", exc_info=True)
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 1

    selected = EntrySelector(entries).select(
        term=args.search, status=args.status, by=SortField.DATE,
    )
    service = ReportingService(clock=SystemClock(), config=config)
    if args.overview:
        _print_overview(service, selected)

    report = service.generate(selected, args.start, args.end)
    renderer_cls = RENDERERS[args.format]
    args.output.mkdir(parents=True, exist_ok=True)
    path = args.output / f"{report.metadata.filename_stem}.{renderer_cls.extension}"

    try:
        options = {"font_path": args.pdf_font} if args.format == "pdf" and args.pdf_font else {}
        service.export(report, renderer_cls(path, **options))
    except (OSError, TransportLedgerError) as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 1

    stats = report.statistics
    print(
        f"  Wrote {path} ({stats.total_entries} entries, "
        f"total {group_digits(stats.total_amount)})"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
