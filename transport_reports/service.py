"""
Transport Reporting Service (``transport_reports.service``).

Responsibility
--------------
Orchestrates transport report generation: stamps the report with the
injected clock, delegates every computation to the pure functions in
``statements.py``, and hands finished reports to a renderer through the
scoped acquisition in ``renderers.base``.

Architecture position
---------------------
**Reports layer** -- thin glue.  ``ReportingService`` is the public entry
point for report generation.  Constructor: ``clock`` + ``config``.

Invariants enforced
-------------------
* Read-only -- entries are never modified, filtered or reordered.
* All monetary amounts use ``Decimal`` -- NEVER ``float``.
* The service keeps no per-report state, so one instance may serve
  concurrent generations on independent inputs.

Failure modes
-------------
* Report generation itself never raises for well-typed entries.
* A reversed period (end before start) is reported as given and logged
  as a warning; it is a display label, not a filter.
* Renderer failure  -> ``RenderError`` after the renderer has been closed.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Any

from transport_kernel.domain.clock import Clock, SystemClock
from transport_kernel.domain.entry import LedgerEntry
from transport_kernel.logging_config import LogContext, get_logger
from transport_kernel.selectors.entry_selector import EntrySelector, LedgerOverview
from transport_reports.config import ReportingConfig
from transport_reports.models import TransportReport
from transport_reports.renderers.base import ReportRenderer, render_report
from transport_reports.statements import assemble_report, report_filename_stem

logger = get_logger("reports.service")


class ReportingService:
    """
    Transport report generation service.

    Contract
    --------
    * ``generate`` returns an immutable ``TransportReport``.
    * ``export`` returns whatever the renderer's ``result()`` returns.

    Guarantees
    ----------
    * Report content delegates to pure functions in ``statements.py``; no
      figures are computed in this class.
    * Clock is injectable for deterministic testing.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        config: ReportingConfig | None = None,
    ):
        self._clock = clock or SystemClock()
        self._config = config or ReportingConfig.with_defaults()

        logger.info(
            "reporting_service_initialized",
            extra={
                "title": self._config.title,
                "table_width_mode": self._config.presentation.table_width_mode.value,
                "percentage_precision": self._config.percentage_precision,
            },
        )

    @property
    def config(self) -> ReportingConfig:
        return self._config

    def generate(
        self,
        entries: Iterable[LedgerEntry],
        start_date: date,
        end_date: date,
    ) -> TransportReport:
        """Build a report covering exactly ``entries``."""
        entries = tuple(entries)
        generated_at = self._clock.now()
        with LogContext.bind(report_id=report_filename_stem(generated_at)):
            if end_date < start_date:
                logger.warning(
                    "report_period_reversed",
                    extra={"period_start": start_date, "period_end": end_date},
                )

            report = assemble_report(
                entries, start_date, end_date, generated_at, self._config,
            )
            self._log_generated(report)
        return report

    def _log_generated(self, report: TransportReport) -> None:
        logger.info(
            "transport_report_generated",
            extra={
                "period_start": report.metadata.period_start,
                "period_end": report.metadata.period_end,
                "entry_count": report.statistics.total_entries,
                "status_count": len(report.distribution.rows),
                "total_amount": report.statistics.total_amount,
                "unpaid_amount": report.statistics.unpaid_amount,
                "filename_stem": report.metadata.filename_stem,
            },
        )

    def export(self, report: TransportReport, renderer: ReportRenderer) -> Any:
        """Render ``report``; the renderer is closed on every exit path."""
        with LogContext.bind(report_id=report.metadata.filename_stem):
            return render_report(report, renderer)

    def generate_and_export(
        self,
        entries: Iterable[LedgerEntry],
        start_date: date,
        end_date: date,
        renderer: ReportRenderer,
    ) -> tuple[TransportReport, Any]:
        report = self.generate(entries, start_date, end_date)
        return report, self.export(report, renderer)

    def overview(self, entries: Iterable[LedgerEntry]) -> LedgerOverview:
        """Entries-list headline figures as of the clock's today."""
        return EntrySelector(entries).overview(self._clock.today())
