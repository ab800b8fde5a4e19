"""
Reporting-specific test fixtures.

Provides:
- ReportingService instances wired to the deterministic clock
- A renderer that records its lifecycle calls
"""

import pytest

from transport_reports.renderers.base import ReportRenderer
from transport_reports.service import ReportingService


@pytest.fixture
def reporting_service(deterministic_clock, reporting_config) -> ReportingService:
    """ReportingService wired to the deterministic clock."""
    return ReportingService(clock=deterministic_clock, config=reporting_config)


class RecordingRenderer(ReportRenderer):
    """
    Records every lifecycle call; optionally fails while writing a section.

    ``fail_on`` is one of "summary", "distribution", "detail" or "close".
    """

    name = "recording"

    def __init__(self, fail_on: str | None = None, error: Exception | None = None):
        super().__init__()
        self.fail_on = fail_on
        self.error = error or RuntimeError("disk full")
        self.calls: list[str] = []
        self.closed_with: bool | None = None

    def _record(self, call: str) -> None:
        self.calls.append(call)
        if self.fail_on == call:
            raise self.error

    def open(self, metadata):
        super().open(metadata)
        self.calls.append("open")

    def write_summary(self, section):
        self._record("summary")

    def write_distribution(self, section):
        self._record("distribution")

    def write_detail(self, section):
        self._record("detail")

    def close(self, *, completed=True):
        self.closed_with = completed
        super().close(completed=completed)
        self._record("close")

    def result(self):
        return list(self.calls)
