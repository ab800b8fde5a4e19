"""
Renderer contract and scoped rendering (``transport_reports.renderers.base``).

Responsibility
--------------
Defines the interface every output adapter implements and the one place
where a report is handed to a renderer.  ``render_report`` opens the
renderer, writes the sections in report order, and closes the renderer on
every exit path -- including empty reports and failures part-way through.

Failure modes
-------------
* Renderer raises while writing  -> renderer closed with
  ``completed=False``, then ``RenderError`` raised (original exception
  chained).
* Renderer raises while closing  -> ``RenderError`` with no section.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any

from transport_kernel.exceptions import RenderError, TransportLedgerError
from transport_kernel.logging_config import get_logger
from transport_reports.models import (
    DetailSection,
    DistributionSection,
    ReportMetadata,
    SectionKind,
    SummarySection,
    TransportReport,
)

logger = get_logger("reports.renderers")

OutputTarget = str | Path | IO[bytes]


class ReportRenderer(ABC):
    """
    Output adapter for a transport report.

    Contract
    --------
    * ``open`` is called exactly once before any ``write_*`` call.
    * ``close`` is called exactly once, after ``open``, whatever happens.
      ``completed`` is False when writing was abandoned; renderers must
      then release their output handle without producing a document, and
      a file opened from a path target is deleted.
    * Renderers consume layout hints but never recompute figures.
    """

    name: str = "renderer"
    extension: str = ""

    def __init__(self, target: OutputTarget | None = None):
        self._target = target
        self._handle: IO[bytes] | None = None
        self._owns_handle = False

    # -- output handle ---------------------------------------------------

    def _acquire(self) -> IO[bytes] | None:
        """Open the target for binary writing; streams are used as given."""
        if self._target is None:
            return None
        if isinstance(self._target, (str, Path)):
            self._handle = open(self._target, "wb")
            self._owns_handle = True
        else:
            self._handle = self._target
        return self._handle

    def _release(self, *, discard: bool = False) -> None:
        """Close the handle; with ``discard``, a file this renderer created is removed."""
        if self._handle is None:
            return
        owned = self._owns_handle
        try:
            self._handle.flush()
        finally:
            if owned:
                self._handle.close()
            self._handle = None
            self._owns_handle = False
            if owned and discard:
                Path(self._target).unlink(missing_ok=True)
                logger.info("report_output_discarded", extra={"target": str(self._target)})

    # -- lifecycle -------------------------------------------------------

    def open(self, metadata: ReportMetadata) -> None:
        self._acquire()

    @abstractmethod
    def write_summary(self, section: SummarySection) -> None: ...

    @abstractmethod
    def write_distribution(self, section: DistributionSection) -> None: ...

    @abstractmethod
    def write_detail(self, section: DetailSection) -> None: ...

    def close(self, *, completed: bool = True) -> None:
        self._release(discard=not completed)

    def result(self) -> Any:
        """Renderer-specific in-memory result (None for file-only renderers)."""
        return None


@contextmanager
def opened(renderer: ReportRenderer, metadata: ReportMetadata) -> Iterator[ReportRenderer]:
    """Scoped acquisition: ``close`` runs on every exit path, even a failed ``open``."""
    completed = False
    try:
        renderer.open(metadata)
        yield renderer
        completed = True
    finally:
        renderer.close(completed=completed)


def _write_section(renderer: ReportRenderer, section: Any) -> None:
    if section.kind == SectionKind.SUMMARY:
        renderer.write_summary(section)
    elif section.kind == SectionKind.DISTRIBUTION:
        renderer.write_distribution(section)
    else:
        renderer.write_detail(section)


def render_report(report: TransportReport, renderer: ReportRenderer) -> Any:
    """
    Write every section of ``report`` through ``renderer``.

    Returns ``renderer.result()``.
    """
    section_name: str | None = None
    try:
        with opened(renderer, report.metadata):
            for section in report.sections:
                section_name = section.kind.value
                _write_section(renderer, section)
            section_name = None
    except TransportLedgerError:
        raise
    except Exception as exc:
        logger.error(
            "report_render_failed",
            extra={"renderer": renderer.name, "section": section_name},
            exc_info=True,
        )
        raise RenderError(renderer.name, section_name, str(exc)) from exc

    logger.info(
        "report_rendered",
        extra={
            "renderer": renderer.name,
            "filename_stem": report.metadata.filename_stem,
            "detail_rows": len(report.detail.rows),
        },
    )
    return renderer.result()
