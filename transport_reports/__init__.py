"""
Transport Reporting Module (``transport_reports``).

Responsibility
--------------
Read-only module that turns a collection of transport ledger entries
into a printable, multi-section report: summary statistics, status
distribution and an itemized detail table, plus the presentation hints a
document renderer needs (colours, column widths, alignment, emphasis).

Architecture position
---------------------
All figures are computed by pure functions in ``statements.py``.
``ReportingService`` adds the clock, logging and the scoped hand-off to
a renderer; ``renderers`` holds the thin output adapters.

Invariants enforced
-------------------
* The report covers exactly the entries it is given; the period is a
  display label.
* Presentation configuration never changes a computed number.
* Empty input yields an all-zero summary, no distribution rows and an
  empty detail table -- never an error.

Failure modes
-------------
* Invalid configuration  -> ``ReportConfigError`` at construction.
* Renderer failure  -> ``RenderError`` after the renderer is closed.
"""

from transport_reports.config import (
    PresentationConfig,
    ReportingConfig,
    StatusStyle,
    TableWidthMode,
)
from transport_reports.models import (
    ColumnAlign,
    DetailColumn,
    DetailRow,
    DetailSection,
    DistributionRow,
    DistributionSection,
    EntryStatistics,
    ReportMetadata,
    ReportSection,
    SectionKind,
    SectionLayout,
    SummaryMetric,
    SummarySection,
    TransportReport,
)
from transport_reports.service import ReportingService
from transport_reports.skins import BUILTIN_SKINS, Skin, get_skin, load_skins

__all__ = [
    # Service
    "ReportingService",
    # Config
    "ReportingConfig",
    "PresentationConfig",
    "StatusStyle",
    "TableWidthMode",
    # Skins
    "Skin",
    "BUILTIN_SKINS",
    "get_skin",
    "load_skins",
    # Models
    "SectionKind",
    "ColumnAlign",
    "EntryStatistics",
    "SectionLayout",
    "SummaryMetric",
    "SummarySection",
    "DistributionRow",
    "DistributionSection",
    "DetailColumn",
    "DetailRow",
    "DetailSection",
    "ReportSection",
    "ReportMetadata",
    "TransportReport",
]
