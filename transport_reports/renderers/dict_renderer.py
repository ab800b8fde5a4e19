"""JSON-ready dict output for transport reports."""

from __future__ import annotations

import json
from typing import Any

from transport_reports.models import (
    DetailSection,
    DistributionSection,
    ReportMetadata,
    SummarySection,
)
from transport_reports.renderers.base import OutputTarget, ReportRenderer
from transport_reports.statements import render_to_dict


class DictRenderer(ReportRenderer):
    """
    Collects the report as plain dicts.

    With a target, the dict is also written there as UTF-8 JSON on a
    completed close.
    """

    name = "dict"
    extension = "json"

    def __init__(self, target: OutputTarget | None = None, *, indent: int | None = 2):
        super().__init__(target)
        self._indent = indent
        self._document: dict[str, Any] | None = None
        self._result: dict[str, Any] | None = None

    def open(self, metadata: ReportMetadata) -> None:
        super().open(metadata)
        self._document = {"metadata": render_to_dict(metadata), "sections": []}

    def _append(self, section: Any) -> None:
        self._document["sections"].append(render_to_dict(section))

    def write_summary(self, section: SummarySection) -> None:
        self._append(section)

    def write_distribution(self, section: DistributionSection) -> None:
        self._append(section)

    def write_detail(self, section: DetailSection) -> None:
        self._append(section)

    def close(self, *, completed: bool = True) -> None:
        written = False
        try:
            if completed:
                if self._handle is not None:
                    text = json.dumps(self._document, indent=self._indent, ensure_ascii=False)
                    self._handle.write(text.encode("utf-8"))
                self._result = self._document
                written = True
        finally:
            self._document = None
            super().close(completed=written)

    def result(self) -> dict[str, Any] | None:
        return self._result
