"""
Report Skins (``transport_reports.skins``).

Responsibility
--------------
Named presentation bundles ("skins") for transport reports.  A skin picks
colours, table sizing and the currency prefix; it never changes a figure.
Skins are either built in or loaded from a YAML document of the form::

    skins:
      night:
        accent_color: "#1e293b"
        highlight_color: [234, 88, 12]
        table_width_mode: auto-fit
        currency_prefix: "₹"

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown skin name  -> ``UnknownSkinError``.
* Invalid colour / width mode  -> ``ReportConfigError``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from transport_kernel.exceptions import ReportConfigError, UnknownSkinError
from transport_kernel.logging_config import get_logger
from transport_reports.config import PresentationConfig, ReportingConfig, TableWidthMode
from transport_reports.formatting import RUPEE_SYMBOL, RUPEE_TEXT_PREFIX

logger = get_logger("reports.skins")

_PRESENTATION_KEYS = frozenset(
    ("accent_color", "highlight_color", "table_width_mode",
     "fixed_table_width", "money_column_width")
)


@dataclass(frozen=True)
class Skin:
    """A named presentation plus currency prefix."""

    name: str
    presentation: PresentationConfig
    currency_prefix: str = RUPEE_TEXT_PREFIX

    def apply(self, config: ReportingConfig) -> ReportingConfig:
        """Copy of ``config`` styled by this skin (formatter override kept)."""
        return replace(
            config,
            presentation=self.presentation,
            currency_prefix=self.currency_prefix,
        )


BUILTIN_SKINS: dict[str, Skin] = {
    "classic": Skin(
        name="classic",
        presentation=PresentationConfig(
            accent_color=(102, 51, 153),
            table_width_mode=TableWidthMode.FIXED_WIDTH,
        ),
        currency_prefix=RUPEE_TEXT_PREFIX,
    ),
    "ledger": Skin(
        name="ledger",
        presentation=PresentationConfig(
            accent_color=(37, 99, 235),
            highlight_color=(234, 88, 12),
            table_width_mode=TableWidthMode.AUTO_FIT,
        ),
        currency_prefix=RUPEE_SYMBOL,
    ),
}

DEFAULT_SKIN = "classic"


def parse_skin(name: str, data: Mapping[str, Any]) -> Skin:
    """Parse one skin entry."""
    if not isinstance(data, Mapping):
        raise ReportConfigError(f"skins.{name}", data, "expected a mapping")
    unknown = set(data) - _PRESENTATION_KEYS - {"currency_prefix"}
    if unknown:
        raise ReportConfigError(f"skins.{name}", sorted(unknown), "unknown keys")
    presentation = PresentationConfig.from_dict(
        {k: v for k, v in data.items() if k in _PRESENTATION_KEYS}
    )
    return Skin(
        name=name,
        presentation=presentation,
        currency_prefix=str(data.get("currency_prefix", RUPEE_TEXT_PREFIX)),
    )


def parse_skins(document: Mapping[str, Any]) -> dict[str, Skin]:
    """Parse a ``{"skins": {...}}`` document."""
    raw = document.get("skins") or {}
    if not isinstance(raw, Mapping):
        raise ReportConfigError("skins", raw, "expected a mapping of skin names")
    return {str(name): parse_skin(str(name), entry) for name, entry in raw.items()}


def load_skins(path: Path) -> dict[str, Skin]:
    """
    Load skins from a YAML file, layered over the built-in skins.

    A file skin with a built-in name replaces the built-in one.
    """
    with open(path, encoding="utf-8") as f:
        document = yaml.safe_load(f) or {}
    if not isinstance(document, Mapping):
        raise ReportConfigError("skins_file", str(path), "top level must be a mapping")
    skins = {**BUILTIN_SKINS, **parse_skins(document)}
    logger.info(
        "report_skins_loaded",
        extra={"path": str(path), "skin_names": sorted(skins)},
    )
    return skins


def get_skin(name: str, skins: Mapping[str, Skin] | None = None) -> Skin:
    """Look up a skin by name."""
    available = BUILTIN_SKINS if skins is None else skins
    try:
        return available[name]
    except KeyError:
        raise UnknownSkinError(name, tuple(sorted(available))) from None
