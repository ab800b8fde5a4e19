"""
Reporting Configuration Schema.

Defines presentation options ("skins"), status colouring and number
formatting for transport reports.  Nothing here changes a computed
number: configuration only affects display strings and the rendering
hints passed through to the document renderer.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Self

from transport_kernel.domain.entry import StatusKind
from transport_kernel.exceptions import ReportConfigError
from transport_kernel.logging_config import get_logger
from transport_reports.formatting import (
    RUPEE_TEXT_PREFIX,
    CurrencyFormatter,
    make_currency_formatter,
)

logger = get_logger("reports.config")

RGB = tuple[int, int, int]


class TableWidthMode(str, Enum):
    """Column sizing strategy requested from the renderer."""

    FIXED_WIDTH = "fixed-width"
    AUTO_FIT = "auto-fit"


def parse_color(value: Any, option: str = "color") -> RGB:
    """
    Accept ``"#rrggbb"`` strings or ``[r, g, b]`` sequences.

    Raises:
        ReportConfigError: if the value is not a valid colour.
    """
    if isinstance(value, str):
        text = value.lstrip("#")
        if len(text) == 6:
            try:
                return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
            except ValueError:
                pass
        raise ReportConfigError(option, value, "expected #rrggbb")
    if isinstance(value, (list, tuple)) and len(value) == 3:
        if all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in value):
            return (value[0], value[1], value[2])
    raise ReportConfigError(option, value, "expected #rrggbb or three 0-255 integers")


def color_to_hex(color: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*color)


@dataclass(frozen=True)
class StatusStyle:
    """Badge colours for one balance status."""

    fill_color: RGB
    text_color: RGB


DEFAULT_STATUS_STYLES: dict[StatusKind, StatusStyle] = {
    StatusKind.PAID: StatusStyle(fill_color=(220, 252, 231), text_color=(22, 101, 52)),
    StatusKind.PARTIAL: StatusStyle(fill_color=(254, 243, 199), text_color=(146, 64, 14)),
    StatusKind.UNPAID: StatusStyle(fill_color=(254, 226, 226), text_color=(153, 27, 27)),
}

# Statuses outside StatusKind are counted and shown, styled neutrally.
FALLBACK_STATUS_STYLE = StatusStyle(fill_color=(241, 245, 249), text_color=(51, 65, 85))


@dataclass(frozen=True)
class PresentationConfig:
    """
    Rendering hints for one report skin.

    ``fixed_table_width`` and ``money_column_width`` are in renderer units
    (millimetres for the PDF renderer) and only apply in FIXED_WIDTH mode.
    """

    accent_color: RGB = (102, 51, 153)
    highlight_color: RGB = (220, 38, 38)
    table_width_mode: TableWidthMode = TableWidthMode.FIXED_WIDTH
    fixed_table_width: float = 180.0
    money_column_width: float = 22.0
    title_font_size: int = 20
    section_font_size: int = 16
    body_font_size: int = 9
    detail_font_size: int = 8

    def __post_init__(self):
        # Normalize "#rrggbb" / list colours and string width modes in place
        object.__setattr__(self, "accent_color", parse_color(self.accent_color, "accent_color"))
        object.__setattr__(
            self, "highlight_color", parse_color(self.highlight_color, "highlight_color"),
        )
        try:
            mode = TableWidthMode(self.table_width_mode)
        except ValueError:
            raise ReportConfigError(
                "table_width_mode", self.table_width_mode,
                "expected 'fixed-width' or 'auto-fit'",
            ) from None
        object.__setattr__(self, "table_width_mode", mode)
        if self.fixed_table_width <= 0 or self.money_column_width <= 0:
            raise ReportConfigError(
                "fixed_table_width",
                (self.fixed_table_width, self.money_column_width),
                "widths must be positive",
            )

    @property
    def is_fixed_width(self) -> bool:
        return self.table_width_mode == TableWidthMode.FIXED_WIDTH

    def status_style(self, status: str | None) -> StatusStyle:
        """Style for a status label; unknown labels get the fallback style."""
        kind = StatusKind.of(status)
        if kind is None:
            return FALLBACK_STATUS_STYLE
        return DEFAULT_STATUS_STYLES[kind]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Create from a plain mapping (YAML skin entry)."""
        values = dict(data)
        try:
            return cls(**values)
        except TypeError as exc:
            raise ReportConfigError("presentation", sorted(values), str(exc)) from None


@dataclass
class ReportingConfig:
    """
    Configuration schema for transport reports.

    ``currency_formatter`` overrides ``currency_prefix`` when set, so both
    a glyph ("₹1,000") and a textual prefix ("Rs. 1,000") are reachable.
    """

    title: str = "Transport Entries Report"

    # Currency display
    currency_prefix: str = RUPEE_TEXT_PREFIX
    currency_formatter: CurrencyFormatter | None = None

    # Decimal places for distribution percentages (ROUND_HALF_UP)
    percentage_precision: int = 0

    # Shown in place of empty text / absent optional values
    placeholder: str = "-"

    presentation: PresentationConfig = field(default_factory=PresentationConfig)

    def __post_init__(self):
        if self.percentage_precision < 0:
            raise ReportConfigError(
                "percentage_precision", self.percentage_precision, "cannot be negative",
            )
        if not self.title:
            raise ReportConfigError("title", self.title, "cannot be empty")

    def formatter(self) -> CurrencyFormatter:
        """The effective currency formatter."""
        return self.currency_formatter or make_currency_formatter(self.currency_prefix)

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("reporting_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Create config from dictionary."""
        values = dict(data)
        if "presentation" in values and isinstance(values["presentation"], Mapping):
            values["presentation"] = PresentationConfig.from_dict(values["presentation"])
        logger.info(
            "reporting_config_loading_from_dict",
            extra={"keys": sorted(values.keys())},
        )
        try:
            return cls(**values)
        except TypeError as exc:
            raise ReportConfigError("reporting", sorted(values), str(exc)) from None
