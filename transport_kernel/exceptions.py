"""
Typed Exception Hierarchy for the Transport Ledger.

The report synthesis functions never raise for well-typed input: empty
collections, negative balances and unknown statuses are all valid. The
exceptions below belong to the edges around that core -- configuration,
entry loading and rendering.

Every exception:
  1. Has a TYPED class (catch by type, not message)
  2. Has a CODE attribute (machine-readable, API-safe)
  3. Carries structured DATA as public attributes (picked up by the
     structured log formatter as ``exc_<field>``)

    TransportLedgerError (base)
    |
    +-- ReportConfigError
    |   +-- UnknownSkinError
    |
    +-- EntryFormatError
    |
    +-- RenderError

Category        | Code                  | When Raised
----------------|-----------------------|------------------------------------
Config          | REPORT_CONFIG_ERROR   | Invalid option value (color, mode...)
                | UNKNOWN_SKIN          | Skin name not defined
Entry           | ENTRY_FORMAT_ERROR    | Record missing/unparseable field
Render          | RENDER_ERROR          | Renderer failed while writing a report
"""


class TransportLedgerError(Exception):
    """
    Base exception for all transport ledger errors.

    All subclasses must have a `code` class attribute
    for machine-readable error identification.
    """

    code: str = "TRANSPORT_LEDGER_ERROR"


# Configuration exceptions


class ReportConfigError(TransportLedgerError, ValueError):
    """A report configuration option has an invalid value (also a ValueError)."""

    code: str = "REPORT_CONFIG_ERROR"

    def __init__(self, option: str, value: object, reason: str):
        self.option = option
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for {option!r}: {value!r} ({reason})")


class UnknownSkinError(ReportConfigError):
    """Requested report skin is not defined."""

    code: str = "UNKNOWN_SKIN"

    def __init__(self, skin_name: str, available: tuple[str, ...]):
        self.skin_name = skin_name
        self.available = available
        super().__init__(
            "skin",
            skin_name,
            f"known skins: {', '.join(available) or 'none'}",
        )


# Entry loading exceptions


class EntryFormatError(TransportLedgerError):
    """A raw ledger record could not be converted into a LedgerEntry."""

    code: str = "ENTRY_FORMAT_ERROR"

    def __init__(self, field_name: str, record_index: int | None, reason: str):
        self.field_name = field_name
        self.record_index = record_index
        self.reason = reason
        where = f"record {record_index}" if record_index is not None else "record"
        super().__init__(f"{where}: field {field_name!r} {reason}")


# Rendering exceptions


class RenderError(TransportLedgerError):
    """
    A renderer failed while writing a report.

    Raised after the renderer has been closed, so the output handle is
    always released before the error reaches the caller.
    """

    code: str = "RENDER_ERROR"

    def __init__(self, renderer: str, section: str | None, reason: str):
        self.renderer = renderer
        self.section = section
        self.reason = reason
        stage = f" while writing {section}" if section else ""
        super().__init__(f"{renderer} failed{stage}: {reason}")
