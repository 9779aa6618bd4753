# ookdecode/core/errors.py
from __future__ import annotations


class OokDecodeError(Exception):
    """
    Base class for all expected operational errors in ookdecode.

    Decode outcomes (records, sanity failures, unsupported packets) are
    ordinary return values and never use this hierarchy.
    """

    #: Stable machine-readable identifier (for CLI exit mapping, logs, etc.)
    code: str = "unknown"

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigError(OokDecodeError):
    """
    Configuration file is missing, malformed or inconsistent.

    Examples:
      - file not found
      - section is not a mapping
      - unknown output format or log level
    """
    code = "config_error"


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------

class HexFormatError(OokDecodeError):
    """
    Captured packet text could not be turned into bytes.

    Examples:
      - odd number of hex digits
      - non-hex characters
      - empty packet
    """
    code = "hex_format_error"


# ---------------------------------------------------------------------------
# Receiver errors
# ---------------------------------------------------------------------------

class ReceiverError(OokDecodeError):
    """Base for failures talking to the radio receiver."""
    code = "receiver_error"


class ReceiverOpenError(ReceiverError):
    """
    Receiver port could not be opened.

    Examples:
      - port not found
      - permission denied
      - device already in use
    """
    code = "receiver_open_error"


class ReceiverIOError(ReceiverError):
    """
    Receiver was open but reading from it failed.

    Examples:
      - USB unplugged
      - OS-level I/O error during read
    """
    code = "receiver_io_error"
