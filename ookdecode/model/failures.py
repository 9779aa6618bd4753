# ookdecode/model/failures.py
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True)
class SanityCheckFailed:
    """A decoded value fell outside its physically plausible range."""
    status: ClassVar[str] = "DECODE_FAIL_SANITY"

    field: str
    value: float

    def as_dict(self) -> dict:
        return {"status": self.status, "field": self.field, "value": self.value}


@dataclass(frozen=True)
class UnsupportedFormat:
    """No decoder claims the packet; discriminator is byte 0."""
    status: ClassVar[str] = "DECODE_FAIL_UNSUPPORTED"

    discriminator: int

    def as_dict(self) -> dict:
        return {"status": self.status, "discriminator": f"0x{self.discriminator:02x}"}


DecodeFailure = Union[SanityCheckFailed, UnsupportedFormat]
