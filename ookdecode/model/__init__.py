from .records import (
    DecodedRecord,
    IntegrityLabel,
    TowerChannel,
    TowerRecord,
    WH45Record,
    WS80Record,
)
from .failures import DecodeFailure, SanityCheckFailed, UnsupportedFormat

__all__ = ["DecodedRecord",
           "IntegrityLabel",
           "TowerChannel",
           "TowerRecord",
           "WS80Record",
           "WH45Record",
           "DecodeFailure",
           "SanityCheckFailed",
           "UnsupportedFormat"]
