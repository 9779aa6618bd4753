# ookdecode/protocol/dispatch.py
from __future__ import annotations

import logging
from typing import Callable, Dict, Sequence, Union

from ookdecode.model.failures import DecodeFailure, UnsupportedFormat
from ookdecode.model.records import DecodedRecord
from .acurite import decode_tower
from .defs import (
    ACURITE_MSGTYPE_INDEX,
    ACURITE_MSGTYPE_MASK,
    ACURITE_MSGTYPE_TOWER_SENSOR,
    CLASSIFY_MIN_LEN,
    FINEOFFSET_MSGTYPE_INDEX,
    FINEOFFSET_MSGTYPE_WH45,
    FINEOFFSET_MSGTYPE_WS80,
    PacketType,
)
from .fineoffset import decode_wh45, decode_ws80

_log = logging.getLogger(__name__)

DecodeResult = Union[DecodedRecord, DecodeFailure]

DECODERS: Dict[PacketType, Callable[[Sequence[int]], DecodeResult]] = {
    PacketType.TOWER: decode_tower,
    PacketType.WS80: decode_ws80,
    PacketType.WH45: decode_wh45,
}

_FINEOFFSET_TYPES: Dict[int, PacketType] = {
    FINEOFFSET_MSGTYPE_WS80: PacketType.WS80,
    FINEOFFSET_MSGTYPE_WH45: PacketType.WH45,
}


def classify(buf: Sequence[int]) -> PacketType:
    """
    Pick a layout from header bytes. The Acurite tag (byte 2, low 6 bits) is
    tested first; a packet matching both vendors is treated as a Tower.
    """
    if len(buf) < CLASSIFY_MIN_LEN:
        raise ValueError(f"Packet too short to classify: {len(buf)} bytes")

    if (buf[ACURITE_MSGTYPE_INDEX] & ACURITE_MSGTYPE_MASK) == ACURITE_MSGTYPE_TOWER_SENSOR:
        return PacketType.TOWER
    return _FINEOFFSET_TYPES.get(buf[FINEOFFSET_MSGTYPE_INDEX], PacketType.UNSUPPORTED)


def decode(buf: Sequence[int]) -> DecodeResult:
    """Classify `buf` and run the matching decoder."""
    ptype = classify(buf)
    if ptype is PacketType.UNSUPPORTED:
        _log.debug("Unsupported message type: 0x%02x", buf[FINEOFFSET_MSGTYPE_INDEX])
        return UnsupportedFormat(discriminator=buf[FINEOFFSET_MSGTYPE_INDEX])

    result = DECODERS[ptype](buf)
    _log.debug("Decoded %d-byte packet as %s", len(buf), ptype.value)
    return result
