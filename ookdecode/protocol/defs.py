# ookdecode/protocol/defs.py
from __future__ import annotations

from enum import Enum


# Message-type tags. Acurite and Fine Offset use unrelated header layouts;
# these values only stay distinguishable for the supported set.
ACURITE_MSGTYPE_TOWER_SENSOR = 0x04
FINEOFFSET_MSGTYPE_WS80 = 0x80
FINEOFFSET_MSGTYPE_WH45 = 0x45

ACURITE_MSGTYPE_MASK = 0x3F
ACURITE_MSGTYPE_INDEX = 2
FINEOFFSET_MSGTYPE_INDEX = 0

# Minimum packet lengths (bytes) per layout.
TOWER_MIN_LEN = 7
WS80_MIN_LEN = 16
WH45_MIN_LEN = 13
CLASSIFY_MIN_LEN = max(ACURITE_MSGTYPE_INDEX, FINEOFFSET_MSGTYPE_INDEX) + 1


class PacketType(Enum):
    TOWER = "Tower"
    WS80 = "WS80"
    WH45 = "WH45"
    UNSUPPORTED = "Unsupported"
