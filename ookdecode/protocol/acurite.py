# ookdecode/protocol/acurite.py
from __future__ import annotations

import logging
from typing import Sequence, Union

from ookdecode.model.failures import SanityCheckFailed
from ookdecode.model.records import TowerChannel, TowerRecord
from .bits import bit, bits, concat, field
from .defs import TOWER_MIN_LEN

_log = logging.getLogger(__name__)

HUMIDITY_NO_SENSOR = 127
HUMIDITY_MAX = 100
TEMP_MIN_C = -40.0
TEMP_MAX_C = 70.0
TEMP_OFFSET = 1000
TEMP_ANOMALY_MASK = 0x3800


def tower_channel(buf: Sequence[int]) -> TowerChannel:
    return TowerChannel(field(buf, 0, width=2, offset=0))


def temperature_anomalies(temp_raw: int) -> int:
    """Count of out-of-band patterns in a raw 14-bit temperature (bits 11-13)."""
    return 1 if temp_raw & TEMP_ANOMALY_MASK else 0


def decode_tower(buf: Sequence[int]) -> Union[TowerRecord, SanityCheckFailed]:
    """
    Acurite tower sensor, 7 bytes:

        byte 0: CC IIIIII    channel, id high
        byte 1: IIIIIIII     id low
        byte 2: xB TTTTTT    battery ok (1), message type 0x04
        byte 3: p HHHHHHH    humidity, 127 = no sensor
        byte 4: p TTTTTTT    temperature high
        byte 5: p TTTTTTT    temperature low, (raw - 1000) / 10 C
        byte 6: checksum
    """
    if len(buf) < TOWER_MIN_LEN:
        raise ValueError(f"Tower packet too short: expected at least {TOWER_MIN_LEN} bytes, got {len(buf)}")

    channel = tower_channel(buf)
    sensor_id = concat((bits(buf, 0, 0x3F), 6), (bits(buf, 1), 8))
    battery_ok = bit(buf, 2, 6)
    humidity = bits(buf, 3, 0x7F)

    if humidity > HUMIDITY_MAX and humidity != HUMIDITY_NO_SENSOR:
        _log.debug("Invalid humidity: %d %%rH", humidity)
        return SanityCheckFailed(field="humidity", value=humidity)

    temp_raw = concat((bits(buf, 4, 0x7F), 7), (bits(buf, 5, 0x7F), 7))
    temp_c = round((temp_raw - TEMP_OFFSET) * 0.1, 1)

    if temp_c < TEMP_MIN_C or temp_c > TEMP_MAX_C:
        _log.debug("Invalid temperature: %.2f C", temp_c)
        return SanityCheckFailed(field="temperature", value=temp_c)

    anomalies = temperature_anomalies(temp_raw)

    return TowerRecord(
        id=sensor_id,
        channel=channel,
        battery_ok=battery_ok,
        temperature_c=temp_c,
        humidity=None if humidity == HUMIDITY_NO_SENSOR else humidity,
        raw_echo=bytes(buf),
        anomaly_count=anomalies or None,
    )
