# ookdecode/protocol/fineoffset.py
"""
Fine Offset WS80 and WH45 decoders.

Neither layout has range checks: a field the station could not measure is
sent as an all-ones sentinel and decodes to None. Sentinels are compared on
the raw value, before any scaling.
"""
from __future__ import annotations

from typing import Optional, Sequence

from ookdecode.model.records import WH45Record, WS80Record
from .bits import bits, concat, uint_be
from .defs import WH45_MIN_LEN, WS80_MIN_LEN

TEMP_OFFSET = 400

WS80_LIGHT_NONE = 0xFFFF
WS80_TEMP_NONE = 0x3FF
WS80_HUMIDITY_NONE = 0xFF
WS80_WIND_NONE = 0x1FF
WS80_UV_NONE = 0xFF
# Narrower than the 16-bit field it guards; kept as the stations send it.
WS80_UNKNOWN_NONE = 0x3FFF

WS80_BATTERY_MV_PER_STEP = 20
WS80_BATTERY_EMPTY_MV = 1400
WS80_BATTERY_MV_PER_LEVEL = 16

WH45_EXT_POWER_BARS = 6


def _scaled(raw: int, sentinel: int, factor: float) -> Optional[float]:
    if raw == sentinel:
        return None
    return round(raw * factor, 1)


def _unscaled(raw: int, sentinel: int) -> Optional[int]:
    return None if raw == sentinel else raw


def _hex_id(buf: Sequence[int]) -> str:
    return f"{uint_be(buf, 1, 3):x}"


def _require_len(buf: Sequence[int], minimum: int, name: str) -> None:
    if len(buf) < minimum:
        raise ValueError(f"{name} packet too short: expected at least {minimum} bytes, got {len(buf)}")


def ws80_battery_level(battery_mv: int) -> float:
    if battery_mv < WS80_BATTERY_EMPTY_MV:
        return 0.0
    return (battery_mv - WS80_BATTERY_EMPTY_MV) / WS80_BATTERY_MV_PER_LEVEL


def decode_ws80(buf: Sequence[int]) -> WS80Record:
    """
    Layout (16 bytes, then CRC):

        0      message type 0x80
        1-3    id
        4-5    light, lux / 10
        6      battery, 20 mV steps
        7      flags: bit 6/5/4 = wind max/dir/avg bit 8, bits 1-0 = temp bits 9-8
        8      temperature low byte, (raw - 400) / 10 C
        9      humidity %
        10     wind avg low byte, m/s * 10
        11     wind dir low byte, degrees
        12     wind max low byte, m/s * 10
        13     UV index * 10
        14-15  unknown
    """
    _require_len(buf, WS80_MIN_LEN, "WS80")

    light_raw = uint_be(buf, 4, 2)
    battery_mv = bits(buf, 6) * WS80_BATTERY_MV_PER_STEP
    flags = bits(buf, 7)

    temp_raw = concat((bits(buf, 7, 0x03), 2), (bits(buf, 8), 8))
    temp_c = None
    if temp_raw != WS80_TEMP_NONE:
        temp_c = round((temp_raw - TEMP_OFFSET) * 0.1, 1)

    wind_avg = concat((bits(buf, 7, 0x10, 4), 1), (bits(buf, 10), 8))
    wind_dir = concat((bits(buf, 7, 0x20, 5), 1), (bits(buf, 11), 8))
    wind_max = concat((bits(buf, 7, 0x40, 6), 1), (bits(buf, 12), 8))

    return WS80Record(
        id=_hex_id(buf),
        battery_mv=battery_mv,
        battery_level=ws80_battery_level(battery_mv),
        flags=flags,
        temperature_c=temp_c,
        humidity=_unscaled(bits(buf, 9), WS80_HUMIDITY_NONE),
        wind_avg_m_s=_scaled(wind_avg, WS80_WIND_NONE, 0.1),
        wind_dir_deg=_unscaled(wind_dir, WS80_WIND_NONE),
        wind_max_m_s=_scaled(wind_max, WS80_WIND_NONE, 0.1),
        uv_index=_scaled(bits(buf, 13), WS80_UV_NONE, 0.1),
        light_lux=None if light_raw == WS80_LIGHT_NONE else light_raw * 10,
        unknown=_unscaled(uint_be(buf, 14, 2), WS80_UNKNOWN_NONE),
        raw_echo=bytes(buf),
    )


def wh45_battery_bars(buf: Sequence[int]) -> int:
    # byte 7 bit 6 -> bit 1, byte 9 bits 7-6 -> bits 1-0
    return bits(buf, 7, 0x40, 5) | bits(buf, 9, 0xC0, 6)


def decode_wh45(buf: Sequence[int]) -> WH45Record:
    """
    Layout (13 bytes, then CRC):

        0      message type 0x45
        1-3    id
        4-5    temperature, low 3 bits of byte 4 + byte 5, (raw - 400) / 10 C
        6      humidity %
        7-8    battery bit, PM2.5 (14 bits) ug/m3 * 10
        9-10   battery bits, PM10 (14 bits) ug/m3 * 10
        11-12  CO2 ppm
    """
    _require_len(buf, WH45_MIN_LEN, "WH45")

    temp_raw = concat((bits(buf, 4, 0x07), 3), (bits(buf, 5), 8))
    battery_bars = wh45_battery_bars(buf)
    pm25_raw = concat((bits(buf, 7, 0x3F), 6), (bits(buf, 8), 8))
    pm10_raw = concat((bits(buf, 9, 0x3F), 6), (bits(buf, 10), 8))

    return WH45Record(
        id=_hex_id(buf),
        battery_bars=battery_bars,
        battery_ok=round(min(battery_bars * 0.2, 1.0), 1),
        ext_power=battery_bars == WH45_EXT_POWER_BARS,
        temperature_c=round((temp_raw - TEMP_OFFSET) * 0.1, 1),
        humidity=bits(buf, 6),
        pm2_5_ug_m3=round(pm25_raw * 0.1, 1),
        pm10_ug_m3=round(pm10_raw * 0.1, 1),
        co2_ppm=uint_be(buf, 11, 2),
        raw_echo=bytes(buf),
    )
