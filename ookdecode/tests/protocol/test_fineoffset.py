from __future__ import annotations

import pytest

from ookdecode.model import IntegrityLabel, WH45Record, WS80Record
from ookdecode.protocol.fineoffset import (
    decode_wh45,
    decode_ws80,
    wh45_battery_bars,
    ws80_battery_level,
)

WS80_EXAMPLE = bytes.fromhex("80002d980000950a764005bc0a003fff973a")
WH45_EXAMPLE = bytes.fromhex("45003fd102a2360040c04701a193ab")


def _ws80(**patch: int) -> bytes:
    buf = bytearray(WS80_EXAMPLE)
    for k, v in patch.items():
        buf[int(k.lstrip("b"))] = v
    return bytes(buf)


def _wh45(**patch: int) -> bytes:
    buf = bytearray(WH45_EXAMPLE)
    for k, v in patch.items():
        buf[int(k.lstrip("b"))] = v
    return bytes(buf)


# ---------------------------------------------------------------------------
# WS80
# ---------------------------------------------------------------------------

def test_ws80_example_packet():
    r = decode_ws80(WS80_EXAMPLE)

    assert isinstance(r, WS80Record)
    assert r.id == "2d98"
    assert r.light_lux == 0
    assert r.battery_mv == 2980
    assert r.battery_level == 98.75
    assert r.flags == 0x0A
    assert r.temperature_c == 23.0
    assert r.humidity == 64
    assert r.wind_avg_m_s == 0.5
    assert r.wind_dir_deg == 188
    assert r.wind_max_m_s == 1.0
    assert r.uv_index == 0.0
    assert r.unknown is None
    assert r.integrity_label is IntegrityLabel.CRC
    assert r.raw_echo == WS80_EXAMPLE


def test_ws80_light_sentinel_is_absent():
    assert decode_ws80(_ws80(b4=0xFF, b5=0xFF)).light_lux is None


@pytest.mark.parametrize("raw", [0x0000, 0x0001, 0x1234, 0xFFFE])
def test_ws80_light_scales_by_ten(raw):
    r = decode_ws80(_ws80(b4=raw >> 8, b5=raw & 0xFF))
    assert r.light_lux == raw * 10


def test_ws80_temperature_sentinel_is_absent():
    assert decode_ws80(_ws80(b7=0x03, b8=0xFF)).temperature_c is None


def test_ws80_temperature_uses_two_flag_bits():
    # raw 0x3FE -> (1022 - 400) / 10
    assert decode_ws80(_ws80(b7=0x03, b8=0xFE)).temperature_c == 62.2
    assert decode_ws80(_ws80(b7=0x00, b8=0x00)).temperature_c == -40.0


def test_ws80_humidity_sentinel_is_absent():
    assert decode_ws80(_ws80(b9=0xFF)).humidity is None


def test_ws80_wind_sentinels_are_absent():
    r = decode_ws80(_ws80(b7=0x70, b10=0xFF, b11=0xFF, b12=0xFF))
    assert r.wind_avg_m_s is None
    assert r.wind_dir_deg is None
    assert r.wind_max_m_s is None


def test_ws80_wind_zero_is_zero_not_absent():
    r = decode_ws80(_ws80(b7=0x00, b10=0x00, b11=0x00, b12=0x00))
    assert r.wind_avg_m_s == 0.0
    assert r.wind_dir_deg == 0
    assert r.wind_max_m_s == 0.0


def test_ws80_wind_high_bits_come_from_flags():
    r = decode_ws80(_ws80(b7=0x70, b10=0x2C, b11=0x0E, b12=0x00))
    assert r.wind_avg_m_s == 30.0   # 0x12C
    assert r.wind_dir_deg == 270    # 0x10E
    assert r.wind_max_m_s == 25.6   # 0x100


def test_ws80_uv_sentinel_and_scale():
    assert decode_ws80(_ws80(b13=0xFF)).uv_index is None
    assert decode_ws80(_ws80(b13=25)).uv_index == 2.5


def test_ws80_unknown_field_keeps_14bit_sentinel():
    assert decode_ws80(_ws80(b14=0x3F, b15=0xFF)).unknown is None
    assert decode_ws80(_ws80(b14=0xFF, b15=0xFF)).unknown == 0xFFFF
    assert decode_ws80(_ws80(b14=0x01, b15=0x02)).unknown == 0x0102


@pytest.mark.parametrize(
    "battery_mv, level",
    [(0, 0.0), (1380, 0.0), (1400, 0.0), (1416, 1.0), (2980, 98.75), (5100, 231.25)],
)
def test_ws80_battery_level_is_unclamped(battery_mv, level):
    assert ws80_battery_level(battery_mv) == level


def test_ws80_battery_ok_is_fractional_level():
    r = decode_ws80(_ws80(b6=0x95))
    assert r.battery_ok == pytest.approx(0.9875)


def test_ws80_has_no_sanity_checks():
    r = decode_ws80(_ws80(b7=0x00, b8=0x00, b9=0xFE))
    assert isinstance(r, WS80Record)
    assert r.humidity == 254


def test_ws80_short_packet_raises():
    with pytest.raises(ValueError):
        decode_ws80(WS80_EXAMPLE[:15])


# ---------------------------------------------------------------------------
# WH45
# ---------------------------------------------------------------------------

def test_wh45_example_packet():
    r = decode_wh45(WH45_EXAMPLE)

    assert isinstance(r, WH45Record)
    assert r.id == "3fd1"
    assert r.temperature_c == 27.4
    assert r.humidity == 54
    assert r.battery_bars == 3
    assert r.battery_ok == 0.6
    assert r.ext_power is False
    assert r.pm2_5_ug_m3 == 6.4
    assert r.pm10_ug_m3 == 7.1
    assert r.co2_ppm == 417
    assert r.integrity_label is IntegrityLabel.CRC
    assert r.raw_echo == WH45_EXAMPLE


def test_wh45_battery_bars_from_byte7_bit6():
    r = decode_wh45(_wh45(b7=0x40, b9=0x00))
    assert r.battery_bars == 2
    assert r.battery_ok == 0.4
    assert r.ext_power is False


@pytest.mark.parametrize(
    "b7, b9, bars",
    [(0x00, 0x00, 0), (0x00, 0x40, 1), (0x00, 0x80, 2), (0x40, 0x40, 3), (0x40, 0xC0, 3), (0xBF, 0x3F, 0)],
)
def test_wh45_battery_bars_bits(b7, b9, bars):
    assert wh45_battery_bars(_wh45(b7=b7, b9=b9)) == bars


def test_wh45_battery_bits_do_not_leak_into_pm():
    r = decode_wh45(_wh45(b7=0x40, b8=0x10, b9=0xC0, b10=0x20))
    assert r.pm2_5_ug_m3 == 1.6
    assert r.pm10_ug_m3 == 3.2


def test_wh45_pm_uses_14_bits():
    r = decode_wh45(_wh45(b7=0x3F, b8=0xFF, b9=0x3F, b10=0xFF))
    assert r.pm2_5_ug_m3 == 1638.3
    assert r.pm10_ug_m3 == 1638.3


def test_wh45_temperature_has_no_sentinel():
    r = decode_wh45(_wh45(b4=0x07, b5=0xFF))
    assert r.temperature_c == 164.7


def test_wh45_temperature_ignores_high_bits_of_byte4():
    assert decode_wh45(_wh45(b4=0xFA)).temperature_c == 27.4


def test_wh45_short_packet_raises():
    with pytest.raises(ValueError):
        decode_wh45(WH45_EXAMPLE[:12])


def test_wh45_accepts_exact_layout_length():
    r = decode_wh45(WH45_EXAMPLE[:13])
    assert r.co2_ppm == 417
