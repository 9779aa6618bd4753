# ookdecode/model/records.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Union

from ookdecode.common.hexstr import to_hex


class IntegrityLabel(str, Enum):
    """Error-detection scheme a protocol declares. Recorded, never verified."""
    CHECKSUM = "CHECKSUM"
    CRC = "CRC"


class TowerChannel(Enum):
    """
    Acurite channel switch, indexed by the top two bits of byte 0.

    Index 1 carries no real channel; it decodes to E ("error") so the record
    can still be produced while flagging the channel as unusable.
    """
    C = 0
    E = 1
    B = 2
    A = 3

    @property
    def label(self) -> str:
        return self.name

    @property
    def is_valid(self) -> bool:
        return self is not TowerChannel.E


@dataclass(frozen=True)
class TowerRecord:
    """Acurite 592TXR-style tower sensor: temperature, humidity, channel."""
    model: ClassVar[str] = "Acurite-Tower"
    integrity_label: ClassVar[IntegrityLabel] = IntegrityLabel.CHECKSUM

    id: int
    channel: TowerChannel
    battery_ok: bool
    temperature_c: float
    humidity: Optional[int]
    raw_echo: bytes
    anomaly_count: Optional[int] = None

    def as_dict(self, *, include_raw: bool = True) -> dict:
        d = {
            "model": self.model,
            "id": self.id,
            "channel": self.channel.label,
            "battery_ok": self.battery_ok,
            "temperature_C": self.temperature_c,
            "humidity": self.humidity,
            "mic": self.integrity_label.value,
        }
        if include_raw:
            d["raw_bytes"] = to_hex(self.raw_echo)
        if self.anomaly_count:
            d["exception"] = self.anomaly_count
        return d


@dataclass(frozen=True)
class WS80Record:
    """
    Fine Offset WS80 ultrasonic weather station.

    battery_level is (mV - 1400) / 16 with no upper clamp; battery_ok is that
    level scaled by 0.01 and therefore may exceed 1.0 on fresh cells.
    """
    model: ClassVar[str] = "Fineoffset-WS80"
    integrity_label: ClassVar[IntegrityLabel] = IntegrityLabel.CRC

    id: str
    battery_mv: int
    battery_level: float
    flags: int
    temperature_c: Optional[float]
    humidity: Optional[int]
    wind_avg_m_s: Optional[float]
    wind_dir_deg: Optional[int]
    wind_max_m_s: Optional[float]
    uv_index: Optional[float]
    light_lux: Optional[int]
    unknown: Optional[int]
    raw_echo: bytes

    @property
    def battery_ok(self) -> float:
        return self.battery_level * 0.01

    def as_dict(self, *, include_raw: bool = True) -> dict:
        d = {
            "model": self.model,
            "id": self.id,
            "battery_ok": self.battery_ok,
            "battery_mV": self.battery_mv,
            "temperature_C": self.temperature_c,
            "humidity": self.humidity,
            "wind_dir_deg": self.wind_dir_deg,
            "wind_avg_m_s": self.wind_avg_m_s,
            "wind_max_m_s": self.wind_max_m_s,
            "uvi": self.uv_index,
            "light_lux": self.light_lux,
            "flags": f"{self.flags:x}",
            "unknown": self.unknown,
            "mic": self.integrity_label.value,
        }
        if include_raw:
            d["raw_bytes"] = to_hex(self.raw_echo)
        return d


@dataclass(frozen=True)
class WH45Record:
    """Fine Offset WH45 air-quality sensor: PM2.5, PM10, CO2, T/H."""
    model: ClassVar[str] = "Fineoffset-WH45"
    integrity_label: ClassVar[IntegrityLabel] = IntegrityLabel.CRC

    id: str
    battery_bars: int
    battery_ok: float
    ext_power: bool
    temperature_c: float
    humidity: int
    pm2_5_ug_m3: float
    pm10_ug_m3: float
    co2_ppm: int
    raw_echo: bytes

    def as_dict(self, *, include_raw: bool = True) -> dict:
        d = {
            "model": self.model,
            "id": self.id,
            "battery_ok": self.battery_ok,
            "temperature_C": self.temperature_c,
            "humidity": self.humidity,
            "pm2_5_ug_m3": self.pm2_5_ug_m3,
            "pm10_ug_m3": self.pm10_ug_m3,
            "co2_ppm": self.co2_ppm,
            "ext_power": int(self.ext_power),
            "mic": self.integrity_label.value,
        }
        if include_raw:
            d["raw_bytes"] = to_hex(self.raw_echo)
        return d


DecodedRecord = Union[TowerRecord, WS80Record, WH45Record]
