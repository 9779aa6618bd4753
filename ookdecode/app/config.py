# ookdecode/app/config.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ookdecode.core.errors import ConfigError

OUTPUT_FORMATS = ("text", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class DecoderConfig:
    port: Optional[str] = None
    baudrate: int = 115200
    timeout_s: float = 1.0
    output_format: str = "text"
    include_raw: bool = True
    drop_unsupported: bool = True
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def log_level_no(self) -> int:
        return logging.getLevelName(self.log_level)


class ConfigLoader:
    """
    Load a DecoderConfig from YAML.

    Layout (every section and key optional):
        receiver: {port, baudrate, timeout_s}
        output:   {format, include_raw}
        decode:   {drop_unsupported}
        logging:  {level, file}
    """

    SECTIONS = ("receiver", "output", "decode", "logging")

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load_yaml(self) -> Dict[str, Any]:
        if not self.path.exists():
            raise ConfigError(f"Config file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                doc = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.path}: {e}") from None

        if not isinstance(doc, dict):
            raise ConfigError(f"{self.path} must contain a mapping")
        return doc

    def _section(self, doc: Dict[str, Any], name: str) -> Dict[str, Any]:
        sec = doc.get(name) or {}
        if not isinstance(sec, dict):
            raise ConfigError(f"Config section '{name}' must be a mapping")
        return sec

    def load(self) -> DecoderConfig:
        doc = self._load_yaml()

        unknown = sorted(set(doc) - set(self.SECTIONS))
        if unknown:
            raise ConfigError(
                f"Unknown config section(s): {', '.join(map(str, unknown))}",
                hint=f"Valid sections: {', '.join(self.SECTIONS)}",
            )

        receiver = self._section(doc, "receiver")
        output = self._section(doc, "output")
        decode = self._section(doc, "decode")
        logging_ = self._section(doc, "logging")

        defaults = DecoderConfig()
        try:
            cfg = DecoderConfig(
                port=_opt_str(receiver.get("port")),
                baudrate=int(receiver.get("baudrate", defaults.baudrate)),
                timeout_s=float(receiver.get("timeout_s", defaults.timeout_s)),
                output_format=str(output.get("format", defaults.output_format)).lower(),
                include_raw=bool(output.get("include_raw", defaults.include_raw)),
                drop_unsupported=bool(decode.get("drop_unsupported", defaults.drop_unsupported)),
                log_level=str(logging_.get("level", defaults.log_level)).upper(),
                log_file=_opt_str(logging_.get("file")),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid value in {self.path}: {e}") from None

        validate_config(cfg)
        return cfg


def validate_config(cfg: DecoderConfig) -> None:
    if cfg.output_format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Unknown output format '{cfg.output_format}'",
            hint=f"Use one of: {', '.join(OUTPUT_FORMATS)}",
        )
    if cfg.log_level not in LOG_LEVELS:
        raise ConfigError(
            f"Unknown log level '{cfg.log_level}'",
            hint=f"Use one of: {', '.join(LOG_LEVELS)}",
        )
    if cfg.baudrate <= 0:
        raise ConfigError(f"baudrate must be positive (got {cfg.baudrate})")
    if cfg.timeout_s < 0:
        raise ConfigError(f"timeout_s must be >= 0 (got {cfg.timeout_s})")


def _opt_str(v: Any) -> Optional[str]:
    return None if v is None else str(v)
