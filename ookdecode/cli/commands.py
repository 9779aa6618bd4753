# ookdecode/cli/commands.py
from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Iterable, Iterator, Optional

from ookdecode.app.config import DecoderConfig
from ookdecode.app.runner import DecodeRunner, RunStats
from ookdecode.app.sinks import JsonLinesSink, PrintRecordSink
from ookdecode.common.hexstr import parse_hex
from ookdecode.common.serial_link import ReceiverLink
from ookdecode.core.errors import ConfigError, OokDecodeError
from ookdecode.protocol.dispatch import classify

_log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


# ---------------- Logging ----------------

def configure_logging(cfg: DecoderConfig) -> None:
    """
    Console handler on stderr plus an optional file handler (idempotent).
    Kept in CLI (presentation-layer concern).
    """
    root = logging.getLogger()
    root.setLevel(cfg.log_level_no)

    if not any(getattr(h, "_ookdecode_console", False) for h in root.handlers):
        sh = logging.StreamHandler(sys.stderr)
        sh.setFormatter(logging.Formatter(LOG_FORMAT))
        sh._ookdecode_console = True  # type: ignore[attr-defined]
        root.addHandler(sh)

    if cfg.log_file:
        configure_file_logging(Path(cfg.log_file))


def configure_file_logging(app_log_path: Path) -> None:
    root = logging.getLogger()
    app_log_path.parent.mkdir(parents=True, exist_ok=True)
    target = str(app_log_path.resolve())

    for h in root.handlers:
        if isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", None) == target:
            return

    fh = logging.FileHandler(app_log_path, encoding="utf-8", delay=True)
    fh.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(fh)


# ---------------- Helpers ----------------

def build_runner(cfg: DecoderConfig) -> DecodeRunner:
    if cfg.output_format == "json":
        sink = JsonLinesSink(include_raw=cfg.include_raw)
    else:
        sink = PrintRecordSink(include_raw=cfg.include_raw)
    return DecodeRunner([sink], drop_unsupported=cfg.drop_unsupported)


def _finish(runner: DecodeRunner) -> RunStats:
    runner.close()
    _log.info("RUN_DONE %s", " ".join(f"{k}={v}" for k, v in runner.stats.as_dict().items()))
    return runner.stats


# ---------------- Commands ----------------

def cmd_decode(packets: Iterable[str], *, cfg: DecoderConfig) -> int:
    runner = build_runner(cfg)
    try:
        runner.run(packets)
    finally:
        _finish(runner)
    return 0


def _read_lines(path: str) -> Iterator[str]:
    if path == "-":
        yield from sys.stdin
        return
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Input file not found: {p}")
    with open(p, "r", encoding="utf-8") as f:
        yield from f


def cmd_file(path: str, *, cfg: DecoderConfig) -> int:
    runner = build_runner(cfg)
    try:
        runner.run(_read_lines(path))
    finally:
        _finish(runner)
    return 0


def cmd_listen(*, cfg: DecoderConfig, secs: Optional[float] = None) -> int:
    if not cfg.port:
        raise ConfigError(
            "No receiver port configured",
            hint="Pass --port or set receiver.port in the config file.",
        )

    runner = build_runner(cfg)
    link = ReceiverLink(cfg.port, baudrate=cfg.baudrate, timeout=cfg.timeout_s)
    t0 = time.time()
    try:
        with link:
            print(f"Listening on {cfg.port} ({cfg.baudrate} baud)")
            while secs is None or time.time() - t0 < secs:
                line = link.readline()
                if line:
                    runner.feed_line(line)
    except KeyboardInterrupt:
        print("Stopped.")
    finally:
        _finish(runner)
    return 0


def cmd_classify(packets: Iterable[str]) -> int:
    for text in packets:
        try:
            buf = parse_hex(text)
            label = classify(buf).value
        except OokDecodeError as e:
            label = f"invalid ({e.message})"
        except ValueError as e:
            label = f"invalid ({e})"
        print(f"{text} -> {label}")
    return 0
