# ookdecode/app/runner.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ookdecode.common.hexstr import parse_hex
from ookdecode.core.errors import HexFormatError
from ookdecode.interfaces.record_sink import RecordSink
from ookdecode.model import SanityCheckFailed, UnsupportedFormat
from ookdecode.protocol.dispatch import DecodeResult, decode


@dataclass
class RunStats:
    lines: int = 0
    decoded: int = 0
    sanity_failed: int = 0
    unsupported: int = 0
    malformed: int = 0

    def as_dict(self) -> dict:
        return {
            "lines": self.lines,
            "decoded": self.decoded,
            "sanity_failed": self.sanity_failed,
            "unsupported": self.unsupported,
            "malformed": self.malformed,
        }


class DecodeRunner:
    """
    Feeds captured hex lines through the decoder and fans results out to sinks.

    - blank lines and '#' comments are skipped
    - malformed hex or packets too short for their layout are counted and logged
    - unsupported packets reach sinks only when drop_unsupported is False
    """

    def __init__(self, sinks: Optional[List[RecordSink]] = None, *, drop_unsupported: bool = True):
        self._sinks: List[RecordSink] = list(sinks or [])
        self._drop_unsupported = drop_unsupported
        self._log = logging.getLogger(__name__)
        self.stats = RunStats()

    def add_sink(self, sink: RecordSink) -> None:
        self._sinks.append(sink)

    def feed_line(self, line: str) -> Optional[DecodeResult]:
        text = line.strip()
        if not text or text.startswith("#"):
            return None

        self.stats.lines += 1
        try:
            buf = parse_hex(text)
            result = decode(buf)
        except (HexFormatError, ValueError, IndexError) as e:
            self.stats.malformed += 1
            self._log.warning("MALFORMED_PACKET text=%r err=%s", text, e)
            return None

        if isinstance(result, UnsupportedFormat):
            self.stats.unsupported += 1
            if self._drop_unsupported:
                self._log.debug("UNSUPPORTED_DROPPED discriminator=0x%02x", result.discriminator)
                return result
            self._log.info("UNSUPPORTED discriminator=0x%02x", result.discriminator)
            for sink in self._sinks:
                sink.on_failure(result)
            return result

        if isinstance(result, SanityCheckFailed):
            self.stats.sanity_failed += 1
            self._log.warning("SANITY_CHECK_FAILED field=%s value=%s raw=%s", result.field, result.value, buf.hex())
            for sink in self._sinks:
                sink.on_failure(result)
            return result

        self.stats.decoded += 1
        for sink in self._sinks:
            sink.on_record(result)
        return result

    def run(self, lines: Iterable[str]) -> RunStats:
        for line in lines:
            self.feed_line(line)
        return self.stats

    def close(self) -> None:
        for sink in self._sinks:
            try:
                sink.close()
            except Exception:
                self._log.exception("SINK_CLOSE_FAILED sink=%r", sink)
