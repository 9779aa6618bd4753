# ookdecode/app/sinks.py
from __future__ import annotations

import json
import sys
from typing import Optional, TextIO

from ookdecode.interfaces.record_sink import RecordSink
from ookdecode.model import DecodedRecord, DecodeFailure


class PrintRecordSink(RecordSink):
    """Print decoded records and failures as readable lines."""

    def __init__(self, *, include_raw: bool = True, stream: Optional[TextIO] = None):
        self._include_raw = include_raw
        self._stream = stream

    def _out(self) -> TextIO:
        return self._stream or sys.stdout

    def on_record(self, record: DecodedRecord) -> None:
        d = record.as_dict(include_raw=self._include_raw)
        print(f"{record.model} -> {d}", file=self._out())

    def on_failure(self, failure: DecodeFailure) -> None:
        print(f"{failure.status} -> {failure.as_dict()}", file=self._out())

    def close(self) -> None:
        return None


class JsonLinesSink(RecordSink):
    """One JSON object per record/failure."""

    def __init__(self, *, include_raw: bool = True, stream: Optional[TextIO] = None):
        self._include_raw = include_raw
        self._stream = stream

    def _write(self, obj: dict) -> None:
        out = self._stream or sys.stdout
        out.write(json.dumps(obj, sort_keys=False) + "\n")
        out.flush()

    def on_record(self, record: DecodedRecord) -> None:
        self._write(record.as_dict(include_raw=self._include_raw))

    def on_failure(self, failure: DecodeFailure) -> None:
        self._write(failure.as_dict())

    def close(self) -> None:
        return None
