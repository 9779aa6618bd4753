# ookdecode/interfaces/record_sink.py
from typing import Protocol

from ookdecode.model import DecodedRecord, DecodeFailure


class RecordSink(Protocol):
    def on_record(self, record: DecodedRecord) -> None: ...
    def on_failure(self, failure: DecodeFailure) -> None: ...
    def close(self) -> None: ...
