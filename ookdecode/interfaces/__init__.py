from .record_sink import RecordSink

__all__ = ["RecordSink"]
