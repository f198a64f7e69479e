"""Realtime broadcast sinks."""

from spark.adapter.realtime.sink import (
    HttpBroadcastSink,
    LoggingBroadcastSink,
    MockBroadcastSink,
)

__all__ = ["HttpBroadcastSink", "LoggingBroadcastSink", "MockBroadcastSink"]
