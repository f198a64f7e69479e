"""Mock realtime providers for testing."""

from dishka import Scope, provide

from spark.adapter.realtime import MockBroadcastSink
from spark.domain.service import BroadcastSink
from spark.util.di.infrastructure.realtime import RealtimeProvider


class MockRealtimeProvider(RealtimeProvider):
    """Mock realtime provider recording events in memory."""

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_broadcast_sink(self) -> BroadcastSink:
        """Provide mock broadcast sink (fresh per test)."""
        return MockBroadcastSink()
