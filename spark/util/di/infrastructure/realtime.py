"""Realtime infrastructure providers."""

from dishka import Scope, provide

from spark.adapter.realtime import HttpBroadcastSink, LoggingBroadcastSink
from spark.config import RealtimeSettings
from spark.domain.service import BroadcastSink
from spark.util.di.base import ProviderBase


class RealtimeProvider(ProviderBase):
    """Realtime component base."""

    __mock_component__ = "realtime"


class ProdRealtimeProvider(RealtimeProvider):
    """Production realtime provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_broadcast_sink(self, settings: RealtimeSettings) -> BroadcastSink:
        """Provide broadcast sink.

        Returns:
            HTTP sink posting to the gateway, or a logging-only sink when
            no gateway is configured
        """
        if not settings.gateway_url:
            return LoggingBroadcastSink()

        return HttpBroadcastSink(
            gateway_url=settings.gateway_url,
            timeout=settings.timeout_seconds,
        )
