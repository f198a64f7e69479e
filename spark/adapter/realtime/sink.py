"""Realtime broadcast sink implementations.

Vote updates are fanned out to connected clients by a separate realtime
gateway. This module only hands events to it.
"""

import httpx
import logfire

from spark.adapter.error import BroadcastError
from spark.domain.service.broadcast import BroadcastEvent, BroadcastSink


class HttpBroadcastSink(BroadcastSink):
    """Posts events as JSON to the realtime gateway."""

    def __init__(self, gateway_url: str, timeout: float = 2.0) -> None:
        """Initialize HTTP sink.

        Args:
            gateway_url: Gateway endpoint accepting broadcast events
            timeout: Request timeout in seconds
        """
        self.gateway_url = gateway_url
        self.timeout = timeout

    async def publish(self, event: BroadcastEvent) -> None:
        """Post an event to the gateway.

        Args:
            event: The event to deliver

        Raises:
            BroadcastError: If the gateway is unreachable or rejects the event
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.gateway_url,
                    json=event.model_dump(mode="json"),
                    timeout=self.timeout,
                )

                if response.status_code >= 300:
                    logfire.error(
                        "Broadcast rejected by gateway",
                        status_code=response.status_code,
                        event=event.event,
                        room=event.room,
                    )
                    raise BroadcastError(
                        f"Gateway rejected event: {response.status_code}"
                    )

        except httpx.HTTPError as e:
            logfire.error("Broadcast HTTP error", error=str(e), event=event.event)
            raise BroadcastError(f"HTTP error during broadcast: {e}")

        logfire.debug("Event broadcast", event=event.event, room=event.room)


class LoggingBroadcastSink(BroadcastSink):
    """Sink used when no gateway is configured: events are only logged."""

    async def publish(self, event: BroadcastEvent) -> None:
        logfire.info(
            "Broadcast skipped, no gateway configured",
            event=event.event,
            room=event.room,
            data=event.data,
        )


class MockBroadcastSink(BroadcastSink):
    """Mock sink for testing.

    Records published events. Set ``fail`` to make every publish raise.
    """

    def __init__(self) -> None:
        self.events: list[BroadcastEvent] = []
        self.fail = False

    async def publish(self, event: BroadcastEvent) -> None:
        if self.fail:
            raise BroadcastError("Mock broadcast failure")
        self.events.append(event)
