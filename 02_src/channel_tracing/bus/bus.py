"""In-memory message bus connecting producer and consumer channels."""

import asyncio
import re
from typing import Protocol

from ..channel import IMessageChannel
from ..logging_config import get_logger
from ..models import Message

logger = get_logger(__name__)

# Header names the transport accepts (JMS property identifier rules)
TRANSPORT_SAFE_KEY = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def is_transport_safe(key: str) -> bool:
    """Check whether a header name can travel over the bus."""
    return TRANSPORT_SAFE_KEY.match(key) is not None


class IMessageBus(Protocol):
    """Broker between output channels and input channels."""

    def bind_producer(self, destination: str, channel: IMessageChannel) -> None:
        """Forward every message sent on channel to destination."""
        ...

    def bind_consumer(self, destination: str, channel: IMessageChannel) -> None:
        """Deliver messages published to destination into channel."""
        ...

    async def publish(self, destination: str, message: Message) -> None:
        """Transport message to every consumer channel bound to destination."""
        ...


class MessageBus:
    """In-memory broker. Consumers run in their own tasks."""

    def __init__(self):
        self._consumers: dict[str, list[IMessageChannel]] = {}

    def bind_producer(self, destination: str, channel: IMessageChannel) -> None:
        """Forward every message sent on channel to destination."""

        async def forward(message: Message) -> None:
            await self.publish(destination, message)

        channel.subscribe(forward)

    def bind_consumer(self, destination: str, channel: IMessageChannel) -> None:
        """Deliver messages published to destination into channel."""
        self._consumers.setdefault(destination, []).append(channel)

    async def publish(self, destination: str, message: Message) -> None:
        """Transport message to every consumer channel bound to destination."""
        wire_message = self._to_wire(message)

        channels = self._consumers.get(destination, [])
        if not channels:
            logger.warning("No consumers bound to destination %s", destination)
            return

        # Deliver concurrently; consumer failures never fail the producer
        results = await asyncio.gather(
            *[channel.send(wire_message) for channel in channels],
            return_exceptions=True,
        )

        for channel, result in zip(channels, results):
            if isinstance(result, Exception):
                logger.error(
                    "Error delivering to %s: %s",
                    channel.identity.resolve_name(),
                    result,
                )

    @staticmethod
    def _to_wire(message: Message) -> Message:
        dropped = [key for key in message.headers if not is_transport_safe(key)]
        if dropped:
            logger.warning("Dropping headers not allowed on the bus: %s", dropped)
        return message.without_headers(*dropped)
