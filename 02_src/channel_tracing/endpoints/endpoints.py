"""Sender and Receiver endpoints at either end of the bus."""

from typing import Any, Mapping

from ..channel import IMessageChannel
from ..logging_config import get_logger
from ..models import HeaderValue, Message

logger = get_logger(__name__)


class Sender:
    """Wraps payloads into messages and sends them on an output channel."""

    def __init__(self, channel: IMessageChannel):
        self._channel = channel

    async def send(
        self, payload: Any, headers: Mapping[str, HeaderValue] | None = None
    ) -> Message:
        """Send payload; return the message as created, before interception.

        Trace headers and markers are added by the channel's interceptors on
        their own copies, so the returned message carries only `id`,
        `timestamp` and the caller's headers.
        """
        message = Message.create(payload, headers)
        await self._channel.send(message)
        logger.info("Sent message %s", message.id)
        return message


class Receiver:
    """Collects messages delivered on an input channel."""

    def __init__(self):
        self._received: list[Message] = []

    async def handle(self, message: Message) -> None:
        """Channel handler: record the delivered message."""
        logger.info("Received message %s", message.id)
        self._received.append(message)

    @property
    def received_messages(self) -> list[Message]:
        return list(self._received)

    def clear(self) -> None:
        self._received.clear()
