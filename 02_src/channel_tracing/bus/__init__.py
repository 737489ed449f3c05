"""MessageBus module."""

from .bus import IMessageBus, MessageBus, is_transport_safe

__all__ = ["IMessageBus", "MessageBus", "is_transport_safe"]
