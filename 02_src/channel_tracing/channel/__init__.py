"""Channel module."""

from .channel import ChannelHandler, DirectChannel, IMessageChannel

__all__ = ["ChannelHandler", "DirectChannel", "IMessageChannel"]
