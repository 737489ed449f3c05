"""Core data models for channel tracing."""

from .channels import AnonymousChannel, ChannelIdentity, NamedChannel, channel_identity
from .messages import ID, TIMESTAMP, HeaderValue, Message
from .tracing import SpanRecord

__all__ = [
    # Messages
    "Message",
    "HeaderValue",
    "ID",
    "TIMESTAMP",
    # Channels
    "NamedChannel",
    "AnonymousChannel",
    "ChannelIdentity",
    "channel_identity",
    # Tracing
    "SpanRecord",
]
