"""Trace context propagation across message channels."""

from .app import Application, IApplication
from .bus import IMessageBus, MessageBus
from .channel import DirectChannel, IMessageChannel
from .config import TracingSettings
from .endpoints import Receiver, Sender
from .exceptions import (
    ChannelTracingError,
    MessageDeliveryError,
    UnsupportedOperationError,
)
from .interceptor import (
    MESSAGE_CONSUMED,
    MESSAGE_SENT_FROM_CLIENT,
    IChannelInterceptor,
    TracingChannelInterceptor,
)
from .models import (
    AnonymousChannel,
    Message,
    NamedChannel,
    SpanRecord,
    channel_identity,
)
from .propagation import (
    DASH,
    MessageTextMap,
    TextMapExtractAdapter,
    decode_headers,
    decode_key,
    encode_key,
)

__all__ = [
    # Application
    "Application",
    "IApplication",
    "TracingSettings",
    # Models
    "Message",
    "NamedChannel",
    "AnonymousChannel",
    "channel_identity",
    "SpanRecord",
    # Propagation
    "DASH",
    "MessageTextMap",
    "TextMapExtractAdapter",
    "decode_headers",
    "decode_key",
    "encode_key",
    # Interceptor
    "IChannelInterceptor",
    "TracingChannelInterceptor",
    "MESSAGE_CONSUMED",
    "MESSAGE_SENT_FROM_CLIENT",
    # Components
    "IMessageChannel",
    "DirectChannel",
    "IMessageBus",
    "MessageBus",
    "Sender",
    "Receiver",
    # Errors
    "ChannelTracingError",
    "MessageDeliveryError",
    "UnsupportedOperationError",
]
