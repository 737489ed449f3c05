"""Interceptor module."""

from .headers import MESSAGE_CONSUMED, MESSAGE_SENT_FROM_CLIENT
from .interceptor import IChannelInterceptor, MessageHandler, TracingChannelInterceptor

__all__ = [
    "IChannelInterceptor",
    "MessageHandler",
    "TracingChannelInterceptor",
    "MESSAGE_CONSUMED",
    "MESSAGE_SENT_FROM_CLIENT",
]
