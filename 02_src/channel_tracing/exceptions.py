"""Exceptions raised by channel tracing components."""


class ChannelTracingError(Exception):
    """Base class for channel tracing errors."""


class UnsupportedOperationError(ChannelTracingError):
    """Raised when writing into a read-only header view."""


class MessageDeliveryError(ChannelTracingError):
    """Raised when a channel has nobody to deliver a message to."""

    def __init__(self, channel_name: str, message: str = "Dispatcher has no subscribers"):
        self.channel_name = channel_name
        super().__init__(f"{message} for channel '{channel_name}'")
