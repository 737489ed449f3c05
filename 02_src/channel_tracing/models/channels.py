"""Channel identity models."""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class NamedChannel:
    """A channel that knows its own structured name."""

    name: str

    def resolve_name(self) -> str:
        return self.name


@dataclass(frozen=True)
class AnonymousChannel:
    """A channel known only by its string form."""

    label: str

    def resolve_name(self) -> str:
        return self.label


ChannelIdentity = Union[NamedChannel, AnonymousChannel]


def channel_identity(channel: Any) -> ChannelIdentity:
    """Resolve the identity of a channel object once, at interception time."""
    identity = getattr(channel, "identity", None)
    if isinstance(identity, (NamedChannel, AnonymousChannel)):
        return identity
    return AnonymousChannel(label=str(channel))
