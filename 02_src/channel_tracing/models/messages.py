"""Message-related data models."""

import time
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

HeaderValue = Union[str, int, float, bool]

# Identity-like headers every Message carries; copies never drop or retype them
ID = "id"
TIMESTAMP = "timestamp"


def _freeze(headers: Mapping[str, HeaderValue] | None) -> Mapping[str, HeaderValue]:
    return MappingProxyType(dict(headers or {}))


@dataclass(frozen=True)
class Message:
    """A payload plus its headers. Header changes produce a new Message."""

    payload: Any
    headers: Mapping[str, HeaderValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _freeze(self.headers))

    @classmethod
    def create(
        cls, payload: Any, headers: Mapping[str, HeaderValue] | None = None
    ) -> "Message":
        """Create a message, assigning id and timestamp unless already given."""
        merged: dict[str, HeaderValue] = {
            ID: str(uuid.uuid4()),
            TIMESTAMP: int(time.time() * 1000),
        }
        merged.update(headers or {})
        return cls(payload=payload, headers=merged)

    @property
    def id(self) -> str | None:
        value = self.headers.get(ID)
        return None if value is None else str(value)

    def with_headers(self, headers: Mapping[str, HeaderValue]) -> "Message":
        """Return a copy with the given headers merged over the current ones."""
        merged = dict(self.headers)
        merged.update(headers)
        return Message(payload=self.payload, headers=merged)

    def without_headers(self, *keys: str) -> "Message":
        """Return a copy without the given headers (id and timestamp are kept)."""
        kept = {
            k: v
            for k, v in self.headers.items()
            if k not in keys or k in (ID, TIMESTAMP)
        }
        return Message(payload=self.payload, headers=kept)
