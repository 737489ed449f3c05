"""Text-map carriers over message headers for tracer inject/extract.

Some transports only accept identifier-like header names, while tracers
happily use keys such as ``ot-tracer-spanid``. Keys are therefore stored with
every ``-`` replaced by a reserved token and decoded again on the way out.
Only string-valued headers take part in extraction; typed headers (ints,
floats, booleans) are left alone and survive the round trip untouched.
"""

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any

from ..config import DEFAULT_DASH_TOKEN
from ..exceptions import UnsupportedOperationError
from ..models import HeaderValue, Message

DASH = DEFAULT_DASH_TOKEN

HeaderSource = Mapping[str, Any] | Iterable[tuple[str, Any]] | None


def encode_key(key: str, token: str = DASH) -> str:
    """Replace every ``-`` in a header key with the reserved token."""
    return key.replace("-", token)


def decode_key(key: str, token: str = DASH) -> str:
    """Replace every reserved token in a header key with ``-``."""
    return key.replace(token, "-")


def decode_headers(headers: HeaderSource, token: str = DASH) -> dict[str, str]:
    """Return the decoded, string-valued subset of ``headers``."""
    if headers is None:
        return {}
    pairs = headers.items() if isinstance(headers, Mapping) else headers
    return {
        decode_key(key, token): value
        for key, value in pairs
        if isinstance(value, str)
    }


class MessageTextMap(MutableMapping):
    """Writable string view over a message's headers, used as inject carrier.

    Writes are collected on a private copy of the headers; call
    :meth:`get_message` to obtain the updated message.
    """

    def __init__(self, message: Message, token: str = DASH):
        self._message = message
        self._token = token
        self._headers: dict[str, HeaderValue] = dict(message.headers)

    def _stored_keys(self) -> dict[str, str]:
        # decoded key -> stored key, string-valued headers only
        return {
            decode_key(key, self._token): key
            for key, value in self._headers.items()
            if isinstance(value, str)
        }

    def __getitem__(self, key: str) -> str:
        return self._headers[self._stored_keys()[key]]

    def __setitem__(self, key: str, value: Any) -> None:
        encoded = encode_key(key, self._token)
        previous = self._stored_keys().get(key)
        if previous is not None and previous != encoded:
            del self._headers[previous]
        self._headers[encoded] = str(value)

    def __delitem__(self, key: str) -> None:
        del self._headers[self._stored_keys()[key]]

    def __iter__(self) -> Iterator[str]:
        return iter(self._stored_keys())

    def __len__(self) -> int:
        return len(self._stored_keys())

    def get_message(self) -> Message:
        """Return a new message carrying the original headers plus all writes."""
        return Message(payload=self._message.payload, headers=self._headers)


class TextMapExtractAdapter(Mapping):
    """Read-only string view over headers, used as extract carrier."""

    def __init__(self, headers: HeaderSource = None, token: str = DASH):
        self._map = decode_headers(headers, token)

    def __getitem__(self, key: str) -> str:
        return self._map[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __setitem__(self, key: str, value: Any) -> None:
        raise UnsupportedOperationError(
            "TextMapExtractAdapter should only be used with Tracer.extract()"
        )

    def __delitem__(self, key: str) -> None:
        raise UnsupportedOperationError(
            "TextMapExtractAdapter should only be used with Tracer.extract()"
        )
