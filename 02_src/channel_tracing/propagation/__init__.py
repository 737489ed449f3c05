"""Header propagation module."""

from .text_map import (
    DASH,
    MessageTextMap,
    TextMapExtractAdapter,
    decode_headers,
    decode_key,
    encode_key,
)

__all__ = [
    "DASH",
    "MessageTextMap",
    "TextMapExtractAdapter",
    "decode_headers",
    "decode_key",
    "encode_key",
]
