"""Tracing and observability data models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SpanRecord:
    """Snapshot of a finished span for display."""

    operation_name: str
    trace_id: int
    span_id: int
    parent_id: int | None
    start_time: float
    finish_time: float
    tags: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_span(cls, span: Any) -> "SpanRecord":
        """Build a record from a finished MockSpan-like object."""
        return cls(
            operation_name=span.operation_name,
            trace_id=span.context.trace_id,
            span_id=span.context.span_id,
            parent_id=span.parent_id,
            start_time=span.start_time,
            finish_time=span.finish_time,
            tags=dict(span.tags),
        )
