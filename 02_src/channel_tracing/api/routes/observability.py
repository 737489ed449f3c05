"""Observability API routes."""

from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query

from ...app import IApplication


class SpanResponse(BaseModel):
    """Response model for a finished span."""

    operation_name: str
    trace_id: int
    span_id: int
    parent_id: int | None
    start_time: float
    finish_time: float
    tags: dict[str, Any]


def create_observability_router(app: IApplication) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/spans", response_model=list[SpanResponse])
    async def get_spans(
        operation_name: str | None = Query(None, description="Filter by operation name"),
        limit: int = Query(100, ge=1, le=1000),
    ) -> list[dict]:
        """Get finished spans with optional filters."""
        try:
            records = app.finished_spans()
            if operation_name:
                records = [r for r in records if r.operation_name == operation_name]

            return [
                {
                    "operation_name": r.operation_name,
                    "trace_id": r.trace_id,
                    "span_id": r.span_id,
                    "parent_id": r.parent_id,
                    "start_time": r.start_time,
                    "finish_time": r.finish_time,
                    "tags": r.tags,
                }
                for r in records[:limit]
            ]

        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
