"""Messaging API routes."""

from typing import Any

from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException

from ...app import IApplication


class MessageRequest(BaseModel):
    """Request model for sending a message."""

    payload: Any
    headers: dict[str, str | bool | int | float] = Field(default_factory=dict)


class MessageResponse(BaseModel):
    """Response model for a sent message."""

    id: str
    headers: dict[str, Any]


def create_messaging_router(app: IApplication) -> APIRouter:
    """Create messaging router."""
    router = APIRouter(prefix="/api", tags=["messaging"])

    @router.post("/messages", response_model=MessageResponse)
    async def send_message(request: MessageRequest) -> dict:
        """Send a message on the output channel."""
        try:
            message = await app.sender.send(request.payload, request.headers)
            return {"id": message.id, "headers": dict(message.headers)}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
