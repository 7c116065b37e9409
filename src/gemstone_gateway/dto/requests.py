"""Request DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Request DTO for the chat endpoint.

    Fields accept any JSON value: type, length and topic checks belong to
    the chat service so every caller gets the same validation errors.
    """

    text: Any = Field(None, description="The user's message (max 100 characters)")
    topic: Any = Field(
        None,
        description="Topic marker; must be 'gemstone_recommendation'",
    )
