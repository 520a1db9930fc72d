from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    message: str = Field(min_length=1, max_length=4000)
    roadmap_id: int | None = None


class ChatMessageRead(BaseModel):
    id: int
    is_user: bool
    message: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ChatResponse(BaseModel):
    reply: str
    messages: list[ChatMessageRead] = Field(default_factory=list)
