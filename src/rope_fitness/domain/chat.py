"""Models for nutrition chat requests and replies."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """Single chat turn."""

    role: str
    content: str


class ChatRequest(BaseModel):
    """Chat payload in either the legacy or the GPT actions shape.

    Legacy clients send ``message`` with optional ``history`` and ``userId``.
    GPT actions send the full conversation as ``messages``.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str | None = None
    history: list[ChatMessage] = Field(default_factory=list)
    messages: list[ChatMessage] = Field(default_factory=list)
    user_id: UUID | None = Field(default=None, alias="userId")


class ChatReply(BaseModel):
    """Reply returned to chat clients."""

    reply: str
    success: bool = False
    response: str | None = None
