from datetime import datetime, timezone
from pydantic import BaseModel, Field

from models.chat import ChatMessage


class ChatSession(BaseModel):
    session_id: str
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    messages: list[ChatMessage] = Field(default_factory=list)
