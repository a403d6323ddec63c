import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


def _new_message_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(BaseModel):
    """One chat turn. Frozen: messages never change after creation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_message_id)
    role: ChatRole
    content: str
    timestamp: datetime = Field(default_factory=_utcnow)
