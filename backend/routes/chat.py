import uuid
from typing import Iterator, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

import store
from gemini.cascade import ModelResolutionCascade
from gemini.client import build_cascade, call_gemini, is_configured
from gemini.errors import ChatError
from models.chat import ChatMessage, ChatRole
from models.session import ChatSession

router = APIRouter(prefix="/chat", tags=["chat"])

WELCOME_MESSAGE = (
    "Hi! I'm your AI sports assistant. I can help you with football matches, "
    "players, teams, and more. What would you like to know?"
)
NOT_CONFIGURED_MESSAGE = (
    "The AI assistant is not configured yet. Add a Gemini API key as "
    "GEMINI_API_KEY in backend/.env to enable it."
)


# ---------- Request / Response schemas ----------

class ChatStatusResponse(BaseModel):
    configured: bool


class StartChatResponse(BaseModel):
    session_id: str
    messages: list[ChatMessage]


class ChatRequest(BaseModel):
    session_id: str
    message: str


class ChatResponse(BaseModel):
    success: bool
    message: Optional[ChatMessage] = None
    error_kind: Optional[str] = None
    error: Optional[str] = None


# ---------- Dependencies ----------

def get_cascade() -> Iterator[Optional[ModelResolutionCascade]]:
    """
    One cascade per request, closed when the response is sent.
    Yields None when no API key is configured.
    """
    if not is_configured():
        yield None
        return
    cascade = build_cascade()
    try:
        yield cascade
    finally:
        cascade.close()


def _get_or_create_session(session_id: str) -> ChatSession:
    session = store.sessions.get(session_id)
    if session is None:
        session = ChatSession(session_id=session_id)
        store.sessions[session_id] = session
    return session


# ---------- Endpoints ----------

@router.get("/status", response_model=ChatStatusResponse)
async def chat_status():
    return ChatStatusResponse(configured=is_configured())


@router.post("/session", response_model=StartChatResponse)
async def start_chat():
    """
    Creates a chat session seeded with the assistant's greeting
    (or a configuration warning when no API key is set).
    """
    session_id = f"soccerx_{uuid.uuid4().hex[:8]}"
    greeting = WELCOME_MESSAGE if is_configured() else NOT_CONFIGURED_MESSAGE
    session = ChatSession(
        session_id=session_id,
        messages=[ChatMessage(role=ChatRole.ASSISTANT, content=greeting)],
    )
    store.sessions[session_id] = session
    return StartChatResponse(session_id=session_id, messages=session.messages)


@router.post("", response_model=ChatResponse)
async def send_message(
    body: ChatRequest,
    cascade: Optional[ModelResolutionCascade] = Depends(get_cascade),
):
    """
    Appends the user's message, resolves a reply through the model cascade
    and appends it. Terminal failures come back as success=false with a
    single displayable error; nothing is appended for the failed reply.
    """
    content = body.message.strip()
    if not content:
        raise HTTPException(status_code=422, detail="Message must not be empty")

    # Serverless restarts can lose sessions; recreate instead of failing
    session = _get_or_create_session(body.session_id)
    history = list(session.messages)
    session.messages.append(ChatMessage(role=ChatRole.USER, content=content))

    if cascade is None:
        return ChatResponse(success=False, error_kind="configuration", error=NOT_CONFIGURED_MESSAGE)

    try:
        reply = await call_gemini(cascade, content, history)
    except ChatError as exc:
        return ChatResponse(success=False, error_kind=exc.kind, error=str(exc))

    assistant = ChatMessage(role=ChatRole.ASSISTANT, content=reply)
    session.messages.append(assistant)
    return ChatResponse(success=True, message=assistant)


@router.get("/{session_id}/messages", response_model=list[ChatMessage])
async def get_messages(session_id: str):
    session = store.sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session.messages
