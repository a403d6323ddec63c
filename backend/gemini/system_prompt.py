"""
System prompt for the SoccerX sports assistant, plus the prompt builder.

Separated from client.py for readability and easier iteration.
"""

from typing import Sequence

from gemini.config import MAX_HISTORY_TURNS
from models.chat import ChatMessage, ChatRole

SYSTEM_PROMPT = """
You are a helpful sports assistant for a football (soccer) app called SoccerX.
You help users with:
- Football match information and schedules
- Player statistics and information
- Team details and standings
- League information
- General football questions

Keep responses concise, friendly, and informative. If you don't know specific
current data, suggest the user check the app's match listings or player database.
""".strip()


def _render_history(history: Sequence[ChatMessage]) -> list[str]:
    lines = []
    for msg in list(history)[-MAX_HISTORY_TURNS:]:
        content = (msg.content or "").strip()
        if not content:
            continue
        speaker = "User" if msg.role == ChatRole.USER else "Assistant"
        lines.append(f"{speaker}: {content}")
    return lines


def build_prompt(message: str, history: Sequence[ChatMessage] = ()) -> str:
    """
    Single text prompt: system context, recent turns, then the new message.

    The completion endpoint takes one text part, so prior turns are inlined
    as a transcript rather than sent as structured chat history.
    """
    sections = [SYSTEM_PROMPT]
    transcript = _render_history(history)
    if transcript:
        sections.append("\n".join(transcript))
    sections.append(f"User: {message.strip()}\nAssistant:")
    return "\n\n".join(sections)
