"""
In-memory chat session store shared across all routes.
Sessions live in a plain dict for the lifetime of the process; nothing is persisted.
"""

from models.session import ChatSession

sessions: dict[str, ChatSession] = {}
