from models.chat import ChatMessage, ChatRole
from models.match import EventTime, KickoffInfo, Match, TargetInstant
from models.session import ChatSession

__all__ = [
    "ChatMessage",
    "ChatRole",
    "ChatSession",
    "EventTime",
    "KickoffInfo",
    "Match",
    "TargetInstant",
]
