"""Domain objects used by the chat service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class MessageInfo:
    """A chat message: who sent it, what it says and when."""

    from_: str
    text: str
    timestamp: datetime


@dataclass
class ChatInfo:
    """Descriptive data of a chat."""

    name: str


@dataclass
class Chat:
    """A chat together with the names of its members."""

    info: ChatInfo
    users: list[str] = field(default_factory=list)