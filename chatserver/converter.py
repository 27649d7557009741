"""Conversion from API messages to domain objects."""

from __future__ import annotations

from datetime import datetime, timezone

from chatserver import chat_messages, model
from chatserver.chat_requests import CreateRequest
from chatserver.timeutils import parse_datetime

# The zero time value used when a timestamp cannot be parsed.
_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def to_chat_info_from_desc(info: chat_messages.ChatInfo | None) -> model.ChatInfo:
    """Build a domain ChatInfo; a missing message yields an empty name."""
    return model.ChatInfo(name=info.name if info is not None else "")


def to_chat_from_desc(request: CreateRequest | None) -> model.Chat:
    """Build a domain Chat from a create request."""
    if request is None:
        return model.Chat(info=to_chat_info_from_desc(None), users=[])
    return model.Chat(
        info=to_chat_info_from_desc(request.chat_info),
        users=list(request.usernames),
    )


def to_message_info_from_desc(info: chat_messages.MessageInfo | None) -> model.MessageInfo:
    """Build a domain MessageInfo; an unparsable datetime becomes the zero time."""
    if info is None:
        info = chat_messages.MessageInfo()
    try:
        timestamp = parse_datetime(info.datetime)
    except ValueError:
        timestamp = _ZERO_TIME
    return model.MessageInfo(from_=info.from_, text=info.text, timestamp=timestamp)