"""Chat API endpoints: request conversion in front of the chat service."""

from __future__ import annotations

import logging
from typing import Any

from chatserver.chat_requests import (
    CreateRequest,
    CreateResponse,
    DeleteRequest,
    SendMessageRequest,
)
from chatserver.converter import to_chat_from_desc, to_message_info_from_desc
from chatserver.service import ChatService
from chatserver.timeutils import parse_datetime

logger = logging.getLogger(__name__)


class Implementation:
    """Handlers of the chat API."""

    def __init__(self, chat_service: ChatService, access_client: Any = None) -> None:
        self.chat_service = chat_service
        self.access_client = access_client

    def create(self, ctx: Any, request: CreateRequest) -> CreateResponse:
        """Create a chat and return its identifier."""
        logger.info("API - GET")
        chat_id = self.chat_service.create(ctx, to_chat_from_desc(request))
        return CreateResponse(id=chat_id)

    def delete(self, ctx: Any, request: DeleteRequest) -> None:
        """Delete a chat."""
        logger.info("API - DELETE")
        self.chat_service.delete(ctx, request.id)

    def send_message(self, ctx: Any, request: SendMessageRequest) -> None:
        """Post a message; raises ValueError when its datetime is not RFC 3339."""
        logger.info("API - GET")
        message = request.message
        parse_datetime(message.datetime if message is not None else "")
        self.chat_service.send_message(ctx, to_message_info_from_desc(message))