"""Business logic of the chat service."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

from chatserver.model import Chat, MessageInfo
from chatserver.repository import (
    ChatMessageRepository,
    ChatRepository,
    ChatUserRepository,
)

logger = logging.getLogger(__name__)


class TxManager(Protocol):
    """Runs work inside a database transaction."""

    def read_committed(self, ctx: Any, handler: Callable[[Any], Any]) -> Any:
        """Run ``handler(ctx)`` in a read-committed transaction.

        An exception from the handler rolls the transaction back and propagates.
        """


class ChatService:
    """Creates and deletes chats and posts messages, each in one transaction."""

    def __init__(
        self,
        chat_repository: ChatRepository,
        chat_message_repository: ChatMessageRepository,
        chat_user_repository: ChatUserRepository,
        tx_manager: TxManager,
    ) -> None:
        self._chat_repository = chat_repository
        self._chat_message_repository = chat_message_repository
        self._chat_user_repository = chat_user_repository
        self._tx_manager = tx_manager

    def create(self, ctx: Any, chat: Chat) -> int:
        """Store the chat with its members and return its identifier."""
        logger.info("SERVICE - CREATE")
        created: list[int] = []

        def work(tx_ctx: Any) -> None:
            chat_id = self._chat_repository.create(tx_ctx, chat.info)
            self._chat_user_repository.add_users(tx_ctx, chat_id, chat.users)
            created.append(chat_id)

        self._tx_manager.read_committed(ctx, work)
        return created[0]

    def send_message(self, ctx: Any, message_info: MessageInfo) -> None:
        """Store a message."""
        logger.info("SERVICE - SendMessage")

        def work(tx_ctx: Any) -> None:
            self._chat_message_repository.add_message(tx_ctx, message_info)

        self._tx_manager.read_committed(ctx, work)

    def delete(self, ctx: Any, chat_id: int) -> None:
        """Delete a chat."""
        logger.info("SERVICE - DELETE")

        def work(tx_ctx: Any) -> None:
            self._chat_repository.delete(tx_ctx, chat_id)

        self._tx_manager.read_committed(ctx, work)