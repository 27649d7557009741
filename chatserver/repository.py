"""Storage of chats, chat members and messages in PostgreSQL."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from chatserver.model import ChatInfo, MessageInfo

logger = logging.getLogger(__name__)

_CHAT_TABLE = "chat"
_CHAT_ID_COLUMN = "id"
_CHAT_NAME_COLUMN = "name"

_CHAT_USER_TABLE = "chat_user"
_CHAT_USER_CHAT_ID_COLUMN = "chat_id"
_CHAT_USER_USERNAME_COLUMN = "username"

_CHAT_MESSAGE_TABLE = "chat_message"
_CHAT_MESSAGE_FROM_COLUMN = "from_user"
_CHAT_MESSAGE_TEXT_COLUMN = "message"
_CHAT_MESSAGE_CREATED_AT_COLUMN = "created_at"


@dataclass(frozen=True)
class Query:
    """A named SQL statement."""

    name: str
    query_raw: str


class DBClient(Protocol):
    """Database access used by the repositories."""

    def query_row(self, ctx: Any, query: Query, *args: Any) -> Sequence[Any]:
        """Run a query and return the values of its single result row."""

    def execute(self, ctx: Any, query: Query, *args: Any) -> Any:
        """Run a statement that returns no rows."""


class ChatRepository(Protocol):
    """Storage of chats."""

    def create(self, ctx: Any, info: ChatInfo) -> int:
        """Store a chat and return its identifier."""

    def delete(self, ctx: Any, chat_id: int) -> None:
        """Remove a chat."""


class ChatUserRepository(Protocol):
    """Storage of chat membership."""

    def add_users(self, ctx: Any, chat_id: int, users: Iterable[str]) -> None:
        """Add users to a chat."""


class ChatMessageRepository(Protocol):
    """Storage of chat messages."""

    def add_message(self, ctx: Any, message: MessageInfo) -> None:
        """Store a message."""


class QueryBuildError(ValueError):
    """An SQL statement could not be built from the given data."""


def _placeholders(start: int, count: int) -> str:
    return ",".join(f"${n}" for n in range(start, start + count))


def _insert(
    table: str,
    columns: Sequence[str],
    rows: Iterable[Sequence[Any]],
    suffix: str = "",
) -> tuple[str, list[Any]]:
    rows = [tuple(row) for row in rows]
    if not rows:
        raise QueryBuildError(
            "insert statements must have at least one set of values or select clause"
        )
    args: list[Any] = []
    groups: list[str] = []
    for row in rows:
        groups.append(f"({_placeholders(len(args) + 1, len(row))})")
        args.extend(row)
    sql = f"INSERT INTO {table} ({','.join(columns)}) VALUES {','.join(groups)}"
    if suffix:
        sql = f"{sql} {suffix}"
    return sql, args


class PgChatRepository:
    """Chat storage backed by PostgreSQL."""

    def __init__(self, db: DBClient) -> None:
        self._db = db

    def create(self, ctx: Any, info: ChatInfo) -> int:
        """Insert a chat and return the identifier the database assigned."""
        logger.info("REPOSITORY - CREATE")
        sql, args = _insert(
            _CHAT_TABLE, [_CHAT_NAME_COLUMN], [[info.name]], suffix="RETURNING id"
        )
        query = Query(name="chat_repository.Create", query_raw=sql)
        row = self._db.query_row(ctx, query, *args)
        return int(row[0])

    def delete(self, ctx: Any, chat_id: int) -> None:
        """Delete the chat with the given identifier."""
        logger.info("REPOSITORY - DELETE")
        sql = f"DELETE FROM {_CHAT_TABLE} WHERE {_CHAT_ID_COLUMN} = $1"
        query = Query(name="chat_repository.Delete", query_raw=sql)
        self._db.execute(ctx, query, chat_id)


class PgChatUserRepository:
    """Chat membership storage backed by PostgreSQL."""

    def __init__(self, db: DBClient) -> None:
        self._db = db

    def add_users(self, ctx: Any, chat_id: int, users: Iterable[str]) -> None:
        """Insert one membership row per user; an empty list is an error."""
        logger.info("CHAT USER REPOSITORY - ADD USERS")
        sql, args = _insert(
            _CHAT_USER_TABLE,
            [_CHAT_USER_CHAT_ID_COLUMN, _CHAT_USER_USERNAME_COLUMN],
            ((chat_id, username) for username in users),
        )
        query = Query(name="chatUser_repository.AddUsers", query_raw=sql)
        self._db.execute(ctx, query, *args)


class PgChatMessageRepository:
    """Chat message storage backed by PostgreSQL."""

    def __init__(self, db: DBClient) -> None:
        self._db = db

    def add_message(self, ctx: Any, message: MessageInfo) -> None:
        """Insert a message."""
        logger.info("REPOSITORY - CREATE")
        sql, args = _insert(
            _CHAT_MESSAGE_TABLE,
            [
                _CHAT_MESSAGE_FROM_COLUMN,
                _CHAT_MESSAGE_TEXT_COLUMN,
                _CHAT_MESSAGE_CREATED_AT_COLUMN,
            ],
            [[message.from_, message.text, message.timestamp]],
        )
        query = Query(name="chatMessage_repository.AddMessage", query_raw=sql)
        self._db.execute(ctx, query, *args)