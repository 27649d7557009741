"""Chat API request and response messages, with their validation rules."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from chatserver.chat_messages import (
    ChatInfo,
    MessageInfo,
    ValidationError,
    _embedded_violation,
    _raise_all,
    _raise_first,
    _Validated,
)


@dataclass
class CreateRequest(_Validated):
    """Request to create a chat with the given members."""

    chat_info: ChatInfo | None = None
    usernames: list[str] = field(default_factory=list)

    def _violations(self, collect_all: bool) -> Iterator[ValidationError]:
        error = _embedded_violation("CreateRequest", "ChatInfo", self.chat_info, collect_all)
        if error is not None:
            yield error

    def validate(self) -> None:
        """Raise the first rule violation, if any."""
        _raise_first(self._violations(False))

    def validate_all(self) -> None:
        """Raise a MultiValidationError holding every violation, if any."""
        _raise_all(self._violations(True))


@dataclass
class CreateResponse(_Validated):
    """Identifier of a newly created chat."""

    id: int = 0

    def validate(self) -> None:
        """Raise the first rule violation, if any; the id has no rules."""
        _raise_first(self._violations(False))

    def validate_all(self) -> None:
        """Raise a MultiValidationError holding every violation, if any."""
        _raise_all(self._violations(True))


@dataclass
class DeleteRequest(_Validated):
    """Request to delete the chat with the given identifier."""

    id: int = 0

    def validate(self) -> None:
        """Raise the first rule violation, if any; the id has no rules."""
        _raise_first(self._violations(False))

    def validate_all(self) -> None:
        """Raise a MultiValidationError holding every violation, if any."""
        _raise_all(self._violations(True))


@dataclass
class SendMessageRequest(_Validated):
    """Request to post a message."""

    message: MessageInfo | None = None

    def _violations(self, collect_all: bool) -> Iterator[ValidationError]:
        error = _embedded_violation("SendMessageRequest", "Message", self.message, collect_all)
        if error is not None:
            yield error

    def validate(self) -> None:
        """Raise the first rule violation, if any."""
        _raise_first(self._violations(False))

    def validate_all(self) -> None:
        """Raise a MultiValidationError holding every violation, if any."""
        _raise_all(self._violations(True))