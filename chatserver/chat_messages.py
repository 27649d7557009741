"""Chat API messages carrying chat and message data, with their validation rules."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

_LENGTH_REASON = "value length must be between 2 and 50 runes, inclusive"
_EMBEDDED_REASON = "embedded message failed validation"


class ValidationError(Exception):
    """A single field of a message broke a validation rule."""

    def __init__(
        self,
        message: str,
        field: str,
        reason: str,
        cause: Exception | None = None,
        key: bool = False,
    ) -> None:
        self.message = message
        self.field = field
        self.reason = reason
        self.cause = cause
        self.key = key
        super().__init__(str(self))

    @property
    def error_name(self) -> str:
        return f"{self.message}ValidationError"

    def __str__(self) -> str:
        cause = f" | caused by: {self.cause}" if self.cause is not None else ""
        key = "key for " if self.key else ""
        return f"invalid {key}{self.message}.{self.field}: {self.reason}{cause}"


class MultiValidationError(Exception):
    """Every rule violation found in a message."""

    def __init__(self, errors: list[ValidationError]) -> None:
        self.errors = list(errors)
        super().__init__(str(self))

    def __str__(self) -> str:
        return "; ".join(str(err) for err in self.errors)

    def all_errors(self) -> list[ValidationError]:
        """Return the wrapped violations."""
        return list(self.errors)


class _Validated:
    """A message whose rule violations can be enumerated."""

    def _violations(self, collect_all: bool) -> Iterator[ValidationError]:
        return iter(())

    def validate(self) -> None:
        _raise_first(self._violations(False))

    def validate_all(self) -> None:
        _raise_all(self._violations(True))


def _raise_first(violations: Iterable[ValidationError]) -> None:
    first = next(iter(violations), None)
    if first is not None:
        raise first


def _raise_all(violations: Iterable[ValidationError]) -> None:
    errors = list(violations)
    if errors:
        raise MultiValidationError(errors)


def _length_violation(message: str, field: str, value: str) -> ValidationError | None:
    if 2 <= len(value) <= 50:
        return None
    return ValidationError(message, field, _LENGTH_REASON)


def _embedded_violation(
    message: str, field: str, embedded: _Validated | None, collect_all: bool
) -> ValidationError | None:
    if embedded is None:
        return None
    try:
        if collect_all:
            embedded.validate_all()
        else:
            embedded.validate()
    except (ValidationError, MultiValidationError) as exc:
        return ValidationError(message, field, _EMBEDDED_REASON, cause=exc)
    return None


@dataclass
class ChatInfo(_Validated):
    """Chat description as sent over the API."""

    name: str = ""

    def _violations(self, collect_all: bool) -> Iterator[ValidationError]:
        error = _length_violation("ChatInfo", "Name", self.name)
        if error is not None:
            yield error

    def validate(self) -> None:
        """Raise the first rule violation, if any."""
        _raise_first(self._violations(False))

    def validate_all(self) -> None:
        """Raise a MultiValidationError holding every violation, if any."""
        _raise_all(self._violations(True))


@dataclass
class MessageInfo(_Validated):
    """Message content as sent over the API; datetime is RFC 3339 text."""

    from_: str = ""
    text: str = ""
    datetime: str = ""

    def _violations(self, collect_all: bool) -> Iterator[ValidationError]:
        for field, value in (("From", self.from_), ("Text", self.text)):
            error = _length_violation("MessageInfo", field, value)
            if error is not None:
                yield error

    def validate(self) -> None:
        """Raise the first rule violation, if any."""
        _raise_first(self._violations(False))

    def validate_all(self) -> None:
        """Raise a MultiValidationError holding every violation, if any."""
        _raise_all(self._violations(True))


@dataclass
class Message(_Validated):
    """A stored message with its identifier."""

    id: int = 0
    message_info: MessageInfo | None = None

    def _violations(self, collect_all: bool) -> Iterator[ValidationError]:
        error = _embedded_violation("Message", "MessageInfo", self.message_info, collect_all)
        if error is not None:
            yield error

    def validate(self) -> None:
        """Raise the first rule violation, if any."""
        _raise_first(self._violations(False))

    def validate_all(self) -> None:
        """Raise a MultiValidationError holding every violation, if any."""
        _raise_all(self._violations(True))