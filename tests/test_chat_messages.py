import pytest

from chatserver.chat_messages import (
    ChatInfo,
    Message,
    MessageInfo,
    MultiValidationError,
    ValidationError,
)

LENGTH_REASON = "value length must be between 2 and 50 runes, inclusive"


@pytest.mark.parametrize("name", ["ab", "x" * 50, "ää"])
def test_chat_info_accepts_lengths_in_range(name):
    info = ChatInfo(name=name)
    assert info.validate() is None
    assert info.validate_all() is None


@pytest.mark.parametrize("name", ["", "a", "x" * 51])
def test_chat_info_rejects_lengths_out_of_range(name):
    with pytest.raises(ValidationError) as excinfo:
        ChatInfo(name=name).validate()
    err = excinfo.value
    assert err.field == "Name"
    assert err.reason == LENGTH_REASON
    assert str(err) == f"invalid ChatInfo.Name: {LENGTH_REASON}"
    assert err.error_name == "ChatInfoValidationError"


def test_message_info_validate_reports_first_error_only():
    with pytest.raises(ValidationError) as excinfo:
        MessageInfo(from_="a", text="b").validate()
    assert excinfo.value.field == "From"


def test_message_info_validate_all_collects_every_error():
    with pytest.raises(MultiValidationError) as excinfo:
        MessageInfo(from_="a", text="b").validate_all()
    errors = excinfo.value.all_errors()
    assert [err.field for err in errors] == ["From", "Text"]
    assert str(excinfo.value) == "; ".join(str(err) for err in errors)


def test_message_info_ignores_datetime():
    info = MessageInfo(from_="alice", text="hello", datetime="not a date")
    assert info.validate() is None


def test_message_without_info_is_valid():
    assert Message(id=7).validate() is None
    assert Message(id=7).validate_all() is None


def test_message_wraps_embedded_error():
    message = Message(id=1, message_info=MessageInfo(from_="alice", text="x"))
    with pytest.raises(ValidationError) as excinfo:
        message.validate()
    err = excinfo.value
    assert err.field == "MessageInfo"
    assert err.reason == "embedded message failed validation"
    assert isinstance(err.cause, ValidationError)
    assert err.cause.field == "Text"
    assert str(err) == (
        "invalid Message.MessageInfo: embedded message failed validation"
        f" | caused by: invalid MessageInfo.Text: {LENGTH_REASON}"
    )


def test_message_validate_all_wraps_multi_error():
    message = Message(id=1, message_info=MessageInfo(from_="a", text="b"))
    with pytest.raises(MultiValidationError) as excinfo:
        message.validate_all()
    (err,) = excinfo.value.all_errors()
    assert isinstance(err.cause, MultiValidationError)
    assert len(err.cause.all_errors()) == 2


def test_key_flag_changes_message():
    err = ValidationError("ChatInfo", "Name", "bad", key=True)
    assert str(err) == "invalid key for ChatInfo.Name: bad"