from datetime import datetime, timezone

from chatserver.model import Chat, ChatInfo, MessageInfo


def test_chat_equality_compares_info_and_users():
    first = Chat(info=ChatInfo(name="general"), users=["alice", "bob"])
    second = Chat(info=ChatInfo(name="general"), users=["alice", "bob"])
    assert first == second
    assert first != Chat(info=ChatInfo(name="general"), users=["alice"])


def test_chat_users_default_to_independent_empty_lists():
    first = Chat(info=ChatInfo(name="one"))
    second = Chat(info=ChatInfo(name="two"))
    first.users.append("alice")
    assert first.users == ["alice"]
    assert second.users == []


def test_message_info_holds_its_fields():
    stamp = datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc)
    message = MessageInfo(from_="alice", text="hello", timestamp=stamp)
    assert message.from_ == "alice"
    assert message.text == "hello"
    assert message.timestamp == stamp
    assert message == MessageInfo("alice", "hello", stamp)


def test_chat_info_name_differs():
    assert ChatInfo(name="a") != ChatInfo(name="b")
    assert ChatInfo(name="a").name == "a"