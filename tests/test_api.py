from datetime import datetime, timezone

import pytest

from chatserver.api import Implementation
from chatserver.chat_messages import ChatInfo as DescChatInfo
from chatserver.chat_messages import MessageInfo as DescMessageInfo
from chatserver.chat_requests import (
    CreateRequest,
    CreateResponse,
    DeleteRequest,
    SendMessageRequest,
)
from chatserver.model import Chat, ChatInfo, MessageInfo


class FakeChatService:
    def __init__(self, chat_id=0, error=None):
        self.chat_id = chat_id
        self.error = error
        self.created = []
        self.deleted = []
        self.sent = []

    def create(self, ctx, chat):
        self.created.append((ctx, chat))
        if self.error is not None:
            raise self.error
        return self.chat_id

    def delete(self, ctx, chat_id):
        self.deleted.append((ctx, chat_id))
        if self.error is not None:
            raise self.error

    def send_message(self, ctx, message_info):
        self.sent.append((ctx, message_info))
        if self.error is not None:
            raise self.error


CHAT_ID = 4821
NAME = "Jane Doe"
USERS = [NAME, NAME, NAME]
FROM = "Jane Doe"
TEXT = "Pale Ale"
DATE_STR = "2006-01-02T15:04:05Z"
DATE = datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc)


def create_request():
    return CreateRequest(chat_info=DescChatInfo(name=NAME), usernames=list(USERS))


def send_request(datetime_text=DATE_STR):
    return SendMessageRequest(
        message=DescMessageInfo(from_=FROM, text=TEXT, datetime=datetime_text)
    )


def test_create_success():
    ctx = object()
    service = FakeChatService(chat_id=CHAT_ID)
    response = Implementation(service).create(ctx, create_request())
    assert response == CreateResponse(id=CHAT_ID)
    assert service.created == [(ctx, Chat(info=ChatInfo(name=NAME), users=USERS))]


def test_create_service_error():
    service_err = RuntimeError("service error")
    service = FakeChatService(error=service_err)
    with pytest.raises(RuntimeError) as info:
        Implementation(service).create(object(), create_request())
    assert info.value is service_err


def test_delete_success():
    ctx = object()
    service = FakeChatService()
    assert Implementation(service).delete(ctx, DeleteRequest(id=CHAT_ID)) is None
    assert service.deleted == [(ctx, CHAT_ID)]


def test_delete_service_error():
    service_err = RuntimeError("service error")
    service = FakeChatService(error=service_err)
    with pytest.raises(RuntimeError) as info:
        Implementation(service).delete(object(), DeleteRequest(id=CHAT_ID))
    assert info.value is service_err
    assert service.deleted[0][1] == CHAT_ID


def test_send_message_success():
    ctx = object()
    service = FakeChatService()
    assert Implementation(service).send_message(ctx, send_request()) is None
    assert service.sent == [(ctx, MessageInfo(from_=FROM, text=TEXT, timestamp=DATE))]


def test_send_message_service_error():
    service_err = RuntimeError("service error")
    service = FakeChatService(error=service_err)
    with pytest.raises(RuntimeError) as info:
        Implementation(service).send_message(object(), send_request())
    assert info.value is service_err


def test_send_message_invalid_date():
    service = FakeChatService()
    with pytest.raises(ValueError):
        Implementation(service).send_message(object(), send_request("not a date"))
    assert service.sent == []


def test_send_message_without_message_is_rejected():
    service = FakeChatService()
    with pytest.raises(ValueError):
        Implementation(service).send_message(object(), SendMessageRequest())
    assert service.sent == []


def test_access_client_is_kept():
    client = object()
    implementation = Implementation(FakeChatService(), client)
    assert implementation.access_client is client