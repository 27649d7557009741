# chatserver

The core of a chat service: the domain model, wire messages with their
validation rules, environment-based configuration, PostgreSQL repositories for
chats, chat members and messages, a transactional chat service, unary call
interceptors and the API handlers that tie them together.

## Modules

- `chatserver.model` – the domain objects `Chat` (`info`, `users`),
  `ChatInfo` (`name`) and `MessageInfo` (`from_`, `text`, `timestamp`).
- `chatserver.timeutils` – `parse_datetime(value)` parses an RFC 3339
  timestamp into a timezone-aware `datetime` and raises `ValueError` on
  anything else.
- `chatserver.config` – configuration:
  - `load(path)` reads a `.env` file into `os.environ` without overriding
    variables that are already set, and returns the values read from the file.
    A missing file raises `FileNotFoundError`.
  - `parse_config(argv=None)` reads the `-config-path` / `--config-path`
    option and returns it, `.env` by default.
  - `GRPCConfig`, `HTTPConfig`, `SwaggerConfig` (each with `host`, `port` and
    `address()`), `PGConfig` (`dsn`) and `TLSConfig`
    (`service_key_file_path`, `service_pem_file_path`). Each has
    `from_env(environ=None)`, which reads `os.environ` or the mapping given.
    A missing or empty setting raises `ConfigError`.
- `chatserver.chat_messages` – the wire messages `ChatInfo`, `MessageInfo`
  (with `datetime` as RFC 3339 text) and `Message`, plus the errors
  `ValidationError` and `MultiValidationError`.
- `chatserver.chat_requests` – `CreateRequest`, `CreateResponse`,
  `DeleteRequest` and `SendMessageRequest`.
- `chatserver.converter` – `to_chat_from_desc`, `to_chat_info_from_desc` and
  `to_message_info_from_desc` turn wire messages into model objects. A
  datetime that cannot be parsed becomes `0001-01-01T00:00:00Z`.
- `chatserver.repository` – the `ChatRepository`, `ChatUserRepository`,
  `ChatMessageRepository` and `DBClient` protocols, the `Query` record, and
  the PostgreSQL implementations `PgChatRepository`, `PgChatUserRepository`
  and `PgChatMessageRepository`.
- `chatserver.service` – `ChatService` and the `TxManager` protocol.
- `chatserver.interceptor` – `validate_interceptor`,
  `new_check_permission_interceptor(provider)`, `chain_unary(*interceptors)`,
  and the `CallContext`, `UnaryServerInfo`, `CheckRequest` and
  `MetadataMissingError` types.
- `chatserver.api` – `Implementation`, with `create`, `delete` and
  `send_message` handlers.

## Validation

Every wire message has `validate()`, which raises `ValidationError` for the
first broken rule, and `validate_all()`, which raises `MultiValidationError`
listing every broken rule (`all_errors()` returns them).

- `ChatInfo.name`, `MessageInfo.from_` and `MessageInfo.text` must be between
  2 and 50 characters long, inclusive.
- `Message.message_info`, `CreateRequest.chat_info` and
  `SendMessageRequest.message` are validated as embedded messages when set;
  a failure is reported on the outer message with the inner error as its
  `cause`.
- `CreateResponse`, `DeleteRequest`, `Message.id` and `MessageInfo.datetime`
  have no rules.

```python
from chatserver.chat_messages import ChatInfo, ValidationError

try:
    ChatInfo(name="x").validate()
except ValidationError as exc:
    print(exc)
    # invalid ChatInfo.Name: value length must be between 2 and 50 runes, inclusive
```

## Configuration

| Variable       | Used by         |
|----------------|-----------------|
| `GRPC_HOST`    | `GRPCConfig`    |
| `GRPC_PORT`    | `GRPCConfig`    |
| `HTTP_HOST`    | `HTTPConfig`    |
| `HTTP_PORT`    | `HTTPConfig`    |
| `SWAGGER_HOST` | `SwaggerConfig` |
| `SWAGGER_PORT` | `SwaggerConfig` |
| `PG_DSN`       | `PGConfig`      |

`TLSConfig` always points at `service.key` and `service.pem`. `address()`
joins host and port with a colon, putting IPv6 hosts in brackets.

```python
from chatserver.config import ConfigError, GRPCConfig

cfg = GRPCConfig.from_env({"GRPC_HOST": "localhost", "GRPC_PORT": "50051"})
print(cfg.address())  # localhost:50051

try:
    GRPCConfig.from_env({})
except ConfigError as exc:
    print(exc)  # grpc host not found
```

## Storage

The repositories build PostgreSQL statements with `$n` placeholders and hand
them, wrapped in a named `Query`, to a `DBClient` you supply:

- `query_row(ctx, query, *args)` runs a query and returns its single row;
  `PgChatRepository.create` uses it to read back the new chat's id
  (`INSERT INTO chat (name) VALUES ($1) RETURNING id`).
- `execute(ctx, query, *args)` runs any other statement.

`PgChatUserRepository.add_users` inserts one `chat_user` row per user in a
single statement; an empty user list raises `QueryBuildError`.
`PgChatMessageRepository.add_message` inserts into `chat_message`
(`from_user`, `message`, `created_at`).

## Service and API

`ChatService(chat_repository, chat_message_repository, chat_user_repository,
tx_manager)` runs each operation through `tx_manager.read_committed(ctx,
handler)`:

- `create(ctx, chat)` stores the chat, then its members, and returns the id;
- `delete(ctx, chat_id)` removes the chat;
- `send_message(ctx, message_info)` stores the message.

Errors from the repositories or the transaction manager propagate unchanged.

`Implementation(chat_service, access_client=None)` converts wire requests and
calls the service. `create` returns a `CreateResponse`; `delete` and
`send_message` return `None`. `send_message` raises `ValueError` when the
message's datetime is not RFC 3339, before the service is called.

## Interceptors

An interceptor is a callable `(ctx, request, info, handler)`.
`validate_interceptor` calls `request.validate()` when the request has one,
then the handler. The interceptor from
`new_check_permission_interceptor(provider)` gets a client from
`provider.access_client(ctx)`, raises `MetadataMissingError` if
`ctx.incoming_metadata` is `None`, and otherwise calls
`client.check(ctx_with_outgoing_metadata, CheckRequest(info.full_method))`
before the handler. `chain_unary(a, b, ...)` combines them with `a` outermost.

## What this package does not do

It runs no servers and has no command to start one: there is no gRPC, HTTP
gateway or Swagger server here. It ships no database driver and no
transaction manager: you provide a `DBClient` and a `TxManager`. It has no
access-service client either; the permission interceptor uses whatever
`provider.access_client(ctx)` returns.