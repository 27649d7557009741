"""Unary call interceptors: request validation and access checks."""

from __future__ import annotations

import functools
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import Any, Protocol

UnaryHandler = Callable[[Any, Any], Any]
UnaryInterceptor = Callable[[Any, Any, "UnaryServerInfo", UnaryHandler], Any]


@dataclass(frozen=True)
class CallContext:
    """Per-call context carrying incoming and outgoing metadata."""

    incoming_metadata: Mapping[str, list[str]] | None = None
    outgoing_metadata: Mapping[str, list[str]] | None = None

    def with_outgoing_metadata(self, metadata: Mapping[str, list[str]]) -> CallContext:
        """Return a copy whose outgoing metadata is ``metadata``."""
        return replace(self, outgoing_metadata=dict(metadata))


@dataclass(frozen=True)
class UnaryServerInfo:
    """Information about the call being intercepted."""

    full_method: str
    server: Any = None


@dataclass(frozen=True)
class CheckRequest:
    """Request to the access service to check an endpoint."""

    endpoint_address: str


class MetadataMissingError(Exception):
    """The call carries no metadata."""

    def __init__(self, message: str = "metadata is not provided") -> None:
        super().__init__(message)


class _AccessClient(Protocol):
    def check(self, ctx: CallContext, request: CheckRequest) -> Any: ...


class _AccessProvider(Protocol):
    def access_client(self, ctx: Any) -> _AccessClient: ...


def validate_interceptor(
    ctx: Any, request: Any, info: UnaryServerInfo, handler: UnaryHandler
) -> Any:
    """Validate the request, if it can be validated, before handling it."""
    validate = getattr(request, "validate", None)
    if callable(validate):
        validate()
    return handler(ctx, request)


def new_check_permission_interceptor(provider: _AccessProvider) -> UnaryInterceptor:
    """Build an interceptor that asks the access service before each call."""

    def check_permission(
        ctx: CallContext, request: Any, info: UnaryServerInfo, handler: UnaryHandler
    ) -> Any:
        client = provider.access_client(ctx)
        metadata = ctx.incoming_metadata
        if metadata is None:
            raise MetadataMissingError()
        outgoing = ctx.with_outgoing_metadata(metadata)
        client.check(outgoing, CheckRequest(endpoint_address=info.full_method))
        return handler(ctx, request)

    return check_permission


def _bind(
    interceptor: UnaryInterceptor,
    info: UnaryServerInfo,
    next_handler: UnaryHandler,
    ctx: Any,
    request: Any,
) -> Any:
    return interceptor(ctx, request, info, next_handler)


def chain_unary(*args: UnaryInterceptor) -> UnaryInterceptor:
    """Combine interceptors into one; the first given runs outermost."""

    def chained(
        ctx: Any, request: Any, info: UnaryServerInfo, handler: UnaryHandler
    ) -> Any:
        wrapped = handler
        for interceptor in reversed(args):
            wrapped = functools.partial(_bind, interceptor, info, wrapped)
        return wrapped(ctx, request)

    return chained