"""Middleware chain — MiddlewareStack and compose_middleware().

Every request a client sends passes through a composable chain.
Right-to-left composition means the first registered middleware is the
outermost wrapper:

    request  → access_token → log → not_eligible_response → transport
    response ←──────────────────────────────────────────────────────

Each middleware is a callable that receives:
    (request: OutgoingRequest, next: Callable[[OutgoingRequest], httpx.Response])
and returns an ``httpx.Response``.
"""
from __future__ import annotations

from collections import OrderedDict
from typing import Callable, Iterator, Protocol

import httpx

from sdkkernel.models import OutgoingRequest

Handler = Callable[[OutgoingRequest], httpx.Response]


# ---------------------------------------------------------------------------
# Middleware Protocol
# ---------------------------------------------------------------------------

class Middleware(Protocol):
    """Protocol that every middleware must satisfy.

    A middleware must call next(request) exactly once and return its result
    (possibly replaced).  It must not swallow exceptions raised by next().
    """

    def __call__(
        self,
        request: OutgoingRequest,
        next: Handler,
    ) -> httpx.Response:
        """Process one request.

        Args:
            request: The outgoing request with the options it was built from.
            next:    Callable that invokes the next middleware or the transport.

        Returns:
            The response from the transport (possibly transformed).
        """
        ...


# ---------------------------------------------------------------------------
# MiddlewareStack — ordered, uniquely named
# ---------------------------------------------------------------------------

class MiddlewareStack:
    """Ordered collection of middlewares keyed by name.

    Insertion order is the request traversal order.  Pushing a name that is
    already registered replaces that middleware in place, so a stack never
    holds two entries with the same name.
    """

    def __init__(self) -> None:
        self._entries: OrderedDict[str, Middleware] = OrderedDict()

    def push(self, middleware: Middleware, name: str) -> None:
        self._entries[name] = middleware

    def remove(self, name: str) -> None:
        self._entries.pop(name, None)

    def clear(self) -> None:
        self._entries.clear()

    def names(self) -> list[str]:
        return list(self._entries)

    def get(self, name: str) -> Middleware | None:
        return self._entries.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[Middleware]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"MiddlewareStack({self.names()!r})"


# ---------------------------------------------------------------------------
# compose_middleware — right-to-left composition
# ---------------------------------------------------------------------------

def compose_middleware(
    middlewares: list[Middleware] | MiddlewareStack,
    handler: Handler,
) -> Handler:
    """Compose middlewares around a handler into a single callable.

    Composition is right-to-left: the first element is the outermost wrapper
    (called first, returned from last).  An empty sequence returns *handler*
    itself.

    Args:
        middlewares: Ordered middlewares, or a ``MiddlewareStack``.  May be empty.
        handler:     The innermost callable, usually the transport send.

    Returns:
        A callable with the handler signature ``(request) -> httpx.Response``.

    Example::

        chain = compose_middleware(
            [AccessTokenMiddleware(client), LogMiddleware(logger)],
            send,
        )
        response = chain(request)
    """
    execute = handler

    for mw in reversed(list(middlewares)):
        inner = execute

        def execute(  # noqa: E731
            request: OutgoingRequest,
            _mw: Middleware = mw,
            _inner: Handler = inner,
        ) -> httpx.Response:
            return _mw(request, _inner)

    return execute
