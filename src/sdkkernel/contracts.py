"""Capability interfaces consumed by the request pipeline.

- :class:`Transport` — what ``BaseClient`` needs from its HTTP client
  (``httpx.Client`` satisfies it).
- :class:`AccessTokenInterface` — attaches credentials to outgoing requests.
- :class:`EligibilityChecker` — optional capability a concrete client
  implements to reject transport-successful responses.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol, Union, runtime_checkable

import httpx

from sdkkernel.models import RequestOptions


class Transport(Protocol):
    """Minimal protocol for the HTTP transport."""

    def build_request(self, method: str, url: Any, **kwargs: Any) -> httpx.Request:
        ...

    def send(self, request: httpx.Request) -> httpx.Response:
        ...


@runtime_checkable
class AccessTokenInterface(Protocol):
    """Credential capability.

    Implementations return the request that should be sent in place of
    *request*, typically a copy carrying a token in its query or headers.
    """

    def apply_to_request(
        self, request: httpx.Request, options: RequestOptions
    ) -> httpx.Request:
        ...


class EligibilityChecker(ABC):
    """Optional client capability: reject responses the API reports as failed.

    Subclass this alongside ``BaseClient`` to have the eligibility middleware
    installed.  Return a message (or any truthy value) to reject *response*,
    or a falsy value to accept it.
    """

    @abstractmethod
    def is_not_eligible_response(
        self, response: httpx.Response, request: httpx.Request
    ) -> Union[str, bool, None]:
        ...


class StaticAccessToken:
    """Attaches a fixed token to the request query string.

    Args:
        token:      The token value.
        query_name: Query parameter name.  Defaults to ``"access_token"``.
    """

    def __init__(self, token: str, query_name: str = "access_token") -> None:
        self.token = token
        self.query_name = query_name

    def apply_to_request(
        self, request: httpx.Request, options: RequestOptions
    ) -> httpx.Request:
        url = request.url.copy_set_param(self.query_name, self.token)
        try:
            body: dict[str, Any] = {"content": request.content}
        except httpx.RequestNotRead:
            body = {"stream": request.stream}
        return httpx.Request(
            request.method,
            url,
            headers=request.headers,
            extensions=request.extensions,
            **body,
        )

    def __repr__(self) -> str:
        return f"StaticAccessToken(query_name={self.query_name!r})"
