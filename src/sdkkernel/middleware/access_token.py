"""AccessTokenMiddleware — attaches the client's current credentials.

The token is read from the owning client on every call, so a token replaced
with ``set_access_token()`` applies to all later requests.  When no token is
set the middleware is a pure pass-through.
"""
from __future__ import annotations

from typing import Callable, Optional

import httpx

from sdkkernel.contracts import AccessTokenInterface
from sdkkernel.middleware.chain import Handler
from sdkkernel.models import OutgoingRequest


class AccessTokenMiddleware:
    """Applies ``token.apply_to_request()`` once per outgoing request.

    Args:
        token_provider: Zero-argument callable returning the current token
                        (or None).
    """

    def __init__(self, token_provider: Callable[[], Optional[AccessTokenInterface]]) -> None:
        self._token_provider = token_provider

    def __call__(self, request: OutgoingRequest, next: Handler) -> httpx.Response:
        token = self._token_provider()
        if token is not None:
            request = request.replace(
                http=token.apply_to_request(request.http, request.options)
            )
        return next(request)
