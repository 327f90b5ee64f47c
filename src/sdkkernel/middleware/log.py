"""LogMiddleware — records each request/response pair on a logger.

Purely observational: the response (or the exception) from the inner chain
is returned (or re-raised) untouched.
"""
from __future__ import annotations

import logging

import httpx

from sdkkernel.formatter import MessageFormatter
from sdkkernel.middleware.chain import Handler
from sdkkernel.models import OutgoingRequest


class LogMiddleware:
    """Formats the request/response with a MessageFormatter and logs it.

    Args:
        logger:    Destination logger.
        formatter: Formatter used to render each entry.
        level:     Log level.  Defaults to ``logging.DEBUG``.
    """

    def __init__(
        self,
        logger: logging.Logger,
        formatter: MessageFormatter | None = None,
        level: int = logging.DEBUG,
    ) -> None:
        self._logger = logger
        self._formatter = formatter or MessageFormatter(MessageFormatter.DEBUG)
        self._level = level

    def __call__(self, request: OutgoingRequest, next: Handler) -> httpx.Response:
        try:
            response = next(request)
        except Exception as exc:
            # EligibilityError and HTTPStatusError carry the response.
            self._logger.log(
                self._level,
                self._formatter.format(request.http, getattr(exc, "response", None), exc),
            )
            raise

        self._logger.log(self._level, self._formatter.format(request.http, response))
        return response
