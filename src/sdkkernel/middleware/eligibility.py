"""NotEligibleResponseMiddleware — lets a client reject successful responses.

Many APIs answer HTTP 200 with an error payload.  After the inner chain
returns, the middleware asks the client's :class:`EligibilityChecker` about
the response:

- a non-empty string rejects it with that message;
- any other truthy value rejects it with ``"Unsuccessful request"``;
- a falsy value accepts it unchanged.
"""
from __future__ import annotations

import logging

import httpx

from sdkkernel.contracts import EligibilityChecker
from sdkkernel.exceptions import EligibilityError
from sdkkernel.middleware.chain import Handler
from sdkkernel.models import OutgoingRequest

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_MESSAGE = "Unsuccessful request"


class NotEligibleResponseMiddleware:
    """Raises :class:`EligibilityError` for responses the checker rejects."""

    def __init__(self, checker: EligibilityChecker) -> None:
        self._checker = checker

    def __call__(self, request: OutgoingRequest, next: Handler) -> httpx.Response:
        response = next(request)

        message = self._checker.is_not_eligible_response(response, request.http)
        if message:
            if not isinstance(message, str):
                message = DEFAULT_REJECTION_MESSAGE
            logger.debug(
                "Rejected %s %s (HTTP %s): %s",
                request.http.method,
                request.http.url,
                response.status_code,
                message,
            )
            raise EligibilityError(message, request.http, response)

        return response
