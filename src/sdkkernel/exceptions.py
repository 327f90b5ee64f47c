"""Exception hierarchy for the sdkkernel request layer.

Everything raised by this package derives from ``KernelError`` so callers can
catch the whole family with a single except clause.

Error taxonomy:

    ConfigurationError  — response type missing/invalid when an unwrap is
                          requested, or an invalid configuration file
    EligibilityError    — response rejected by the client's eligibility check
    TransportError      — ``httpx.TransportError``, re-exported; raised by the
                          transport and propagated untouched
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from httpx import TransportError

if TYPE_CHECKING:
    import httpx


class KernelError(Exception):
    """Base exception for all sdkkernel errors."""


class ConfigurationError(KernelError):
    """Raised when the client is misconfigured.

    Examples: unset ``response_type`` when an unwrapped result is requested,
    an unknown response type, a config file that fails validation.
    """


class EligibilityError(KernelError):
    """Raised when a transport-successful response is rejected by the client.

    Attributes:
        message:  Rejection reason returned by the eligibility check.
        request:  The ``httpx.Request`` that produced the response.
        response: The rejected ``httpx.Response``.
    """

    def __init__(
        self,
        message: str,
        request: "httpx.Request",
        response: "httpx.Response",
    ) -> None:
        self.message = message
        self.request = request
        self.response = response
        super().__init__(message)


__all__ = [
    "ConfigurationError",
    "EligibilityError",
    "KernelError",
    "TransportError",
]
