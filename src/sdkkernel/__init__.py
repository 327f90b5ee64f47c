"""sdkkernel – base request layer for typed HTTP API clients.

This package provides:

- :class:`BaseClient` – Verb helpers over a middleware pipeline
- :class:`MiddlewareStack` – Ordered, uniquely named request interceptors
- :func:`unwrap_response` – Response shaping per :class:`ResponseType`
- :class:`KernelConfig` – Pydantic configuration with TOML/env loading
- :class:`MessageFormatter` – Request/response log line templates
"""

from sdkkernel.client import BaseClient, open_upload_parts
from sdkkernel.config import HttpSettings, KernelConfig, load_config
from sdkkernel.contracts import (
    AccessTokenInterface,
    EligibilityChecker,
    StaticAccessToken,
    Transport,
)
from sdkkernel.exceptions import (
    ConfigurationError,
    EligibilityError,
    KernelError,
    TransportError,
)
from sdkkernel.formatter import MessageFormatter
from sdkkernel.logging_setup import setup_logging
from sdkkernel.middleware import MiddlewareStack, compose_middleware
from sdkkernel.models import (
    UPLOAD_TIMEOUT,
    MultipartPart,
    OutgoingRequest,
    RequestOptions,
    ResponseType,
)
from sdkkernel.unwrap import unwrap_response

__all__ = [
    "AccessTokenInterface",
    "BaseClient",
    "ConfigurationError",
    "EligibilityChecker",
    "EligibilityError",
    "HttpSettings",
    "KernelConfig",
    "KernelError",
    "MessageFormatter",
    "MiddlewareStack",
    "MultipartPart",
    "OutgoingRequest",
    "RequestOptions",
    "ResponseType",
    "StaticAccessToken",
    "Transport",
    "TransportError",
    "UPLOAD_TIMEOUT",
    "compose_middleware",
    "load_config",
    "open_upload_parts",
    "setup_logging",
    "unwrap_response",
]
