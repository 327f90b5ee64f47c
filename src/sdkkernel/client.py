"""BaseClient — the request pipeline every API client builds on.

Concrete SDK clients subclass :class:`BaseClient` and call the verb helpers
(``http_get``, ``http_post``, ``http_post_json``, ``http_put``,
``http_delete``, ``http_upload``) from their endpoint methods.  Each helper
assembles :class:`RequestOptions` and hands them to :meth:`BaseClient.request`,
which drives the middleware chain and unwraps the response.

Example::

    class OrdersClient(BaseClient, EligibilityChecker):
        def is_not_eligible_response(self, response, request):
            body = response.json()
            return body.get("errmsg") if body.get("errcode") else False

        def list_orders(self, page: int = 1):
            return self.http_get("orders", {"page": page})

    client = OrdersClient(
        KernelConfig(response_type="array", http={"base_uri": "https://api.example.com/"}),
        StaticAccessToken("secret"),
    )
"""

from __future__ import annotations

import logging
import os
import threading
from contextlib import ExitStack
from typing import Any, Mapping, Optional, Union

import httpx
from rich.console import Console

from sdkkernel.config import KernelConfig, load_config
from sdkkernel.contracts import AccessTokenInterface, EligibilityChecker, Transport
from sdkkernel.formatter import MessageFormatter
from sdkkernel.logging_setup import setup_logging
from sdkkernel.middleware import (
    AccessTokenMiddleware,
    LogMiddleware,
    Middleware,
    MiddlewareStack,
    NotEligibleResponseMiddleware,
    compose_middleware,
)
from sdkkernel.models import (
    UPLOAD_TIMEOUT,
    MultipartPart,
    OutgoingRequest,
    RequestOptions,
)
from sdkkernel.unwrap import unwrap_response

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def open_upload_parts(
    files: Mapping[str, PathLike],
    form: Mapping[str, Any],
    stack: ExitStack,
) -> tuple[MultipartPart, ...]:
    """Build multipart parts, opening each file inside *stack*.

    File parts come first, in mapping order, followed by the literal form
    fields.  Every opened file is closed when *stack* exits.
    """
    parts = [
        MultipartPart(name, stack.enter_context(open(path, "rb")))
        for name, path in files.items()
    ]
    parts.extend(MultipartPart(name, contents) for name, contents in form.items())
    return tuple(parts)


class BaseClient:
    """Base class for API clients: verb helpers over a middleware pipeline.

    Args:
        config:              Client configuration.  Defaults to ``KernelConfig()``.
        access_token:        Credentials applied to every request, if any.
        http_client:         Transport.  When omitted an ``httpx.Client`` is
                             created from ``config.http`` and owned (closed)
                             by this client.
        logger:              Logger for request/response entries.  The log
                             middleware is installed only when one is given.
        eligibility_checker: Explicit checker.  Defaults to ``self`` when the
                             subclass implements :class:`EligibilityChecker`.
    """

    def __init__(
        self,
        config: KernelConfig | None = None,
        access_token: AccessTokenInterface | None = None,
        *,
        http_client: Transport | None = None,
        logger: logging.Logger | None = None,
        eligibility_checker: EligibilityChecker | None = None,
    ) -> None:
        self.config = config or KernelConfig()
        self._access_token = access_token
        self._logger = logger

        if eligibility_checker is None and isinstance(self, EligibilityChecker):
            eligibility_checker = self
        self._eligibility_checker = eligibility_checker

        self._owned_http: httpx.Client | None = None
        if http_client is None:
            http_client = self._owned_http = self._create_http_client()
        self._http: Transport = http_client

        self._middlewares = MiddlewareStack()
        self._middlewares_built = False
        self._middlewares_lock = threading.Lock()

    def _create_http_client(self) -> httpx.Client:
        kwargs: dict[str, Any] = {"base_url": self.config.http.base_uri}
        if self.config.http.timeout is not None:
            kwargs["timeout"] = self.config.http.timeout
        return httpx.Client(**kwargs)

    @classmethod
    def from_config(
        cls,
        config: KernelConfig | None = None,
        access_token: AccessTokenInterface | None = None,
        *,
        console: Console | None = None,
        **kwargs: Any,
    ) -> "BaseClient":
        """Build a client with logging configured from *config*.

        *config* defaults to :func:`load_config`.  The log middleware writes
        to the logger returned by :func:`setup_logging`, so ``log_level``
        and ``log_file`` decide where request/response entries end up.
        Remaining keyword arguments go to the constructor.
        """
        config = config or load_config()
        if kwargs.get("logger") is None:
            kwargs["logger"] = setup_logging(config, console=console)
        return cls(config, access_token, **kwargs)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def http_client(self) -> Transport:
        """The underlying transport."""
        return self._http

    @property
    def middlewares(self) -> MiddlewareStack:
        """The middleware stack (empty until the first request)."""
        return self._middlewares

    # ------------------------------------------------------------------
    # Access token
    # ------------------------------------------------------------------

    def get_access_token(self) -> Optional[AccessTokenInterface]:
        return self._access_token

    def set_access_token(self, access_token: AccessTokenInterface) -> "BaseClient":
        """Replace the token used by subsequent requests."""
        self._access_token = access_token
        return self

    # ------------------------------------------------------------------
    # Verb helpers
    # ------------------------------------------------------------------

    def http_get(self, url: str, query: Mapping[str, Any] | None = None) -> Any:
        """GET request with query parameters."""
        return self.request(url, "GET", RequestOptions(query=query or {}))

    def http_post(self, url: str, data: Mapping[str, Any] | None = None) -> Any:
        """POST request with a form-encoded body."""
        return self.request(url, "POST", RequestOptions(form_params=data or {}))

    def http_put(self, url: str, data: Any = None) -> Any:
        """PUT request with a JSON body."""
        return self.request(url, "PUT", RequestOptions(json=_json_body(data)))

    def http_delete(self, url: str, data: Any = None) -> Any:
        """DELETE request with a JSON body."""
        return self.request(url, "DELETE", RequestOptions(json=_json_body(data)))

    def http_post_json(
        self,
        url: str,
        data: Any = None,
        query: Mapping[str, Any] | None = None,
    ) -> Any:
        """POST request with a JSON body and optional query parameters."""
        return self.request(
            url,
            "POST",
            RequestOptions(query=query or {}, json=_json_body(data)),
        )

    def http_upload(
        self,
        url: str,
        files: Mapping[str, PathLike] | None = None,
        form: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> Any:
        """Multipart POST of files (field name → path) and literal form fields.

        Files are opened for the duration of the call and closed on every
        exit path.  The connect, write and read timeouts are fixed at 30s.
        """
        with ExitStack() as stack:
            parts = open_upload_parts(files or {}, form or {}, stack)
            return self.request(
                url,
                "POST",
                RequestOptions(
                    query=query or {},
                    multipart=parts,
                    timeout=UPLOAD_TIMEOUT,
                ),
            )

    # ------------------------------------------------------------------
    # Core request
    # ------------------------------------------------------------------

    def request(
        self,
        url: str,
        method: str = "GET",
        options: RequestOptions | None = None,
        return_raw: bool = False,
    ) -> Any:
        """Send a request through the middleware chain.

        Args:
            url:        Absolute URL, or a path relative to ``http.base_uri``.
            method:     HTTP method.
            options:    Query, body and timeout options.
            return_raw: Return the ``httpx.Response`` without unwrapping.

        Returns:
            The transport response when *return_raw* is true, otherwise the
            shape selected by ``response_type``.

        Raises:
            ConfigurationError: If unwrapping is requested and
                ``response_type`` is unset or invalid.
            EligibilityError: If the client's eligibility check rejects the
                response.
            httpx.TransportError: Propagated from the transport.
        """
        self._ensure_middlewares()

        options = options or RequestOptions()
        http_request = self._http.build_request(method, url, **options.build_kwargs())

        handler = compose_middleware(self._middlewares, self._send)
        response = handler(OutgoingRequest(http=http_request, options=options))

        return response if return_raw else self.unwrap_response(response)

    def request_raw(
        self,
        url: str,
        method: str = "GET",
        options: RequestOptions | None = None,
    ) -> httpx.Response:
        """Shorthand for ``request(..., return_raw=True)``."""
        return self.request(url, method, options, return_raw=True)

    def unwrap_response(self, response: httpx.Response) -> Any:
        """Shape *response* according to the configured ``response_type``."""
        return unwrap_response(response, self.config.get("response_type"))

    def _send(self, request: OutgoingRequest) -> httpx.Response:
        return self._http.send(request.http)

    # ------------------------------------------------------------------
    # Middleware registration
    # ------------------------------------------------------------------

    def push_middleware(self, middleware: Middleware, name: str) -> "BaseClient":
        """Append *middleware* under *name*, replacing any entry with that name."""
        self._middlewares.push(middleware, name)
        return self

    def register_http_middlewares(self) -> None:
        """Register the default middlewares.

        Order: ``access_token``, ``log`` (when a logger is configured),
        ``not_eligible_response`` (when an eligibility checker is present).
        Subclasses may extend this; call ``super()`` to keep the defaults.
        """
        self.push_middleware(
            AccessTokenMiddleware(self.get_access_token), "access_token"
        )

        if self._logger is not None:
            template = self.config.get("http.log_template", MessageFormatter.DEBUG)
            self.push_middleware(
                LogMiddleware(self._logger, MessageFormatter(template)), "log"
            )

        if self._eligibility_checker is not None:
            self.push_middleware(
                NotEligibleResponseMiddleware(self._eligibility_checker),
                "not_eligible_response",
            )

    def reset_middlewares(self) -> None:
        """Drop the stack; the next request registers the middlewares again."""
        with self._middlewares_lock:
            self._middlewares.clear()
            self._middlewares_built = False

    def _ensure_middlewares(self) -> None:
        if self._middlewares_built:
            return
        with self._middlewares_lock:
            if self._middlewares_built:
                return
            self.register_http_middlewares()
            self._middlewares_built = True
            logger.debug(
                "%s middlewares registered: %s",
                type(self).__name__,
                ", ".join(self._middlewares.names()),
            )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owned_http is not None:
            self._owned_http.close()

    def __enter__(self) -> "BaseClient":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def _json_body(data: Any) -> Any:
    return {} if data is None else data
