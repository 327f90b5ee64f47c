"""MessageFormatter — renders a request/response pair from a template.

Templates contain ``{placeholder}`` tokens:

    {request}        Full HTTP request message
    {response}       Full HTTP response message
    {ts}             ISO 8601 date in UTC
    {date_iso_8601}  ISO 8601 date in UTC
    {date_common_log} Apache common log date
    {host}           Host of the request
    {method}         Method of the request
    {uri} / {url}    URI of the request
    {target}         Request target (path and query)
    {version}        Protocol version
    {req_version}    Protocol version of the request
    {res_version}    Protocol version of the response
    {code}           Status code of the response (if available)
    {phrase}         Reason phrase of the response (if available)
    {error}          Error message (if any)
    {req_headers}    Request start line and headers
    {res_headers}    Response start line and headers
    {req_body}       Request body
    {res_body}       Response body
    {req_header_*}   A single request header, e.g. {req_header_User-Agent}
    {res_header_*}   A single response header

Unknown placeholders render as an empty string.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

import httpx

_PLACEHOLDER = re.compile(r"\{\s*([A-Za-z_\-\.0-9]+)\s*\}")

_DEFAULT_VERSION = "1.1"


def _target(request: httpx.Request) -> str:
    return request.url.raw_path.decode("ascii", errors="replace")


def _res_version(response: httpx.Response) -> str:
    return response.http_version.removeprefix("HTTP/") or _DEFAULT_VERSION


def _header_lines(headers: httpx.Headers) -> str:
    return "".join(f"\r\n{name}: {value}" for name, value in headers.multi_items())


def _request_body(request: httpx.Request) -> str:
    try:
        return request.content.decode("utf-8", errors="replace")
    except httpx.RequestNotRead:
        # Streaming bodies (multipart uploads) are not buffered.
        return ""


def _response_body(response: httpx.Response) -> str:
    try:
        return response.text
    except httpx.ResponseNotRead:
        return ""


def _request_head(request: httpx.Request) -> str:
    return (
        f"{request.method} {_target(request)} HTTP/{_DEFAULT_VERSION}"
        + _header_lines(request.headers)
    )


def _response_head(response: httpx.Response) -> str:
    return (
        f"HTTP/{_res_version(response)} {response.status_code} {response.reason_phrase}"
        + _header_lines(response.headers)
    )


class MessageFormatter:
    """Formats log messages for a request, its response and any error.

    Args:
        template: Template string; defaults to :attr:`CLF`.
    """

    CLF = (
        '{host} {req_header_User-Agent} - [{date_common_log}] '
        '"{method} {target} HTTP/{version}" {code} {res_header_Content-Length}'
    )
    DEBUG = ">>>>>>>>\n{request}\n<<<<<<<<\n{response}\n--------\n{error}"
    SHORT = '[{ts}] "{method} {target} HTTP/{version}" {code}'

    def __init__(self, template: str = CLF) -> None:
        self.template = template or self.CLF

    def format(
        self,
        request: httpx.Request,
        response: Optional[httpx.Response] = None,
        error: Optional[BaseException] = None,
    ) -> str:
        """Render the template for one request/response cycle."""
        cache: dict[str, str] = {}

        def replace(match: re.Match) -> str:
            key = match.group(1)
            if key not in cache:
                cache[key] = self._resolve(key, request, response, error)
            return cache[key]

        return _PLACEHOLDER.sub(replace, self.template)

    # ------------------------------------------------------------------
    # Placeholder resolution
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve(
        key: str,
        request: httpx.Request,
        response: Optional[httpx.Response],
        error: Optional[BaseException],
    ) -> str:
        if key == "request":
            return _request_head(request) + "\r\n\r\n" + _request_body(request)
        if key == "response":
            if response is None:
                return ""
            return _response_head(response) + "\r\n\r\n" + _response_body(response)
        if key == "req_headers":
            return _request_head(request)
        if key == "res_headers":
            return _response_head(response) if response is not None else "NULL"
        if key == "req_body":
            return _request_body(request)
        if key == "res_body":
            return _response_body(response) if response is not None else "NULL"
        if key in ("ts", "date_iso_8601"):
            return datetime.now(timezone.utc).isoformat()
        if key == "date_common_log":
            return datetime.now(timezone.utc).strftime("%d/%b/%Y:%H:%M:%S %z")
        if key == "method":
            return request.method
        if key == "version":
            return _DEFAULT_VERSION
        if key in ("uri", "url"):
            return str(request.url)
        if key == "target":
            return _target(request)
        if key == "req_version":
            return _DEFAULT_VERSION
        if key == "res_version":
            return _res_version(response) if response is not None else "NULL"
        if key == "host":
            return request.headers.get("Host", request.url.host)
        if key == "code":
            return str(response.status_code) if response is not None else "NULL"
        if key == "phrase":
            return response.reason_phrase if response is not None else "NULL"
        if key == "error":
            return str(error) if error is not None else "NULL"

        if key.startswith("req_header_"):
            return request.headers.get(key[len("req_header_"):], "")
        if key.startswith("res_header_"):
            if response is None:
                return "NULL"
            return response.headers.get(key[len("res_header_"):], "")
        return ""
