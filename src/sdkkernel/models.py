"""Data models and enumerations for the request pipeline."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import IO, Any, Mapping, Optional, Union

import httpx


class ResponseType(str, Enum):
    """Output shape produced when a response is unwrapped.

    RAW: The ``httpx.Response`` itself.
    ARRAY: Decoded JSON as plain ``dict``/``list`` values.
    OBJECT: Decoded JSON with objects as ``SimpleNamespace`` instances.
    COLLECTION: Decoded JSON with objects as ``OrderedDict`` instances.
    STRING: The response body text.
    """

    RAW = "raw"
    ARRAY = "array"
    OBJECT = "object"
    COLLECTION = "collection"
    STRING = "string"


# ---------------------------------------------------------------------------
# Upload timeout policy
# ---------------------------------------------------------------------------

UPLOAD_TIMEOUT_SECONDS = 30.0

UPLOAD_TIMEOUT = httpx.Timeout(
    UPLOAD_TIMEOUT_SECONDS,
    connect=UPLOAD_TIMEOUT_SECONDS,
    read=UPLOAD_TIMEOUT_SECONDS,
    write=UPLOAD_TIMEOUT_SECONDS,
)


# ---------------------------------------------------------------------------
# Request options
# ---------------------------------------------------------------------------

PartContents = Union[IO[bytes], str, bytes, int, float, bool, None]


def _encode_literal(value: Any) -> bytes:
    if isinstance(value, bytes):
        return value
    if value is None:
        return b""
    if isinstance(value, bool):
        return b"true" if value else b"false"
    return str(value).encode("utf-8")


@dataclass(frozen=True)
class MultipartPart:
    """One part of a multipart body.

    Attributes:
        name:     Form field name.
        contents: An open binary stream for file parts, or a literal value.
    """

    name: str
    contents: PartContents

    @property
    def is_stream(self) -> bool:
        return hasattr(self.contents, "read")


@dataclass(frozen=True)
class RequestOptions:
    """Everything a verb helper hands to ``BaseClient.request``.

    Only one body variant (``form_params``, ``json`` or ``multipart``) is
    expected per request; ``query`` may accompany any of them.
    """

    query: Mapping[str, Any] = field(default_factory=dict)
    form_params: Optional[Mapping[str, Any]] = None
    json: Any = None
    multipart: tuple[MultipartPart, ...] = ()
    headers: Mapping[str, str] = field(default_factory=dict)
    timeout: Optional[httpx.Timeout] = None

    def build_kwargs(self) -> dict[str, Any]:
        """Translate the options into ``httpx.Client.build_request`` kwargs."""
        kwargs: dict[str, Any] = {}
        if self.query:
            kwargs["params"] = dict(self.query)
        if self.headers:
            kwargs["headers"] = dict(self.headers)
        if self.multipart:
            # Literals go in as filename-less file fields so every part keeps
            # its position and the body stays multipart without a file.
            kwargs["files"] = [
                (p.name, p.contents)
                if p.is_stream
                else (p.name, (None, _encode_literal(p.contents)))
                for p in self.multipart
            ]
        elif self.form_params is not None:
            kwargs["data"] = dict(self.form_params)
        if self.json is not None:
            kwargs["json"] = self.json
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return kwargs


@dataclass(frozen=True)
class OutgoingRequest:
    """The request travelling through the middleware chain.

    Middlewares never mutate an ``OutgoingRequest``; they call
    :meth:`replace` to hand a modified copy to the next layer.

    Attributes:
        http:    The ``httpx.Request`` that will reach the transport.
        options: The options the request was built from.
    """

    http: httpx.Request
    options: RequestOptions = field(default_factory=RequestOptions)

    def replace(self, **changes: Any) -> "OutgoingRequest":
        return dataclasses.replace(self, **changes)
