"""Response unwrapping — converts an ``httpx.Response`` into the configured shape."""

from __future__ import annotations

import json
from collections import OrderedDict
from types import SimpleNamespace
from typing import Any, Optional, Union

import httpx

from sdkkernel.exceptions import ConfigurationError
from sdkkernel.models import ResponseType


def _coerce_response_type(response_type: Union[ResponseType, str, None]) -> ResponseType:
    if response_type is None or response_type == "":
        raise ConfigurationError(
            "response_type is not configured; set it or request a raw response"
        )
    try:
        return ResponseType(response_type)
    except ValueError:
        allowed = ", ".join(t.value for t in ResponseType)
        raise ConfigurationError(
            f"Unsupported response_type: {response_type!r} (expected one of: {allowed})"
        ) from None


def _decode(response: httpx.Response, **hooks: Any) -> Any:
    if not response.content.strip():
        return None
    return json.loads(response.text, **hooks)


def unwrap_response(
    response: httpx.Response,
    response_type: Optional[Union[ResponseType, str]],
) -> Any:
    """Convert *response* into the shape selected by *response_type*.

    Args:
        response:      The transport response.
        response_type: A :class:`ResponseType` or its string value.

    Returns:
        The response itself, a ``dict``/``list``, ``SimpleNamespace``
        objects, ``OrderedDict`` objects, or the body text.

    Raises:
        ConfigurationError: If *response_type* is unset or unrecognised.
        json.JSONDecodeError: If a structured shape is requested and the body
            is not valid JSON.
    """
    kind = _coerce_response_type(response_type)

    if kind is ResponseType.RAW:
        return response
    if kind is ResponseType.STRING:
        return response.text
    if kind is ResponseType.ARRAY:
        data = _decode(response)
        return {} if data is None else data
    if kind is ResponseType.OBJECT:
        data = _decode(response, object_hook=lambda d: SimpleNamespace(**d))
        return SimpleNamespace() if data is None else data
    # ResponseType.COLLECTION
    data = _decode(response, object_pairs_hook=OrderedDict)
    return OrderedDict() if data is None else data
