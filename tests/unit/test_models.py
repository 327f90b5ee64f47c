"""Unit tests for sdkkernel.models."""

from __future__ import annotations

import dataclasses
import io

import httpx
import pytest

from sdkkernel.models import (
    UPLOAD_TIMEOUT,
    MultipartPart,
    OutgoingRequest,
    RequestOptions,
    ResponseType,
)


class TestResponseType:
    """Tests for the ResponseType enum."""

    def test_values(self) -> None:
        assert {t.value for t in ResponseType} == {
            "raw", "array", "object", "collection", "string",
        }

    def test_is_str(self) -> None:
        assert ResponseType.ARRAY == "array"

    def test_from_string(self) -> None:
        assert ResponseType("collection") is ResponseType.COLLECTION


class TestUploadTimeout:
    """The upload timeout policy is fixed at 30 seconds per phase."""

    def test_all_phases_thirty_seconds(self) -> None:
        assert UPLOAD_TIMEOUT.connect == 30.0
        assert UPLOAD_TIMEOUT.read == 30.0
        assert UPLOAD_TIMEOUT.write == 30.0


class TestMultipartPart:
    """Tests for MultipartPart."""

    def test_stream_detection(self) -> None:
        assert MultipartPart("doc", io.BytesIO(b"x")).is_stream
        assert not MultipartPart("title", "x").is_stream
        assert not MultipartPart("count", 3).is_stream

    def test_frozen(self) -> None:
        part = MultipartPart("title", "x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            part.name = "other"  # type: ignore[misc]


class TestRequestOptionsBuildKwargs:
    """RequestOptions.build_kwargs maps onto httpx.Client.build_request."""

    def test_empty(self) -> None:
        assert RequestOptions().build_kwargs() == {}

    def test_query(self) -> None:
        assert RequestOptions(query={"page": 1}).build_kwargs() == {"params": {"page": 1}}

    def test_form_params(self) -> None:
        kwargs = RequestOptions(form_params={"a": "b"}).build_kwargs()
        assert kwargs == {"data": {"a": "b"}}

    def test_json_with_query(self) -> None:
        kwargs = RequestOptions(query={"q": "x"}, json={"k": 1}).build_kwargs()
        assert kwargs == {"params": {"q": "x"}, "json": {"k": 1}}

    def test_headers_and_timeout(self) -> None:
        timeout = httpx.Timeout(5.0)
        kwargs = RequestOptions(headers={"X-A": "1"}, timeout=timeout).build_kwargs()
        assert kwargs == {"headers": {"X-A": "1"}, "timeout": timeout}

    def test_multipart_keeps_part_order(self) -> None:
        stream = io.BytesIO(b"file")
        options = RequestOptions(
            multipart=(MultipartPart("doc", stream), MultipartPart("title", "x")),
        )
        kwargs = options.build_kwargs()
        assert kwargs["files"] == [("doc", stream), ("title", (None, b"x"))]
        assert "data" not in kwargs

    @pytest.mark.parametrize(
        "value, encoded",
        [(True, b"true"), (False, b"false"), (None, b""), (1.5, b"1.5"), (b"raw", b"raw")],
    )
    def test_literal_encoding_independent_of_files(self, value, encoded) -> None:
        with_file = RequestOptions(
            multipart=(MultipartPart("doc", io.BytesIO(b"f")), MultipartPart("v", value)),
        ).build_kwargs()
        without_file = RequestOptions(multipart=(MultipartPart("v", value),)).build_kwargs()
        assert with_file["files"][1] == ("v", (None, encoded))
        assert without_file["files"][0] == ("v", (None, encoded))

    def test_literal_only_multipart_stays_multipart(self) -> None:
        options = RequestOptions(multipart=(MultipartPart("title", "x"), MultipartPart("n", 2)))
        kwargs = options.build_kwargs()
        assert kwargs["files"] == [("title", (None, b"x")), ("n", (None, b"2"))]
        assert "data" not in kwargs

    def test_multipart_wins_over_form_params(self) -> None:
        options = RequestOptions(
            form_params={"ignored": "1"},
            multipart=(MultipartPart("doc", io.BytesIO(b"x")),),
        )
        assert "data" not in options.build_kwargs()


class TestOutgoingRequest:
    """OutgoingRequest is replaced, never mutated."""

    def test_replace_returns_copy(self) -> None:
        original = OutgoingRequest(http=httpx.Request("GET", "https://a.example.com/"))
        other = httpx.Request("GET", "https://b.example.com/")
        replaced = original.replace(http=other)
        assert replaced.http is other
        assert original.http is not other
        assert replaced.options is original.options

    def test_frozen(self) -> None:
        request = OutgoingRequest(http=httpx.Request("GET", "https://a.example.com/"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.http = httpx.Request("GET", "https://b.example.com/")  # type: ignore[misc]
