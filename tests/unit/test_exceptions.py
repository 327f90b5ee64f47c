"""Unit tests for sdkkernel custom exceptions."""

from __future__ import annotations

import httpx
import pytest

from sdkkernel.exceptions import (
    ConfigurationError,
    EligibilityError,
    KernelError,
    TransportError,
)


class TestKernelError:
    """Tests for the base KernelError."""

    def test_is_exception_subclass(self) -> None:
        assert issubclass(KernelError, Exception)

    def test_instantiate_with_message(self) -> None:
        err = KernelError("something went wrong")
        assert str(err) == "something went wrong"

    def test_can_be_raised_and_caught(self) -> None:
        with pytest.raises(KernelError):
            raise KernelError("test")


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_is_kernel_error(self) -> None:
        assert issubclass(ConfigurationError, KernelError)

    def test_message_preserved(self) -> None:
        err = ConfigurationError("response_type missing")
        assert "response_type missing" in str(err)

    def test_caught_as_base_class(self) -> None:
        with pytest.raises(KernelError):
            raise ConfigurationError("bad config")


class TestEligibilityError:
    """Tests for EligibilityError."""

    def test_is_kernel_error(self) -> None:
        assert issubclass(EligibilityError, KernelError)

    def test_attributes(self) -> None:
        request = httpx.Request("GET", "https://api.example.com/")
        response = httpx.Response(200, json={"errcode": 40013})
        err = EligibilityError("invalid appid", request, response)
        assert err.message == "invalid appid"
        assert err.request is request
        assert err.response is response
        assert str(err) == "invalid appid"


class TestTransportError:
    """TransportError is httpx's own class, not a wrapper."""

    def test_is_httpx_transport_error(self) -> None:
        assert TransportError is httpx.TransportError

    def test_not_a_kernel_error(self) -> None:
        assert not issubclass(TransportError, KernelError)

    def test_covers_timeouts_and_connect_errors(self) -> None:
        assert issubclass(httpx.ConnectTimeout, TransportError)
        assert issubclass(httpx.ConnectError, TransportError)
