"""
🧪 test_strategies.py: unit-тести для HttpxErrorStrategy

Перевіряє:
- Таймаути та транспортні збої → transient ProviderError
- 5xx / 408 / 429 повторюються, решта 4xx остаточні
- Інші помилки httpx (redirects, decoding) → остаточний ProviderError
- Невідомий виняток → None
"""

import httpx
import pytest

from checkout_engine.errors.custom_errors import ProviderError
from checkout_engine.errors.strategies import HttpxErrorStrategy, is_transient_status

URL = "https://rates.test/calculateAramexRate"


def _status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", URL)
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError(f"HTTP {status}", request=request, response=response)


@pytest.mark.parametrize("status, transient", [(500, True), (503, True), (408, True), (429, True), (400, False), (404, False)])
def test_is_transient_status(status, transient):
    assert is_transient_status(status) is transient


@pytest.mark.parametrize("status, transient", [(502, True), (422, False)])
def test_status_error_mapping(status, transient):
    error = HttpxErrorStrategy().handle(_status_error(status))
    assert isinstance(error, ProviderError)
    assert error.status_code == status
    assert error.transient is transient
    assert error.url == URL


def test_timeout_is_transient():
    request = httpx.Request("POST", URL)
    error = HttpxErrorStrategy().handle(httpx.ConnectTimeout("slow", request=request))
    assert error.transient is True
    assert error.url == URL


def test_transport_error_without_request():
    error = HttpxErrorStrategy().handle(httpx.ConnectError("refused"))
    assert error.transient is True
    assert error.url == "N/A"


@pytest.mark.parametrize(
    "error",
    [
        httpx.TooManyRedirects("loop", request=httpx.Request("POST", URL)),
        httpx.DecodingError("bad gzip", request=httpx.Request("POST", URL)),
    ],
)
def test_other_httpx_errors_are_terminal(error):
    mapped = HttpxErrorStrategy().handle(error)
    assert isinstance(mapped, ProviderError)
    assert mapped.transient is False
    assert mapped.url == URL


def test_unknown_error_is_not_handled():
    assert HttpxErrorStrategy().handle(ValueError("nope")) is None
