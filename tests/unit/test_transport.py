# twelvedatapy/tests/unit/test_transport.py
import logging
from unittest.mock import patch

import pytest
import requests

from twelvedatapy.api.exceptions import APIHttpError, APITimeoutError, TransportError
from twelvedatapy.api.transport import HTTPTransport, parse_credits

URL = "https://api.twelvedata.com/stocks?apikey=demo"


# --- Credit header parsing ---
def test_parse_credits_reads_both_headers(credit_headers):
    assert parse_credits(credit_headers) == (10, 1)

def test_parse_credits_without_headers_is_zero():
    assert parse_credits({}) == (0, 0)
    assert parse_credits(None) == (0, 0)

def test_parse_credits_non_numeric_defaults_that_side_only(caplog):
    with caplog.at_level(logging.WARNING):
        assert parse_credits({"api-credits-left": "lots", "api-credits-used": "1"}) == (0, 1)
        assert parse_credits({"api-credits-left": "7", "api-credits-used": ""}) == (7, 0)
    assert "non-numeric" in caplog.text

def test_parse_credits_negative_is_zero():
    assert parse_credits({"api-credits-left": "-3", "api-credits-used": "2"}) == (0, 2)


# --- GET behaviour ---
def test_get_returns_body_status_and_credits(response_factory, credit_headers):
    transport = HTTPTransport(timeout_sec=3)
    with patch.object(requests.Session, "get",
                      return_value=response_factory({"data": []}, headers=credit_headers)) as mock_get:
        response = transport.get(URL)
    mock_get.assert_called_once_with(URL, timeout=3)
    assert response.body == b'{"data": []}'
    assert response.status_code == 200
    assert (response.credits_left, response.credits_used) == (10, 1)

def test_non_200_raises_http_error_without_inspecting_body(response_factory, credit_headers):
    transport = HTTPTransport()
    with patch.object(requests.Session, "get",
                      return_value=response_factory(b"Bad Gateway", status_code=502,
                                                    headers=credit_headers)):
        with pytest.raises(APIHttpError) as exc_info:
            transport.get(URL)
    assert exc_info.value.status_code == 502
    assert exc_info.value.http_status_code == 502
    assert isinstance(exc_info.value, TransportError)

def test_connect_timeout_is_retried_exactly_once(response_factory, credit_headers):
    transport = HTTPTransport()
    side_effects = [requests.exceptions.ConnectTimeout("dial"),
                    response_factory({"status": "ok"}, headers=credit_headers)]
    with patch.object(requests.Session, "get", side_effect=side_effects) as mock_get:
        response = transport.get(URL)
    assert mock_get.call_count == 2
    assert response.credits_left == 10

def test_second_connect_timeout_raises_timeout_error():
    transport = HTTPTransport()
    with patch.object(requests.Session, "get",
                      side_effect=requests.exceptions.ConnectTimeout("dial")) as mock_get:
        with pytest.raises(APITimeoutError):
            transport.get(URL)
    assert mock_get.call_count == 2

def test_read_timeout_is_not_retried():
    transport = HTTPTransport()
    with patch.object(requests.Session, "get",
                      side_effect=requests.exceptions.ReadTimeout("slow")) as mock_get:
        with pytest.raises(APITimeoutError):
            transport.get(URL)
    assert mock_get.call_count == 1

def test_connection_error_raises_transport_error():
    transport = HTTPTransport()
    with patch.object(requests.Session, "get",
                      side_effect=requests.exceptions.ConnectionError("refused")):
        with pytest.raises(TransportError) as exc_info:
            transport.get(URL)
    assert not isinstance(exc_info.value, APITimeoutError)

def test_log_url_is_used_in_log_messages(caplog):
    transport = HTTPTransport()
    with patch.object(requests.Session, "get",
                      side_effect=requests.exceptions.ConnectionError("refused")):
        with caplog.at_level(logging.ERROR):
            with pytest.raises(TransportError):
                transport.get("https://x/stocks?apikey=secretkey", log_url="https://x/stocks?apikey=*****tkey")
    assert "secretkey" not in caplog.text
    assert "*****tkey" in caplog.text

def test_api_key_in_exception_text_is_masked(caplog):
    transport = HTTPTransport()
    url = "https://x/api_usage?apikey=supersecretkey9999"
    log_url = "https://x/api_usage?apikey=*****9999"
    urllib3_text = ("HTTPSConnectionPool(host='x', port=443): Max retries exceeded with url: "
                    "/api_usage?apikey=supersecretkey9999 (Caused by NewConnectionError)")
    with patch.object(requests.Session, "get",
                      side_effect=requests.exceptions.ConnectionError(urllib3_text)):
        with caplog.at_level(logging.ERROR):
            with pytest.raises(TransportError) as exc_info:
                transport.get(url, log_url=log_url)
    assert "supersecretkey9999" not in str(exc_info.value)
    assert "/api_usage?apikey=*****9999" in str(exc_info.value)
    assert "supersecretkey9999" not in caplog.text

def test_api_key_in_timeout_text_is_masked(caplog):
    transport = HTTPTransport()
    url = "https://x/stocks?apikey=supersecretkey9999"
    with patch.object(requests.Session, "get",
                      side_effect=requests.exceptions.ReadTimeout(f"Read timed out: {url}")):
        with caplog.at_level(logging.ERROR):
            with pytest.raises(APITimeoutError) as exc_info:
                transport.get(url, log_url="https://x/stocks?apikey=*****9999")
    assert "supersecretkey9999" not in str(exc_info.value)
    assert exc_info.value.__cause__ is None
    assert "supersecretkey9999" not in caplog.text
