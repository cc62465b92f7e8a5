# twelvedatapy/tests/unit/test_client.py
import logging
from unittest.mock import patch

import pytest
import requests

from twelvedatapy import APIClient, APIResult, api_schemas
from twelvedatapy.api.exceptions import (
    APIHttpError, APIResponseParsingError, ConfigurationError, ForbiddenError,
    InvalidProviderResponseError, NotFoundError, PlanRestrictedError, RateLimitExceededError, TransportError
)

STOCKS_BODY = {
    "data": [
        {"symbol": "AAPL", "name": "Apple Inc", "currency": "USD", "exchange": "NASDAQ",
         "mic_code": "XNGS", "country": "United States", "type": "Common Stock",
         "access": {"global": "Basic", "plan": "Basic"}},
        {"symbol": "AAPL", "name": "Apple Inc", "currency": "EUR", "exchange": "FSX",
         "mic_code": "XFRA", "country": "Germany", "type": "Common Stock"},
    ],
    "status": "ok",
}

QUOTE_NOT_FOUND_MAP = {
    "AAAAA": {"code": 400, "message": "**symbol** not found: AAAAA", "status": "error",
              "meta": {"symbol": "AAAAA", "interval": "", "exchange": ""}},
    "BBBBB": {"code": 400, "message": "**symbol** not found: BBBBB", "status": "error",
              "meta": {"symbol": "BBBBB", "interval": "", "exchange": ""}},
}


@pytest.fixture
def client_with(fake_transport_factory):
    def _make(body=b"{}", **kwargs):
        transport = fake_transport_factory(body, **kwargs)
        return APIClient(api_key="testkey1234", base_url="https://api.example.test/",
                         transport=transport), transport
    return _make


# --- End-to-end through requests.Session ---
def test_stocks_end_to_end_with_credits(response_factory, credit_headers):
    client = APIClient(api_key="testkey1234", base_url="https://api.example.test")
    with patch.object(requests.Session, "get",
                      return_value=response_factory(STOCKS_BODY, headers=credit_headers)):
        data, credits_left, credits_used, error = client.get_stocks("AAPL")
    assert error is None
    assert (credits_left, credits_used) == (10, 1)
    assert isinstance(data, api_schemas.Stocks)
    assert len(data.data) == 2
    assert data.data[0].access.global_ == "Basic"
    assert data.data[1].access is None

def test_stocks_empty_data_is_success_not_not_found(response_factory, credit_headers):
    client = APIClient(api_key="testkey1234")
    with patch.object(requests.Session, "get",
                      return_value=response_factory({"data": []}, headers=credit_headers)):
        result = client.get_stocks("AAAAA")
    assert result.error is None
    assert result.data.data == []
    assert (result.credits_left, result.credits_used) == (10, 1)

def test_non_200_yields_transport_error_and_zero_credits(response_factory, credit_headers):
    client = APIClient(api_key="testkey1234")
    with patch.object(requests.Session, "get",
                      return_value=response_factory(b"oops", status_code=500, headers=credit_headers)):
        result = client.get_stocks("AAPL")
    assert isinstance(result.error, APIHttpError)
    assert isinstance(result.error, TransportError)
    assert result.data is None
    assert (result.credits_left, result.credits_used) == (0, 0)

def test_dial_failure_yields_zero_credits():
    client = APIClient(api_key="testkey1234")
    with patch.object(requests.Session, "get",
                      side_effect=requests.exceptions.ConnectionError("refused")):
        result = client.get_time_series("AAPL", "1day")
    assert isinstance(result.error, TransportError)
    assert (result.credits_left, result.credits_used) == (0, 0)

def test_dial_failure_error_does_not_carry_api_key(caplog):
    client = APIClient(api_key="supersecretkey9999", base_url="http://127.0.0.1:1")
    failure = requests.exceptions.ConnectionError(
        "HTTPConnectionPool(host='127.0.0.1', port=1): Max retries exceeded with url: "
        "/api_usage?apikey=supersecretkey9999 (Caused by NewConnectionError)")
    with patch.object(requests.Session, "get", side_effect=failure):
        with caplog.at_level(logging.DEBUG):
            result = client.get_usage()
    assert isinstance(result.error, TransportError)
    assert "supersecretkey9999" not in str(result.error)
    assert "supersecretkey9999" not in caplog.text


# --- Classification through the client ---
def test_multi_symbol_not_found_is_carried_in_result(client_with):
    client, _ = client_with(QUOTE_NOT_FOUND_MAP)
    data, credits_left, credits_used, error = client.get_quotes(["AAAAA", "BBBBB"])
    assert error is None
    assert len(data.data) == 0
    assert len(data.errors) == 2
    assert (credits_left, credits_used) == (10, 1)

def test_single_symbol_quote_not_found_is_call_error(client_with):
    client, _ = client_with({"code": 400, "message": "**symbol** not found: AAAAA",
                             "status": "error"})
    result = client.get_quotes(["AAAAA"])
    assert isinstance(result.error, NotFoundError)
    assert result.data is None
    assert (result.credits_left, result.credits_used) == (10, 1)

def test_single_symbol_quote_success(client_with):
    client, transport = client_with({"symbol": "AAPL", "close": "148.50000", "is_market_open": True})
    result = client.get_quotes("AAPL")
    assert result.error is None
    assert len(result.data.data) == 1
    assert result.data.data[0].is_market_open is True
    assert "symbol=AAPL&" in transport.urls[0]

def test_quote_map_with_null_entry_is_parsing_error(client_with):
    client, _ = client_with({"AAPL": {"symbol": "AAPL", "close": "1.0"}, "MSFT": None})
    result = client.get_quotes(["AAPL", "MSFT"])
    assert isinstance(result.error, APIResponseParsingError)
    assert result.data is None
    assert (result.credits_left, result.credits_used) == (10, 1)

def test_quote_symbols_are_joined(client_with):
    client, transport = client_with({})
    client.get_quotes(["AAPL", "EUR/USD"])
    assert "symbol=AAPL%2CEUR%2FUSD&" in transport.urls[0]

def test_quotes_requires_symbols(client_with):
    client, transport = client_with({})
    with pytest.raises(ValueError):
        client.get_quotes([])
    assert transport.urls == []

def test_time_series_symbol_not_found(client_with):
    client, _ = client_with({"code": 400, "message": "symbol not found: AAAAA", "status": "error"})
    result = client.get_time_series("AAAAA", "1min")
    assert isinstance(result.error, NotFoundError)

def test_time_series_plan_restricted(client_with):
    client, _ = client_with({"code": 400, "status": "error",
                             "message": "**symbol** XNAS is not available with your plan."})
    result = client.get_time_series("XNAS", "1min")
    assert isinstance(result.error, PlanRestrictedError)

def test_exchange_rate_symbol_not_found(client_with):
    client, _ = client_with({"code": 400, "message": "**symbol** not found: AAA/BBB", "status": "error"})
    result = client.get_exchange_rate("AAA/BBB")
    assert isinstance(result.error, NotFoundError)

def test_400_on_unrefined_endpoint_is_invalid_response(client_with):
    client, _ = client_with({"code": 400, "message": "**symbol** not found: AAAAA", "status": "error"})
    result = client.get_profile("AAAAA")
    assert isinstance(result.error, InvalidProviderResponseError)

@pytest.mark.parametrize("code, expected", [
    (429, RateLimitExceededError), (403, ForbiddenError), (404, NotFoundError),
])
def test_provider_codes_become_error_values(client_with, code, expected):
    client, _ = client_with({"code": code, "message": "msg", "status": "error"})
    result = client.get_statistics("AAPL")
    assert isinstance(result.error, expected)
    assert (result.credits_left, result.credits_used) == (10, 1)

def test_market_state_empty_array_is_not_found(client_with):
    client, _ = client_with(b"[]")
    result = client.get_market_state(exchange="NYSE")
    assert isinstance(result.error, NotFoundError)

def test_market_state_decodes_list(client_with):
    client, _ = client_with([{"name": "NYSE", "code": "XNYS", "country": "United States",
                              "is_market_open": True, "time_to_open": "00:00:00",
                              "time_to_close": "05:12:31"}])
    result = client.get_market_state()
    assert result.error is None
    assert [s.code for s in result.data] == ["XNYS"]

def test_invalid_json_is_parsing_error(client_with):
    client, _ = client_with(b"<html>gateway</html>")
    result = client.get_usage()
    assert isinstance(result.error, APIResponseParsingError)
    assert result.error.raw_response_text == "<html>gateway</html>"
    assert (result.credits_left, result.credits_used) == (10, 1)

def test_shape_mismatch_is_parsing_error(client_with):
    client, _ = client_with({"data": "not-a-list"})
    result = client.get_etfs()
    assert isinstance(result.error, APIResponseParsingError)


# --- Logging ---
def test_expected_errors_are_not_logged_as_errors(client_with, caplog):
    client, _ = client_with({"code": 429, "message": "out of credits", "status": "error"})
    with caplog.at_level(logging.DEBUG):
        client.get_time_series("AAPL", "1min")
    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]

def test_not_found_is_not_logged_as_error(client_with, caplog):
    client, _ = client_with(b"[]")
    with caplog.at_level(logging.DEBUG):
        client.get_market_state()
    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]

def test_other_errors_are_logged_with_body(client_with, caplog):
    client, _ = client_with({"code": 403, "message": "apikey is invalid", "status": "error"})
    with caplog.at_level(logging.ERROR):
        client.get_usage()
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "apikey is invalid" in errors[0].getMessage()


# --- URL building ---
def test_api_key_is_masked_in_log_url(client_with):
    client, transport = client_with({"timestamp": "2023-03-10 10:00:00", "current_usage": 1,
                                     "plan_limit": 8, "daily_usage": 5, "plan_daily_limit": 800})
    result = client.get_usage()
    assert result.data.plan_limit == 8
    assert transport.urls[0] == "https://api.example.test/api_usage?apikey=testkey1234"
    assert "testkey1234" not in transport.log_urls[0]
    assert transport.log_urls[0].endswith("1234")

def test_optional_arguments_render_empty(client_with):
    client, transport = client_with({"values": [], "status": "ok"})
    client.get_time_series("AAPL", "1day", output_size=30, pre_post=True)
    url = transport.urls[0]
    assert "outputsize=30" in url
    assert "prepost=true" in url
    assert "exchange=&" in url

def test_market_movers_instrument_in_path(client_with):
    client, transport = client_with({"values": [], "status": "ok"})
    client.get_market_movers("etf", direction="losers")
    assert "/market_movers/etf?" in transport.urls[0]
    assert "direction=losers" in transport.urls[0]

def test_url_templates_can_be_overridden(fake_transport_factory):
    transport = fake_transport_factory({"data": [], "status": "ok"})
    client = APIClient(api_key="k", base_url="https://api.example.test", transport=transport,
                       url_templates={"indices": "/v2/indices?apikey={apikey}&country={country}"})
    client.get_indices(country="Japan")
    assert transport.urls[0] == "https://api.example.test/v2/indices?apikey=k&country=Japan"


def test_template_with_unknown_placeholder_raises_configuration_error(fake_transport_factory):
    transport = fake_transport_factory({})
    client = APIClient(api_key="k", transport=transport,
                       url_templates={"usage": "/api_usage?apikey={apikey}&format={format}"})
    with pytest.raises(ConfigurationError):
        client.get_usage()
    assert transport.urls == []

# --- APIResult ---
def test_result_raise_for_error():
    ok = APIResult("payload", 10, 1, None)
    assert ok.ok
    assert ok.raise_for_error() == "payload"
    failed = APIResult(None, 0, 0, NotFoundError("gone"))
    assert not failed.ok
    with pytest.raises(NotFoundError):
        failed.raise_for_error()


# --- Per-endpoint smoke tests ---
@pytest.mark.parametrize("call, path, body, model", [
    (lambda c: c.get_stocks(), "/stocks?", {"data": [], "status": "ok"}, api_schemas.Stocks),
    (lambda c: c.get_exchanges(), "/exchanges?", {"data": [{"name": "NYSE", "code": "XNYS"}]},
     api_schemas.Exchanges),
    (lambda c: c.get_indices(), "/indices?", {"data": []}, api_schemas.Indices),
    (lambda c: c.get_etfs(), "/etf?", {"data": []}, api_schemas.Etfs),
    (lambda c: c.get_time_series("AAPL", "1day"), "/time_series?",
     {"meta": {"symbol": "AAPL"}, "values": [{"datetime": "2023-03-10", "close": "148.5"}]},
     api_schemas.TimeSeries),
    (lambda c: c.get_exchange_rate("USD/JPY"), "/exchange_rate?",
     {"symbol": "USD/JPY", "rate": 136.4, "timestamp": 1678461832}, api_schemas.ExchangeRate),
    (lambda c: c.get_market_movers(), "/market_movers/stocks?", {"values": []},
     api_schemas.MarketMovers),
    (lambda c: c.get_profile("AAPL"), "/profile?", {"symbol": "AAPL", "CEO": "Tim Cook"},
     api_schemas.Profile),
    (lambda c: c.get_insider_transactions("AAPL"), "/insider_transactions?",
     {"meta": {"symbol": "AAPL"}, "insider_transactions": [{"full_name": "X", "is_direct": True}]},
     api_schemas.InsiderTransactions),
    (lambda c: c.get_dividends("AAPL", range_="full"), "/dividends?",
     {"meta": {"symbol": "AAPL"}, "dividends": [{"payment_date": "2023-02-16", "amount": 0.23}]},
     api_schemas.Dividends),
    (lambda c: c.get_statistics("AAPL"), "/statistics?", {"meta": {"symbol": "AAPL"}},
     api_schemas.Statistics),
    (lambda c: c.get_earnings_calendar(), "/earnings_calendar?", {"earnings": {}, "status": "ok"},
     api_schemas.Earnings),
    (lambda c: c.get_income_statement("AAPL"), "/income_statement?",
     {"income_statement": [{"fiscal_date": "2022-09-30", "sales": 394328000000}]},
     api_schemas.IncomeStatement),
    (lambda c: c.get_balance_sheet("AAPL"), "/balance_sheet?", {"balance_sheet": []},
     api_schemas.BalanceSheet),
    (lambda c: c.get_cash_flow("AAPL", period="quarterly"), "/cash_flow?",
     {"cash_flow": [{"fiscal_date": "2022-12-31", "free_cash_flow": None}]},
     api_schemas.CashFlow),
    (lambda c: c.get_usage(), "/api_usage?", {"current_usage": 1, "plan_limit": 8},
     api_schemas.Usage),
])
def test_every_endpoint_decodes_its_model(client_with, call, path, body, model):
    client, transport = client_with(body)
    result = call(client)
    assert result.error is None
    assert isinstance(result.data, model)
    assert (result.credits_left, result.credits_used) == (10, 1)
    assert transport.urls[0].startswith("https://api.example.test" + path)
