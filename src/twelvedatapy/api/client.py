# twelvedatapy/api/client.py
"""
API client module for twelvedatapy.

This module provides the APIClient class, one public method per REST
endpoint. Every method returns an :class:`APIResult`: the typed data, the
two credit counters reported for the call, and an error value. Provider,
transport and decoding failures are returned, not raised.
"""
import logging
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Sequence, Union
from urllib.parse import quote

from pydantic import BaseModel, TypeAdapter, ValidationError

from twelvedatapy.config import (
    API_KEY as CONFIG_API_KEY,
    BASE_URL as CONFIG_BASE_URL,
    URL_TEMPLATES,
    mask_api_key
)
from .classifier import classify
from .error_mapper import EXPECTED_ERROR_TYPES, map_outcome_to_error
from .exceptions import APIError, APIResponseParsingError, ConfigurationError, TransportError
from .quotes import decode_quotes
from .transport import HTTPTransport
from . import schemas

logger = logging.getLogger(__name__)

_market_state_list = TypeAdapter(List[schemas.MarketState])


class APIResult(NamedTuple):
    """
    Uniform return value of every endpoint method.

    Unpacks as ``data, credits_left, credits_used, error``. Credits are both 0
    when no response was received.
    """
    data: Any
    credits_left: int
    credits_used: int
    error: Optional[APIError]

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> Any:
        """Raises the carried error, if any; otherwise returns ``data``."""
        if self.error is not None:
            raise self.error
        return self.data


def _query_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return quote(str(value), safe="")


# pylint: disable=too-many-public-methods, too-many-arguments
class APIClient:
    """
    A client for the Twelve Data REST API.

    Args:
        api_key (Optional[str]): API key. Defaults to config (``TWELVEDATA_API_KEY``).
        base_url (Optional[str]): Override for the API base URL. Defaults to config.
        timeout_sec (Optional[float]): Per-request timeout for the default transport.
        transport (Optional[HTTPTransport]): Transport to use; any object with a
            compatible ``get(url, log_url=None)`` method is accepted.
        url_templates (Optional[Mapping[str, str]]): Per-endpoint template
            overrides merged over ``config.URL_TEMPLATES``.
        log (Optional[logging.Logger]): Logger to use instead of the module logger.
    """
    def __init__(self, api_key: Optional[str] = None,
                 base_url: Optional[str] = None,
                 timeout_sec: Optional[float] = None,
                 transport: Optional[HTTPTransport] = None,
                 url_templates: Optional[Mapping[str, str]] = None,
                 log: Optional[logging.Logger] = None):
        self.api_key = api_key or CONFIG_API_KEY
        self.base_url = (base_url or CONFIG_BASE_URL).rstrip("/")
        self.logger = log or logger
        self.transport = transport or HTTPTransport(timeout_sec=timeout_sec, log=self.logger)
        self.url_templates: Dict[str, str] = dict(URL_TEMPLATES)
        if url_templates:
            self.url_templates.update(url_templates)

        self.logger.info("APIClient initialized. Base URL: %s. API key: %s",
                         self.base_url, mask_api_key(self.api_key))

    def _build_url(self, endpoint: str, api_key: str, params: Dict[str, Any]) -> str:
        template = self.url_templates.get(endpoint)
        if template is None:
            raise ConfigurationError(f"No URL template configured for endpoint '{endpoint}'.")
        values = {name: _query_value(value) for name, value in params.items()}
        values["apikey"] = quote(api_key, safe="*")
        try:
            return self.base_url + template.format(**values)
        except (KeyError, IndexError) as e:
            raise ConfigurationError(
                f"URL template for '{endpoint}' uses unknown placeholder {e}: {template}"
            ) from e

    def _log_error(self, endpoint: str, error: APIError, body: Optional[bytes]):
        body_preview = body[:500] if body else b""
        if isinstance(error, EXPECTED_ERROR_TYPES):
            self.logger.debug("%s: %s (%s)", endpoint, type(error).__name__, error)
            return
        self.logger.error("%s: %s: %s. Body: %r", endpoint, type(error).__name__, error, body_preview)

    def _request(self, endpoint: str,
                 decoder: Union[type, Callable[[Any], Any]],
                 refine: bool = False,
                 **params: Any) -> APIResult:
        """
        Performs one call: transport, classification, error mapping, decoding.

        Args:
            endpoint (str): Key into ``url_templates``.
            decoder: A pydantic model class, or a callable taking the parsed payload.
            refine (bool): Whether a code-400 message is refined (per-symbol endpoints).
            **params: Template placeholder values.
        """
        url = self._build_url(endpoint, self.api_key, params)
        log_url = self._build_url(endpoint, mask_api_key(self.api_key), params)

        try:
            response = self.transport.get(url, log_url=log_url)
        except TransportError as e:
            return APIResult(None, 0, 0, e)

        credits_left, credits_used = response.credits_left, response.credits_used
        outcome = classify(response.body)
        error = map_outcome_to_error(endpoint, outcome, response.body, refine=refine)
        if error is not None:
            self._log_error(endpoint, error, response.body)
            return APIResult(None, credits_left, credits_used, error)

        try:
            if isinstance(decoder, type) and issubclass(decoder, BaseModel):
                data = decoder.model_validate(outcome.payload)
            else:
                data = decoder(outcome.payload)
        except ValidationError as e_val:
            error = APIResponseParsingError(
                f"Failed to parse '{endpoint}' response: {e_val}",
                raw_response_text=response.body.decode("utf-8", errors="replace")
            )
            self._log_error(endpoint, error, response.body)
            return APIResult(None, credits_left, credits_used, error)
        except APIResponseParsingError as e_parse:
            self._log_error(endpoint, e_parse, response.body)
            return APIResult(None, credits_left, credits_used, e_parse)

        return APIResult(data, credits_left, credits_used, None)

    # --- Reference data ---

    def get_stocks(self, symbol: str = "", exchange: str = "", country: str = "",
                   instrument_type: str = "", show_plan: bool = False) -> APIResult:
        """Lists stocks matching the filters. Data: ``schemas.Stocks``."""
        return self._request("stocks", schemas.Stocks,
                             symbol=symbol, exchange=exchange, country=country,
                             type=instrument_type, show_plan=show_plan)

    def get_exchanges(self, instrument_type: str = "", name: str = "", code: str = "",
                      country: str = "") -> APIResult:
        """Lists exchanges. Data: ``schemas.Exchanges``."""
        return self._request("exchanges", schemas.Exchanges,
                             type=instrument_type, name=name, code=code, country=country)

    def get_indices(self, symbol: str = "", country: str = "") -> APIResult:
        """Lists market indices. Data: ``schemas.Indices``."""
        return self._request("indices", schemas.Indices, symbol=symbol, country=country)

    def get_etfs(self, symbol: str = "", exchange: str = "", country: str = "",
                 show_plan: bool = False) -> APIResult:
        """Lists ETFs matching the filters. Data: ``schemas.Etfs``."""
        return self._request("etfs", schemas.Etfs,
                             symbol=symbol, exchange=exchange, country=country,
                             show_plan=show_plan)

    # --- Core data ---

    def get_time_series(self, symbol: str, interval: str, exchange: str = "",
                        country: str = "", instrument_type: str = "",
                        output_size: Optional[int] = None,
                        pre_post: Optional[bool] = None) -> APIResult:
        """
        Fetches OHLCV bars for one symbol. Data: ``schemas.TimeSeries``.

        An unknown symbol yields ``NotFoundError``; a symbol outside the
        account's plan yields ``PlanRestrictedError``.
        """
        return self._request("time_series", schemas.TimeSeries, refine=True,
                             symbol=symbol, interval=interval, exchange=exchange,
                             country=country, type=instrument_type,
                             outputsize=output_size, prepost=pre_post)

    def get_quotes(self, symbols: Union[str, Sequence[str]], interval: str = "",
                   exchange: str = "", country: str = "",
                   volume_time_period: Optional[int] = None,
                   instrument_type: str = "", pre_post: Optional[bool] = None,
                   timezone: str = "", decimal_places: Optional[int] = None) -> APIResult:
        """
        Fetches quotes for one or more symbols. Data: ``schemas.Quotes``.

        For a multi-symbol request, unknown symbols are reported in
        ``Quotes.errors`` and the call's own error stays None. For a single
        symbol the provider returns the error directly, which becomes the
        call's error.

        Raises:
            ValueError: ``symbols`` is empty.
        """
        if isinstance(symbols, str):
            symbols = [symbols]
        symbols = [s for s in symbols if s]
        if not symbols:
            raise ValueError("get_quotes requires at least one symbol.")

        return self._request("quote", decode_quotes, refine=True,
                             symbol=",".join(symbols), interval=interval, exchange=exchange,
                             country=country, volume_time_period=volume_time_period,
                             type=instrument_type, prepost=pre_post, timezone=timezone,
                             dp=decimal_places)

    def get_exchange_rate(self, symbol: str, timezone: str = "",
                          precision: Optional[int] = None) -> APIResult:
        """Fetches the rate of a currency pair such as ``"USD/JPY"``. Data: ``schemas.ExchangeRate``."""
        return self._request("exchange_rate", schemas.ExchangeRate, refine=True,
                             symbol=symbol, timezone=timezone, precision=precision)

    def get_market_movers(self, instrument: str = "stocks", direction: str = "",
                          output_size: Optional[int] = None, country: str = "",
                          decimal_places: Optional[int] = None) -> APIResult:
        """Lists the top gainers or losers of a market. Data: ``schemas.MarketMovers``."""
        return self._request("market_movers", schemas.MarketMovers,
                             instrument=instrument, direction=direction,
                             outputsize=output_size, country=country, dp=decimal_places)

    def get_market_state(self, exchange: str = "", code: str = "", country: str = "") -> APIResult:
        """
        Fetches the open or closed state of exchanges. Data: ``List[schemas.MarketState]``.

        A bare ``[]`` yields ``NotFoundError``.
        """
        return self._request("market_state", _market_state_list.validate_python,
                             exchange=exchange, code=code, country=country)

    # --- Fundamentals ---

    def get_profile(self, symbol: str, exchange: str = "", country: str = "") -> APIResult:
        """Fetches the company profile of a symbol. Data: ``schemas.Profile``."""
        return self._request("profile", schemas.Profile,
                             symbol=symbol, exchange=exchange, country=country)

    def get_insider_transactions(self, symbol: str, exchange: str = "",
                                 country: str = "") -> APIResult:
        """Lists insider trades of a symbol. Data: ``schemas.InsiderTransactions``."""
        return self._request("insider_transactions", schemas.InsiderTransactions,
                             symbol=symbol, exchange=exchange, country=country)

    def get_dividends(self, symbol: str, exchange: str = "", country: str = "",
                      range_: str = "", start_date: str = "", end_date: str = "") -> APIResult:
        """
        Lists dividend payments of a symbol. Data: ``schemas.Dividends``.

        ``range_`` is the provider's ``range`` parameter (e.g. "last", "full").
        """
        return self._request("dividends", schemas.Dividends,
                             symbol=symbol, exchange=exchange, country=country,
                             range=range_, start_date=start_date, end_date=end_date)

    def get_statistics(self, symbol: str, exchange: str = "", country: str = "") -> APIResult:
        """Fetches valuation and financial statistics of a symbol. Data: ``schemas.Statistics``."""
        return self._request("statistics", schemas.Statistics,
                             symbol=symbol, exchange=exchange, country=country)

    def get_earnings_calendar(self, decimal_places: Optional[int] = None,
                              start_date: str = "", end_date: str = "") -> APIResult:
        """Lists earnings reports by date. Data: ``schemas.Earnings``."""
        return self._request("earnings_calendar", schemas.Earnings,
                             dp=decimal_places, start_date=start_date, end_date=end_date)

    def get_income_statement(self, symbol: str, exchange: str = "", country: str = "",
                             period: str = "", start_date: str = "",
                             end_date: str = "") -> APIResult:
        """Fetches income statements of a symbol. Data: ``schemas.IncomeStatement``."""
        return self._request("income_statement", schemas.IncomeStatement,
                             symbol=symbol, exchange=exchange, country=country,
                             period=period, start_date=start_date, end_date=end_date)

    def get_balance_sheet(self, symbol: str, exchange: str = "", country: str = "",
                          period: str = "", start_date: str = "",
                          end_date: str = "") -> APIResult:
        """Fetches balance sheets of a symbol. Data: ``schemas.BalanceSheet``."""
        return self._request("balance_sheet", schemas.BalanceSheet,
                             symbol=symbol, exchange=exchange, country=country,
                             period=period, start_date=start_date, end_date=end_date)

    def get_cash_flow(self, symbol: str, exchange: str = "", country: str = "",
                      period: str = "", start_date: str = "", end_date: str = "") -> APIResult:
        """Fetches cash flow statements of a symbol. Data: ``schemas.CashFlow``."""
        return self._request("cash_flow", schemas.CashFlow,
                             symbol=symbol, exchange=exchange, country=country,
                             period=period, start_date=start_date, end_date=end_date)

    # --- Advanced ---

    def get_usage(self) -> APIResult:
        """Reports API credit usage for the current minute and day. Data: ``schemas.Usage``."""
        return self._request("usage", schemas.Usage)

    def close(self):
        """Closes the underlying transport's connection pool."""
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()
