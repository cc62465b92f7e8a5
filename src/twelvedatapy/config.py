# twelvedatapy/config.py
import os
import logging
from typing import Any, Dict, Optional

from dotenv import load_dotenv, find_dotenv

logger = logging.getLogger(__name__)

# --- .env loading ---
project_root_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
explicit_env_path = os.path.join(project_root_path, '.env')

logger.debug("Config: Attempting to load .env from explicit path: %s", explicit_env_path)

dotenv_path_to_load: Optional[str] = None
if os.path.exists(explicit_env_path):
    dotenv_path_to_load = explicit_env_path
else:
    logger.debug(
        "Config: Explicit .env path '%s' not found. Using find_dotenv default search.",
        explicit_env_path
    )
    found_path = find_dotenv(usecwd=True, raise_error_if_not_found=False)
    if found_path and os.path.exists(found_path):
        dotenv_path_to_load = found_path

if dotenv_path_to_load:
    logger.info("Config: Loading environment variables from: %s", dotenv_path_to_load)
    if not load_dotenv(dotenv_path=dotenv_path_to_load, override=False):
        logger.warning(
            "Config: python-dotenv reported no variables loaded from %s. "
            "Check file content or permissions.",
            dotenv_path_to_load
        )
else:
    logger.debug("Config: No .env file found. Relying on process environment variables.")


# --- Core settings ---
DEFAULT_API_KEY = "demo"
DEFAULT_BASE_URL = "https://api.twelvedata.com"
DEFAULT_WS_URL = "wss://ws.twelvedata.com/v1/quotes/price"
DEFAULT_TIMEOUT_SEC = 15.0

API_KEY = os.getenv("TWELVEDATA_API_KEY") or DEFAULT_API_KEY
BASE_URL = (os.getenv("TWELVEDATA_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")
WS_URL = os.getenv("TWELVEDATA_WS_URL") or DEFAULT_WS_URL

TIMEOUT_SEC_STR = os.getenv("TWELVEDATA_TIMEOUT_SEC")
TIMEOUT_SEC: float = DEFAULT_TIMEOUT_SEC
if TIMEOUT_SEC_STR and TIMEOUT_SEC_STR.strip():
    try:
        TIMEOUT_SEC = float(TIMEOUT_SEC_STR)
    except ValueError:
        logger.warning(
            "Config: TWELVEDATA_TIMEOUT_SEC ('%s') is not a valid number. Using default %s.",
            TIMEOUT_SEC_STR, DEFAULT_TIMEOUT_SEC
        )

if API_KEY == DEFAULT_API_KEY:
    logger.warning(
        "Config WARNING: TWELVEDATA_API_KEY is not set. Using the 'demo' key, "
        "which only serves a handful of symbols."
    )


# --- Credit accounting headers ---
CREDITS_LEFT_HEADER = "api-credits-left"
CREDITS_USED_HEADER = "api-credits-used"


# --- Endpoint URL templates (appended to BASE_URL) ---
URL_TEMPLATES: Dict[str, str] = {
    # Reference data
    "stocks": "/stocks?apikey={apikey}&symbol={symbol}&exchange={exchange}"
              "&country={country}&type={type}&show_plan={show_plan}",
    "exchanges": "/exchanges?apikey={apikey}&type={type}&name={name}&code={code}&country={country}",
    "indices": "/indices?apikey={apikey}&symbol={symbol}&country={country}",
    "etfs": "/etf?apikey={apikey}&symbol={symbol}&exchange={exchange}"
            "&country={country}&show_plan={show_plan}",
    # Core data
    "time_series": "/time_series?apikey={apikey}&symbol={symbol}&interval={interval}"
                   "&exchange={exchange}&country={country}&type={type}"
                   "&outputsize={outputsize}&prepost={prepost}",
    "quote": "/quote?apikey={apikey}&symbol={symbol}&interval={interval}&exchange={exchange}"
             "&country={country}&volume_time_period={volume_time_period}&type={type}"
             "&prepost={prepost}&dp={dp}&timezone={timezone}",
    "exchange_rate": "/exchange_rate?apikey={apikey}&symbol={symbol}&precision={precision}"
                     "&timezone={timezone}",
    "market_movers": "/market_movers/{instrument}?apikey={apikey}&direction={direction}"
                     "&outputsize={outputsize}&country={country}&dp={dp}",
    "market_state": "/market_state?apikey={apikey}&exchange={exchange}&code={code}&country={country}",
    # Fundamentals
    "earnings_calendar": "/earnings_calendar?apikey={apikey}&dp={dp}"
                         "&start_date={start_date}&end_date={end_date}",
    "profile": "/profile?apikey={apikey}&symbol={symbol}&exchange={exchange}&country={country}",
    "insider_transactions": "/insider_transactions?apikey={apikey}&symbol={symbol}"
                            "&exchange={exchange}&country={country}",
    "income_statement": "/income_statement?apikey={apikey}&symbol={symbol}&exchange={exchange}"
                        "&country={country}&period={period}&start_date={start_date}&end_date={end_date}",
    "balance_sheet": "/balance_sheet?apikey={apikey}&symbol={symbol}&exchange={exchange}"
                     "&country={country}&period={period}&start_date={start_date}&end_date={end_date}",
    "cash_flow": "/cash_flow?apikey={apikey}&symbol={symbol}&exchange={exchange}"
                 "&country={country}&period={period}&start_date={start_date}&end_date={end_date}",
    "dividends": "/dividends?apikey={apikey}&symbol={symbol}&exchange={exchange}"
                 "&country={country}&range={range}&start_date={start_date}&end_date={end_date}",
    "statistics": "/statistics?apikey={apikey}&symbol={symbol}&exchange={exchange}&country={country}",
    # Advanced
    "usage": "/api_usage?apikey={apikey}",
}


# --- WebSocket settings ---
WS_PONG_WAIT_SEC = 60.0
WS_PING_PERIOD_SEC = (WS_PONG_WAIT_SEC * 9) / 10
WS_WRITE_WAIT_SEC = 10.0
WS_CLOSE_GRACE_SEC = 1.0
WS_EVENTS_QUEUE_SIZE = 1024
WS_PRICE_EVENT_TYPE = "price"


def mask_api_key(value: Optional[str]) -> str:
    """Obscures all but the last four characters of an API key for logging."""
    if not value:
        return "None"
    if len(value) > 4:
        return f"{'*' * (len(value) - 4)}{value[-4:]}"
    return "***"


def _log_config_var(var_name: str, var_value: Any,
                    is_sensitive: bool = False, is_url: bool = False):
    """
    Logs one effective configuration value, obscuring sensitive ones.

    Args:
        var_name (str): The name of the configuration variable.
        var_value (Any): The value of the configuration variable.
        is_sensitive (bool, optional): If True, the value will be obscured in logs.
        is_url (bool, optional): If True, logs at INFO level, otherwise DEBUG.
    """
    if var_value is None:
        logger.debug("Config: %s is not set or resolved to None.", var_name)
        return
    display_value = mask_api_key(str(var_value)) if is_sensitive else str(var_value)
    log_level = logging.INFO if is_url else logging.DEBUG
    logger.log(log_level, "Config: Effective %s: %s", var_name, display_value)


logger.debug("--- Effective Runtime Configuration ---")
_log_config_var("API_KEY", API_KEY, is_sensitive=True)
_log_config_var("BASE_URL", BASE_URL, is_url=True)
_log_config_var("WS_URL", WS_URL, is_url=True)
_log_config_var("TIMEOUT_SEC", TIMEOUT_SEC)
logger.debug("--- End of Effective Runtime Configuration ---")
