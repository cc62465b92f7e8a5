# twelvedatapy/credits.py
"""
Published API credit cost per endpoint call.

Informational only: the client reports the credits the provider actually
charged (see ``APIResult.credits_used``) and never throttles on these numbers.
Costs are per symbol for batch-capable endpoints.
"""
from typing import Dict

ENDPOINT_CREDIT_COST: Dict[str, int] = {
    # Reference data
    "stocks": 1,
    "etfs": 1,
    "indices": 1,
    "exchanges": 1,
    "market_state": 1,
    # Core data
    "time_series": 1,
    "exchange_rate": 1,
    "quote": 1,
    "market_movers": 100,
    # Fundamentals
    "profile": 10,
    "dividends": 20,
    "splits": 20,
    "earnings": 20,
    "earnings_calendar": 40,
    "statistics": 50,
    "insider_transactions": 200,
    "income_statement": 100,
    "balance_sheet": 100,
    "cash_flow": 100,
    "key_executives": 1000,
    "institutional_holders": 1500,
    "fund_holders": 1500,
    "direct_holders": 1500,
    # Advanced
    "usage": 0,
}


def estimate_credits(endpoint: str, symbols: int = 1) -> int:
    """
    Estimates the credits a call will consume.

    Args:
        endpoint (str): Endpoint name as used in ``config.URL_TEMPLATES``.
        symbols (int): Number of symbols requested in one batch call.

    Returns:
        int: ``cost * symbols``.

    Raises:
        ValueError: Unknown endpoint or a symbol count below 1.
    """
    if endpoint not in ENDPOINT_CREDIT_COST:
        raise ValueError(f"Unknown endpoint '{endpoint}'.")
    if symbols < 1:
        raise ValueError(f"symbols must be at least 1, got {symbols}.")
    return ENDPOINT_CREDIT_COST[endpoint] * symbols
