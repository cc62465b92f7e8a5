"""
Example 02: Multi-symbol quotes.

Requests quotes for several symbols in one call. Unknown symbols do not fail
the call: they are reported in the result's ``errors`` list next to the
quotes that succeeded.
"""
# pylint: disable=invalid-name  # Allow filename for example script
import sys
import os
import logging
import argparse

src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from twelvedatapy import APIClient, NotFoundError, PlanRestrictedError, estimate_credits

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s [%(levelname)s]: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger("MultiSymbolQuotesExample")


def run_example(symbols):
    logger.info("Requesting quotes for %s (estimated cost: %d credits)",
                ", ".join(symbols), estimate_credits("quote", symbols=len(symbols)))
    api_client = APIClient()
    result = api_client.get_quotes(symbols)

    if isinstance(result.error, NotFoundError):
        logger.warning("Symbol not found: %s", result.error)
        return
    if isinstance(result.error, PlanRestrictedError):
        logger.warning("Not available with the current plan: %s", result.error)
        return
    if result.error is not None:
        logger.error("Quote request failed: %s", result.error)
        return

    for quote in result.data.data:
        logger.info("  %-10s close=%s change=%s%% (%s)",
                    quote.symbol, quote.close, quote.percent_change, quote.datetime)
    for quote_error in result.data.errors:
        symbol = quote_error.meta.symbol if quote_error.meta else "?"
        logger.warning("  %-10s error %s: %s", symbol, quote_error.code, quote_error.message)
    logger.info("Credits used: %d, left: %d", result.credits_used, result.credits_left)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fetch quotes for several symbols in one call.")
    parser.add_argument("symbols", nargs="*", default=["AAPL", "EUR/USD", "NOSUCHSYMBOL"],
                        help="Symbols to quote.")
    args = parser.parse_args()
    run_example(args.symbols)
