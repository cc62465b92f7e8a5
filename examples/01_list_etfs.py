"""
Example 01: List ETFs.

This script demonstrates:
1. Initializing the APIClient from the .env / environment configuration.
2. Calling an endpoint and unpacking its (data, credits_left, credits_used, error) result.
3. Handling the returned error value without exceptions.
"""
# pylint: disable=invalid-name  # Allow filename for example script
import sys
import os
import logging
import argparse

# ---- sys.path modification ----
# Ensure the 'src' directory is on the path to find the 'twelvedatapy' package
src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if src_path not in sys.path:
    sys.path.insert(0, src_path)
# ---- End sys.path modification ----

from twelvedatapy import APIClient, RateLimitExceededError

# --- Configure Logging ---
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s [%(levelname)s]: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def run_example(symbol: str, exchange: str, limit: int):
    """Lists ETFs matching the filters and reports the credits charged."""
    logger.info("--- Example 01: List ETFs ---")
    api_client = APIClient()

    etfs, credits_left, credits_used, error = api_client.get_etfs(
        symbol=symbol, exchange=exchange, show_plan=True
    )
    logger.info("Credits used: %d, credits left this minute: %d", credits_used, credits_left)

    if isinstance(error, RateLimitExceededError):
        logger.warning("Out of API credits for now: %s", error)
        return
    if error is not None:
        logger.error("Failed to list ETFs: %s (%s)", error, type(error).__name__)
        return

    logger.info("Found %d ETFs. Showing up to %d:", len(etfs.data), limit)
    for etf in etfs.data[:limit]:
        plan = etf.access.plan if etf.access else "N/A"
        logger.info("  %-8s %-45s %-6s %-10s plan=%s",
                    etf.symbol, (etf.name or "")[:45], etf.currency, etf.exchange, plan)
    api_client.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="List ETFs available from the provider.")
    parser.add_argument("--symbol", type=str, default="", help="Filter by symbol.")
    parser.add_argument("--exchange", type=str, default="", help="Filter by exchange.")
    parser.add_argument("--limit", type=int, default=20, help="How many ETFs to print.")
    args = parser.parse_args()

    run_example(symbol=args.symbol, exchange=args.exchange, limit=args.limit)
