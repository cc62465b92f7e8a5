# examples/03_price_stream.py
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

import logging
import threading
import argparse

from twelvedatapy import PriceStream, StreamConnectionState, StreamError

# --- Configure Logging ---
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s [%(levelname)s]: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger("PriceStreamExample")


def handle_stream_state_change(old_state: StreamConnectionState, new_state: StreamConnectionState):
    logger.info("PriceStream state changed: %s -> %s", old_state.name, new_state.name)

def handle_stream_error(error: Exception):
    logger.error("PriceStream error: %s", error)


def run_price_stream_example(symbols, duration_seconds: int):
    logger.info("--- Example: Real-Time Price Stream ---")
    logger.info("Symbols: %s. Running for %d seconds.", ", ".join(symbols), duration_seconds)

    stream = PriceStream(
        on_state_change_callback=handle_stream_state_change,
        on_error_callback=handle_stream_error
    )
    stop_event = threading.Event()
    subscriber = threading.Thread(target=stream.subscribe, args=(symbols, stop_event),
                                  name="PriceStreamSubscriber", daemon=True)
    subscriber.start()
    timer = threading.Timer(duration_seconds, stop_event.set)
    timer.start()

    try:
        while not stop_event.is_set() and subscriber.is_alive():
            for event in stream.events(timeout=1):
                logger.info("  %-10s %s %s (volume %s, ts %s)", event.symbol, event.price,
                            event.currency or "", event.day_volume, event.timestamp)
    except StreamError as e_stream:
        logger.error("STREAM ERROR: %s", e_stream)
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received. Shutting down stream...")
    finally:
        timer.cancel()
        stop_event.set()
        subscriber.join(5)
        logger.info("Price stream example finished (status: %s).", stream.connection_status.name)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Stream real-time prices for symbols.")
    parser.add_argument("symbols", nargs="*", default=["AAPL", "EUR/USD", "BTC/USD"],
                        help="Symbols to subscribe to.")
    parser.add_argument("--duration", type=int, default=60,
                        help="How long (in seconds) to run the stream.")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG level logging.")
    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.info("DEBUG logging enabled.")

    run_price_stream_example(args.symbols, args.duration)
