# twelvedatapy/real_time/price_stream.py

import json
import logging
import queue
import threading
from typing import Any, Callable, Iterator, Optional, Sequence

from pydantic import ValidationError
from websockets.exceptions import ConnectionClosed, WebSocketException
from websockets.sync.client import ClientConnection, connect

from twelvedatapy.api.exceptions import StreamError
from twelvedatapy.api.schemas import PriceEvent
from twelvedatapy.config import (
    API_KEY as CONFIG_API_KEY,
    WS_URL as CONFIG_WS_URL,
    WS_CLOSE_GRACE_SEC,
    WS_EVENTS_QUEUE_SIZE,
    WS_PING_PERIOD_SEC,
    WS_PRICE_EVENT_TYPE,
    WS_WRITE_WAIT_SEC,
    mask_api_key
)
from .stream_state import StreamConnectionState

logger = logging.getLogger(__name__)

StreamErrorCallback = Callable[[Exception], None]
StreamStateChangeCallback = Callable[[StreamConnectionState, StreamConnectionState], None]

class PriceStream:
    """
    Streams price ticks from the provider's WebSocket endpoint.

    ``subscribe`` blocks the calling thread: it runs a reader thread that
    decodes frames into :class:`PriceEvent` and puts them on a bounded queue,
    while the calling thread sends keep-alive pings until stopped. Only frames
    with ``"event": "price"`` are queued. When the queue is full the reader
    blocks until the consumer catches up.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        ws_url: Optional[str] = None,
        queue_size: int = WS_EVENTS_QUEUE_SIZE,
        ping_period: float = WS_PING_PERIOD_SEC,
        close_grace: float = WS_CLOSE_GRACE_SEC,
        log: Optional[logging.Logger] = None,
        on_state_change_callback: Optional[StreamStateChangeCallback] = None,
        on_error_callback: Optional[StreamErrorCallback] = None,
    ):
        self.api_key = api_key or CONFIG_API_KEY
        self.ws_url = ws_url or CONFIG_WS_URL
        self.ping_period = ping_period
        self.close_grace = close_grace
        self.logger = log or logger
        self.on_state_change_callback = on_state_change_callback
        self.on_error_callback = on_error_callback

        self._events: "queue.Queue[PriceEvent]" = queue.Queue(maxsize=queue_size)
        self._stop_event = threading.Event()
        self._state_lock = threading.Lock()
        self.connection_status = StreamConnectionState.NOT_INITIALIZED
        self.connection: Optional[ClientConnection] = None

    # --- State handling ---

    def _set_connection_state(self, new_state: StreamConnectionState, reason: str = ""):
        with self._state_lock:
            old_state = self.connection_status
            self.connection_status = new_state
        if old_state == new_state:
            return
        self.logger.info("PriceStream: state %s -> %s%s", old_state.name, new_state.name,
                         f" ({reason})" if reason else "")
        if self.on_state_change_callback:
            try:
                self.on_state_change_callback(old_state, new_state)
            except Exception as e:  # pylint: disable=broad-except
                self.logger.error("PriceStream: error in state change callback: %s", e, exc_info=True)

    def _report_error(self, error: Exception):
        if self.on_error_callback:
            try:
                self.on_error_callback(error)
            except Exception as e:  # pylint: disable=broad-except
                self.logger.error("PriceStream: error in error callback: %s", e, exc_info=True)

    # --- Consumer side ---

    def consume(self) -> "queue.Queue[PriceEvent]":
        """Returns the queue the reader puts price events on."""
        return self._events

    def events(self, timeout: Optional[float] = None) -> Iterator[PriceEvent]:
        """
        Yields price events as they arrive.

        Args:
            timeout (Optional[float]): Stop iterating after this many seconds
                without an event. None waits indefinitely.
        """
        while True:
            try:
                yield self._events.get(timeout=timeout)
            except queue.Empty:
                return

    def stop(self):
        """Requests ``subscribe`` to close the connection and return."""
        self._stop_event.set()

    # --- Connection side ---

    def _handle_frame(self, message: Any):
        try:
            frame = json.loads(message)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            self.logger.warning("PriceStream: malformed frame skipped (%s): %r", e, message[:200])
            return
        if not isinstance(frame, dict):
            self.logger.warning("PriceStream: unexpected frame skipped: %r", message[:200])
            return
        if frame.get("event") != WS_PRICE_EVENT_TYPE:
            self.logger.debug("PriceStream: dropping '%s' frame.", frame.get("event"))
            return
        try:
            event = PriceEvent.model_validate(frame)
        except ValidationError as e:
            self.logger.warning("PriceStream: price frame failed validation, skipped: %s", e)
            return
        self._events.put(event)

    def _get_connection_state(self) -> StreamConnectionState:
        with self._state_lock:
            return self.connection_status

    def _read_loop(self, connection: ClientConnection, done: threading.Event,
                   stop_event: threading.Event):
        try:
            for message in connection:
                self._handle_frame(message)
        except ConnectionClosed as e:
            if self._get_connection_state() != StreamConnectionState.STOPPING:
                self.logger.warning("PriceStream: connection closed by peer: %s", e)
                self._report_error(e)
        finally:
            # done first, so the keep-alive loop sees a peer close when it wakes.
            done.set()
            stop_event.set()

    def _open(self) -> ClientConnection:
        url = f"{self.ws_url}?apikey={self.api_key}"
        self.logger.info("PriceStream: connecting to %s?apikey=%s", self.ws_url, mask_api_key(self.api_key))
        self._set_connection_state(StreamConnectionState.CONNECTING)
        try:
            return connect(url, open_timeout=WS_WRITE_WAIT_SEC, close_timeout=self.close_grace,
                           ping_interval=None, ping_timeout=None)
        except (OSError, TimeoutError, WebSocketException) as e:
            self._set_connection_state(StreamConnectionState.ERROR, f"dial failed: {type(e).__name__}")
            self._report_error(e)
            raise StreamError(f"Failed to connect to {self.ws_url}: {e}") from e

    def subscribe(self, symbols: Sequence[str], stop_event: Optional[threading.Event] = None):
        """
        Connects, subscribes to ``symbols`` and blocks until stopped.

        Returns when ``stop_event`` (or ``stop()``) is set, after sending a
        close frame and giving the reader ``close_grace`` seconds to finish.
        Also returns when the peer closes the connection or a pong is missed;
        ``stop_event`` is set in that case too.

        Args:
            symbols (Sequence[str]): Symbols to subscribe to, e.g. ``["AAPL", "EUR/USD"]``.
            stop_event (Optional[threading.Event]): Cancellation signal.

        Raises:
            ValueError: ``symbols`` is empty.
            StreamError: The connection could not be established or the
                subscribe frame could not be sent.
        """
        symbols = [s for s in symbols if s]
        if not symbols:
            raise ValueError("PriceStream.subscribe requires at least one symbol.")
        if stop_event is None:
            self._stop_event.clear()
            stop_event = self._stop_event

        self.connection = self._open()
        self._set_connection_state(StreamConnectionState.CONNECTED)

        done = threading.Event()
        reader = threading.Thread(target=self._read_loop, args=(self.connection, done, stop_event),
                                  name="PriceStreamReader", daemon=True)
        reader.start()

        try:
            self._send_subscribe(symbols)
            self._keepalive(stop_event)
        finally:
            self._shutdown(reader, done)

    def _send_subscribe(self, symbols: Sequence[str]):
        frame = {"action": "subscribe", "params": {"symbols": ",".join(symbols)}}
        try:
            self.connection.send(json.dumps(frame))
        except (ConnectionClosed, OSError) as e:
            self._set_connection_state(StreamConnectionState.ERROR, "subscribe failed")
            self._report_error(e)
            raise StreamError(f"Failed to send subscribe frame: {e}") from e
        self.logger.info("PriceStream: subscribed to %s", frame["params"]["symbols"])

    def _keepalive(self, stop_event: threading.Event):
        pong_waiter: Optional[threading.Event] = None
        while not stop_event.wait(self.ping_period):
            if pong_waiter is not None and not pong_waiter.is_set():
                self.logger.warning("PriceStream: no pong within %.1fs, closing.", self.ping_period)
                break
            try:
                pong_waiter = self.connection.ping()
            except (ConnectionClosed, OSError) as e:
                self.logger.warning("PriceStream: ping failed: %s", e)
                break

    def _shutdown(self, reader: threading.Thread, done: threading.Event):
        if done.is_set():
            self.connection.close()
            self._set_connection_state(StreamConnectionState.DISCONNECTED, "closed by peer")
            return

        self._set_connection_state(StreamConnectionState.STOPPING)
        # close() sends the close frame and waits up to close_timeout for the peer.
        self.connection.close()
        reader.join(self.close_grace)
        if reader.is_alive():
            self.logger.warning("PriceStream: reader did not finish within %.1fs.", self.close_grace)
        self._set_connection_state(StreamConnectionState.DISCONNECTED)
