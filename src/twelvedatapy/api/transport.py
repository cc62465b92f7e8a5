# twelvedatapy/api/transport.py
"""
HTTP transport for the REST endpoints.

One GET per call, with a single immediate retry when establishing the
connection times out. Any status other than 200 is a transport failure and
the body is not inspected.
"""
import logging
import time
from typing import Mapping, NamedTuple, Optional, Tuple
from urllib.parse import urlsplit

import requests

from twelvedatapy import __version__ as library_version
from twelvedatapy.config import CREDITS_LEFT_HEADER, CREDITS_USED_HEADER, TIMEOUT_SEC
from .exceptions import APIHttpError, APITimeoutError, TransportError

logger = logging.getLogger(__name__)


class ProviderResponse(NamedTuple):
    """A received response: raw body, status code and the two credit counters."""
    body: bytes
    status_code: int
    credits_left: int
    credits_used: int


def _parse_credit_header(headers: Mapping[str, str], name: str,
                         log: logging.Logger) -> int:
    value = headers.get(name)
    if value is None:
        log.debug("Transport: credit header '%s' missing; counting 0.", name)
        return 0
    try:
        parsed = int(str(value).strip())
    except ValueError:
        log.warning("Transport: credit header '%s' has non-numeric value '%s'; counting 0.",
                    name, value)
        return 0
    if parsed < 0:
        log.warning("Transport: credit header '%s' is negative (%s); counting 0.", name, parsed)
        return 0
    return parsed


def parse_credits(headers: Optional[Mapping[str, str]],
                  log: Optional[logging.Logger] = None) -> Tuple[int, int]:
    """
    Reads ``(credits_left, credits_used)`` from response headers.

    Each side is parsed on its own; a missing or malformed header yields 0 for
    that side only and never fails the call.
    """
    log = log or logger
    if not headers:
        return 0, 0
    return (_parse_credit_header(headers, CREDITS_LEFT_HEADER, log),
            _parse_credit_header(headers, CREDITS_USED_HEADER, log))


def _path_and_query(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.path}?{parts.query}" if parts.query else parts.path


def redact_url(text: str, url: str, display_url: str) -> str:
    """
    Replaces ``url`` in ``text`` with ``display_url``.

    urllib3 messages quote only the path and query of the request, so that
    form is replaced as well.
    """
    if url == display_url:
        return text
    text = text.replace(url, display_url)
    return text.replace(_path_and_query(url), _path_and_query(display_url))


class HTTPTransport:
    """
    Issues GET requests through a shared ``requests.Session``.

    Args:
        session (Optional[requests.Session]): Session to use; a new one by default.
        timeout_sec (Optional[float]): Per-request timeout. Defaults to config.
        log (Optional[logging.Logger]): Logger to use instead of the module logger.
    """
    def __init__(self, session: Optional[requests.Session] = None,
                 timeout_sec: Optional[float] = None,
                 log: Optional[logging.Logger] = None):
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "User-Agent": f"twelvedatapy/{library_version}",
        })
        self.timeout = timeout_sec if timeout_sec is not None else TIMEOUT_SEC
        self.logger = log or logger

    def _send(self, url: str) -> requests.Response:
        try:
            return self.session.get(url, timeout=self.timeout)
        except requests.exceptions.ConnectTimeout:
            self.logger.warning("Transport: connect timeout, retrying once.")
            return self.session.get(url, timeout=self.timeout)

    def get(self, url: str, log_url: Optional[str] = None) -> ProviderResponse:
        """
        Performs one GET.

        Args:
            url (str): Full request URL.
            log_url (Optional[str]): URL variant safe to log (api key masked).

        Returns:
            ProviderResponse: Body, status and credit counters of a 200 response.

        Raises:
            APITimeoutError: The request timed out (after the connect retry).
            APIHttpError: The provider answered with a status other than 200.
            TransportError: Any other failure to obtain a response.
        """
        display_url = log_url or url
        started = time.monotonic()
        try:
            response = self._send(url)
        except requests.exceptions.Timeout as e:
            reason = redact_url(str(e), url, display_url)
            self.logger.error("Timeout during GET %s: %s", display_url, reason)
            raise APITimeoutError(f"Timeout during GET {display_url}.") from None
        except requests.exceptions.RequestException as e:
            reason = redact_url(str(e), url, display_url)
            self.logger.error("Request exception during GET %s: %s", display_url, reason)
            raise TransportError(f"Request exception during GET {display_url}: {reason}") from None

        elapsed_ms = (time.monotonic() - started) * 1000
        self.logger.debug("GET %s -> HTTP %s in %.1f ms", display_url, response.status_code, elapsed_ms)

        if response.status_code != 200:
            self.logger.error("HTTP error during GET %s: Status Code %s",
                              display_url, response.status_code)
            raise APIHttpError(response.status_code, response_text=response.text)

        credits_left, credits_used = parse_credits(response.headers, self.logger)
        return ProviderResponse(response.content, response.status_code, credits_left, credits_used)

    def close(self):
        self.session.close()
