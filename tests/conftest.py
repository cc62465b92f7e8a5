# twelvedatapy/tests/conftest.py
import json
import os
import sys
from typing import Any, Dict, Optional
from unittest.mock import MagicMock

import pytest

# Ensures that the 'src' directory is on sys.path when pytest runs without an
# installed package, so that `from twelvedatapy import ...` works in tests.
SRC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from twelvedatapy.api.transport import ProviderResponse  # pylint: disable=wrong-import-position


def make_http_response(body: Any, status_code: int = 200,
                       headers: Optional[Dict[str, str]] = None) -> MagicMock:
    """Builds a stand-in for ``requests.Response`` as returned by ``Session.get``."""
    if isinstance(body, bytes):
        content = body
    elif isinstance(body, str):
        content = body.encode("utf-8")
    else:
        content = json.dumps(body).encode("utf-8")
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.text = content.decode("utf-8")
    response.headers = headers if headers is not None else {}
    return response


class FakeTransport:
    """Transport double that replays one canned ``ProviderResponse`` (or raises)."""
    def __init__(self, body: Any = b"{}", credits_left: int = 10, credits_used: int = 1,
                 error: Optional[Exception] = None):
        if not isinstance(body, (bytes, str)):
            body = json.dumps(body)
        self.body = body.encode("utf-8") if isinstance(body, str) else body
        self.credits_left = credits_left
        self.credits_used = credits_used
        self.error = error
        self.urls = []
        self.log_urls = []

    def get(self, url: str, log_url: Optional[str] = None) -> ProviderResponse:
        self.urls.append(url)
        self.log_urls.append(log_url)
        if self.error is not None:
            raise self.error
        return ProviderResponse(self.body, 200, self.credits_left, self.credits_used)


@pytest.fixture
def response_factory():
    return make_http_response


@pytest.fixture
def fake_transport_factory():
    return FakeTransport


@pytest.fixture
def credit_headers():
    return {"api-credits-left": "10", "api-credits-used": "1"}
