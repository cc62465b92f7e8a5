# twelvedatapy/__init__.py
"""
twelvedatapy: A Python client library for the Twelve Data market-data API.

This library provides a typed REST client whose calls return the decoded
data together with the provider's credit counters and an error value, and a
WebSocket stream of real-time price events.
"""
import logging

# Defined before the submodule imports below, which read it.
__version__ = "0.1.0"

# Configure a NullHandler for the library's root logger.
logging.getLogger(__name__).addHandler(logging.NullHandler())

from .api.client import APIClient, APIResult  # pylint: disable=wrong-import-position
from .api.exceptions import (  # pylint: disable=wrong-import-position
    LibraryError,
    ConfigurationError,
    APIError,
    TransportError,
    APITimeoutError,
    APIHttpError,
    APIResponseParsingError,
    RateLimitExceededError,
    NotFoundError,
    PlanRestrictedError,
    ForbiddenError,
    InvalidProviderResponseError,
    StreamError
)
# Pydantic schemas are exposed as a module: twelvedatapy.api_schemas.ModelName
from .api import schemas as api_schemas  # pylint: disable=wrong-import-position
from .config import API_KEY, BASE_URL, WS_URL  # pylint: disable=wrong-import-position
from .credits import ENDPOINT_CREDIT_COST, estimate_credits  # pylint: disable=wrong-import-position
from .real_time import PriceStream, StreamConnectionState  # pylint: disable=wrong-import-position

__all__ = [
    # Version
    "__version__",

    # from api.client.py
    "APIClient", "APIResult",

    # from api.exceptions.py
    "LibraryError", "ConfigurationError", "APIError", "TransportError",
    "APITimeoutError", "APIHttpError", "APIResponseParsingError",
    "RateLimitExceededError", "NotFoundError", "PlanRestrictedError",
    "ForbiddenError", "InvalidProviderResponseError", "StreamError",

    # Pydantic schemas
    "api_schemas",

    # from config.py
    "API_KEY", "BASE_URL", "WS_URL",

    # from credits.py
    "ENDPOINT_CREDIT_COST", "estimate_credits",

    # from real_time (...)
    "PriceStream", "StreamConnectionState",
]
