# twelvedatapy/api/__init__.py
"""
The twelvedatapy.api subpackage provides the REST client, the response
classifier and decoders, and the API-specific exceptions.
"""
from .client import APIClient, APIResult
from .classifier import ClassifiedOutcome, OutcomeKind, ProviderErrorKind, classify
from .quotes import decode_quotes
from .transport import HTTPTransport, ProviderResponse, parse_credits

from .exceptions import (
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

__all__ = [
    # From client.py
    "APIClient",
    "APIResult",

    # From classifier.py, quotes.py, transport.py
    "ClassifiedOutcome", "OutcomeKind", "ProviderErrorKind", "classify",
    "decode_quotes",
    "HTTPTransport", "ProviderResponse", "parse_credits",

    # Exceptions
    "APIError",
    "TransportError",
    "APITimeoutError",
    "APIHttpError",
    "APIResponseParsingError",
    "RateLimitExceededError",
    "NotFoundError",
    "PlanRestrictedError",
    "ForbiddenError",
    "InvalidProviderResponseError",
    "StreamError",
]
