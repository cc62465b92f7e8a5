# twelvedatapy/api/exceptions.py
"""
Exceptions module for twelvedatapy.

The endpoint methods of :class:`~twelvedatapy.api.client.APIClient` return
instances of these classes as error values inside an ``APIResult`` rather
than raising them. They remain ordinary exceptions so callers can raise
them (see ``APIResult.raise_for_error``).
"""

from typing import Any, Optional


class LibraryError(Exception):
    """Base exception class for all twelvedatapy errors."""
    pass


class ConfigurationError(LibraryError):
    """Raised when there is a configuration error."""
    pass


class APIError(LibraryError):
    """Base class for API-related errors.

    Attributes:
        message (str): The error message.
        error_code (Optional[Any]): The provider error code, if available.
        raw_response (Optional[Any]): The raw response body, if available.
        http_status_code (Optional[int]): The HTTP status code, if applicable.
    """
    def __init__(self, message: str, error_code: Any = None, raw_response: Any = None,
                 http_status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.raw_response = raw_response
        self.http_status_code = http_status_code

    def __str__(self):
        parts = [self.message]
        if self.error_code is not None:
            parts.append(f"API ErrorCode: {self.error_code}")
        if self.http_status_code is not None:
            parts.append(f"HTTP Status: {self.http_status_code}")
        return " | ".join(parts)


class TransportError(APIError):
    """Raised when no usable HTTP response was obtained (dial failure, timeout, non-200)."""
    pass


class APITimeoutError(TransportError):
    """Raised when an API request times out."""
    def __init__(self, message: str = "API request timed out.", error_code: Any = None,
                 raw_response: Any = None):
        super().__init__(message, error_code=error_code, raw_response=raw_response)


class APIHttpError(TransportError):
    """Raised when the provider answers with a status code other than 200."""
    def __init__(self, http_status_code: int, message: Optional[str] = None,
                 response_text: Optional[str] = None):
        self.status_code = http_status_code
        self.response_text = response_text

        msg = message or f"HTTP error {http_status_code}"
        if response_text and not message and len(response_text) < 200:
            msg += f" - Server Response: {response_text}"
        elif response_text and not message:
            msg += f" - Server Response Preview: {response_text[:100]}..."

        super().__init__(msg, http_status_code=http_status_code)


class APIResponseParsingError(APIError):
    """Raised when a response body is not valid JSON or does not match the expected shape."""
    def __init__(self, message: str, raw_response_text: Optional[str] = None,
                 error_code: Any = None, raw_response: Any = None):
        super().__init__(message, error_code=error_code, raw_response=raw_response)
        self.raw_response_text = raw_response_text


class RateLimitExceededError(APIError):
    """The provider reported code 429: the credit quota for the current period is exhausted."""
    pass


class NotFoundError(APIError):
    """No matching records: empty-array body, code 404, or a 'symbol not found' 400."""
    pass


class PlanRestrictedError(APIError):
    """The requested symbol or endpoint is not available with the account's plan."""
    pass


class ForbiddenError(APIError):
    """The provider reported code 403, typically an invalid or demo API key."""
    pass


class InvalidProviderResponseError(APIError):
    """The provider reported an error code with no more specific mapping."""
    pass


class StreamError(LibraryError):
    """Raised when the price stream cannot be established or written to."""
    pass
