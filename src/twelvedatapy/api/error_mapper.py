# twelvedatapy/api/error_mapper.py
"""
Maps classified response outcomes to specific APIError instances.

The provider reports an unknown symbol and a plan restriction as code 400
with a free-text message. For endpoints that can fail per symbol the message
is matched once here; the resulting error type is final.
"""
import logging
from typing import Optional, Union

from .classifier import ClassifiedOutcome, OutcomeKind, ProviderErrorKind
from .exceptions import (
    APIError, APIResponseParsingError, ForbiddenError, InvalidProviderResponseError,
    NotFoundError, PlanRestrictedError, RateLimitExceededError
)

logger = logging.getLogger(__name__)

SYMBOL_NOT_FOUND_PHRASES = ("**symbol** not found", "symbol not found")
PLAN_RESTRICTED_PHRASE = "is not available with your plan"

# Expected outcomes; callers should not log these as errors.
EXPECTED_ERROR_TYPES = (RateLimitExceededError, NotFoundError)


def refine_bad_request(message: Optional[str]) -> type:
    """
    Narrows a code-400 message to an error class.

    Args:
        message (Optional[str]): The provider's error message.

    Returns:
        type: ``NotFoundError``, ``PlanRestrictedError`` or ``InvalidProviderResponseError``.
    """
    lowered = (message or "").lower()
    if any(phrase in lowered for phrase in SYMBOL_NOT_FOUND_PHRASES):
        return NotFoundError
    if PLAN_RESTRICTED_PHRASE in lowered:
        return PlanRestrictedError
    return InvalidProviderResponseError


def _body_text(raw_body: Union[bytes, str, None]) -> Optional[str]:
    if raw_body is None:
        return None
    if isinstance(raw_body, bytes):
        return raw_body.decode("utf-8", errors="replace")
    return raw_body


# pylint: disable=too-many-return-statements
def map_outcome_to_error(endpoint: str, outcome: ClassifiedOutcome,
                         raw_body: Union[bytes, str, None] = None,
                         refine: bool = False) -> Optional[APIError]:
    """
    Maps a classified outcome to the error value a call returns.

    Args:
        endpoint (str): The endpoint name (e.g., "time_series"), used in messages.
        outcome (ClassifiedOutcome): Result of ``classify``.
        raw_body (Union[bytes, str, None]): The body, attached to parsing errors.
        refine (bool): Whether a 400 is refined by its message text.

    Returns:
        Optional[APIError]: None for ``SUCCESS``, otherwise the specific error.
    """
    if outcome.kind is OutcomeKind.SUCCESS:
        return None

    if outcome.kind is OutcomeKind.NOT_FOUND:
        return NotFoundError(f"No records found for '{endpoint}'.", raw_response=[])

    if outcome.kind is OutcomeKind.UNMARSHAL_FAILURE:
        return APIResponseParsingError(
            f"Invalid JSON response from '{endpoint}': {outcome.parse_error}",
            raw_response_text=_body_text(raw_body)
        )

    detail = outcome.detail
    code = detail.code if detail else None
    message = detail.message if detail and detail.message else None
    raw = detail.model_dump(exclude_unset=True) if detail else None

    if outcome.error_kind is ProviderErrorKind.TOO_MANY_REQUESTS:
        return RateLimitExceededError(message or f"API credits exhausted ('{endpoint}').", code, raw)
    if outcome.error_kind is ProviderErrorKind.NOT_FOUND_BY_CODE:
        return NotFoundError(message or f"Not found ('{endpoint}').", code, raw)
    if outcome.error_kind is ProviderErrorKind.FORBIDDEN:
        return ForbiddenError(message or f"Access forbidden ('{endpoint}').", code, raw)
    if outcome.error_kind is ProviderErrorKind.BAD_REQUEST:
        error_cls = refine_bad_request(message) if refine else InvalidProviderResponseError
        return error_cls(message or f"Bad request ('{endpoint}').", code, raw)

    logger.debug(
        "ErrorMapper: No specific mapping for endpoint '%s', code '%s', msg: '%s'.",
        endpoint, code, message
    )
    return InvalidProviderResponseError(
        message or f"Invalid response from '{endpoint}' (API code {code}).", code, raw
    )
