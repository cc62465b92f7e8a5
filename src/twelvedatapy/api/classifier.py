# twelvedatapy/api/classifier.py
"""
Classifies raw provider response bodies.

Every endpoint call passes its body through :func:`classify` before any
endpoint-specific decoding. The provider answers HTTP 200 for
application-level failures and signals them inside the body instead, either
as a ``{"code", "message", "status"}`` envelope or, for some lookups, as a
bare ``[]``.
"""
import json
import logging
from enum import Enum, auto
from typing import Any, NamedTuple, Optional, Union

from pydantic import ValidationError

from .schemas import ErrorEnvelope

logger = logging.getLogger(__name__)

EMPTY_RESULT_SENTINEL = b"[]"


class OutcomeKind(Enum):
    """Top-level classification of a response body."""
    SUCCESS = auto()
    NOT_FOUND = auto()
    PROVIDER_ERROR = auto()
    UNMARSHAL_FAILURE = auto()


class ProviderErrorKind(Enum):
    """Provider error code families recognised in the error envelope."""
    BAD_REQUEST = auto()
    TOO_MANY_REQUESTS = auto()
    FORBIDDEN = auto()
    NOT_FOUND_BY_CODE = auto()
    INVALID_RESPONSE = auto()


PROVIDER_ERROR_CODES = {
    400: ProviderErrorKind.BAD_REQUEST,
    429: ProviderErrorKind.TOO_MANY_REQUESTS,
    403: ProviderErrorKind.FORBIDDEN,
    404: ProviderErrorKind.NOT_FOUND_BY_CODE,
}


class ClassifiedOutcome(NamedTuple):
    """
    Result of :func:`classify`. Exactly one ``kind`` holds per body.

    Attributes:
        kind (OutcomeKind): The outcome case.
        payload (Any): For ``SUCCESS``, the already parsed JSON document, so
            decoders do not parse the body a second time.
        error_kind (Optional[ProviderErrorKind]): Set for ``PROVIDER_ERROR``.
        detail (Optional[ErrorEnvelope]): The provider's code/message/status,
            kept for message-based refinement downstream.
        parse_error (Optional[str]): Decoder message for ``UNMARSHAL_FAILURE``.
    """
    kind: OutcomeKind
    payload: Any = None
    error_kind: Optional[ProviderErrorKind] = None
    detail: Optional[ErrorEnvelope] = None
    parse_error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS


def _error_code_of(document: Any) -> int:
    """Returns the integer ``code`` of a top-level object, or 0 when there is none."""
    if not isinstance(document, dict):
        return 0
    code = document.get("code")
    # bool is an int subclass; a JSON true/false is not an error code.
    if isinstance(code, bool) or not isinstance(code, int):
        return 0
    return code


def classify(body: Union[bytes, str]) -> ClassifiedOutcome:
    """
    Classifies one response body.

    Args:
        body (Union[bytes, str]): The raw response body.

    Returns:
        ClassifiedOutcome: ``NOT_FOUND`` for a bare ``[]``, ``UNMARSHAL_FAILURE``
        for invalid JSON, ``PROVIDER_ERROR`` for an object carrying a nonzero
        integer ``code``, otherwise ``SUCCESS`` with the parsed payload.
    """
    raw = body.encode("utf-8") if isinstance(body, str) else body

    if raw == EMPTY_RESULT_SENTINEL:
        return ClassifiedOutcome(OutcomeKind.NOT_FOUND)

    try:
        document = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return ClassifiedOutcome(OutcomeKind.UNMARSHAL_FAILURE, parse_error=str(e))

    code = _error_code_of(document)
    if code == 0:
        return ClassifiedOutcome(OutcomeKind.SUCCESS, payload=document)

    try:
        detail = ErrorEnvelope.model_validate(document)
    except ValidationError as e:
        # A code with a non-string message is still an error; keep the code.
        logger.debug("Classifier: error envelope with unexpected field types: %s", e)
        detail = ErrorEnvelope(code=code)

    error_kind = PROVIDER_ERROR_CODES.get(code, ProviderErrorKind.INVALID_RESPONSE)
    return ClassifiedOutcome(OutcomeKind.PROVIDER_ERROR, error_kind=error_kind, detail=detail)
