# twelvedatapy/api/quotes.py
"""
Decoder for the quote endpoint.

For a single symbol the provider returns one bare quote object. For several
symbols it returns an object keyed by symbol, where each value is either a
quote or a per-symbol error ``{"code", "message", "status", "meta"}``.
"""
import logging
from typing import Any, Dict

from pydantic import ValidationError

from .exceptions import APIResponseParsingError
from .schemas import Quote, QuoteError, Quotes

logger = logging.getLogger(__name__)


def _is_symbol_map(payload: Any) -> bool:
    # A bare quote always names its symbol; a symbol-keyed map never has that key.
    return isinstance(payload, dict) and "symbol" not in payload


def decode_quotes(payload: Any) -> Quotes:
    """
    Decodes an already classified, successful quote payload.

    Args:
        payload (Any): Parsed JSON of the response body.

    Returns:
        Quotes: Successful quotes in ``data`` and per-symbol errors in ``errors``.
        Both may be populated. An empty mapping yields an empty result.

    Raises:
        APIResponseParsingError: The payload matches neither shape, or an
            entry of a symbol map is neither a quote nor an error.
    """
    result = Quotes()
    try:
        if _is_symbol_map(payload):
            entries: Dict[str, Dict[str, Any]] = payload
            for symbol, entry in entries.items():
                if not isinstance(entry, dict) or not ("code" in entry or "symbol" in entry):
                    raise APIResponseParsingError(
                        f"Quote entry for '{symbol}' is neither a quote nor an error: {entry!r}",
                        raw_response_text=str(payload)[:500]
                    )
                if "code" in entry:
                    result.errors.append(QuoteError.model_validate(entry))
                    logger.debug("Quotes: per-symbol error for '%s': %s", symbol, entry.get("message"))
                else:
                    result.data.append(Quote.model_validate(entry))
            return result

        result.data.append(Quote.model_validate(payload))
        return result
    except ValidationError as e_val:
        raise APIResponseParsingError(
            f"Failed to parse quote response: {e_val}",
            raw_response_text=str(payload)[:500]
        ) from e_val
