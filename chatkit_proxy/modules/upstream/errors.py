"""
Error-message extraction for upstream ChatKit responses.

The upstream error payload has no fixed shape: `error` may be a string or
an object with a `message`, `details` may be a string or wrap another
error, and some responses only carry a top-level `message`. Each shape is
handled by one extractor; extractors are tried in order and the first one
returning a string wins.
"""

from typing import Any, Callable, Mapping, Optional, Tuple

ErrorExtractor = Callable[[Mapping[str, Any]], Optional[str]]


def _message_of(value: Any) -> Optional[str]:
    """Return a non-empty `message` string from a mapping, if any."""
    if isinstance(value, Mapping):
        message = value.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def error_string(payload: Mapping[str, Any]) -> Optional[str]:
    error = payload.get("error")
    return error if isinstance(error, str) else None


def error_message(payload: Mapping[str, Any]) -> Optional[str]:
    return _message_of(payload.get("error"))


def details_string(payload: Mapping[str, Any]) -> Optional[str]:
    details = payload.get("details")
    return details if isinstance(details, str) else None


def details_error_string(payload: Mapping[str, Any]) -> Optional[str]:
    details = payload.get("details")
    if isinstance(details, Mapping):
        nested = details.get("error")
        if isinstance(nested, str):
            return nested
    return None


def details_error_message(payload: Mapping[str, Any]) -> Optional[str]:
    details = payload.get("details")
    if isinstance(details, Mapping):
        return _message_of(details.get("error"))
    return None


def top_level_message(payload: Mapping[str, Any]) -> Optional[str]:
    message = payload.get("message")
    return message if isinstance(message, str) else None


# Order matters: first match wins.
ERROR_EXTRACTORS: Tuple[ErrorExtractor, ...] = (
    error_string,
    error_message,
    details_string,
    details_error_string,
    details_error_message,
    top_level_message,
)


def extract_upstream_error(
    payload: Any,
    extractors: Tuple[ErrorExtractor, ...] = ERROR_EXTRACTORS,
) -> Optional[str]:
    """
    Extract a human-readable error message from an upstream payload.

    Args:
        payload: Decoded upstream JSON body (any type)
        extractors: Strategies to try, in order

    Returns:
        The first message found, or None
    """
    if not isinstance(payload, Mapping):
        return None

    for extractor in extractors:
        message = extractor(payload)
        if message is not None:
            return message
    return None


def extract_error_detail(payload: Any, fallback: str) -> str:
    """Like extract_upstream_error, but never returns None."""
    message = extract_upstream_error(payload)
    return fallback if message is None else message
