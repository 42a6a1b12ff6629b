"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations


from typing import Optional

from citydelivery.adapters.api_errors import (
    ApiDecodeError,
    ApiError,
    ApiTransportError,
)
from citydelivery.domain.ports import UseCaseError

FETCH_ERROR_PREFIX = "Error fetching deliveries. Please try again."


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Remote errors (any non-2xx status) keep the adapter's
    ``HTTP error! status: ..., message: ...`` text so both the status code and
    the raw body reach the user. Transport and decode failures surface the
    underlying error's message.

    Args:
        exc: Exception raised below the use-case boundary.
        default_code: Code used for exceptions that are not adapter errors.
        default_message: Detail used when ``exc`` has no message.

    Returns:
        UseCaseError: Error whose message is ready for display.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTransportError):
        return UseCaseError("TRANSPORT_ERROR", _compose_error_message(str(exc)))
    if isinstance(exc, ApiDecodeError):
        return UseCaseError("DECODE_ERROR", _compose_error_message(str(exc)))
    if isinstance(exc, ApiError) and exc.status is not None:
        return UseCaseError("REMOTE_ERROR", _compose_error_message(str(exc)))

    detail = str(exc) or default_message or "Unexpected error."
    return UseCaseError(default_code, _compose_error_message(detail))


def _compose_error_message(detail: str) -> str:
    """Prefix the detail text with the standard retry hint."""
    detail_text = (detail or "").strip()
    if detail_text:
        return f"{FETCH_ERROR_PREFIX} {detail_text}"
    return FETCH_ERROR_PREFIX


__all__ = ["FETCH_ERROR_PREFIX", "map_api_error"]
