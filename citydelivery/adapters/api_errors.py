from __future__ import annotations

from typing import Any, Optional


class ApiError(RuntimeError):
    """Base class for REST adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from the delivery endpoint."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, payload=payload, context=context)


class ApiServerError(ApiError):
    """HTTP 5xx (or any other non-2xx) from the delivery endpoint."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, payload=payload, context=context)


class ApiTransportError(ApiError):
    """Connectivity failure before any HTTP status was received."""

    def __init__(
        self,
        message: str,
        *,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, context=context)


class ApiTimeoutError(ApiTransportError):
    """Transport level timeout."""


class ApiDecodeError(ApiError):
    """2xx response whose body is not the expected JSON shape."""

    def __init__(
        self,
        message: str,
        *,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, payload=payload, context=context)


def response_text(resp: Any) -> str:
    """Best-effort read of the raw response body without raising."""
    try:
        text = getattr(resp, "text", "")
    except Exception:
        return ""
    return text if isinstance(text, str) else str(text or "")


def build_error_message(status: int, body: str) -> str:
    return f"HTTP error! status: {status}, message: {body}"


__all__ = [
    "ApiClientError",
    "ApiDecodeError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "ApiTransportError",
    "build_error_message",
    "response_text",
]
