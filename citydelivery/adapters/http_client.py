"""Shared HTTP transport utilities for REST adapters.

This module provides a thin wrapper around ``requests.Session`` so adapter
implementations share timeout policy and header construction, and so every
``requests`` transport exception surfaces as a typed adapter error.

Dependencies:
    - ``requests`` for network I/O.
    - ``citydelivery.adapters.api_errors`` for typed transport failures.

Call context:
    - Constructed by ``citydelivery/adapters/delivery_rest.py``.
    - Used only inside adapter layer methods; use cases interact through ports.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from citydelivery.adapters.api_errors import ApiTimeoutError, ApiTransportError

LOGGER = logging.getLogger(__name__)


@dataclass
class HttpConfig:
    """Timeout configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Default timeout in seconds for JSON API calls.
    """
    request_timeout_s: int = 10


class HttpSession:
    """Single-attempt requests wrapper with JSON headers.

    This class is intentionally transport-only. Callers provide endpoint URLs and
    decide how to map non-2xx responses into use-case errors. Failed requests
    are never retried.
    """

    def __init__(self, cfg: HttpConfig) -> None:
        """Create a session.

        Args:
            cfg: Shared timeout settings.

        Side Effects:
            Creates a persistent ``requests.Session`` object.
        """
        self.session = requests.Session()
        self.cfg = cfg

    def _headers(
        self, accept: str = "application/json", json_body: bool = False
    ) -> Dict[str, str]:
        """Build request headers for adapter calls.

        Args:
            accept: ``Accept`` header value expected by the caller.
            json_body: Whether to add ``Content-Type: application/json``.

        Returns:
            Dictionary of request headers.
        """
        headers = {"Accept": accept}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        accept: str = "application/json",
        json_content_type: bool = False,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send one GET request.

        Args:
            url: Absolute endpoint URL.
            params: Optional query parameter mapping.
            accept: ``Accept`` header value.
            json_content_type: Send ``Content-Type: application/json`` even
                without a body; some PHP backends branch on it.
            timeout: Optional timeout override in seconds.

        Returns:
            ``requests.Response`` regardless of HTTP status.

        Raises:
            ApiTimeoutError: If the request timed out.
            ApiTransportError: For any other ``requests`` failure.

        Call Chain:
            Adapter methods -> ``HttpSession.get`` -> ``requests.Session.get``.
        """
        context = f"GET {url}"
        LOGGER.debug("%s params=%s", context, params)
        try:
            return self.session.get(
                url,
                params=params,
                headers=self._headers(accept=accept, json_body=json_content_type),
                timeout=timeout or self.cfg.request_timeout_s,
            )
        except req_exc.Timeout as exc:
            raise ApiTimeoutError(f"Timeout contacting {url}", context=context) from exc
        except req_exc.RequestException as exc:
            raise ApiTransportError(str(exc) or f"Failed to contact {url}", context=context) from exc


__all__ = ["HttpConfig", "HttpSession"]
