"""REST adapter implementing the delivery ranking transport contract."""

from __future__ import annotations

from datetime import date
from typing import Any, List, Mapping

import requests

from citydelivery.domain.models import CityDelivery, format_query_date
from citydelivery.domain.ports import DeliveryPort

from citydelivery.adapters.api_errors import (
    ApiClientError,
    ApiDecodeError,
    ApiServerError,
    build_error_message,
    response_text,
)
from citydelivery.adapters.http_client import HttpConfig, HttpSession


class DeliveryRestAdapter(DeliveryPort):
    """HTTP adapter for the `fetch_deliveries` endpoint."""

    def __init__(
        self,
        endpoint_url: str,
        *,
        request_timeout_s: int = 10,
    ) -> None:
        if not str(endpoint_url or "").strip():
            raise ValueError("DeliveryRestAdapter requires an endpoint URL")

        self.endpoint_url = str(endpoint_url).strip()
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s)
        self.session = HttpSession(self.cfg)

    def fetch_deliveries(self, start: date, end: date) -> List[CityDelivery]:
        """GET per-city totals for ``start..end`` in server order."""
        params = {
            "startDate": format_query_date(start),
            "endDate": format_query_date(end),
        }
        resp = self.session.get(
            self.endpoint_url,
            params=params,
            json_content_type=True,
            timeout=self.cfg.request_timeout_s,
        )
        ctx = f"fetch_deliveries[{params['startDate']}..{params['endDate']}]"
        self._ensure_ok(resp, ctx)
        return self._parse_deliveries(self._json_list(resp, ctx), ctx)

    # ------------------------------------------------------------------
    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        """Raise typed adapter errors for non-2xx responses."""
        if 200 <= resp.status_code < 300:
            return
        status = resp.status_code
        body = response_text(resp)
        message = build_error_message(status, body)
        if 400 <= status < 500:
            raise ApiClientError(message, status=status, payload=body, context=ctx)
        raise ApiServerError(message, status=status, payload=body, context=ctx)

    @staticmethod
    def _json_list(resp: requests.Response, ctx: str) -> List[Any]:
        """Parse response JSON and require an array payload."""
        try:
            payload = resp.json()
        except ValueError as exc:
            snippet = response_text(resp)[:400]
            raise ApiDecodeError(f"Invalid JSON response: {snippet}", payload=snippet, context=ctx) from exc
        if not isinstance(payload, list):
            raise ApiDecodeError(
                "Invalid JSON response shape: expected array",
                payload=payload,
                context=ctx,
            )
        return payload

    @staticmethod
    def _parse_deliveries(items: List[Any], ctx: str) -> List[CityDelivery]:
        """Normalize the array entries into ``CityDelivery`` records."""
        deliveries: List[CityDelivery] = []
        for index, raw in enumerate(items):
            if not isinstance(raw, Mapping):
                raise ApiDecodeError(
                    f"Invalid delivery entry at index {index}: expected object",
                    payload=raw,
                    context=ctx,
                )
            city = raw.get("city")
            if not isinstance(city, str):
                raise ApiDecodeError(
                    f"Invalid delivery entry at index {index}: city missing",
                    payload=raw,
                    context=ctx,
                )
            count = _as_count(raw.get("delivery_count"))
            if count is None:
                raise ApiDecodeError(
                    f"Invalid delivery entry at index {index}: delivery_count is invalid",
                    payload=raw,
                    context=ctx,
                )
            deliveries.append(CityDelivery(city=city, delivery_count=count))
        return deliveries


def _as_count(value: Any) -> int | None:
    """Accept integers, integral floats and digit strings; reject the rest."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        count = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        count = int(value)
    elif isinstance(value, str):
        try:
            count = int(value.strip())
        except ValueError:
            return None
    else:
        return None
    return count if count >= 0 else None


__all__ = ["DeliveryRestAdapter"]
