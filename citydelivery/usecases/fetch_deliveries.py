"""Use case for reading per-city delivery totals for a date window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from citydelivery.domain.models import CityDelivery, DateRange
from citydelivery.domain.ports import DeliveryPort, UseCaseError
from citydelivery.usecases.error_mapping import map_api_error


@dataclass
class FetchDeliveries:
    """Fetch decoded ``CityDelivery`` records through ``DeliveryPort``."""

    delivery_port: DeliveryPort

    def __call__(self, *, date_range: DateRange) -> List[CityDelivery]:
        """Return the server-ordered delivery list for a complete range.

        Reversed ranges are forwarded unchanged.

        Raises:
            UseCaseError: ``RANGE_INCOMPLETE`` when an endpoint is missing, or
                the mapped adapter failure.
        """
        if not date_range.is_complete:
            raise UseCaseError("RANGE_INCOMPLETE", "Start and end dates are required.")
        try:
            return list(self.delivery_port.fetch_deliveries(date_range.start, date_range.end))
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="DELIVERY_FETCH_FAILED",
                default_message="Delivery lookup failed.",
            ) from exc


__all__ = ["FetchDeliveries"]
