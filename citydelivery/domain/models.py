from __future__ import annotations

"""Domain value objects for the delivery ranking component."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal, Optional

FetchState = Literal["idle", "loading", "error", "success"]


def format_query_date(value: date) -> str:
    """Render a calendar date as ``YYYY-MM-DD`` for the remote query string."""
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        raise TypeError("format_query_date requires a date instance.")
    return value.strftime("%Y-%m-%d")


@dataclass(frozen=True)
class DateRange:
    """User-selected query window; either endpoint may be absent."""

    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_complete(self) -> bool:
        """Both endpoints present. Ordering is not checked."""
        return self.start is not None and self.end is not None

    def __str__(self) -> str:
        start = format_query_date(self.start) if self.start is not None else "?"
        end = format_query_date(self.end) if self.end is not None else "?"
        return f"{start}..{end}"


@dataclass(frozen=True)
class CityDelivery:
    """One city and the number of deliveries it received in the window."""

    city: str
    """Display label exactly as delivered by the backend."""

    delivery_count: int
    """Non-negative delivery total for the city."""

    def __post_init__(self) -> None:
        if not isinstance(self.city, str):
            raise TypeError("CityDelivery.city must be a string.")
        if isinstance(self.delivery_count, bool) or not isinstance(self.delivery_count, int):
            raise TypeError("CityDelivery.delivery_count must be an integer.")
        if self.delivery_count < 0:
            raise ValueError("CityDelivery.delivery_count must be non-negative.")


@dataclass(frozen=True)
class FetchStatus:
    """Which of the loading/error/list views is current."""

    state: FetchState = "idle"
    message: str = ""

    @classmethod
    def idle(cls) -> "FetchStatus":
        return cls("idle")

    @classmethod
    def loading(cls) -> "FetchStatus":
        return cls("loading")

    @classmethod
    def error(cls, message: str) -> "FetchStatus":
        return cls("error", str(message))

    @classmethod
    def success(cls) -> "FetchStatus":
        return cls("success")

    @property
    def is_loading(self) -> bool:
        return self.state == "loading"

    @property
    def is_error(self) -> bool:
        return self.state == "error"


__all__ = [
    "CityDelivery",
    "DateRange",
    "FetchState",
    "FetchStatus",
    "format_query_date",
]
