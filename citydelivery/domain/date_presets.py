"""Calendar arithmetic for the quick-select date range presets.

Every helper is a pure function of the ``today`` argument so presets can be
recomputed whenever the selector renders.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Tuple

from .models import DateRange

THIS_MONTH = "This Month"
LAST_MONTH = "Last Month"
THIS_QUARTER = "This Quarter"
LAST_QUARTER = "Last Quarter"
THIS_YEAR = "This Year"

PRESET_LABELS: Tuple[str, ...] = (
    THIS_MONTH,
    LAST_MONTH,
    THIS_QUARTER,
    LAST_QUARTER,
    THIS_YEAR,
)


@dataclass(frozen=True)
class DateRangePreset:
    """Named shortcut resolving to a complete date range."""

    label: str
    date_range: DateRange


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=last)


def shift_months(day: date, months: int) -> date:
    """Move ``day`` by whole months, clamping to the target month's length."""
    index = day.year * 12 + (day.month - 1) + months
    year, month0 = divmod(index, 12)
    last = calendar.monthrange(year, month0 + 1)[1]
    return date(year, month0 + 1, min(day.day, last))


def start_of_quarter(day: date) -> date:
    first_month = ((day.month - 1) // 3) * 3 + 1
    return date(day.year, first_month, 1)


def end_of_quarter(day: date) -> date:
    return end_of_month(shift_months(start_of_quarter(day), 2))


def start_of_year(day: date) -> date:
    return date(day.year, 1, 1)


def end_of_year(day: date) -> date:
    return date(day.year, 12, 31)


def month_range(day: date) -> DateRange:
    """Full calendar month containing ``day``."""
    return DateRange(start_of_month(day), end_of_month(day))


def preset_ranges(today: date) -> Tuple[DateRangePreset, ...]:
    """Return the quick-select presets relative to ``today`` in display order."""
    last_month = shift_months(today, -1)
    last_quarter = shift_months(today, -3)
    return (
        DateRangePreset(THIS_MONTH, month_range(today)),
        DateRangePreset(LAST_MONTH, month_range(last_month)),
        DateRangePreset(
            THIS_QUARTER,
            DateRange(start_of_quarter(today), end_of_quarter(today)),
        ),
        DateRangePreset(
            LAST_QUARTER,
            DateRange(start_of_quarter(last_quarter), end_of_quarter(last_quarter)),
        ),
        DateRangePreset(THIS_YEAR, DateRange(start_of_year(today), end_of_year(today))),
    )


__all__ = [
    "DateRangePreset",
    "LAST_MONTH",
    "LAST_QUARTER",
    "PRESET_LABELS",
    "THIS_MONTH",
    "THIS_QUARTER",
    "THIS_YEAR",
    "end_of_month",
    "end_of_quarter",
    "end_of_year",
    "month_range",
    "preset_ranges",
    "shift_months",
    "start_of_month",
    "start_of_quarter",
    "start_of_year",
]
