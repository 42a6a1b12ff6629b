"""Thin web-facing helpers for NiceGUI bindings.

These helpers translate between the Quasar date picker's raw model value and
``DateRange`` without adding I/O or orchestration logic.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Dict, Mapping, Optional, Union

from citydelivery.domain.models import DateRange, format_query_date

PickerValue = Union[None, str, Dict[str, str]]


def _parse_day(value: Any) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` (or ``YYYY/MM/DD``) text; anything else is absent."""
    if isinstance(value, date):
        return value
    text = str(value or "").strip().replace("/", "-")
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def parse_picker_value(value: Any) -> DateRange:
    """Convert the range picker model into a ``DateRange``.

    Quasar emits ``{"from": ..., "to": ...}`` for a span and collapses a
    single-day span into a plain string. ``None`` means the selection was
    cleared.
    """
    if value is None:
        return DateRange()
    if isinstance(value, Mapping):
        return DateRange(_parse_day(value.get("from")), _parse_day(value.get("to")))
    day = _parse_day(value)
    return DateRange(day, day)


def picker_value_for(date_range: DateRange) -> PickerValue:
    """Inverse of ``parse_picker_value`` for programmatic picker updates."""
    start, end = date_range.start, date_range.end
    if start is None and end is None:
        return None
    if start is not None and start == end:
        return format_query_date(start)
    return {
        "from": format_query_date(start) if start is not None else "",
        "to": format_query_date(end) if end is not None else "",
    }


class PickerSync:
    """Two-way binding between the range picker widget and the range selector.

    NiceGUI fires ``on_change`` for programmatic value updates too, so a
    preset click would otherwise come back as a second range change (and a
    second fetch). ``push`` marks its own writes and ``on_change`` ignores them.
    """

    def __init__(self, apply_range: Callable[[DateRange], None]) -> None:
        self._apply_range = apply_range
        self._syncing = False
        self.widget: Optional[Any] = None

    def push(self, date_range: DateRange) -> None:
        """Show ``date_range`` in the picker without reporting it back."""
        if self.widget is None:
            return
        self._syncing = True
        try:
            self.widget.value = picker_value_for(date_range)
        finally:
            self._syncing = False

    def on_change(self, value: Any) -> None:
        """Forward a user edit of the picker as a new range."""
        if self._syncing:
            return
        self._apply_range(parse_picker_value(value))


__all__ = ["PickerSync", "PickerValue", "parse_picker_value", "picker_value_for"]
