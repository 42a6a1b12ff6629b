from __future__ import annotations

from datetime import date
from typing import Callable, List, Optional

from ..domain.date_presets import DateRangePreset, month_range, preset_ranges
from ..domain.models import DateRange
from .display_format import range_label


class RangeSelectorVM:
    """Holds the selected date window and the quick-select presets, no I/O here.

    Picker edits and preset clicks both go through ``set_range`` so downstream
    consumers cannot tell them apart. Every call notifies
    ``on_range_changed``, including one that repeats the current range.
    """

    def __init__(
        self,
        *,
        today: Callable[[], date] = date.today,
        on_range_changed: Optional[Callable[[DateRange], None]] = None,
    ) -> None:
        self._today = today
        self.on_range_changed = on_range_changed
        self.date_range: DateRange = month_range(today())

    @property
    def label(self) -> str:
        return range_label(self.date_range)

    def set_range(self, new_range: DateRange) -> None:
        """Replace the current range as-is; partial or reversed ranges are kept."""
        if not isinstance(new_range, DateRange):
            raise TypeError("RangeSelectorVM.set_range requires a DateRange.")
        self.date_range = new_range
        if self.on_range_changed:
            self.on_range_changed(new_range)

    def presets(self) -> List[DateRangePreset]:
        """Presets evaluated against today's date at call time."""
        return list(preset_ranges(self._today()))

    def select_preset(self, label: str) -> DateRange:
        for preset in self.presets():
            if preset.label == label:
                self.set_range(preset.date_range)
                return preset.date_range
        raise ValueError(f"Unknown date range preset: {label!r}")


__all__ = ["RangeSelectorVM"]
