"""Display labeling helpers for view models.

Call context:
    ``render_result`` and ``RangeSelectorVM`` call these helpers so the web
    views never format domain values themselves.
"""

from __future__ import annotations

from typing import Optional

from ..domain.models import DateRange, format_query_date


def delivery_badge(count: int) -> str:
    """Badge text shown next to a city row."""
    return f"{int(count)} deliveries"


def range_label(date_range: Optional[DateRange]) -> str:
    """Human-readable ``start - end`` label; missing endpoints show as ``...``."""
    if date_range is None:
        return "..."
    start = format_query_date(date_range.start) if date_range.start else "..."
    end = format_query_date(date_range.end) if date_range.end else "..."
    return f"{start} - {end}"


__all__ = ["delivery_badge", "range_label"]
