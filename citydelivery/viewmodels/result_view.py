"""Result projection for the delivery ranking list.

Call context:
    ``DeliveriesVM.result_view`` calls ``render_result`` after every status
    change; ``web_ui/main.py`` turns the ``ResultView`` into widgets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence, Tuple

from ..domain.models import CityDelivery, FetchStatus
from .display_format import delivery_badge

ResultKind = Literal["loading", "error", "list"]


@dataclass(frozen=True)
class CityRow:
    """Display row model consumed by the ranking list widget."""
    rank: int
    city: str
    badge: str


@dataclass(frozen=True)
class ResultView:
    """Exactly one of loading indicator, error message or city rows."""
    kind: ResultKind
    message: str = ""
    rows: Tuple[CityRow, ...] = ()


def render_result(status: FetchStatus, cities: Sequence[CityDelivery]) -> ResultView:
    """Pick the view for ``status``; rows keep the order the server sent."""
    if status.is_loading:
        return ResultView(kind="loading")
    if status.is_error:
        return ResultView(kind="error", message=status.message)
    rows = tuple(
        CityRow(rank=index, city=item.city, badge=delivery_badge(item.delivery_count))
        for index, item in enumerate(cities, start=1)
    )
    return ResultView(kind="list", rows=rows)


__all__ = ["CityRow", "ResultKind", "ResultView", "render_result"]
