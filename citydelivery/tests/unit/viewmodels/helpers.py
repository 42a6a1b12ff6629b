from __future__ import annotations

import asyncio
from datetime import date
from typing import Any, Callable, Dict, List, Tuple

from citydelivery.domain.models import DateRange


class FakeDeliveryPort:
    """Canned outcome per ``(start, end)``; exceptions are raised."""

    def __init__(self, outcomes: Dict[Tuple[date, date], Any]) -> None:
        self.outcomes = dict(outcomes)
        self.calls: List[Tuple[date, date]] = []

    def fetch_deliveries(self, start: date, end: date):
        self.calls.append((start, end))
        outcome = self.outcomes[(start, end)]
        if isinstance(outcome, Exception):
            raise outcome
        return list(outcome)


async def inline_io(func: Callable[[], Any]) -> Any:
    return func()


class GatedIo:
    """I/O runner that holds every call until its gate is released."""

    def __init__(self) -> None:
        self.gates: List[asyncio.Event] = []

    async def __call__(self, func: Callable[[], Any]) -> Any:
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        return func()

    async def wait_for_calls(self, count: int) -> None:
        while len(self.gates) < count:
            await asyncio.sleep(0)


def key(date_range: DateRange) -> Tuple[date, date]:
    return (date_range.start, date_range.end)


__all__ = ["FakeDeliveryPort", "GatedIo", "inline_io", "key"]
