"""Fetch status and held city list for the ranking panel.

Call context:
    ``CityDeliveryRuntime`` schedules ``fetch_deliveries`` on the UI event loop
    whenever the selected range becomes complete and refreshes the results
    widget from ``on_changed``.

Concurrency:
    The blocking use case runs through ``run_io`` (``nicegui.run.io_bound`` in
    the web runtime). All state mutation happens on the event loop after the
    await, so no locking is needed. Requests are never cancelled: with
    ``discard_stale_responses`` off, whichever response resolves last wins.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Tuple, TypeVar

from ..domain.models import CityDelivery, DateRange, FetchStatus
from ..domain.ports import UseCaseError
from ..usecases.error_mapping import map_api_error
from ..usecases.fetch_deliveries import FetchDeliveries
from .result_view import ResultView, render_result

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
IoRunner = Callable[[Callable[[], T]], Awaitable[T]]


async def _to_thread(func: Callable[[], T]) -> T:
    return await asyncio.to_thread(func)


class DeliveriesVM:
    """Owns ``FetchStatus`` and the city list shown by the results panel."""

    def __init__(
        self,
        fetch: FetchDeliveries,
        *,
        run_io: Optional[IoRunner] = None,
        discard_stale_responses: bool = False,
        on_changed: Optional[Callable[[], None]] = None,
    ) -> None:
        self._fetch = fetch
        self._run_io = run_io or _to_thread
        self.discard_stale_responses = discard_stale_responses
        self.on_changed = on_changed

        self.status: FetchStatus = FetchStatus.idle()
        self.cities: Tuple[CityDelivery, ...] = ()
        self._generation = 0

    def result_view(self) -> ResultView:
        return render_result(self.status, self.cities)

    async def fetch_deliveries(self, date_range: DateRange) -> None:
        """Load deliveries for ``date_range`` and commit the outcome.

        Incomplete ranges are ignored. Any failure, including an I/O runner
        that raises or yields nothing, ends in Error: the status carries the
        user-facing message and the previously held cities stay untouched.
        """
        if not date_range.is_complete:
            LOGGER.debug("Skipping fetch for incomplete range %s", date_range)
            return

        self._generation += 1
        generation = self._generation
        self._set_status(FetchStatus.loading())

        error: Optional[UseCaseError] = None
        cities: Optional[List[CityDelivery]] = None
        try:
            cities = await self._run_io(lambda: self._fetch(date_range=date_range))
        except Exception as exc:
            error = map_api_error(exc, default_code="DELIVERY_FETCH_FAILED")
        else:
            if cities is None:
                # run.io_bound yields None once the app is shutting down
                error = map_api_error(
                    RuntimeError("No response received."),
                    default_code="DELIVERY_FETCH_FAILED",
                )

        if error is not None:
            if self._is_stale(generation):
                LOGGER.debug("Dropping stale failure for %s: %s", date_range, error.message)
                return
            LOGGER.error("Fetch error: %s", error.message)
            self._set_status(FetchStatus.error(error.message))
            return

        if self._is_stale(generation):
            LOGGER.debug("Dropping stale response for %s", date_range)
            return
        self.cities = tuple(cities)
        LOGGER.info("Loaded %d cities for %s", len(self.cities), date_range)
        self._set_status(FetchStatus.success())

    # ------------------------------------------------------------------
    def _is_stale(self, generation: int) -> bool:
        return self.discard_stale_responses and generation != self._generation

    def _set_status(self, status: FetchStatus) -> None:
        self.status = status
        if self.on_changed:
            self.on_changed()


__all__ = ["DeliveriesVM", "IoRunner"]
