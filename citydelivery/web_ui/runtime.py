"""NiceGUI runtime orchestration for the delivery ranking page.

This module composes the settings, adapter, use case and viewmodels for one
browser page. Each page visit gets its own ``CityDeliveryRuntime`` so the
selected range and fetch state stay local to that client.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Coroutine, List, Optional

from nicegui import background_tasks, run

from citydelivery.adapters.delivery_rest import DeliveryRestAdapter
from citydelivery.adapters.storage_local import StorageLocal
from citydelivery.domain.date_presets import DateRangePreset
from citydelivery.domain.models import DateRange
from citydelivery.domain.ports import DeliveryPort
from citydelivery.usecases.fetch_deliveries import FetchDeliveries
from citydelivery.viewmodels.deliveries_vm import DeliveriesVM, IoRunner
from citydelivery.viewmodels.range_vm import RangeSelectorVM
from citydelivery.viewmodels.result_view import ResultView
from citydelivery.viewmodels.settings_vm import SettingsVM


LOGGER = logging.getLogger(__name__)

SpawnFn = Callable[[Coroutine[Any, Any, None]], Any]


def load_settings(settings_dir: Optional[str] = None) -> SettingsVM:
    """Build settings from ``user_settings.json`` when a directory is given."""
    settings_vm = SettingsVM()
    if settings_dir:
        payload = StorageLocal(root_dir=settings_dir).load_user_settings()
        if payload is not None:
            settings_vm.apply_dict(payload)
            LOGGER.info("Loaded settings from %s", settings_dir)
    return settings_vm


def save_settings(settings_vm: SettingsVM, settings_dir: str) -> str:
    """Persist the effective settings and return the written path."""
    storage = StorageLocal(root_dir=settings_dir)
    storage.save_user_settings(settings_vm.to_dict())
    LOGGER.info("Saved settings to %s", storage.settings_path)
    return storage.settings_path


class CityDeliveryRuntime:
    """Per-page state used by NiceGUI views.

    Range changes that produce a complete range schedule exactly one fetch
    through ``spawn``. Incomplete ranges schedule nothing.
    """

    def __init__(
        self,
        settings_vm: SettingsVM,
        *,
        delivery_port: Optional[DeliveryPort] = None,
        spawn: Optional[SpawnFn] = None,
        run_io: Optional[IoRunner] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.settings_vm = settings_vm
        port = delivery_port or DeliveryRestAdapter(
            settings_vm.endpoint_url,
            request_timeout_s=settings_vm.request_timeout_s,
        )
        self._spawn = spawn or background_tasks.create
        self.on_results_changed: Optional[Callable[[], None]] = None
        self.on_range_changed: Optional[Callable[[DateRange], None]] = None

        self.deliveries_vm = DeliveriesVM(
            FetchDeliveries(delivery_port=port),
            run_io=run_io or run.io_bound,
            discard_stale_responses=settings_vm.discard_stale_responses,
            on_changed=self._notify_results,
        )
        self.range_vm = RangeSelectorVM(today=today, on_range_changed=self._handle_range_changed)

    # ------------------------------------------------------------------
    @property
    def date_range(self) -> DateRange:
        return self.range_vm.date_range

    def presets(self) -> List[DateRangePreset]:
        return self.range_vm.presets()

    def result_view(self) -> ResultView:
        return self.deliveries_vm.result_view()

    def start(self) -> None:
        """Fetch for the initial range once the page is built."""
        self._schedule_fetch(self.range_vm.date_range)

    def set_range(self, date_range: DateRange) -> None:
        self.range_vm.set_range(date_range)

    def select_preset(self, label: str) -> DateRange:
        return self.range_vm.select_preset(label)

    # ------------------------------------------------------------------
    def _handle_range_changed(self, date_range: DateRange) -> None:
        if self.on_range_changed:
            self.on_range_changed(date_range)
        self._schedule_fetch(date_range)

    def _schedule_fetch(self, date_range: DateRange) -> None:
        if not date_range.is_complete:
            LOGGER.debug("Range %s incomplete; no fetch scheduled", date_range)
            return
        LOGGER.debug("Scheduling delivery fetch for %s", date_range)
        self._spawn(self.deliveries_vm.fetch_deliveries(date_range))

    def _notify_results(self) -> None:
        if self.on_results_changed:
            self.on_results_changed()


__all__ = ["CityDeliveryRuntime", "SpawnFn", "load_settings", "save_settings"]
