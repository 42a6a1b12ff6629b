"""Domain package exports for value objects and ports."""

from .date_presets import DateRangePreset, PRESET_LABELS, month_range, preset_ranges
from .models import CityDelivery, DateRange, FetchState, FetchStatus, format_query_date
from .ports import DeliveryPort, StoragePort, UseCaseError

__all__ = [
    "CityDelivery",
    "DateRange",
    "DateRangePreset",
    "DeliveryPort",
    "FetchState",
    "FetchStatus",
    "PRESET_LABELS",
    "StoragePort",
    "UseCaseError",
    "format_query_date",
    "month_range",
    "preset_ranges",
]
