from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Protocol

from .models import CityDelivery


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class DeliveryPort(Protocol):
    """Read per-city delivery totals for a date window from the backend."""

    def fetch_deliveries(self, start: date, end: date) -> List[CityDelivery]: ...


class StoragePort(Protocol):
    """Persistence for user settings."""

    def save_user_settings(self, payload: Dict) -> None: ...
    def load_user_settings(self) -> Optional[Dict]: ...
