from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Mapping, Optional

from ..utils.logging import env_forces_debug

DEFAULT_ENDPOINT_URL = "https://ratio.sketchdesign.ma/fetch_deliveries.php"


@dataclass
class SettingsConfig:
    """Typed runtime settings that persist via StorageLocal."""

    endpoint_url: str = DEFAULT_ENDPOINT_URL
    request_timeout_s: int = 10
    discard_stale_responses: bool = False


def _default_debug_logging() -> bool:
    return env_forces_debug()


class SettingsVM:
    """Keeps app settings state and validation, no I/O here."""

    def __init__(self, *, config: Optional[SettingsConfig] = None) -> None:
        self.config = config or SettingsConfig()
        self.debug_logging: bool = _default_debug_logging()

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def endpoint_url(self) -> str:
        return self.config.endpoint_url

    @endpoint_url.setter
    def endpoint_url(self, value: str) -> None:
        self.config = replace(self.config, endpoint_url=self._coerce_url(value))

    @property
    def request_timeout_s(self) -> int:
        return self.config.request_timeout_s

    @request_timeout_s.setter
    def request_timeout_s(self, value: int) -> None:
        self.config = replace(self.config, request_timeout_s=self._coerce_timeout(value))

    @property
    def discard_stale_responses(self) -> bool:
        return self.config.discard_stale_responses

    @discard_stale_responses.setter
    def discard_stale_responses(self, value: bool) -> None:
        self.config = replace(self.config, discard_stale_responses=self._coerce_bool(value))

    # ------------------------------------------------------------------
    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted settings to the view-model."""

        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed_keys = {*SettingsConfig.__annotations__.keys(), "debug_logging"}
        unknown = set(payload.keys()) - allowed_keys
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")

        updates: Dict[str, Any] = {}
        for cfg_key in SettingsConfig.__annotations__.keys():
            if cfg_key in payload:
                updates[cfg_key] = self._coerce_config_value(cfg_key, payload[cfg_key])

        if updates:
            self.config = replace(self.config, **updates)

        if "debug_logging" in payload:
            self.debug_logging = self._coerce_bool(payload["debug_logging"])

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot["debug_logging"] = bool(self.debug_logging)
        return snapshot

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _coerce_config_value(self, key: str, raw: Any) -> Any:
        if key == "endpoint_url":
            return self._coerce_url(raw)
        if key == "request_timeout_s":
            return self._coerce_timeout(raw)
        if key == "discard_stale_responses":
            return self._coerce_bool(raw)
        raise ValueError(f"Unhandled config field: {key}")

    @staticmethod
    def _coerce_url(value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("endpoint_url must be a string.")
        normalized = value.strip()
        if not normalized.lower().startswith(("http://", "https://")):
            raise ValueError("endpoint_url must be an http(s) URL.")
        return normalized

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _coerce_timeout(value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError("request_timeout_s must be an integer.")
        if isinstance(value, (int, float)):
            coerced = int(value)
        elif isinstance(value, str):
            try:
                coerced = int(value.strip())
            except (TypeError, ValueError) as exc:
                raise ValueError("request_timeout_s must be an integer.") from exc
        else:
            raise ValueError("request_timeout_s must be an integer.")
        if coerced <= 0:
            raise ValueError("request_timeout_s must be positive.")
        return coerced
