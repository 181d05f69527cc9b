from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Mapping

from ..utils.logging import env_requests_debug
from .commands_vm import COPY_FEEDBACK_MS, TRAY_COPY_FEEDBACK_MS

STORE_BACKENDS: tuple[str, ...] = ("local", "rest", "mock")


@dataclass
class SettingsConfig:
    """Typed runtime settings that persist via SettingsLocal."""

    store_backend: str = "local"
    data_dir: str = ""
    api_base_url: str = ""
    api_key: str = ""
    request_timeout_s: int = 10
    retries: int = 2
    fuzzy_threshold: float = 0.3
    copy_feedback_ms: int = COPY_FEEDBACK_MS
    tray_copy_feedback_ms: int = TRAY_COPY_FEEDBACK_MS


def _default_debug_logging() -> bool:
    return env_requests_debug()


def default_settings_payload() -> dict:
    payload = asdict(SettingsConfig())
    payload["debug_logging"] = _default_debug_logging()
    return payload


class SettingsVM:
    """Keeps app settings state and validation, no I/O here."""

    def __init__(self, *, config: SettingsConfig | None = None) -> None:
        self.config = config or SettingsConfig()
        self.debug_logging: bool = _default_debug_logging()

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def store_backend(self) -> str:
        return self.config.store_backend

    @store_backend.setter
    def store_backend(self, value: str) -> None:
        self.config = replace(self.config, store_backend=self._coerce_backend(value))

    @property
    def data_dir(self) -> str:
        return self.config.data_dir

    @data_dir.setter
    def data_dir(self, value: str) -> None:
        self.config = replace(self.config, data_dir=self._coerce_optional_str(value))

    @property
    def api_base_url(self) -> str:
        return self.config.api_base_url

    @api_base_url.setter
    def api_base_url(self, value: str) -> None:
        self.config = replace(self.config, api_base_url=self._coerce_optional_str(value))

    @property
    def api_key(self) -> str:
        return self.config.api_key

    @api_key.setter
    def api_key(self, value: str) -> None:
        self.config = replace(self.config, api_key=self._coerce_optional_str(value))

    @property
    def request_timeout_s(self) -> int:
        return self.config.request_timeout_s

    @property
    def retries(self) -> int:
        return self.config.retries

    @property
    def fuzzy_threshold(self) -> float:
        return self.config.fuzzy_threshold

    @fuzzy_threshold.setter
    def fuzzy_threshold(self, value: float) -> None:
        self.config = replace(self.config, fuzzy_threshold=self._coerce_threshold(value))

    @property
    def copy_feedback_ms(self) -> int:
        return self.config.copy_feedback_ms

    @property
    def tray_copy_feedback_ms(self) -> int:
        return self.config.tray_copy_feedback_ms

    # ------------------------------------------------------------------
    def is_valid(self) -> bool:
        if self.store_backend == "rest" and not self.api_base_url:
            return False
        return True

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted settings to the view-model."""

        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed_keys = {*SettingsConfig.__annotations__.keys(), "debug_logging"}
        unknown = set(payload.keys()) - allowed_keys
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")

        updates = {
            key: self._coerce_config_value(key, payload[key])
            for key in SettingsConfig.__annotations__.keys()
            if key in payload
        }
        if updates:
            self.config = replace(self.config, **updates)

        if "debug_logging" in payload:
            self.debug_logging = self._coerce_bool(payload["debug_logging"])

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot["debug_logging"] = bool(self.debug_logging)
        return snapshot

    def set_debug_logging(self, enabled: bool) -> None:
        self.debug_logging = self._coerce_bool(enabled)

    # ------------------------------------------------------------------
    # Coercion helpers
    # ------------------------------------------------------------------
    def _coerce_config_value(self, key: str, value: Any) -> Any:
        if key == "store_backend":
            return self._coerce_backend(value)
        if key in {"data_dir", "api_base_url", "api_key"}:
            return self._coerce_optional_str(value)
        if key == "fuzzy_threshold":
            return self._coerce_threshold(value)
        return self._coerce_int(key, value)

    @staticmethod
    def _coerce_backend(value: Any) -> str:
        text = str(value or "").strip().lower()
        if text not in STORE_BACKENDS:
            raise ValueError(f"store_backend must be one of: {', '.join(STORE_BACKENDS)}")
        return text

    @staticmethod
    def _coerce_optional_str(value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @staticmethod
    def _coerce_int(name: str, value: Any) -> int:
        try:
            coerced = int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{name} must be an integer") from exc
        if coerced < 0:
            raise ValueError(f"{name} must be >= 0")
        return coerced

    @staticmethod
    def _coerce_threshold(value: Any) -> float:
        try:
            coerced = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError("fuzzy_threshold must be a number") from exc
        if not 0.0 <= coerced <= 1.0:
            raise ValueError("fuzzy_threshold must be within [0.0, 1.0]")
        return coerced

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)


__all__ = ["STORE_BACKENDS", "SettingsConfig", "SettingsVM", "default_settings_payload"]
