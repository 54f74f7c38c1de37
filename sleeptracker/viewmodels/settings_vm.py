from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional

from ..domain.ports import DEFAULT_DATABASE_URL
from ..utils.logging import env_requests_debug
from .history_format import DEFAULT_TIME_FORMAT


@dataclass
class SettingsConfig:
    """Typed runtime settings that persist via StorageLocal."""

    database_url: str = DEFAULT_DATABASE_URL
    history_limit: int = 0
    time_format: str = DEFAULT_TIME_FORMAT


def _default_debug_logging() -> bool:
    return env_requests_debug()


class SettingsVM:
    """Keeps app settings state and validation, no I/O here."""

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig()
        self.on_save = on_save
        self.debug_logging: bool = _default_debug_logging()

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def database_url(self) -> str:
        return self.config.database_url

    @database_url.setter
    def database_url(self, value: str) -> None:
        self.config = replace(self.config, database_url=self._coerce_url(value))

    @property
    def history_limit(self) -> int:
        return self.config.history_limit

    @history_limit.setter
    def history_limit(self, value: int) -> None:
        coerced = self._coerce_int("history_limit", value, allow_negative=False)
        self.config = replace(self.config, history_limit=coerced)

    @property
    def time_format(self) -> str:
        return self.config.time_format

    @time_format.setter
    def time_format(self, value: str) -> None:
        self.config = replace(self.config, time_format=self._coerce_format(value))

    @staticmethod
    def known_keys() -> set:
        return {*SettingsConfig.__annotations__.keys(), "debug_logging"}

    # ------------------------------------------------------------------
    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted settings to the view-model."""

        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        unknown = set(payload.keys()) - self.known_keys()
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

    def cmd_save(self) -> None:
        if self.on_save:
            self.on_save(self.to_dict())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _coerce_config_value(self, key: str, raw: Any) -> Any:
        if key == "database_url":
            return self._coerce_url(raw)
        if key == "history_limit":
            return self._coerce_int(key, raw, allow_negative=False)
        if key == "time_format":
            return self._coerce_format(raw)
        raise ValueError(f"Unhandled config field: {key}")

    @staticmethod
    def _coerce_url(value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("database_url must be a non-empty string.")
        return value.strip()

    @staticmethod
    def _coerce_format(value: Any) -> str:
        if not isinstance(value, str) or "%" not in value:
            raise ValueError("time_format must be a strftime pattern.")
        return value

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
    def _coerce_int(name: str, value: Any, *, allow_negative: bool = True) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        if isinstance(value, (int, float)):
            coerced = int(value)
        elif isinstance(value, str):
            try:
                coerced = int(value.strip())
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{name} must be an integer.") from exc
        else:
            raise ValueError(f"{name} must be an integer.")
        if not allow_negative and coerced < 0:
            raise ValueError(f"{name} must be non-negative.")
        return coerced
