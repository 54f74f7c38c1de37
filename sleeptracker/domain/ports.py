from __future__ import annotations

from typing import List, Optional, Protocol

from .entities import NightId, SleepNight
from .errors import UseCaseError

DEFAULT_DATABASE_URL = "sqlite:///sleep_tracker.db"


# ---- Ports (Hexagonal boundaries) ----
class SessionStorePort(Protocol):
    """Row-level persistence for sleep nights.

    Every method raises :class:`~sleeptracker.domain.errors.StoreFailure` when
    the underlying engine fails; nothing else is reported.
    """

    def insert(self, night: SleepNight) -> SleepNight: ...  # returns night with id
    def update(self, night: SleepNight) -> None: ...
    def get(self, night_id: NightId) -> Optional[SleepNight]: ...
    def get_most_recent(self) -> Optional[SleepNight]: ...  # newest by start time
    def list_all(self) -> List[SleepNight]: ...  # newest first
    def clear(self) -> None: ...


class SettingsPort(Protocol):
    """Persistence for user settings."""

    def save_user_settings(self, payload: dict) -> None: ...
    def load_user_settings(self) -> Optional[dict]: ...


__all__ = ["DEFAULT_DATABASE_URL", "SessionStorePort", "SettingsPort", "UseCaseError"]
