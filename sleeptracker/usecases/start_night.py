from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from ..domain.entities import SleepNight
from ..domain.ports import SessionStorePort
from .error_mapping import map_store_error
from .load_tonight import LoadTonight


@dataclass
class StartNight:
    """Insert a new open night and re-read tonight from the store."""

    store: SessionStorePort

    def __call__(self, now_ms: int) -> Optional[SleepNight]:
        try:
            self.store.insert(SleepNight.open_at(now_ms))
        except Exception as e:
            raise map_store_error(e, default_code="START_FAILED") from e
        return LoadTonight(self.store)()
