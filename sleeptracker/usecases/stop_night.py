from __future__ import annotations
from dataclasses import dataclass
from ..domain.entities import SleepNight
from ..domain.ports import SessionStorePort
from .error_mapping import map_store_error


@dataclass
class StopNight:
    """Close ``night`` at ``now_ms`` and persist it."""

    store: SessionStorePort

    def __call__(self, night: SleepNight, now_ms: int) -> SleepNight:
        closed = night.closed_at(now_ms)
        try:
            self.store.update(closed)
        except Exception as e:
            raise map_store_error(e, default_code="STOP_FAILED") from e
        return closed
