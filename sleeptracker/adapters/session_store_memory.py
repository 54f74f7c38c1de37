"""In-memory session store for tests and ``--db memory`` demo runs."""
from __future__ import annotations

import threading
from typing import Dict, List, Optional

from ..domain.entities import NightId, SleepNight
from ..domain.errors import StoreFailure
from ..domain.ports import SessionStorePort


class InMemorySessionStore(SessionStorePort):
    """Dict-backed nights table with auto-incrementing ids."""

    def __init__(self) -> None:
        self._rows: Dict[NightId, SleepNight] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def insert(self, night: SleepNight) -> SleepNight:
        with self._lock:
            stored = night.with_id(self._next_id)
            self._next_id += 1
            self._rows[stored.night_id] = stored
            return stored

    def update(self, night: SleepNight) -> None:
        if night.night_id is None:
            raise StoreFailure("update", "night has no id (was it inserted?)")
        with self._lock:
            if night.night_id in self._rows:
                self._rows[night.night_id] = night

    def get(self, night_id: NightId) -> Optional[SleepNight]:
        with self._lock:
            return self._rows.get(night_id)

    def get_most_recent(self) -> Optional[SleepNight]:
        nights = self.list_all()
        return nights[0] if nights else None

    def list_all(self) -> List[SleepNight]:
        with self._lock:
            rows = list(self._rows.values())
        return sorted(rows, key=lambda n: (n.start_time_milli, n.night_id), reverse=True)

    def clear(self) -> None:
        with self._lock:
            self._rows.clear()


__all__ = ["InMemorySessionStore"]
