from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from ..domain.entities import SleepNight
from ..domain.ports import SessionStorePort
from .error_mapping import map_store_error


@dataclass
class LoadTonight:
    """Return the newest night if it is still open, else ``None``."""

    store: SessionStorePort

    def __call__(self) -> Optional[SleepNight]:
        try:
            night = self.store.get_most_recent()
        except Exception as e:
            raise map_store_error(e, default_code="LOAD_FAILED") from e
        if night is not None and night.is_open:
            return night
        return None
