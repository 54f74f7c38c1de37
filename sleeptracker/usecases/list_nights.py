from __future__ import annotations
from dataclasses import dataclass
from typing import List
from ..domain.entities import SleepNight
from ..domain.ports import SessionStorePort
from .error_mapping import map_store_error


@dataclass
class ListNights:
    store: SessionStorePort

    def __call__(self) -> List[SleepNight]:
        try:
            return list(self.store.list_all())
        except Exception as e:
            raise map_store_error(e, default_code="LIST_FAILED") from e
