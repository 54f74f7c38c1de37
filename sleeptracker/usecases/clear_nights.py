from __future__ import annotations
from dataclasses import dataclass
from ..domain.ports import SessionStorePort
from .error_mapping import map_store_error


@dataclass
class ClearNights:
    store: SessionStorePort

    def __call__(self) -> None:
        try:
            self.store.clear()
        except Exception as e:
            raise map_store_error(e, default_code="CLEAR_FAILED") from e
