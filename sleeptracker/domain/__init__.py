"""Domain package exports for sleep records, ports and errors."""

from .entities import NightId, SleepNight, UNRATED_QUALITY
from .errors import StoreFailure, UseCaseError
from .ports import DEFAULT_DATABASE_URL, SessionStorePort, SettingsPort

__all__ = [
    "DEFAULT_DATABASE_URL",
    "NightId",
    "SessionStorePort",
    "SettingsPort",
    "SleepNight",
    "StoreFailure",
    "UNRATED_QUALITY",
    "UseCaseError",
]
