"""Typed domain records for tracked sleep nights.

The persisted "unfinished" marker is equality of the start and end times: a
night is open while ``start_time_milli == end_time_milli``.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

NightId = int
UNRATED_QUALITY = -1


@dataclass(frozen=True)
class SleepNight:
    """One sleep session as stored in the nights table.

    Attributes:
        night_id: Store-assigned primary key, ``None`` before insertion.
        start_time_milli: Epoch milliseconds when tracking started.
        end_time_milli: Epoch milliseconds when tracking stopped. Equal to the
            start time while the night is still open.
        sleep_quality: Rating 0..5 set by the quality screen, ``-1`` if unrated.
    """

    night_id: Optional[NightId] = None
    start_time_milli: int = 0
    end_time_milli: int = 0
    sleep_quality: int = UNRATED_QUALITY

    def __post_init__(self) -> None:
        if self.end_time_milli < self.start_time_milli:
            raise ValueError("end_time_milli must not precede start_time_milli.")

    @classmethod
    def open_at(cls, now_ms: int) -> "SleepNight":
        """Return a fresh, unsaved night that starts (and ends) at ``now_ms``."""
        return cls(start_time_milli=int(now_ms), end_time_milli=int(now_ms))

    @property
    def is_open(self) -> bool:
        return self.start_time_milli == self.end_time_milli

    @property
    def duration_ms(self) -> int:
        return self.end_time_milli - self.start_time_milli

    def closed_at(self, now_ms: int) -> "SleepNight":
        """Return a copy whose end time is ``now_ms`` (never before the start)."""
        return replace(self, end_time_milli=max(int(now_ms), self.start_time_milli))

    def with_id(self, night_id: NightId) -> "SleepNight":
        return replace(self, night_id=night_id)


__all__ = ["NightId", "SleepNight", "UNRATED_QUALITY"]
