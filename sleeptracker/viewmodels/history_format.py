"""Display helpers that turn stored nights into history lines.

Call context:
    ``SleepTrackerVM`` calls :func:`format_nights` whenever the nights list
    changes and publishes the result through ``on_history_changed``.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import List, Optional, Sequence

from ..domain.entities import SleepNight

DEFAULT_TIME_FORMAT = "%a %d-%b-%Y %H:%M"

_QUALITY_LABELS = {
    0: "Very bad",
    1: "Poor",
    2: "So-so",
    3: "OK",
    4: "Pretty good",
    5: "Excellent!",
}


def quality_label(quality: Optional[int]) -> str:
    """Map a 0..5 rating to its label; anything else (including unrated) is ``--``."""
    if quality is None:
        return "--"
    return _QUALITY_LABELS.get(int(quality), "--")


def fmt_timestamp(epoch_ms: int, time_format: str = DEFAULT_TIME_FORMAT, tz: Optional[tzinfo] = None) -> str:
    return datetime.fromtimestamp(epoch_ms / 1000.0, tz=tz).strftime(time_format)


def fmt_duration(duration_ms: int) -> str:
    """Format a duration as h:mm (negative values clamp to zero)."""
    total_min = max(0, int(duration_ms)) // 60000
    hours, minutes = divmod(total_min, 60)
    return f"{hours}:{minutes:02d} h"


def format_night(night: SleepNight, *, time_format: str = DEFAULT_TIME_FORMAT, tz: Optional[tzinfo] = None) -> str:
    start = fmt_timestamp(night.start_time_milli, time_format, tz)
    if night.is_open:
        return f"#{night.night_id}  {start}  ->  in progress"
    end = fmt_timestamp(night.end_time_milli, time_format, tz)
    return (
        f"#{night.night_id}  {start}  ->  {end}  "
        f"({fmt_duration(night.duration_ms)})  Quality: {quality_label(night.sleep_quality)}"
    )


def format_tonight(night: Optional[SleepNight], *, time_format: str = DEFAULT_TIME_FORMAT, tz: Optional[tzinfo] = None) -> str:
    if night is None:
        return "Not tracking"
    return f"Tracking since {fmt_timestamp(night.start_time_milli, time_format, tz)}"


def format_nights(
    nights: Sequence[SleepNight],
    *,
    time_format: str = DEFAULT_TIME_FORMAT,
    limit: int = 0,
    tz: Optional[tzinfo] = None,
) -> List[str]:
    """Return one history line per night, keeping the given (newest-first) order.

    Args:
        nights: Nights as returned by the store.
        time_format: ``strftime`` pattern for start/end times.
        limit: Keep only the first ``limit`` lines when positive.
        tz: Time zone for rendering; local time when ``None``.
    """
    selected = list(nights)
    if limit > 0:
        selected = selected[:limit]
    return [format_night(night, time_format=time_format, tz=tz) for night in selected]


__all__ = [
    "DEFAULT_TIME_FORMAT",
    "fmt_duration",
    "fmt_timestamp",
    "format_night",
    "format_nights",
    "format_tonight",
    "quality_label",
]
