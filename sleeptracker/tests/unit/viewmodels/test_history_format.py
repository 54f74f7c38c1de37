from datetime import timezone

import pytest

from sleeptracker.domain.entities import SleepNight
from sleeptracker.viewmodels.history_format import (
    fmt_duration,
    format_night,
    format_nights,
    format_tonight,
    quality_label,
)

# 2026-10-18 22:30:00 UTC
_START = 1_792_362_600_000


@pytest.mark.parametrize(
    ("quality", "label"),
    [(0, "Very bad"), (1, "Poor"), (2, "So-so"), (3, "OK"), (4, "Pretty good"), (5, "Excellent!"), (-1, "--"), (9, "--"), (None, "--")],
)
def test_quality_labels(quality, label):
    assert quality_label(quality) == label


def test_fmt_duration_uses_hours_and_minutes():
    assert fmt_duration(0) == "0:00 h"
    assert fmt_duration((7 * 60 + 5) * 60_000 + 59_999) == "7:05 h"
    assert fmt_duration(-5) == "0:00 h"


def test_format_closed_night():
    night = SleepNight(
        night_id=7,
        start_time_milli=_START,
        end_time_milli=_START + 8 * 3_600_000 + 15 * 60_000,
        sleep_quality=4,
    )

    line = format_night(night, time_format="%Y-%m-%d %H:%M", tz=timezone.utc)

    assert line == "#7  2026-10-18 22:30  ->  2026-10-19 06:45  (8:15 h)  Quality: Pretty good"


def test_format_open_night_and_tonight_label():
    night = SleepNight.open_at(_START).with_id(2)

    assert format_night(night, time_format="%H:%M", tz=timezone.utc) == "#2  22:30  ->  in progress"
    assert format_tonight(night, time_format="%H:%M", tz=timezone.utc) == "Tracking since 22:30"
    assert format_tonight(None) == "Not tracking"


def test_format_nights_keeps_order_and_applies_limit():
    nights = [SleepNight.open_at(_START + i).with_id(i) for i in (3, 2, 1)]

    assert [line.split()[0] for line in format_nights(nights, tz=timezone.utc)] == ["#3", "#2", "#1"]
    assert len(format_nights(nights, limit=2, tz=timezone.utc)) == 2
    assert format_nights([]) == []
