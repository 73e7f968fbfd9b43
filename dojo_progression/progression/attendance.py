"""
Attendance normalizer: a realistic default for the Time Machine slider.

    weeks     = max(1, weeks since join_date)
    avg       = round_half_up(attendance_count / weeks)
    suggested = default_frequency            if avg == 0
                clamp(avg, min_freq, max_freq) otherwise

The result is a starting position for the slider, not a measured truth. It
is recomputed from its inputs on every call; callers should call it again
whenever ``attendance_count`` changes.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from dojo_progression.config import ForecastConfig
from dojo_progression.utils.time_utils import round_half_up, utcnow, weeks_between


def suggest_frequency(
    join_date: date | datetime,
    attendance_count: int,
    now: Optional[datetime] = None,
    settings: ForecastConfig = ForecastConfig(),
) -> int:
    """Suggest a weekly training frequency from attendance history.

    Args:
        join_date:        When the student joined. A future date counts as one
                          elapsed week.
        attendance_count: Lifetime attended classes.
        now:              Reference time (default: current UTC time).
        settings:         Slider bounds and default.

    Returns:
        Integer frequency in ``[settings.min_frequency, settings.max_frequency]``.

    Raises:
        ValueError: If ``attendance_count`` is negative.
    """
    if attendance_count < 0:
        raise ValueError(f"attendance_count must be non-negative, got {attendance_count}.")

    now = now or utcnow()
    weeks = max(1.0, weeks_between(join_date, now))
    avg = round_half_up(attendance_count / weeks)

    if avg == 0:
        return settings.default_frequency
    return max(settings.min_frequency, min(settings.max_frequency, avg))
