"""
Engine output models.

``PromotionStatus``  — rank display for one student (stripes, progress bar).
``SessionPreview``   — what a class's points would do to the student's stripes.
``LifetimeDistance`` — reconstructed cumulative distance to the terminal rank.
``ForecastResult``   — the Time Machine projection for one attendance cadence.

All models are frozen: they are derived values, recomputed from inputs on
every call and never edited afterwards.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, model_validator


def _check_percent(value: float, field_name: str) -> None:
    if not 0.0 <= value <= 100.0:
        raise ValueError(f"{field_name} must be in [0, 100], got {value}.")


class PromotionStatus(BaseModel):
    """Stripe count and belt progress for the student's current belt.

    Attributes:
        belt_id:                 Current belt id.
        belt_name:               Current belt display name.
        stripes:                 Stripes earned, capped at ``stripes_per_belt``.
        stripes_per_belt:        Stripes that complete the belt.
        progress_percent:        ``stripes / stripes_per_belt * 100``.
        points_per_stripe:       Resolved stripe cost for this belt.
        points_into_stripe:      Points toward the next stripe (0 when full).
        stripe_progress_percent: Progress toward the next stripe (100 when full).
        has_max_stripes:         True when the belt is complete.
    """

    model_config = ConfigDict(frozen=True)

    belt_id: str
    belt_name: str
    stripes: int
    stripes_per_belt: int
    progress_percent: float
    points_per_stripe: int
    points_into_stripe: int
    stripe_progress_percent: float
    has_max_stripes: bool

    @model_validator(mode="after")
    def validate_ranges(self) -> "PromotionStatus":
        _check_percent(self.progress_percent, "progress_percent")
        _check_percent(self.stripe_progress_percent, "stripe_progress_percent")
        if not 0 <= self.stripes <= self.stripes_per_belt:
            raise ValueError(
                f"stripes ({self.stripes}) must be in [0, {self.stripes_per_belt}]."
            )
        return self


class SessionPreview(BaseModel):
    """Effect of awarding ``session_points`` in one class."""

    model_config = ConfigDict(frozen=True)

    session_points: int
    points_required: int
    stripes_before: int
    stripes_after: int
    new_stripes: int
    has_max_stripes: bool


class LifetimeDistance(BaseModel):
    """Cumulative point accounting from the first belt to the terminal rank.

    Attributes:
        total_points_needed:     Sum of every non-terminal belt's full cost.
        banked_points:           Full cost of belts the student has passed.
        current_lifetime_points: ``banked_points`` + current-belt points.
        points_remaining:        ``max(0, needed - current)``.
        percent_complete:        Lifetime progress, clamped to [0, 100].
    """

    model_config = ConfigDict(frozen=True)

    total_points_needed: int
    banked_points: int
    current_lifetime_points: int
    points_remaining: int
    percent_complete: float

    @model_validator(mode="after")
    def validate_ranges(self) -> "LifetimeDistance":
        _check_percent(self.percent_complete, "percent_complete")
        if self.points_remaining < 0:
            raise ValueError("points_remaining must be non-negative.")
        return self


class ForecastResult(BaseModel):
    """Projected date of reaching the terminal rank at one weekly cadence.

    ``reachable`` is False when the cadence earns no points at all; in that
    case ``estimated_date`` is the far-future sentinel rather than a real
    projection.
    """

    model_config = ConfigDict(frozen=True)

    target_belt_name: str
    total_points_needed: int
    points_remaining: int
    percent_complete: float
    estimated_date: datetime
    attendance_per_week: float
    velocity_per_class: float
    points_per_week: float
    reachable: bool
    baseline_frequency: float
    baseline_date: datetime
    years_saved: float

    @model_validator(mode="after")
    def validate_ranges(self) -> "ForecastResult":
        _check_percent(self.percent_complete, "percent_complete")
        if self.years_saved < 0:
            raise ValueError("years_saved must be non-negative.")
        return self
