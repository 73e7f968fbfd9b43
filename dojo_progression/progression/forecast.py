"""
Time Machine: projected date of reaching the terminal rank.

Lifetime reconstruction
-----------------------
``StudentProgression.total_points`` only counts points at the current belt
(it resets on promotion), but the forecast needs the distance from where the
student stands to the terminal rank across every remaining belt. It is
rebuilt from the ladder on each call:

    target        = index of the terminal belt
    belt_total(i) = stripes_per_belt * points_per_stripe(belt i)
    needed        = sum(belt_total(i) for i < target)
    banked        = sum(belt_total(i) for i < current)
    current       = banked + total_points
    remaining     = max(0, needed - current)
    percent       = current / needed * 100   (100 when needed == 0), clamped

By default the terminal belt itself costs nothing: being promoted to it is
the goal. ``ForecastConfig.include_terminal_belt`` moves the goal to a fully
striped terminal belt (``target`` becomes ``len(ladder)``).

Date projection
---------------
    remaining <= 0         → now (already qualified)
    points_per_week <= 0   → now + sentinel_years   (no path at this cadence)
    otherwise              → now + remaining / points_per_week weeks,
                             however far away (datetime.max if it overflows)

"Years saved" compares the chosen cadence ``f`` against ``max(1, f - 1)``:
the difference between the two projected dates in 365-day years, rounded to
one decimal. It is a motivational figure for the parent view, not an
optimisation result.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from dojo_progression.config import ForecastConfig, VelocityConfig
from dojo_progression.models.belt import BeltLadder
from dojo_progression.models.club import ClubProgressionConfig
from dojo_progression.models.policy import PerBeltPolicy, StripeConfig, UniformPolicy
from dojo_progression.models.results import ForecastResult, LifetimeDistance
from dojo_progression.models.student import StudentProgression
from dojo_progression.progression.velocity import estimate_velocity
from dojo_progression.utils.time_utils import (
    add_weeks,
    add_years,
    as_datetime,
    utcnow,
    years_between,
)

log = logging.getLogger(__name__)


def belt_total(
    belt_id: str,
    policy: UniformPolicy | PerBeltPolicy,
    stripes: StripeConfig,
) -> int:
    """Points needed to complete one belt."""
    return stripes.stripes_per_belt * policy.points_per_stripe_for(belt_id)


def lifetime_distance(
    student: StudentProgression,
    ladder: BeltLadder,
    policy: UniformPolicy | PerBeltPolicy,
    stripes: StripeConfig,
    include_terminal_belt: bool = False,
) -> LifetimeDistance:
    """Reconstruct the student's cumulative distance to the terminal rank.

    With ``include_terminal_belt`` the goal becomes a fully striped terminal
    belt, so the terminal belt's own cost is added to ``total_points_needed``.

    Raises:
        UnknownBeltError: If the student's belt is not in the ladder.
    """
    current_index = ladder.index_of(student.current_belt_id)
    end = len(ladder) if include_terminal_belt else ladder.terminal_index

    needed = 0
    banked = 0
    for i, belt in enumerate(ladder.belts[:end]):
        total = belt_total(belt.id, policy, stripes)
        needed += total
        if i < current_index:
            banked += total

    current = banked + student.total_points
    remaining = max(0, needed - current)
    if needed > 0:
        percent = min(100.0, max(0.0, current / needed * 100.0))
    else:
        percent = 100.0

    log.debug(
        "Lifetime distance for belt '%s': needed=%d banked=%d current=%d remaining=%d",
        student.current_belt_id, needed, banked, current, remaining,
    )
    return LifetimeDistance(
        total_points_needed=needed,
        banked_points=banked,
        current_lifetime_points=current,
        points_remaining=remaining,
        percent_complete=percent,
    )


def project_date(
    points_remaining: float,
    attendance_per_week: float,
    velocity_per_class: float,
    now: datetime,
    sentinel_years: int = 10,
) -> datetime:
    """Project the date on which ``points_remaining`` will have been earned.

    Returns the far-future sentinel (``now + sentinel_years``) instead of
    raising when the cadence earns nothing. Any positive rate yields a real
    projection, even decades out; one beyond ``datetime``'s range
    saturates at ``datetime.max``.
    """
    if points_remaining <= 0:
        return now

    points_per_week = attendance_per_week * velocity_per_class
    if points_per_week <= 0:
        return add_years(now, sentinel_years)

    weeks_needed = points_remaining / points_per_week
    try:
        return add_weeks(now, weeks_needed)
    except OverflowError:
        return datetime.max.replace(tzinfo=now.tzinfo)


def baseline_frequency(attendance_per_week: float) -> float:
    """The "one class fewer" cadence used for the years-saved comparison."""
    return max(1, attendance_per_week - 1)


def _check_rates(attendance_per_week: float, velocity_per_class: float) -> None:
    if attendance_per_week < 0:
        raise ValueError(
            f"attendance_per_week must be non-negative, got {attendance_per_week}."
        )
    if velocity_per_class < 0:
        raise ValueError(
            f"velocity_per_class must be non-negative, got {velocity_per_class}."
        )


def forecast(
    student: StudentProgression,
    ladder: BeltLadder,
    policy: UniformPolicy | PerBeltPolicy,
    stripes: StripeConfig,
    velocity_per_class: float,
    attendance_per_week: float,
    now: Optional[datetime] = None,
    settings: ForecastConfig = ForecastConfig(),
) -> ForecastResult:
    """Project when ``student`` reaches the terminal rank of ``ladder``.

    Args:
        student:             Progress snapshot.
        ladder:              Club belt ladder.
        policy:              Points-per-stripe policy.
        stripes:             Stripe configuration.
        velocity_per_class:  Expected points per attended class.
        attendance_per_week: Hypothetical weekly cadence (the slider value).
        now:                 Reference time (default: current UTC time).
        settings:            Forecast settings (sentinel horizon).

    Returns:
        ``ForecastResult`` for the given cadence.

    Raises:
        ValueError: If ``attendance_per_week`` or ``velocity_per_class`` is negative.
        UnknownBeltError: If the student's belt is not in the ladder.
    """
    _check_rates(attendance_per_week, velocity_per_class)

    now = as_datetime(now) if now is not None else utcnow()
    distance = lifetime_distance(
        student, ladder, policy, stripes,
        include_terminal_belt=settings.include_terminal_belt,
    )

    points_per_week = attendance_per_week * velocity_per_class
    estimated = project_date(
        distance.points_remaining, attendance_per_week, velocity_per_class,
        now, settings.sentinel_years,
    )
    baseline = baseline_frequency(attendance_per_week)
    baseline_date = project_date(
        distance.points_remaining, baseline, velocity_per_class,
        now, settings.sentinel_years,
    )

    reachable = distance.points_remaining <= 0 or points_per_week > 0
    if not reachable:
        log.debug(
            "No path at %.2f classes/week x %.2f pts/class; "
            "using the %d-year sentinel date.",
            attendance_per_week, velocity_per_class, settings.sentinel_years,
        )

    return ForecastResult(
        target_belt_name=ladder.terminal.name,
        total_points_needed=distance.total_points_needed,
        points_remaining=distance.points_remaining,
        percent_complete=distance.percent_complete,
        estimated_date=estimated,
        attendance_per_week=attendance_per_week,
        velocity_per_class=velocity_per_class,
        points_per_week=points_per_week,
        reachable=reachable,
        baseline_frequency=baseline,
        baseline_date=baseline_date,
        years_saved=years_between(baseline_date, estimated),
    )


def forecast_terminal_rank(
    student: StudentProgression,
    club: ClubProgressionConfig,
    attendance_per_week: float,
    velocity_per_class: Optional[float] = None,
    now: Optional[datetime] = None,
    settings: ForecastConfig = ForecastConfig(),
    velocity_model: VelocityConfig = VelocityConfig(),
) -> ForecastResult:
    """``forecast()`` against a club snapshot.

    ``velocity_per_class`` is estimated from the club's skills and bonus
    switches (using ``velocity_model``) when not given.
    """
    if velocity_per_class is None:
        velocity_per_class = estimate_velocity(club.skills, club.bonuses, velocity_model)
    return forecast(
        student, club.ladder, club.policy, club.stripes,
        velocity_per_class=velocity_per_class,
        attendance_per_week=attendance_per_week,
        now=now,
        settings=settings,
    )


def forecast_schedule(
    student: StudentProgression,
    club: ClubProgressionConfig,
    frequencies: Optional[Iterable[float]] = None,
    velocity_per_class: Optional[float] = None,
    now: Optional[datetime] = None,
    settings: ForecastConfig = ForecastConfig(),
    velocity_model: VelocityConfig = VelocityConfig(),
) -> list[ForecastResult]:
    """Forecast every cadence on the slider (or the given ``frequencies``).

    All rows share one ``now`` and one velocity so they are directly
    comparable.
    """
    if frequencies is None:
        frequencies = range(settings.min_frequency, settings.max_frequency + 1)
    if velocity_per_class is None:
        velocity_per_class = estimate_velocity(club.skills, club.bonuses, velocity_model)
    now = as_datetime(now) if now is not None else utcnow()

    return [
        forecast_terminal_rank(
            student, club, f,
            velocity_per_class=velocity_per_class,
            now=now,
            settings=settings,
        )
        for f in frequencies
    ]
