"""
Shared pytest fixtures for the dojo progression test suite.

Provides:
  - ``now``: a fixed, timezone-aware reference time. Engine functions take
    ``now`` explicitly, so no test depends on the wall clock.
  - The three-belt ladder used throughout (White → Yellow → Black) with
    uniform and per-belt policies.
  - Sample student, skill and club snapshots.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from dojo_progression.models.belt import Belt, BeltLadder
from dojo_progression.models.club import ClubProgressionConfig
from dojo_progression.models.policy import PerBeltPolicy, StripeConfig, UniformPolicy
from dojo_progression.models.student import BonusFlags, SkillConfig, StudentProgression


# ── Time ──────────────────────────────────────────────────────────────────────

@pytest.fixture
def now() -> datetime:
    """Fixed reference time: Monday 2026-01-05 12:00 UTC."""
    return datetime(2026, 1, 5, 12, 0, 0, tzinfo=timezone.utc)


# ── Ladder and policy ─────────────────────────────────────────────────────────

@pytest.fixture
def three_belt_ladder() -> BeltLadder:
    """White (0) → Yellow (1) → Black (2, terminal)."""
    return BeltLadder(belts=[
        Belt(id="white", name="White", order=0),
        Belt(id="yellow", name="Yellow", order=1),
        Belt(id="black", name="Black", order=2),
    ])


@pytest.fixture
def uniform_policy() -> UniformPolicy:
    return UniformPolicy(points_per_stripe=64)


@pytest.fixture
def per_belt_policy() -> PerBeltPolicy:
    """White 50, Yellow 80; Black has no entry and falls back to 64."""
    return PerBeltPolicy(
        points_per_belt={"white": 50, "yellow": 80},
        default_points_per_stripe=64,
    )


@pytest.fixture
def four_stripes() -> StripeConfig:
    return StripeConfig(stripes_per_belt=4)


# ── Students and clubs ────────────────────────────────────────────────────────

@pytest.fixture
def make_student():
    """Factory for ``StudentProgression`` with sensible defaults."""

    def _make(
        belt: str = "white",
        points: int = 0,
        attendance_count: int = 0,
        join_date: date = date(2025, 1, 6),
    ) -> StudentProgression:
        return StudentProgression(
            current_belt_id=belt,
            total_points=points,
            attendance_count=attendance_count,
            join_date=join_date,
        )

    return _make


@pytest.fixture
def demo_skills() -> list[SkillConfig]:
    """Four active skills, as in the demo club."""
    return [
        SkillConfig(id="discipline", name="Discipline"),
        SkillConfig(id="technique", name="Technique"),
        SkillConfig(id="focus", name="Focus"),
        SkillConfig(id="power", name="Power"),
    ]


@pytest.fixture
def uniform_club(three_belt_ladder, uniform_policy, four_stripes, demo_skills) -> ClubProgressionConfig:
    return ClubProgressionConfig(
        ladder=three_belt_ladder,
        policy=uniform_policy,
        stripes=four_stripes,
        skills=demo_skills,
        bonuses=BonusFlags(),
    )


@pytest.fixture
def per_belt_club(three_belt_ladder, per_belt_policy, four_stripes, demo_skills) -> ClubProgressionConfig:
    return ClubProgressionConfig(
        ladder=three_belt_ladder,
        policy=per_belt_policy,
        stripes=four_stripes,
        skills=demo_skills,
        bonuses=BonusFlags(),
    )
