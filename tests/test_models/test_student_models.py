"""Tests for StudentProgression, ClubProgressionConfig and result models."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from dojo_progression.models.club import ClubProgressionConfig
from dojo_progression.models.policy import PerBeltPolicy, UniformPolicy
from dojo_progression.models.results import LifetimeDistance, PromotionStatus
from dojo_progression.models.student import SkillConfig, StudentProgression


class TestStudentProgression:
    def test_defaults(self):
        s = StudentProgression(current_belt_id="white", join_date=date(2025, 1, 1))
        assert s.total_points == 0
        assert s.attendance_count == 0

    def test_negative_points_raise(self):
        with pytest.raises(ValidationError, match="non-negative"):
            StudentProgression(
                current_belt_id="white", total_points=-1, join_date=date(2025, 1, 1)
            )

    def test_negative_attendance_raises(self):
        with pytest.raises(ValidationError, match="non-negative"):
            StudentProgression(
                current_belt_id="white", attendance_count=-3, join_date=date(2025, 1, 1)
            )

    def test_datetime_join_date_is_truncated(self):
        s = StudentProgression(
            current_belt_id="white",
            join_date=datetime(2025, 3, 4, 18, 30, tzinfo=timezone.utc),
        )
        assert s.join_date == date(2025, 3, 4)

    def test_iso_string_join_date(self):
        s = StudentProgression(current_belt_id="white", join_date="2025-03-04")
        assert s.join_date == date(2025, 3, 4)


class TestClubProgressionConfig:
    def test_defaults(self, three_belt_ladder):
        club = ClubProgressionConfig(ladder=three_belt_ladder)
        assert isinstance(club.policy, UniformPolicy)
        assert club.stripes.stripes_per_belt == 4
        assert club.skills == []

    def test_policy_parsed_from_dict(self, three_belt_ladder):
        club = ClubProgressionConfig(
            ladder=three_belt_ladder,
            policy={"kind": "per_belt", "points_per_belt": {"white": 10}},
        )
        assert isinstance(club.policy, PerBeltPolicy)

    def test_active_skills(self, three_belt_ladder):
        club = ClubProgressionConfig(
            ladder=three_belt_ladder,
            skills=[SkillConfig(id="a"), SkillConfig(id="b", is_active=False)],
        )
        assert [s.id for s in club.active_skills] == ["a"]

    def test_stale_per_belt_entry_logs_warning(self, three_belt_ladder, caplog):
        with caplog.at_level(logging.WARNING, logger="dojo_progression.models.club"):
            club = ClubProgressionConfig(
                ladder=three_belt_ladder,
                policy=PerBeltPolicy(points_per_belt={"purple": 99}),
            )
        assert "purple" in caplog.text
        assert club.policy.points_per_stripe_for("white") == 64


class TestResultModels:
    def test_promotion_status_rejects_out_of_range_percent(self):
        with pytest.raises(ValidationError, match="progress_percent"):
            PromotionStatus(
                belt_id="white", belt_name="White", stripes=1, stripes_per_belt=4,
                progress_percent=120.0, points_per_stripe=64, points_into_stripe=0,
                stripe_progress_percent=0.0, has_max_stripes=False,
            )

    def test_lifetime_distance_rejects_negative_remaining(self):
        with pytest.raises(ValidationError, match="points_remaining"):
            LifetimeDistance(
                total_points_needed=10, banked_points=0, current_lifetime_points=20,
                points_remaining=-10, percent_complete=100.0,
            )
