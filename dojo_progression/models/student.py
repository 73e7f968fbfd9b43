"""
Student and club-activity input models.

``StudentProgression`` is a read-only snapshot of one student's progress.
``total_points`` is RANK-SCOPED: it counts points earned since the last
promotion and is reset to 0 by the grading workflow whenever the student is
promoted. Lifetime distance to the terminal rank is never stored; the
forecast engine reconstructs it from the ladder (see
``progression/forecast.py``).

``SkillConfig`` and ``BonusFlags`` describe how a club grades a class and
feed the velocity estimate.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class StudentProgression(BaseModel):
    """Snapshot of a student's progress at their current belt.

    Attributes:
        current_belt_id:  Id of the belt the student currently holds.
        total_points:     Points earned at the current belt (resets on promotion).
        attendance_count: Lifetime number of attended classes.
        join_date:        Date the student joined the club.
        student_id:       Optional external identifier, for labelling output.
        name:             Optional display name, for labelling output.
    """

    model_config = ConfigDict(frozen=True)

    current_belt_id: str
    total_points: int = 0
    attendance_count: int = 0
    join_date: date
    student_id: Optional[str] = None
    name: Optional[str] = None

    @field_validator("join_date", mode="before")
    @classmethod
    def coerce_join_date(cls, v):
        # Storage layers hand over timestamps; only the calendar day matters.
        if isinstance(v, datetime):
            return v.date()
        return v

    @field_validator("total_points", "attendance_count")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"must be non-negative, got {v}.")
        return v


class SkillConfig(BaseModel):
    """A gradable skill (e.g. Technique, Focus). Only active skills count."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: Optional[str] = None
    is_active: bool = True


class BonusFlags(BaseModel):
    """Club-wide switches for the optional per-class bonus point sources."""

    model_config = ConfigDict(frozen=True)

    homework_bonus_enabled: bool = False
    coach_bonus_enabled: bool = False
