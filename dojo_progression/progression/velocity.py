"""
Velocity estimate: expected points earned per attended class.

Formula
-------
    active_skills = max(1, number of active skills)
    max_points    = active_skills * max_skill_score          # 2 per skill
    realistic     = max_points * efficiency                  # 0.85
    velocity      = realistic
                    + homework_bonus  (if enabled)           # +1.0
                    + coach_bonus     (if enabled)           # +0.5

This is a conservative model assumption, not a historical average: new
students have too little grading history for an average to mean much, and a
fixed heuristic keeps the forecast from jumping after a single good or bad
class. The floor of one skill keeps clubs that have not configured skills
from getting a zero-velocity forecast.

The constants come from ``VelocityConfig`` (``[velocity]`` in the config file).
"""

from __future__ import annotations

import logging
from typing import Iterable

from dojo_progression.config import VelocityConfig
from dojo_progression.models.student import BonusFlags, SkillConfig

log = logging.getLogger(__name__)


def active_skill_count(skills: Iterable[SkillConfig]) -> int:
    """Number of active skills, floored at 1."""
    return max(1, sum(1 for s in skills if s.is_active))


def estimate_velocity(
    skills: Iterable[SkillConfig],
    bonuses: BonusFlags,
    model: VelocityConfig = VelocityConfig(),
) -> float:
    """Estimate points per attended class for forecasting.

    Args:
        skills:  Club skill configuration; inactive skills are ignored.
        bonuses: Club bonus switches.
        model:   Heuristic constants.

    Returns:
        Expected points per class (always > 0).
    """
    count = active_skill_count(skills)
    realistic = count * model.max_skill_score * model.efficiency

    bonus = 0.0
    if bonuses.homework_bonus_enabled:
        bonus += model.homework_bonus
    if bonuses.coach_bonus_enabled:
        bonus += model.coach_bonus

    velocity = realistic + bonus
    log.debug(
        "Velocity estimate: %d active skill(s) -> %.2f skill pts + %.2f bonus = %.2f/class",
        count, realistic, bonus, velocity,
    )
    return velocity
