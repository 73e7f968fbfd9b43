"""
Promotion evaluation: points at the current belt → stripes and progress.

    stripes          = min(floor(total_points / points_per_stripe), stripes_per_belt)
    progress_percent = stripes / stripes_per_belt * 100

A belt that has reached its full stripe count is assumed to be promoted by
the grading workflow before further points accrue, so stripes never exceed
``stripes_per_belt`` here even if ``total_points`` does.

The session helpers mirror the coach's grading screen: before saving a
class, the coach sees how many stripes the class's points would award.
"""

from __future__ import annotations

from typing import Mapping

from dojo_progression.models.belt import BeltLadder
from dojo_progression.models.policy import PerBeltPolicy, StripeConfig, UniformPolicy
from dojo_progression.models.results import PromotionStatus, SessionPreview
from dojo_progression.models.student import StudentProgression

# Per-skill score scale used when grading a class (red / yellow / green).
MIN_SKILL_SCORE = 0
MAX_SKILL_SCORE = 2


def resolve_points_per_stripe(
    belt_id: str,
    ladder: BeltLadder,
    policy: UniformPolicy | PerBeltPolicy,
) -> int:
    """Return the stripe cost for ``belt_id``.

    Raises:
        UnknownBeltError: If ``belt_id`` is not in ``ladder``.
    """
    ladder.index_of(belt_id)
    return policy.points_per_stripe_for(belt_id)


def evaluate_promotion(
    student: StudentProgression,
    ladder: BeltLadder,
    policy: UniformPolicy | PerBeltPolicy,
    stripes: StripeConfig,
) -> PromotionStatus:
    """Derive stripe count and belt progress for ``student``.

    Args:
        student: Progress snapshot (``total_points`` is rank-scoped).
        ladder:  Club belt ladder.
        policy:  Points-per-stripe policy.
        stripes: Stripe configuration.

    Returns:
        ``PromotionStatus`` with ``progress_percent`` in [0, 100].

    Raises:
        UnknownBeltError: If the student's belt is not in the ladder.
    """
    belt = ladder.get(student.current_belt_id)
    pps = policy.points_per_stripe_for(belt.id)
    per_belt = stripes.stripes_per_belt

    raw_stripes = student.total_points // pps
    earned = min(raw_stripes, per_belt)
    has_max = raw_stripes >= per_belt

    if has_max:
        into_stripe = 0
        stripe_progress = 100.0
    else:
        into_stripe = student.total_points % pps
        stripe_progress = into_stripe / pps * 100.0

    return PromotionStatus(
        belt_id=belt.id,
        belt_name=belt.name,
        stripes=earned,
        stripes_per_belt=per_belt,
        progress_percent=earned / per_belt * 100.0,
        points_per_stripe=pps,
        points_into_stripe=into_stripe,
        stripe_progress_percent=stripe_progress,
        has_max_stripes=has_max,
    )


def session_total(
    skill_scores: Mapping[str, int],
    homework_points: int = 0,
    bonus_points: int = 0,
) -> int:
    """Sum the points a single class awards a student.

    Args:
        skill_scores:    Skill id → score on the 0–2 scale.
        homework_points: Homework points (clubs with the homework bonus).
        bonus_points:    Coach bonus points (clubs with the coach bonus).

    Raises:
        ValueError: If a skill score is outside 0–2 or a bonus is negative.
    """
    for skill_id, score in skill_scores.items():
        if not MIN_SKILL_SCORE <= score <= MAX_SKILL_SCORE:
            raise ValueError(
                f"Score for skill '{skill_id}' must be in "
                f"[{MIN_SKILL_SCORE}, {MAX_SKILL_SCORE}], got {score}."
            )
    if homework_points < 0 or bonus_points < 0:
        raise ValueError("homework_points and bonus_points must be non-negative.")
    return sum(skill_scores.values()) + homework_points + bonus_points


def preview_session(
    student: StudentProgression,
    session_points: int,
    ladder: BeltLadder,
    policy: UniformPolicy | PerBeltPolicy,
    stripes: StripeConfig,
) -> SessionPreview:
    """Show how many stripes ``session_points`` would award ``student``.

    Stripe counts here are raw (uncapped) so the coach can see when a class
    pushes a student past a full belt.

    Raises:
        ValueError: If ``session_points`` is negative.
        UnknownBeltError: If the student's belt is not in the ladder.
    """
    if session_points < 0:
        raise ValueError(f"session_points must be non-negative, got {session_points}.")

    pps = resolve_points_per_stripe(student.current_belt_id, ladder, policy)
    before = student.total_points // pps
    after = (student.total_points + session_points) // pps

    return SessionPreview(
        session_points=session_points,
        points_required=pps,
        stripes_before=before,
        stripes_after=after,
        new_stripes=after - before,
        has_max_stripes=after >= stripes.stripes_per_belt,
    )
