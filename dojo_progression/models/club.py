"""
Club progression configuration snapshot.

``ClubProgressionConfig`` bundles everything an admin configures for the
grading system: the belt ladder, the points policy, stripes per belt, the
gradable skills and the bonus switches. Engine entry points accept it as one
frozen object so a caller cannot accidentally combine a freshly edited ladder
with a stale policy.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dojo_progression.models.belt import BeltLadder
from dojo_progression.models.policy import PerBeltPolicy, PointsPolicy, StripeConfig, UniformPolicy
from dojo_progression.models.student import BonusFlags, SkillConfig

log = logging.getLogger(__name__)


class ClubProgressionConfig(BaseModel):
    """Complete grading configuration for one club.

    Attributes:
        ladder:  Ordered belt catalog.
        policy:  Points-per-stripe policy (uniform or per belt).
        stripes: Stripes needed to complete a belt.
        skills:  Gradable skills; inactive ones are ignored by the velocity model.
        bonuses: Homework / coach bonus switches.
    """

    model_config = ConfigDict(frozen=True)

    ladder: BeltLadder
    policy: PointsPolicy = Field(default_factory=UniformPolicy)
    stripes: StripeConfig = Field(default_factory=StripeConfig)
    skills: list[SkillConfig] = Field(default_factory=list)
    bonuses: BonusFlags = Field(default_factory=BonusFlags)

    @model_validator(mode="after")
    def check_policy_against_ladder(self) -> "ClubProgressionConfig":
        if isinstance(self.policy, PerBeltPolicy):
            stale = self.policy.unmapped_ids(self.ladder)
            if stale:
                log.warning(
                    "Per-belt points map has entries for belts not in the ladder "
                    "(ignored): %s",
                    stale,
                )
        return self

    @property
    def active_skills(self) -> list[SkillConfig]:
        return [s for s in self.skills if s.is_active]
