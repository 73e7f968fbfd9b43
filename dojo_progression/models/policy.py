"""
Points policy and stripe configuration.

A club decides how many points a stripe costs in one of two ways:

  - ``UniformPolicy``  — one ``points_per_stripe`` for every belt.
  - ``PerBeltPolicy``  — a ``belt_id → points_per_stripe`` map, with a named
    ``default_points_per_stripe`` used for belts the map does not cover.

``PointsPolicy`` is the discriminated union of the two (discriminator:
``kind``), so a policy read from TOML or JSON is parsed into the right class
automatically::

    TypeAdapter(PointsPolicy).validate_python({"kind": "uniform", "points_per_stripe": 64})

Every stripe cost must be ``> 0``. Invalid values are rejected when the
policy is constructed, so evaluation code never has to guard against a zero
or negative divisor.

``StripeConfig`` holds ``stripes_per_belt`` — shared across the whole ladder.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from dojo_progression.models.belt import BeltLadder

DEFAULT_POINTS_PER_STRIPE = 64
DEFAULT_STRIPES_PER_BELT = 4
DEFAULT_ESCALATION_STEP = 16


def _require_positive(v: int, field_name: str) -> int:
    if v <= 0:
        raise ValueError(f"{field_name} must be > 0, got {v}.")
    return v


class UniformPolicy(BaseModel):
    """The same stripe cost for every belt."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["uniform"] = "uniform"
    points_per_stripe: int = DEFAULT_POINTS_PER_STRIPE

    @field_validator("points_per_stripe")
    @classmethod
    def validate_points_per_stripe(cls, v: int) -> int:
        return _require_positive(v, "points_per_stripe")

    def points_per_stripe_for(self, belt_id: str) -> int:
        return self.points_per_stripe


class PerBeltPolicy(BaseModel):
    """Belt-specific stripe costs with an explicit fallback.

    Attributes:
        points_per_belt:           Map of belt id → points per stripe.
        default_points_per_stripe: Used for any belt missing from the map.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["per_belt"] = "per_belt"
    points_per_belt: dict[str, int] = Field(default_factory=dict)
    default_points_per_stripe: int = DEFAULT_POINTS_PER_STRIPE

    @field_validator("points_per_belt")
    @classmethod
    def validate_points_per_belt(cls, v: dict[str, int]) -> dict[str, int]:
        bad = {belt_id: pps for belt_id, pps in v.items() if pps <= 0}
        if bad:
            raise ValueError(f"points_per_belt values must be > 0, got {bad}.")
        return v

    @field_validator("default_points_per_stripe")
    @classmethod
    def validate_default(cls, v: int) -> int:
        return _require_positive(v, "default_points_per_stripe")

    def points_per_stripe_for(self, belt_id: str) -> int:
        return self.points_per_belt.get(belt_id, self.default_points_per_stripe)

    def unmapped_ids(self, ladder: BeltLadder) -> list[str]:
        """Map keys that name no belt in ``ladder`` (stale after a belt was removed)."""
        return sorted(k for k in self.points_per_belt if not ladder.contains(k))


PointsPolicy = Annotated[Union[UniformPolicy, PerBeltPolicy], Field(discriminator="kind")]

_POLICY_ADAPTER: TypeAdapter = TypeAdapter(PointsPolicy)


def parse_policy(raw: dict) -> UniformPolicy | PerBeltPolicy:
    """Validate a raw dict (e.g. a TOML ``[policy]`` table) into a policy.

    A table without ``kind`` is treated as ``"uniform"``.

    Raises:
        pydantic.ValidationError: On unknown ``kind`` or non-positive costs.
    """
    data = dict(raw)
    data.setdefault("kind", "uniform")
    return _POLICY_ADAPTER.validate_python(data)


class StripeConfig(BaseModel):
    """Number of stripes that complete a belt; shared by every belt."""

    model_config = ConfigDict(frozen=True)

    stripes_per_belt: int = DEFAULT_STRIPES_PER_BELT

    @field_validator("stripes_per_belt")
    @classmethod
    def validate_stripes_per_belt(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"stripes_per_belt must be >= 1, got {v}.")
        return v


def escalating_policy(
    ladder: BeltLadder,
    base: int = DEFAULT_POINTS_PER_STRIPE,
    step: int = DEFAULT_ESCALATION_STEP,
) -> PerBeltPolicy:
    """Seed a per-belt policy whose stripe cost grows by ``step`` per belt.

    This is what the setup wizard pre-fills when an admin switches to
    per-belt costs: 64, 80, 96, ... for a default ``base`` of 64.

    Raises:
        ValueError: If ``step`` is negative.
        pydantic.ValidationError: If ``base`` is not positive.
    """
    if step < 0:
        raise ValueError(f"step must be non-negative, got {step}.")
    return PerBeltPolicy(
        points_per_belt={belt.id: base + i * step for i, belt in enumerate(ladder.belts)},
        default_points_per_stripe=base,
    )


def policy_from_ladder(
    ladder: BeltLadder,
    default: int = DEFAULT_POINTS_PER_STRIPE,
) -> UniformPolicy | PerBeltPolicy:
    """Build a policy from the belts' own ``points_per_stripe`` values.

    Returns a ``UniformPolicy`` when no belt carries its own cost.
    """
    mapping = {
        belt.id: belt.points_per_stripe
        for belt in ladder.belts
        if belt.points_per_stripe is not None
    }
    if not mapping:
        return UniformPolicy(points_per_stripe=default)
    return PerBeltPolicy(points_per_belt=mapping, default_points_per_stripe=default)
