"""
Club grading configuration loader.

Reads a club TOML file (default ``config/club.toml``) into a validated
``ClubProgressionConfig``.

Unlike a process-wide registry, this loader never caches: admins can edit
the ladder or policy at any time, and every call re-reads the file so the
engine never evaluates against a stale configuration.

TOML structure
--------------
    [ladder]
    preset = "wt"                # or omit and list belts explicitly:

    [[ladder.belts]]
    id = "white"
    name = "White"
    order = 0
    points_per_stripe = 50       # optional

    [policy]
    kind = "per_belt"            # "uniform" (default) or "per_belt"
    default_points_per_stripe = 64
    [policy.points_per_belt]
    white = 50

    [stripes]
    stripes_per_belt = 4

    [[skills]]
    id = "technique"
    is_active = true

    [bonuses]
    homework_bonus_enabled = true
    coach_bonus_enabled = false

When ``[policy]`` is omitted, belts that carry their own
``points_per_stripe`` produce a per-belt policy; otherwise the uniform
default (64) applies.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from dojo_progression.models.belt import Belt, BeltLadder
from dojo_progression.models.club import ClubProgressionConfig
from dojo_progression.models.policy import StripeConfig, parse_policy, policy_from_ladder
from dojo_progression.models.student import BonusFlags, SkillConfig
from dojo_progression.taxonomy.belt_presets import preset_ladder

log = logging.getLogger(__name__)


def _parse_ladder(raw: dict[str, Any]) -> BeltLadder:
    """Build the ladder from a preset name or an explicit belt list.

    Raises:
        ValueError: If both or neither of ``preset`` / ``belts`` are given,
            or the preset name is unknown.
        pydantic.ValidationError: If a belt or the ladder fails validation.
    """
    preset = raw.get("preset")
    belts = raw.get("belts")

    if preset and belts:
        raise ValueError("[ladder] must set either 'preset' or 'belts', not both.")
    if preset:
        return preset_ladder(preset)
    if not belts:
        raise ValueError("[ladder] must set 'preset' or list at least one [[ladder.belts]].")

    return BeltLadder(belts=[
        Belt(**{"order": i, **belt}) for i, belt in enumerate(belts)
    ])


def club_config_from_dict(raw: dict[str, Any]) -> ClubProgressionConfig:
    """Validate a raw club dict (parsed TOML or JSON) into a config snapshot.

    Raises:
        ValueError: If the ladder section is malformed.
        pydantic.ValidationError: On any configuration error (non-positive
            stripe costs, ``stripes_per_belt < 1``, duplicate belts, ...).
    """
    ladder = _parse_ladder(raw.get("ladder", {}))

    if "policy" in raw:
        policy = parse_policy(raw["policy"])
    else:
        policy = policy_from_ladder(ladder)

    return ClubProgressionConfig(
        ladder=ladder,
        policy=policy,
        stripes=StripeConfig(**raw.get("stripes", {})),
        skills=[SkillConfig(**s) for s in raw.get("skills", [])],
        bonuses=BonusFlags(**raw.get("bonuses", {})),
    )


def load_club_config(club_path: Path | str) -> ClubProgressionConfig:
    """Load and validate a club TOML file.

    Raises:
        FileNotFoundError: If ``club_path`` does not exist.
        tomllib.TOMLDecodeError: If the TOML is malformed.
        ValueError / pydantic.ValidationError: On configuration errors.
    """
    path = Path(club_path)
    if not path.exists():
        raise FileNotFoundError(
            f"Club config file not found: {path}\n"
            "Set [club] config_file in config/default.toml or pass --club."
        )

    with open(path, "rb") as f:
        raw = tomllib.load(f)

    club = club_config_from_dict(raw)
    log.info(
        "Loaded club config from %s: %d belt(s), %s policy, %d stripe(s)/belt",
        path, len(club.ladder), club.policy.kind, club.stripes.stripes_per_belt,
    )
    return club
