"""
Built-in belt ladders for common grading systems.

The setup wizard offers these as one-click presets; admins can then rename,
reorder, add, or remove belts. Ids are slugified names, so
``"Red/Black Stripe"`` becomes ``"red-black-stripe"``.

Each preset belt carries its display colour, and stripe belts (the WT
intermediate ranks) also carry the colour of their stripe.

Usage example::

    from dojo_progression.taxonomy.belt_presets import BeltSystem, preset_ladder

    ladder = preset_ladder(BeltSystem.WT)
    ladder.terminal.name   # "Black Belt"
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from dojo_progression.models.belt import Belt, BeltLadder, slugify


class BeltSystem(StrEnum):
    """Grading systems with a built-in ladder."""

    WT = "wt"
    """World Taekwondo colour belts, with stripe belts between colours."""

    ITF = "itf"
    """International Taekwon-Do Federation."""

    KARATE = "karate"
    """Kyu ladder with three brown grades."""

    BJJ = "bjj"
    """Brazilian Jiu-Jitsu; the red belt follows black."""

    JUDO = "judo"
    """Kodokan-style kyu colours."""


WHITE = "#FFFFFF"
YELLOW = "#FFD700"
ORANGE = "#FFA500"
GREEN = "#008000"
BLUE = "#0000FF"
PURPLE = "#800080"
BROWN = "#A52A2A"
RED = "#FF0000"
BLACK = "#000000"

# (name, colour, stripe colour)
_PresetBelt = tuple[str, str, Optional[str]]

_PRESETS: dict[BeltSystem, tuple[_PresetBelt, ...]] = {
    BeltSystem.WT: (
        ("White Belt", WHITE, None),
        ("White/Yellow Stripe", WHITE, YELLOW),
        ("Yellow Belt", YELLOW, None),
        ("Yellow/Green Stripe", YELLOW, GREEN),
        ("Green Belt", GREEN, None),
        ("Green/Blue Stripe", GREEN, BLUE),
        ("Blue Belt", BLUE, None),
        ("Blue/Red Stripe", BLUE, RED),
        ("Red Belt", RED, None),
        ("Red/Black Stripe", RED, BLACK),
        ("Black Belt", BLACK, None),
    ),
    BeltSystem.ITF: (
        ("White", WHITE, None),
        ("Yellow", YELLOW, None),
        ("Orange", ORANGE, None),
        ("Green", GREEN, None),
        ("Blue", BLUE, None),
        ("Purple", PURPLE, None),
        ("Brown", BROWN, None),
        ("Red", RED, None),
        ("Black", BLACK, None),
    ),
    BeltSystem.KARATE: (
        ("White", WHITE, None),
        ("Yellow", YELLOW, None),
        ("Orange", ORANGE, None),
        ("Green", GREEN, None),
        ("Blue", BLUE, None),
        ("Purple", PURPLE, None),
        ("Brown (3rd Kyu)", BROWN, None),
        ("Brown (2nd Kyu)", BROWN, None),
        ("Brown (1st Kyu)", BROWN, None),
        ("Black", BLACK, None),
    ),
    BeltSystem.BJJ: (
        ("White", WHITE, None),
        ("Blue", BLUE, None),
        ("Purple", PURPLE, None),
        ("Brown", BROWN, None),
        ("Black", BLACK, None),
        ("Red", RED, None),
    ),
    BeltSystem.JUDO: (
        ("White", WHITE, None),
        ("Yellow", YELLOW, None),
        ("Orange", ORANGE, None),
        ("Green", GREEN, None),
        ("Blue", BLUE, None),
        ("Brown", BROWN, None),
        ("Black", BLACK, None),
    ),
}


def preset_ladder(system: BeltSystem | str) -> BeltLadder:
    """Return a fresh ``BeltLadder`` for ``system``.

    Raises:
        ValueError: If ``system`` is not a known preset name.
    """
    try:
        key = BeltSystem(system)
    except ValueError:
        raise ValueError(
            f"Unknown belt system '{system}'. "
            f"Must be one of {[s.value for s in BeltSystem]}."
        ) from None

    return BeltLadder(belts=[
        Belt(id=slugify(name), name=name, order=i, color=color, stripe_color=stripe)
        for i, (name, color, stripe) in enumerate(_PRESETS[key])
    ])
