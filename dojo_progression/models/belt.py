"""
Belt ladder models.

``Belt`` is one rank in a club's grading system. ``BeltLadder`` is the
ordered catalog of ranks a student progresses through; its last belt (by
``order``) is the terminal rank that the forecast engine targets.

Both models are frozen. Club admins edit the ladder through settings screens,
which produce a new ``BeltLadder`` rather than mutating the old one, so an
engine call always sees a consistent ladder.

Ladder construction is where configuration errors surface: an empty ladder,
duplicate belt ids, or duplicate ``order`` values raise
``pydantic.ValidationError`` immediately. Looking up a belt id that is not in
the ladder is a data-integrity problem on the student record instead, and
raises ``UnknownBeltError``.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class UnknownBeltError(KeyError):
    """Raised when a student references a belt id that is not in the ladder.

    Attributes:
        belt_id:   The id that could not be resolved.
        known_ids: Belt ids present in the ladder, in ladder order.
    """

    def __init__(self, belt_id: str, known_ids: Iterable[str] = ()) -> None:
        self.belt_id = belt_id
        self.known_ids = list(known_ids)
        super().__init__(belt_id)

    def __str__(self) -> str:
        return (
            f"Belt '{self.belt_id}' is not in the belt ladder.  "
            f"Known belts: {self.known_ids}"
        )


class Belt(BaseModel):
    """A single rank in the belt ladder.

    Attributes:
        id:                Stable identifier referenced by student records.
        name:              Display name, e.g. ``"Yellow"``.
        order:             Ladder position (0 = first rank). Immutable once
                           students reference the belt.
        points_per_stripe: Optional per-belt stripe cost; only consulted when
                           a policy is built with ``policy_from_ladder()``.
        color:             Optional display colour (hex string).
        stripe_color:      Optional colour of the stripe on a stripe belt.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    order: int
    points_per_stripe: Optional[int] = None
    color: Optional[str] = None
    stripe_color: Optional[str] = None

    @field_validator("id", "name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Belt id and name must not be empty.")
        return v.strip()

    @field_validator("order")
    @classmethod
    def validate_order(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"order must be non-negative, got {v}.")
        return v

    @field_validator("points_per_stripe")
    @classmethod
    def validate_points_per_stripe(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError(f"points_per_stripe must be > 0, got {v}.")
        return v


class BeltLadder(BaseModel):
    """Ordered catalog of belts; ``belts`` is always sorted by ``order``."""

    model_config = ConfigDict(frozen=True)

    belts: list[Belt]

    @field_validator("belts")
    @classmethod
    def sort_and_validate(cls, v: list[Belt]) -> list[Belt]:
        if not v:
            raise ValueError("Belt ladder must contain at least one belt.")

        ids = [b.id for b in v]
        dupes = sorted({i for i in ids if ids.count(i) > 1})
        if dupes:
            raise ValueError(f"Duplicate belt ids in ladder: {dupes}.")

        orders = [b.order for b in v]
        dupe_orders = sorted({o for o in orders if orders.count(o) > 1})
        if dupe_orders:
            raise ValueError(f"Duplicate belt order values in ladder: {dupe_orders}.")

        return sorted(v, key=lambda b: b.order)

    def __len__(self) -> int:
        return len(self.belts)

    @property
    def ids(self) -> list[str]:
        return [b.id for b in self.belts]

    @property
    def terminal(self) -> Belt:
        """The final rank in the ladder (e.g. Black Belt)."""
        return self.belts[-1]

    @property
    def terminal_index(self) -> int:
        return len(self.belts) - 1

    def index_of(self, belt_id: str) -> int:
        """Return the ladder position of ``belt_id``.

        Raises:
            UnknownBeltError: If ``belt_id`` is not in the ladder.
        """
        for i, belt in enumerate(self.belts):
            if belt.id == belt_id:
                return i
        raise UnknownBeltError(belt_id, self.ids)

    def get(self, belt_id: str) -> Belt:
        """Return the ``Belt`` with id ``belt_id``.

        Raises:
            UnknownBeltError: If ``belt_id`` is not in the ladder.
        """
        return self.belts[self.index_of(belt_id)]

    def contains(self, belt_id: str) -> bool:
        return belt_id in self.ids

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "BeltLadder":
        """Build a ladder from display names in rank order.

        Ids are slugified names (``"Red/Black"`` → ``"red-black"``).
        """
        belts = [
            Belt(id=slugify(name), name=name, order=i)
            for i, name in enumerate(names)
        ]
        return cls(belts=belts)


def slugify(name: str) -> str:
    """Lower-case ``name`` and collapse runs of non-alphanumerics into ``-``."""
    return re.sub(r"[^a-z0-9]+", "-", name.strip().lower()).strip("-")
