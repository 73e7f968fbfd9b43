"""Tests for the built-in belt ladders."""

from __future__ import annotations

import pytest

from dojo_progression.taxonomy.belt_presets import BeltSystem, preset_ladder


@pytest.mark.parametrize(
    "system, length, first, terminal",
    [
        (BeltSystem.WT, 11, "white-belt", "black-belt"),
        (BeltSystem.ITF, 9, "white", "black"),
        (BeltSystem.KARATE, 10, "white", "black"),
        (BeltSystem.BJJ, 6, "white", "red"),
        (BeltSystem.JUDO, 7, "white", "black"),
    ],
)
def test_preset_shape(system, length, first, terminal):
    ladder = preset_ladder(system)
    assert len(ladder) == length
    assert ladder.belts[0].id == first
    assert ladder.terminal.id == terminal
    assert [b.order for b in ladder.belts] == list(range(length))


@pytest.mark.parametrize("system", list(BeltSystem))
def test_every_belt_has_a_colour(system):
    assert all(b.color and b.color.startswith("#") for b in preset_ladder(system).belts)


def test_wt_stripe_belts():
    ladder = preset_ladder("wt")
    stripe = ladder.get("red-black-stripe")
    assert stripe.name == "Red/Black Stripe"
    assert (stripe.color, stripe.stripe_color) == ("#FF0000", "#000000")
    assert ladder.get("red-belt").stripe_color is None
    assert sum(1 for b in ladder.belts if b.stripe_color) == 5


def test_itf_ladder():
    assert preset_ladder(BeltSystem.ITF).ids == [
        "white", "yellow", "orange", "green", "blue", "purple", "brown", "red", "black",
    ]


def test_karate_brown_grades():
    ladder = preset_ladder(BeltSystem.KARATE)
    assert ladder.ids[6:9] == ["brown-3rd-kyu", "brown-2nd-kyu", "brown-1st-kyu"]
    assert ladder.get("brown-1st-kyu").name == "Brown (1st Kyu)"


def test_bjj_terminal_rank_is_red():
    ladder = preset_ladder(BeltSystem.BJJ)
    assert ladder.terminal.name == "Red"
    assert ladder.index_of("black") == ladder.terminal_index - 1


def test_each_call_returns_a_fresh_ladder():
    assert preset_ladder("bjj") is not preset_ladder("bjj")


def test_unknown_system():
    with pytest.raises(ValueError, match="Unknown belt system 'kendo'"):
        preset_ladder("kendo")


def test_standard_is_not_a_preset():
    with pytest.raises(ValueError, match="Unknown belt system"):
        preset_ladder("standard")
