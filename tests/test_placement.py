"""Tests for overlap, trimming and cut-off debris."""

from dataclasses import replace

import pytest

from stacker.game.entities import Block
from stacker.game.placement import PlacementOutcome, resolve

COLOR = (143, 211, 244)


def top_block():
    return Block(x=100.0, y=620.0, width=200.0, depth=30.0, moving=False, direction=0)


def moving_block(x, width=200.0):
    return Block(x=x, y=590.0, width=width, depth=30.0, color=COLOR, speed=3.0, direction=1)


# --- Worked examples ---

def test_right_overhang_keeps_x_and_drops_right_slice():
    result = resolve(moving_block(250.0), top_block())

    assert result.outcome == PlacementOutcome.HIT
    assert result.offset == 150.0
    assert result.overlap == 50.0
    assert result.block.x == 250.0
    assert result.block.width == 50.0
    assert result.block.moving is False

    assert result.debris.x == 300.0
    assert result.debris.width == 150.0
    assert result.debris.y == 590.0
    assert result.debris.height == 30.0
    assert result.debris.color == COLOR


def test_clean_miss_turns_whole_block_into_debris():
    current = moving_block(310.0)
    result = resolve(current, top_block())

    assert result.outcome == PlacementOutcome.MISS
    assert result.overlap == -10.0
    assert result.block is None
    assert not result.landed
    assert result.debris.x == 310.0
    assert result.debris.width == 200.0
    assert result.debris.y == current.y


# --- Geometry ---

def test_left_overhang_snaps_to_top_x():
    result = resolve(moving_block(40.0), top_block())

    assert result.outcome == PlacementOutcome.HIT
    assert result.offset == -60.0
    assert result.block.x == 100.0
    assert result.block.width == 140.0
    assert result.debris.x == 40.0
    assert result.debris.width == 60.0


def test_perfect_drop_has_no_debris():
    result = resolve(moving_block(100.0), top_block())

    assert result.outcome == PlacementOutcome.HIT
    assert result.block.width == 200.0
    assert result.block.x == 100.0
    assert result.debris is None


def test_touching_edges_is_a_miss():
    assert resolve(moving_block(300.0), top_block()).outcome == PlacementOutcome.MISS
    assert resolve(moving_block(-100.0), top_block()).outcome == PlacementOutcome.MISS


def test_too_narrow_hit_is_game_over_but_still_lands():
    result = resolve(moving_block(295.0), top_block())

    assert result.outcome == PlacementOutcome.GAME_OVER
    assert result.landed
    assert result.block.width == 5.0


def test_exactly_min_width_is_still_a_hit():
    result = resolve(moving_block(290.0), top_block())
    assert result.outcome == PlacementOutcome.HIT
    assert result.block.width == 10.0


def test_custom_min_width():
    result = resolve(moving_block(250.0), top_block(), min_width=60.0)
    assert result.outcome == PlacementOutcome.GAME_OVER


@pytest.mark.parametrize("x", [float(x) for x in range(-150, 351, 7)])
def test_overlap_invariant(x):
    top = top_block()
    result = resolve(moving_block(x), top)
    expected = top.width - abs(x - top.x)

    if result.landed:
        assert expected > 0
        assert result.block.width == pytest.approx(expected)
        assert result.block.width <= top.width
    else:
        assert expected <= 0


# --- Purity ---

def test_resolve_is_pure_and_deterministic():
    current = moving_block(250.0)
    top = top_block()
    current_before = replace(current)
    top_before = replace(top)

    first = resolve(current, top)
    second = resolve(current, top)

    assert first == second
    assert current == current_before
    assert top == top_before
    assert current.moving is True
    assert first.block is not current
