"""Tests for block motion and debris physics."""

import pytest

from stacker.game.entities import Block, Debris, age_debris


def make_block(x=10.0, width=50.0, speed=3.0, direction=1):
    return Block(x=x, y=0.0, width=width, depth=30.0, speed=speed, direction=direction)


# --- Block.advance ---

def test_advance_moves_by_speed_times_direction():
    block = make_block(x=10.0, speed=3.0, direction=1)
    block.advance(480)
    assert block.x == 13.0
    assert block.direction == 1

    block.direction = -1
    block.advance(480)
    assert block.x == 10.0


def test_advance_reflects_at_right_edge_without_clamping():
    block = make_block(x=428.0, width=50.0, speed=3.0, direction=1)
    block.advance(480)
    assert block.x == 431.0  # overshoot kept
    assert block.direction == -1

    block.advance(480)
    assert block.x == 428.0
    assert block.direction == -1


def test_advance_reflects_at_left_edge():
    block = make_block(x=1.0, speed=3.0, direction=-1)
    block.advance(480)
    assert block.x == -2.0
    assert block.direction == 1

    block.advance(480)
    assert block.x == 1.0


def test_advance_from_offscreen_left_keeps_moving_in():
    block = make_block(x=-50.0, speed=3.0, direction=1)
    block.advance(480)
    assert block.x == -47.0
    assert block.direction == 1


def test_advance_never_gets_stuck():
    block = make_block(x=0.0, width=50.0, speed=7.0, direction=1)
    positions = []
    for _ in range(1000):
        block.advance(480)
        positions.append(block.x)
        assert -7.0 <= block.x <= 480 - 50 + 7.0

    # Both walls reached and left again
    assert min(positions) < 7.0
    assert max(positions) > 480 - 50 - 7.0


def test_block_wider_than_boundary_stays_bounded():
    block = make_block(x=100.0, width=300.0, speed=3.0, direction=-1)
    positions = []
    for _ in range(200):
        block.advance(150)
        positions.append(block.x)

    # Right edge parked on the wall, bouncing by one step
    assert all(-153.0 <= x <= -147.0 for x in positions[-50:])
    assert len(set(positions[-50:])) == 2


def test_stopped_block_does_not_move():
    block = make_block(x=10.0)
    block.stop()
    block.advance(480)
    assert block.x == 10.0
    assert block.moving is False

    block.stop()
    assert block.moving is False


def test_right_edge_property():
    assert make_block(x=10.0, width=50.0).right == 60.0


# --- Debris ---

def test_debris_update_applies_gravity_and_fade():
    piece = Debris(x=0.0, y=100.0, width=20.0, height=30.0)
    piece.update(gravity=0.5, fade_rate=0.02)
    assert piece.vy == 0.5
    assert piece.y == 100.5
    assert piece.opacity == pytest.approx(0.98)

    piece.update(gravity=0.5, fade_rate=0.02)
    assert piece.vy == 1.0
    assert piece.y == 101.5


def test_debris_opacity_never_negative():
    piece = Debris(x=0.0, y=0.0, width=1.0, height=1.0, opacity=0.01)
    piece.update(fade_rate=0.02)
    assert piece.opacity == 0.0


def test_debris_is_dead_below_view_or_faded():
    assert Debris(x=0, y=721, width=1, height=1).is_dead(720)
    assert Debris(x=0, y=10, width=1, height=1, opacity=0.0).is_dead(720)
    assert not Debris(x=0, y=10, width=1, height=1).is_dead(720)


# --- age_debris ---

def test_age_debris_tolerates_empty_list():
    assert age_debris([], 720) == []


def test_age_debris_culls_dead_pieces():
    alive = Debris(x=0, y=10, width=5, height=5)
    fading = Debris(x=0, y=10, width=5, height=5, opacity=0.01)
    falling = Debris(x=0, y=719.8, width=5, height=5, vy=3.0)

    survivors = age_debris([alive, fading, falling], 720)
    assert survivors == [alive]
    assert alive.y == 10.5
