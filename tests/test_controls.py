"""Tests for the input surface."""

import pytest

from paddle_engine.controls import InputSurface, screen_to_arena
from paddle_engine import arena

# Game area drawn at (20, 70) at half scale
RECT = (20, 70, 400, 250)


def test_screen_to_arena_scales():
    assert screen_to_arena(120, 20, 400, 800) == pytest.approx(200)
    assert screen_to_arena(70, 70, 250, 500) == pytest.approx(0)


def test_screen_to_arena_rejects_empty_container():
    with pytest.raises(ValueError):
        screen_to_arena(10, 0, 0, 800)


def test_targets_start_centred():
    surface = InputSurface()
    assert surface.left_target == arena.ARENA_HEIGHT / 2
    assert surface.right_target == arena.ARENA_HEIGHT / 2


def test_1p_pointer_drives_left_anywhere():
    """In 1P the whole area controls the left paddle."""
    surface = InputSurface("1P")
    surface.pointer_move(400, 120, RECT)  # right half of the area
    assert surface.left_target == pytest.approx(100)
    assert surface.right_target == arena.ARENA_HEIGHT / 2


def test_2p_pointer_splits_at_halfway():
    """In 2P each half of the area drives its own paddle."""
    surface = InputSurface("2P")
    surface.pointer_move(100, 120, RECT)
    surface.pointer_move(400, 270, RECT)
    assert surface.left_target == pytest.approx(100)
    assert surface.right_target == pytest.approx(400)


def test_pointer_outside_area_passes_through():
    """Targets outside the arena are allowed; the physics clamps the paddle."""
    surface = InputSurface("1P")
    surface.pointer_move(100, 0, RECT)
    assert surface.left_target < 0


def test_arrow_keys_nudge_right_target_in_2p():
    surface = InputSurface("2P")
    surface.key_down("ArrowUp")
    surface.apply_keys()
    surface.apply_keys()
    assert surface.right_target == arena.ARENA_HEIGHT / 2 - 2 * arena.KEY_NUDGE

    surface.key_up("ArrowUp")
    surface.key_down("ArrowDown")
    surface.apply_keys()
    assert surface.right_target == arena.ARENA_HEIGHT / 2 - arena.KEY_NUDGE


def test_arrow_keys_clamped():
    """Holding a key can't push the target past the arena edge."""
    surface = InputSurface("2P")
    surface.key_down("ArrowDown")
    for _ in range(100):
        surface.apply_keys()
    assert surface.right_target == arena.ARENA_HEIGHT


def test_arrow_keys_ignored_in_1p():
    surface = InputSurface("1P")
    surface.key_down("ArrowUp")
    surface.apply_keys()
    assert surface.right_target == arena.ARENA_HEIGHT / 2


def test_reset_clears_keys_and_targets():
    surface = InputSurface("2P")
    surface.key_down("ArrowUp")
    surface.pointer_move(100, 80, RECT)
    surface.reset()
    assert surface.keys_held == set()
    assert surface.left_target == arena.ARENA_HEIGHT / 2
