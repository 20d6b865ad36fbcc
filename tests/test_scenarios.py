"""Tests for the preset scenarios."""

import pytest

from paddle_engine.physics import ball_out, simulate
from paddle_engine.scenarios import SCENARIO_PRESETS, get_scenario, list_scenarios
from paddle_engine.types import PaddleHitEvent, WallBounceEvent
from paddle_engine import arena


def test_all_scenarios_load():
    """Every preset builds a ball inside the arena and two paddles in bounds."""
    for key in list_scenarios():
        ball, left, right = get_scenario(key)
        assert 0 <= ball.pos.x <= arena.ARENA_WIDTH, f"{key}: ball x out of range"
        assert 0 <= ball.pos.y <= arena.ARENA_HEIGHT, f"{key}: ball y out of range"
        assert left.side == "left" and right.side == "right"
        assert left.velocity == 0 and right.velocity == 0


def test_list_scenarios_matches_presets():
    assert set(list_scenarios()) == set(SCENARIO_PRESETS)


def test_unknown_scenario():
    with pytest.raises(KeyError):
        get_scenario("nonexistent")


def test_get_scenario_returns_fresh_ball():
    """Each call builds a new ball so runs don't leak into each other."""
    a, _, _ = get_scenario("straight_shot")
    b, _, _ = get_scenario("straight_shot")
    a.pos.x = 0
    assert b.pos.x == arena.ARENA_WIDTH / 2


def test_straight_shot_is_returned():
    ball, left, right = get_scenario("straight_shot")
    _, events = simulate(ball, left, right, max_ticks=100)
    hits = [e for e in events if isinstance(e, PaddleHitEvent)]
    assert [h.side for h in hits] == ["left"]


def test_miss_leaves_on_the_right():
    ball, left, right = get_scenario("miss")
    positions, events = simulate(ball, left, right)
    assert len(positions) == 2, "Ball should be out after one tick"
    assert ball_out(positions[-1]) == "left"
    assert not events


def test_wall_rebound_hits_top():
    ball, left, right = get_scenario("wall_rebound")
    _, events = simulate(ball, left, right, max_ticks=5)
    walls = [e.wall for e in events if isinstance(e, WallBounceEvent)]
    assert walls[:1] == ["top"]


def test_spin_curves_in_opposite_directions():
    """Topspin drifts down, backspin drifts up, by a comparable amount."""
    top, l1, r1 = get_scenario("topspin_curve")
    back, l2, r2 = get_scenario("backspin_curve")
    top_path, _ = simulate(top, l1, r1, max_ticks=60)
    back_path, _ = simulate(back, l2, r2, max_ticks=60)

    top_drift = top_path[-1].pos.y - top.pos.y
    back_drift = back_path[-1].pos.y - back.pos.y
    assert top_drift > 5
    assert back_drift < -5
    assert top_drift == pytest.approx(-back_drift)


def test_edge_smash_deflects_up():
    """Fast ball on the paddle's top edge comes back rising."""
    ball, left, right = get_scenario("edge_smash")
    positions, events = simulate(ball, left, right, max_ticks=40)
    hit = next(e for e in events if isinstance(e, PaddleHitEvent))
    assert hit.side == "left"
    assert hit.relative_hit < -0.5
    after = positions[hit.tick]
    assert after.vel.y < 0
