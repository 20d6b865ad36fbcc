"""Tests for the frame driver and headless matches."""

import dataclasses
import random
import pytest

from paddle_engine.game import Game, GameStatus, MatchResult, simulate_match
from paddle_engine.scenarios import get_scenario
from paddle_engine.types import Ball, ScoreEvent, Settings, Vec2
from paddle_engine import arena


def _game(mode="2P", **kwargs):
    return Game(Settings(mode=mode), rng=random.Random(42), **kwargs)


def _load(game, key):
    game.ball, game.left, game.right = get_scenario(key)


# --- status machine ---

def test_starts_idle():
    """A new game waits in START and ticks do nothing."""
    game = _game()
    assert game.status == GameStatus.START
    assert game.tick() == []
    assert game.ball.pos.x == arena.ARENA_WIDTH / 2
    assert game.tick_count == 0


def test_toggle_cycles_play_and_pause():
    game = _game()
    game.toggle()
    assert game.status == GameStatus.PLAYING
    game.toggle()
    assert game.status == GameStatus.PAUSED
    game.toggle()
    assert game.status == GameStatus.PLAYING


def test_pause_freezes_state():
    """While paused, advance() runs no ticks and the ball stays put."""
    game = _game()
    game.start()
    game.advance(0.1)
    game.pause()
    before = (game.ball.pos.x, game.ball.pos.y, game.tick_count)

    for _ in range(10):
        game.advance(0.1)

    assert (game.ball.pos.x, game.ball.pos.y, game.tick_count) == before


def test_end_keeps_entities():
    """GAMEOVER freezes the table as it was."""
    game = _game()
    game.start()
    game.advance(0.05)
    x = game.ball.pos.x
    game.end()
    assert game.status == GameStatus.GAMEOVER
    game.advance(0.5)
    assert game.ball.pos.x == x


def test_start_after_gameover_resets():
    """Starting again after GAMEOVER begins from a fresh table."""
    game = _game()
    game.start()
    game.advance(0.05)
    game.end()
    game.start()
    assert game.status == GameStatus.PLAYING
    assert game.tick_count == 0
    assert game.ball.pos.x == arena.ARENA_WIDTH / 2


def test_reset_returns_to_start():
    game = _game()
    game.start()
    game.advance(0.05)
    game.reset()
    assert game.status == GameStatus.START
    assert game.rally == 0
    assert game.left.y == game.left.prev_y


def test_end_ignored_before_start():
    game = _game()
    game.end()
    assert game.status == GameStatus.START


# --- scenarios through the full tick ---

def test_straight_shot_single_rally_callback():
    """Ball straight into a still left paddle → on_rally(1) exactly once."""
    calls = []
    game = _game(on_rally=calls.append)
    _load(game, "straight_shot")
    game.start()

    for _ in range(100):
        game.tick()

    assert calls == [1], f"Expected one rally callback, got {calls}"
    assert game.ball.vel.x > 0


def test_miss_scores_and_serves_toward_winner():
    """Ball slipping past the right paddle → one point for left, serve heads left."""
    scores = []
    game = _game(on_score=scores.append)
    _load(game, "miss")
    game.start()

    events = game.tick()

    assert scores == ["left"]
    assert [e.winner for e in events if isinstance(e, ScoreEvent)] == ["left"]
    assert game.ball.pos.x == arena.ARENA_WIDTH / 2
    assert game.ball.pos.y == arena.ARENA_HEIGHT / 2
    assert game.ball.vel.x < 0
    assert game.rally == 0


def test_one_score_per_exit():
    """A point is only counted once; the serve puts the ball back in play."""
    scores = []
    game = _game(on_score=scores.append)
    _load(game, "miss")
    game.start()
    for _ in range(30):
        game.tick()
    assert scores == ["left"]


# --- fixed-step loop ---

def test_advance_runs_whole_ticks():
    """Elapsed time turns into whole ticks; the remainder carries over."""
    game = _game()
    game.start()
    game.advance(3 * arena.TICK_SECONDS + 0.001)
    assert game.tick_count == 3

    game.advance(arena.TICK_SECONDS - 0.0005)
    assert game.tick_count == 4, "Carried remainder should complete a fourth tick"


def test_advance_caps_ticks_after_stall():
    """A long stall runs at most MAX_TICKS_PER_ADVANCE ticks and drops the rest."""
    game = _game()
    game.start()
    game.advance(2.0)
    assert game.tick_count == arena.MAX_TICKS_PER_ADVANCE

    game.advance(0.0)
    assert game.tick_count == arena.MAX_TICKS_PER_ADVANCE, "Dropped time must not be replayed"


def test_advance_returns_snapshot():
    game = _game()
    game.start()
    snap = game.advance(arena.TICK_SECONDS * 2)
    assert snap.tick == 2
    assert snap.status == "PLAYING"
    assert snap.ball.x == game.ball.pos.x


def test_snapshot_is_frozen():
    """Snapshots don't change when the game moves on and can't be edited."""
    game = _game()
    game.start()
    snap = game.snapshot()
    game.tick()

    assert snap.ball.x == arena.ARENA_WIDTH / 2
    assert snap.tick == 0
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.ball.x = 0


# --- modes ---

def test_1p_right_is_ai():
    game = _game("1P")
    assert game.right_ai is not None
    assert game.right.is_ai
    assert not game.left.is_ai


def test_switch_to_2p_hands_right_to_player():
    game = _game("1P")
    game.apply_settings(Settings(mode="2P"))
    assert game.right_ai is None
    assert not game.right.is_ai


def test_2p_arrow_keys_move_right_paddle():
    """Held ArrowUp in 2P lifts the right paddle over a few ticks."""
    game = _game("2P")
    game.ball = Ball(vel=Vec2(-6, 0))
    game.start()
    game.controls.key_down("ArrowUp")
    start_y = game.right.y
    for _ in range(5):
        game.tick()
    assert game.controls.right_target == arena.ARENA_HEIGHT / 2 - 5 * arena.KEY_NUDGE
    assert game.right.y < start_y


def test_difficulty_change_takes_effect():
    game = _game("1P")
    game.apply_settings(Settings(mode="1P", difficulty="hard"))
    assert game.right_ai.profile.label == "Insane"


# --- headless matches ---

def test_simulate_match_result():
    """A short AI match produces consistent scores and stats."""
    result = simulate_match("hard", "easy", duration=20, seed=1)

    assert isinstance(result, MatchResult)
    m, s = result.match, result.stats
    assert m.over
    assert m.left_score == s["left_points"]
    assert m.right_score == s["right_points"]
    assert s["total_points"] == len(result.points) == m.left_score + m.right_score
    assert s["ticks"] == len(result.speeds)
    assert s["left_label"] == "Insane"
    assert s["right_label"] == "Beginner"
    assert s["paddle_hits"] > 0


def test_simulate_match_respects_speed_cap():
    result = simulate_match("hard", "hard", duration=20, seed=3)
    assert max(result.speeds) <= arena.MAX_BALL_SPEED + 1e-9


def test_simulate_match_reproducible():
    """Same seed → same points."""
    a = simulate_match("medium", "easy", duration=15, seed=9)
    b = simulate_match("medium", "easy", duration=15, seed=9)
    assert [(p.winner, p.rally_length, p.tick) for p in a.points] == \
        [(p.winner, p.rally_length, p.tick) for p in b.points]
