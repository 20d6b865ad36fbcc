"""Tests for rally counting, scoring and the re-serve."""

import random
import pytest

from paddle_engine.scoring import Scorekeeper, serve_direction
from paddle_engine.types import (
    Ball,
    PaddleHitEvent,
    RallyEvent,
    ScoreEvent,
    Vec2,
    WallBounceEvent,
)
from paddle_engine import arena


def _hit(side="left"):
    return PaddleHitEvent(side=side, relative_hit=0.0, paddle_velocity=0.0, speed=6.0)


def test_serve_direction():
    """The serve heads toward the side that won the point."""
    assert serve_direction("left") == -1
    assert serve_direction("right") == 1


def test_rally_counts_paddle_hits_only():
    """Each paddle hit advances the rally and fires on_rally; wall bounces don't."""
    calls = []
    sk = Scorekeeper(on_rally=calls.append, rng=random.Random(1))
    events = [_hit("left"), WallBounceEvent(wall="top", pos=Vec2(0, 8)), _hit("right")]

    out = sk.record_hits(events, tick=12)

    assert calls == [1, 2]
    assert sk.rally == 2
    assert sk.longest_rally == 2
    assert [e.count for e in out] == [1, 2]
    assert all(isinstance(e, RallyEvent) and e.tick == 12 for e in out)


def test_no_score_while_ball_in_play():
    """Ball inside the arena → nothing scored, ball untouched."""
    scores = []
    sk = Scorekeeper(on_score=scores.append, rng=random.Random(1))
    ball = Ball(pos=Vec2(100, 100), vel=Vec2(-6, 2))

    out = sk.settle(ball, [])

    assert out == []
    assert scores == []
    assert ball.pos.x == 100


def test_ball_out_left_scores_right():
    """Ball past the left edge → right scores, serve heads right."""
    scores = []
    sk = Scorekeeper(on_score=scores.append, rng=random.Random(5))
    sk.rally = 4
    ball = Ball(pos=Vec2(-3, 300), vel=Vec2(-9, 1), spin=0.7)

    out = sk.settle(ball, [], tick=30)

    assert scores == ["right"]
    assert [e.winner for e in out if isinstance(e, ScoreEvent)] == ["right"]
    assert ball.pos.x == arena.ARENA_WIDTH / 2
    assert ball.pos.y == arena.ARENA_HEIGHT / 2
    assert ball.vel.x == pytest.approx(arena.INITIAL_BALL_SPEED)
    assert abs(ball.vel.y) <= arena.SERVE_JITTER / 2
    assert ball.spin == 0
    assert sk.rally == 0


def test_ball_out_right_scores_left():
    """Ball past the right edge → left scores, serve heads left."""
    scores = []
    sk = Scorekeeper(on_score=scores.append, rng=random.Random(5))
    ball = Ball(pos=Vec2(805, 250), vel=Vec2(6, 0))

    sk.settle(ball, [])

    assert scores == ["left"]
    assert ball.vel.x == pytest.approx(-arena.INITIAL_BALL_SPEED)


def test_on_score_sees_rally_before_reset():
    """The score callback runs before the serve clears the rally."""
    seen = []
    sk = Scorekeeper(rng=random.Random(2))
    sk.on_score = lambda winner: seen.append(sk.rally)
    sk.rally = 7

    sk.settle(Ball(pos=Vec2(-1, 250)), [])

    assert seen == [7]
    assert sk.rally == 0


def test_longest_rally_survives_serve():
    """The best rally of the match is kept across points."""
    sk = Scorekeeper(rng=random.Random(3))
    sk.record_hits([_hit(), _hit("right"), _hit()])
    sk.settle(Ball(pos=Vec2(-1, 250)), [])
    sk.record_hits([_hit()])

    assert sk.rally == 1
    assert sk.longest_rally == 3

    sk.reset()
    assert sk.longest_rally == 0


def test_serve_jitter_varies():
    """Serves get a small random vertical component."""
    sk = Scorekeeper(rng=random.Random(11))
    vys = set()
    for _ in range(20):
        ball = Ball()
        sk.serve(ball, 1)
        vys.add(round(ball.vel.y, 6))
        assert -2 <= ball.vel.y <= 2
    assert len(vys) > 1
