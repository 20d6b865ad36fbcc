"""Tests for match scores and the clock."""

import pytest

from paddle_engine.match import create_match, format_clock, score_point, tick_clock
from paddle_engine import arena


def test_create_match():
    m = create_match()
    assert m.left_score == 0
    assert m.right_score == 0
    assert m.time_left == arena.MATCH_DURATION
    assert not m.over
    assert m.winner is None


def test_score_point_copy_on_write():
    """score_point returns a new match and leaves the old one alone."""
    m0 = create_match()
    m1 = score_point(m0, "left")
    m2 = score_point(m1, "right")

    assert (m0.left_score, m0.right_score) == (0, 0)
    assert (m1.left_score, m1.right_score) == (1, 0)
    assert (m2.left_score, m2.right_score) == (1, 1)
    assert len(m2.history) == 2
    assert m2.history[-1]["winner"] == "right"
    assert m0.history == []


def test_score_point_rejects_unknown_side():
    with pytest.raises(ValueError):
        score_point(create_match(), "p1")


def test_clock_runs_down():
    m = tick_clock(create_match(10), 2.5)
    assert m.time_left == pytest.approx(7.5)
    assert not m.over


def test_clock_expiry_decides_winner():
    """Leader at zero wins."""
    m = score_point(create_match(1), "right")
    m = tick_clock(m, 5)
    assert m.over
    assert m.time_left == 0
    assert m.winner == "right"


def test_draw_has_no_winner():
    m = tick_clock(create_match(1), 1)
    assert m.over
    assert m.winner is None


def test_points_after_expiry_ignored():
    """Once the clock is out, further points don't count."""
    m = tick_clock(score_point(create_match(1), "left"), 1)
    m = score_point(m, "right")
    assert (m.left_score, m.right_score) == (1, 0)
    assert m.winner == "left"


@pytest.mark.parametrize("seconds,expected", [
    (90, "1:30"),
    (59.2, "1:00"),
    (5, "0:05"),
    (0.01, "0:01"),
    (0, "0:00"),
])
def test_format_clock(seconds, expected):
    assert format_clock(seconds) == expected
