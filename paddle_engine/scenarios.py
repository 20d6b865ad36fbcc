"""Preset ball/paddle set-ups for demos, charts and tests.

Paddle positions are the top edge y; ``None`` means centred. Spin of 0.3
bends a 6 u/tick ball by roughly a paddle height across the arena before
drag and decay flatten it out.
"""

from paddle_engine.types import Ball, Paddle, Vec2
from paddle_engine import arena

_CENTER_X = arena.ARENA_WIDTH / 2
_CENTER_Y = arena.ARENA_HEIGHT / 2
_TOP_Y = 0
_BOTTOM_Y = arena.ARENA_HEIGHT - arena.PADDLE_HEIGHT

SCENARIO_PRESETS = {
    "straight_shot": {
        "label": "Straight shot into the left paddle",
        "pos": (_CENTER_X, _CENTER_Y),
        "vel": (-6, 0),
        "spin": 0.0,
        "left_y": None,
        "right_y": None,
    },
    "miss": {
        "label": "Ball slips past the right paddle",
        "pos": (arena.ARENA_WIDTH - 1, _CENTER_Y),
        "vel": (6, 0),
        "spin": 0.0,
        "left_y": _TOP_Y,
        "right_y": _BOTTOM_Y,
    },
    "wall_rebound": {
        "label": "Steep shot off the top wall",
        "pos": (_CENTER_X, arena.BALL_RADIUS + 2),
        "vel": (-3, -5),
        "spin": 0.0,
        "left_y": None,
        "right_y": None,
    },
    "topspin_curve": {
        "label": "Positive spin curving down",
        "pos": (arena.RIGHT_PADDLE_X - 40, _CENTER_Y - 60),
        "vel": (-6, 0),
        "spin": 0.3,
        "left_y": None,
        "right_y": None,
    },
    "backspin_curve": {
        "label": "Negative spin curving up",
        "pos": (arena.RIGHT_PADDLE_X - 40, _CENTER_Y + 60),
        "vel": (-6, 0),
        "spin": -0.3,
        "left_y": None,
        "right_y": None,
    },
    "edge_smash": {
        "label": "Fast ball clipping the paddle's top edge",
        "pos": (_CENTER_X, _CENTER_Y - 36),
        "vel": (-18, 0),
        "spin": 0.0,
        "left_y": None,
        "right_y": None,
    },
}


def get_scenario(key: str) -> tuple[Ball, Paddle, Paddle]:
    """Return (ball, left, right) for a preset key."""
    preset = SCENARIO_PRESETS[key]
    ball = Ball(
        pos=Vec2(*preset["pos"]),
        vel=Vec2(*preset["vel"]),
        spin=preset["spin"],
    )
    left = Paddle.centered("left")
    right = Paddle.centered("right")
    if preset["left_y"] is not None:
        left = left.placed_at(preset["left_y"])
    if preset["right_y"] is not None:
        right = right.placed_at(preset["right_y"])
    return ball, left, right


def list_scenarios() -> list[str]:
    """Return all available scenario keys."""
    return list(SCENARIO_PRESETS.keys())
