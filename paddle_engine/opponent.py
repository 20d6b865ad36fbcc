"""Opponent controller — drives an AI paddle from the current ball state.

The controller looks exactly one tick ahead: it chases the ball's current y
while the ball approaches and drifts back to the middle otherwise. Difficulty
comes from two knobs only, the tracking gain (``speed``) and the per-tick aim
error (``error_margin``).
"""

import random
from typing import Optional

from paddle_engine.types import Ball, DifficultyProfile, Paddle
from paddle_engine import arena


class OpponentController:
    """Computes paddle moves for one AI-controlled side."""

    def __init__(
        self,
        profile: DifficultyProfile,
        side: str = "right",
        rng: Optional[random.Random] = None,
    ):
        """Create a controller.

        Args:
            profile: Tracking speed and error margin.
            side: "left" or "right", the side this controller defends.
            rng: Random source for the aim error. Pass a seeded instance for
                reproducible runs.
        """
        if side not in ("left", "right"):
            raise ValueError(f"side must be 'left' or 'right', got {side!r}")
        self.profile = profile
        self.side = side
        self.rng = rng or random.Random()

    @classmethod
    def for_difficulty(cls, key: str, side: str = "right", rng: Optional[random.Random] = None) -> "OpponentController":
        return cls(DifficultyProfile.from_key(key), side=side, rng=rng)

    @property
    def gain(self) -> float:
        return arena.AI_TRACKING_GAIN * (self.profile.speed / arena.AI_REFERENCE_SPEED)

    def ball_incoming(self, ball: Ball) -> bool:
        if self.side == "right":
            return ball.vel.x > 0
        return ball.vel.x < 0

    def target_y(self, ball: Ball) -> float:
        """Where the paddle centre should go, before aim error."""
        if self.ball_incoming(ball):
            return ball.pos.y
        return arena.ARENA_HEIGHT / 2

    def error(self) -> float:
        """Uniform aim error in [-error_margin/2, error_margin/2)."""
        return (self.rng.random() - 0.5) * self.profile.error_margin

    def adjustment(self, ball: Ball, paddle: Paddle) -> float:
        """Change in paddle y for this tick (unclamped)."""
        target = self.target_y(ball) + self.error()
        return (target - paddle.center) * self.gain

    def move(self, ball: Ball, paddle: Paddle) -> Paddle:
        return paddle.moved_to(paddle.y + self.adjustment(ball, paddle))
