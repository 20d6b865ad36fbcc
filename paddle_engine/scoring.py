"""Match bookkeeping — rally counting, point detection and the re-serve.

The bookkeeper turns what the physics engine detected during a tick into
callbacks for the outside world:

- one ``on_rally(count)`` per paddle hit
- one ``on_score(winner)`` per ball leaving the arena, always followed by a
  serve in the same tick so the next tick starts from a valid state

Serve convention: the ball is served toward the side that just won the point,
so after the left side scores the new ball travels left (``vel.x < 0``).
"""

import random
from typing import Callable, Optional, Union

from paddle_engine.physics import ball_out
from paddle_engine.types import Ball, PaddleHitEvent, RallyEvent, ScoreEvent, Vec2
from paddle_engine import arena


ScoreCallback = Callable[[str], None]
RallyCallback = Callable[[int], None]


def serve_direction(winner: str) -> int:
    """Horizontal sign of the serve that follows a point won by ``winner``."""
    return -1 if winner == "left" else 1


class Scorekeeper:
    """Owns the rally counter and emits score/rally callbacks."""

    def __init__(
        self,
        on_score: Optional[ScoreCallback] = None,
        on_rally: Optional[RallyCallback] = None,
        rng: Optional[random.Random] = None,
    ):
        self.on_score = on_score
        self.on_rally = on_rally
        self.rng = rng or random.Random()
        self.rally = 0
        self.longest_rally = 0

    def reset(self) -> None:
        self.rally = 0
        self.longest_rally = 0

    def record_hits(self, events: list, tick: int = 0) -> list[RallyEvent]:
        """Advance the rally once per paddle hit in ``events``."""
        rally_events = []
        for e in events:
            if not isinstance(e, PaddleHitEvent):
                continue
            self.rally += 1
            self.longest_rally = max(self.longest_rally, self.rally)
            rally_events.append(RallyEvent(count=self.rally, tick=tick))
            if self.on_rally is not None:
                self.on_rally(self.rally)
        return rally_events

    def check_score(self, ball: Ball) -> Optional[str]:
        return ball_out(ball)

    def serve(self, ball: Ball, direction: int) -> None:
        """Re-centre the ball and launch it horizontally toward ``direction`` (+1 right, -1 left)."""
        ball.pos = Vec2(arena.ARENA_WIDTH / 2, arena.ARENA_HEIGHT / 2)
        ball.vel = Vec2(
            direction * arena.INITIAL_BALL_SPEED,
            (self.rng.random() - 0.5) * arena.SERVE_JITTER,
        )
        ball.spin = 0.0
        self.rally = 0

    def settle(self, ball: Ball, events: list, tick: int = 0) -> list[Union[RallyEvent, ScoreEvent]]:
        """Process one tick's physics events: rally hits, then scoring and re-serve."""
        out: list[Union[RallyEvent, ScoreEvent]] = list(self.record_hits(events, tick))

        winner = self.check_score(ball)
        if winner is not None:
            out.append(ScoreEvent(winner=winner, tick=tick))
            if self.on_score is not None:
                self.on_score(winner)
            self.serve(ball, serve_direction(winner))

        return out
