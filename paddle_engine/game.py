"""Frame driver — the match status machine and the fixed-step tick loop.

A front-end calls ``Game.advance(elapsed)`` once per display refresh. The driver
converts wall-clock time into whole logical ticks at ``TICK_RATE`` so physics
behaves the same on a 60 Hz, 144 Hz or headless loop. Each tick runs to
completion (controls, physics, bookkeeping) before the next one starts.

Status transitions:
- START    -> PLAYING           start() / toggle()
- PLAYING <-> PAUSED            pause() / resume() / toggle()
- PLAYING, PAUSED -> GAMEOVER   end() (clock expiry), entity state kept frozen
- GAMEOVER -> PLAYING           toggle() / start(), after a full reset
- any      -> START             reset()
"""

import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from paddle_engine.types import (
    Ball,
    BallView,
    Paddle,
    PaddleHitEvent,
    ScoreEvent,
    Settings,
    Snapshot,
    WallBounceEvent,
    Match,
)
from paddle_engine.controls import InputSurface
from paddle_engine.match import create_match, score_point, tick_clock
from paddle_engine.opponent import OpponentController
from paddle_engine.physics import step
from paddle_engine.scoring import Scorekeeper
from paddle_engine import arena


class GameStatus(Enum):
    START = "START"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    GAMEOVER = "GAMEOVER"


class Game:
    """Owns the ball, both paddles and the rally counter for one table."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        on_score=None,
        on_rally=None,
        rng: Optional[random.Random] = None,
        left_ai: Optional[OpponentController] = None,
        swept: bool = False,
    ):
        """Create a game in the START state.

        Args:
            settings: Mode and difficulty; defaults to 1P medium.
            on_score: Called with "left"/"right" when a point is scored.
            on_rally: Called with the new rally count after every paddle hit.
            rng: Random source shared by the opponent and the serve.
            left_ai: Optional controller for the left paddle (AI-vs-AI play).
            swept: Enable swept paddle collision checks.
        """
        self.settings = settings or Settings()
        self.rng = rng or random.Random()
        self.controls = InputSurface(self.settings.mode)
        self.scorekeeper = Scorekeeper(on_score=on_score, on_rally=on_rally, rng=self.rng)
        self.left_ai = left_ai
        self.right_ai: Optional[OpponentController] = None
        self.swept = swept
        self.status = GameStatus.START
        self._reset_entities()
        self.apply_settings(self.settings)

    # --- state ---

    def _reset_entities(self) -> None:
        self.ball = Ball()
        self.left = Paddle.centered("left", is_ai=self.left_ai is not None)
        self.right = Paddle.centered("right", is_ai=self.right_ai is not None)
        self.scorekeeper.reset()
        self.controls.reset()
        self.tick_count = 0
        self._accumulator = 0.0

    @property
    def rally(self) -> int:
        return self.scorekeeper.rally

    def apply_settings(self, settings: Settings) -> None:
        """Switch mode/difficulty; takes effect from the next tick."""
        self.settings = settings
        self.controls.mode = settings.mode
        if settings.mode == "1P":
            self.right_ai = OpponentController(settings.profile(), side="right", rng=self.rng)
        else:
            self.right_ai = None
        self.right = replace(self.right, is_ai=self.right_ai is not None)

    # --- status machine ---

    def start(self) -> None:
        if self.status == GameStatus.GAMEOVER:
            self.reset()
        self.status = GameStatus.PLAYING

    def pause(self) -> None:
        if self.status == GameStatus.PLAYING:
            self.status = GameStatus.PAUSED

    def resume(self) -> None:
        if self.status == GameStatus.PAUSED:
            self.status = GameStatus.PLAYING

    def toggle(self) -> None:
        if self.status == GameStatus.PLAYING:
            self.pause()
        else:
            self.start()

    def end(self) -> None:
        if self.status in (GameStatus.PLAYING, GameStatus.PAUSED):
            self.status = GameStatus.GAMEOVER

    def reset(self) -> None:
        self._reset_entities()
        self.status = GameStatus.START

    # --- loop ---

    def tick(self) -> list:
        """Run one logical tick. No-op unless PLAYING.

        Returns the tick's events: wall bounces, paddle hits, rally and score events.
        """
        if self.status != GameStatus.PLAYING:
            return []

        self.tick_count += 1
        self.controls.apply_keys()

        self.left, self.right, events = step(
            self.ball,
            self.left,
            self.right,
            self.controls.left_target,
            self.controls.right_target,
            left_ai=self.left_ai,
            right_ai=self.right_ai,
            swept=self.swept,
            tick=self.tick_count,
        )
        events.extend(self.scorekeeper.settle(self.ball, events, self.tick_count))
        return events

    def advance(self, elapsed: float) -> Snapshot:
        """Consume ``elapsed`` seconds of wall-clock time as whole ticks.

        At most ``MAX_TICKS_PER_ADVANCE`` ticks run per call; a longer stall
        (window drag, debugger) is dropped rather than replayed.
        """
        if self.status != GameStatus.PLAYING:
            self._accumulator = 0.0
            return self.snapshot()

        self._accumulator += elapsed
        ticks = 0
        while self._accumulator >= arena.TICK_SECONDS and ticks < arena.MAX_TICKS_PER_ADVANCE:
            self.tick()
            self._accumulator -= arena.TICK_SECONDS
            ticks += 1
            if self.status != GameStatus.PLAYING:
                break

        if self._accumulator >= arena.TICK_SECONDS:
            self._accumulator = 0.0
        return self.snapshot()

    def snapshot(self) -> Snapshot:
        b = self.ball
        return Snapshot(
            ball=BallView(x=b.pos.x, y=b.pos.y, radius=b.radius, spin=b.spin, vx=b.vel.x, vy=b.vel.y),
            left=self.left,
            right=self.right,
            rally=self.rally,
            status=self.status.value,
            tick=self.tick_count,
        )


@dataclass
class PointRecord:
    """One point of a headless match."""
    winner: str
    rally_length: int
    tick: int


@dataclass
class MatchResult:
    """Full result of a headless AI-vs-AI match."""
    match: Match
    points: list  # list[PointRecord]
    left_difficulty: str
    right_difficulty: str
    speeds: list = field(default_factory=list)  # ball speed after each tick
    stats: dict = field(default_factory=dict)


def simulate_match(
    left_difficulty: str = "medium",
    right_difficulty: str = "medium",
    duration: float = arena.MATCH_DURATION,
    seed: Optional[int] = None,
    swept: bool = False,
) -> MatchResult:
    """Play a timed match between two opponent controllers without rendering."""
    rng = random.Random(seed)
    points: list[PointRecord] = []
    speeds: list[float] = []
    hits = 0
    wall_bounces = 0
    match = create_match(duration)

    game = Game(
        Settings(mode="1P", difficulty=right_difficulty),
        rng=rng,
        left_ai=OpponentController.for_difficulty(left_difficulty, side="left", rng=rng),
        swept=swept,
    )

    def on_score(winner: str) -> None:
        # Fires before the serve, so the rally counter still holds this point's length
        points.append(PointRecord(winner=winner, rally_length=game.rally, tick=game.tick_count))

    game.scorekeeper.on_score = on_score
    game.start()

    for _ in range(int(round(duration * arena.TICK_RATE))):
        events = game.tick()
        for e in events:
            if isinstance(e, ScoreEvent):
                match = score_point(match, e.winner)
            elif isinstance(e, PaddleHitEvent):
                hits += 1
            elif isinstance(e, WallBounceEvent):
                wall_bounces += 1
        speeds.append(game.ball.speed())
        match = tick_clock(match, arena.TICK_SECONDS)
        if match.over:
            game.end()
            break

    # Float drift can leave a sliver on the clock after the last tick
    if not match.over:
        match = tick_clock(match, match.time_left)

    stats = _compute_match_stats(points, speeds, hits, wall_bounces, left_difficulty, right_difficulty)
    return MatchResult(
        match=match,
        points=points,
        left_difficulty=left_difficulty,
        right_difficulty=right_difficulty,
        speeds=speeds,
        stats=stats,
    )


def _compute_match_stats(
    points: list[PointRecord],
    speeds: list[float],
    hits: int,
    wall_bounces: int,
    left_difficulty: str,
    right_difficulty: str,
) -> dict:
    """Compute match statistics."""
    left_points = sum(1 for p in points if p.winner == "left")
    right_points = sum(1 for p in points if p.winner == "right")

    rally_lengths = [p.rally_length for p in points]
    avg_rally = sum(rally_lengths) / max(len(rally_lengths), 1)
    max_rally = max(rally_lengths) if rally_lengths else 0

    return {
        "left_points": left_points,
        "right_points": right_points,
        "total_points": len(points),
        "avg_rally_length": round(avg_rally, 1),
        "max_rally_length": max_rally,
        "paddle_hits": hits,
        "wall_bounces": wall_bounces,
        "max_speed": round(max(speeds), 2) if speeds else 0.0,
        "ticks": len(speeds),
        "left_label": arena.DIFFICULTIES[left_difficulty]["label"],
        "right_label": arena.DIFFICULTIES[right_difficulty]["label"],
    }
