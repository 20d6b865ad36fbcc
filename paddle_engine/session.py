"""Match session — connects a Game to the scoreboard, clock and commentary.

This is the outside world from the engine's point of view: it receives the
``on_score``/``on_rally`` callbacks, keeps the ``Match`` and decides when to
ask for commentary. The left side is "Player", the right side "Opponent".
"""

import random
from typing import Optional

from paddle_engine.commentary import CommentaryFeed
from paddle_engine.game import Game, GameStatus
from paddle_engine.match import create_match, score_point, tick_clock
from paddle_engine.types import Settings, Snapshot
from paddle_engine import arena


class MatchSession:
    """A timed match with optional live commentary."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        commentary: Optional[CommentaryFeed] = None,
        rng: Optional[random.Random] = None,
        duration: float = arena.MATCH_DURATION,
    ):
        self.settings = settings or Settings()
        self.commentary = commentary
        self.duration = duration
        self.match = create_match(duration)
        self.game = Game(
            self.settings,
            on_score=self.handle_score,
            on_rally=self.handle_rally,
            rng=rng,
        )
        self._summary_sent = False

    @property
    def status(self) -> GameStatus:
        return self.game.status

    def _comment(self, event: str, is_game_over: bool = False) -> None:
        if self.commentary is None:
            return
        self.commentary.request(
            event,
            self.match.left_score,
            self.match.right_score,
            self.settings.personality,
            is_game_over,
        )

    def handle_score(self, winner: str) -> None:
        self.match = score_point(self.match, winner)
        self._comment("Player scored!" if winner == "left" else "Opponent scored!")

    def handle_rally(self, count: int) -> None:
        if count > 0 and count % arena.RALLY_MILESTONE == 0:
            self._comment(f"Massive rally! {count} consecutive hits.")

    def toggle(self) -> None:
        """Start, pause or resume; after game over, start a fresh match."""
        if self.game.status == GameStatus.GAMEOVER:
            self.restart()
            self.game.start()
            return
        was_start = self.game.status == GameStatus.START
        self.game.toggle()
        if was_start:
            self._comment(f"Game start! {self.settings.mode} battle engaged.")

    def restart(self) -> None:
        """Reset scores, clock, commentary and the table; back to START."""
        self.match = create_match(self.duration)
        self._summary_sent = False
        if self.commentary is not None:
            self.commentary.clear()
        self.game.reset()

    def apply_settings(self, settings: Settings) -> None:
        self.settings = settings
        self.game.apply_settings(settings)

    def advance(self, elapsed: float) -> Snapshot:
        """Advance the table and, while playing, the match clock."""
        if self.game.status == GameStatus.PLAYING:
            self.match = tick_clock(self.match, elapsed)
            if self.match.over:
                self.game.end()

        if self.match.over and not self._summary_sent:
            self._summary_sent = True
            self._comment("Game over summary", is_game_over=True)

        return self.game.advance(elapsed)
