"""Core data types for the paddle simulation."""

from dataclasses import dataclass, field, replace
from typing import Optional

from paddle_engine import arena


@dataclass
class Vec2:
    """2D vector for position and velocity."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vec2":
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vec2":
        return self.__mul__(scalar)

    def magnitude(self) -> float:
        return (self.x**2 + self.y**2) ** 0.5

    def copy(self) -> "Vec2":
        return Vec2(self.x, self.y)


@dataclass
class Ball:
    """The ball. Mutated in place by the physics engine every tick.

    ``spin`` is a scalar proxy for angular rate: it curves ``vel.y`` each tick
    and decays toward zero. It has no physical unit.
    """
    pos: Vec2 = field(default_factory=lambda: Vec2(arena.ARENA_WIDTH / 2, arena.ARENA_HEIGHT / 2))
    vel: Vec2 = field(default_factory=lambda: Vec2(arena.INITIAL_BALL_SPEED, 0.0))
    radius: float = arena.BALL_RADIUS
    spin: float = 0.0

    def speed(self) -> float:
        return self.vel.magnitude()

    def copy(self) -> "Ball":
        return Ball(
            pos=self.pos.copy(),
            vel=self.vel.copy(),
            radius=self.radius,
            spin=self.spin,
        )


def clamp_paddle_y(y: float, height: float = arena.PADDLE_HEIGHT) -> float:
    """Clamp a paddle's top edge so the paddle stays inside the arena."""
    return max(0.0, min(arena.ARENA_HEIGHT - height, y))


@dataclass(frozen=True)
class Paddle:
    """Immutable paddle snapshot.

    A tick never edits a paddle: ``moved_to`` returns the next snapshot with the
    old ``y`` carried over as ``prev_y``, so ``velocity`` is always the
    displacement produced by the most recent move.
    """
    y: float
    prev_y: float
    side: str = "left"  # "left" or "right"
    height: float = arena.PADDLE_HEIGHT
    width: float = arena.PADDLE_WIDTH
    is_ai: bool = False

    @classmethod
    def centered(cls, side: str, is_ai: bool = False) -> "Paddle":
        y = arena.ARENA_HEIGHT / 2 - arena.PADDLE_HEIGHT / 2
        return cls(y=y, prev_y=y, side=side, is_ai=is_ai)

    @property
    def x(self) -> float:
        return arena.LEFT_PADDLE_X if self.side == "left" else arena.RIGHT_PADDLE_X

    @property
    def face_x(self) -> float:
        """X coordinate of the face the ball strikes."""
        return self.x + self.width if self.side == "left" else self.x

    @property
    def center(self) -> float:
        return self.y + self.height / 2

    @property
    def velocity(self) -> float:
        return self.y - self.prev_y

    def moved_to(self, y: float) -> "Paddle":
        return replace(self, y=clamp_paddle_y(y, self.height), prev_y=self.y)

    def placed_at(self, y: float) -> "Paddle":
        """Teleport with zero velocity (used by resets and scenarios)."""
        y = clamp_paddle_y(y, self.height)
        return replace(self, y=y, prev_y=y)


@dataclass(frozen=True)
class DifficultyProfile:
    """How fast and how accurately the opponent tracks the ball."""
    speed: float
    error_margin: float
    label: str = ""

    @classmethod
    def from_key(cls, key: str) -> "DifficultyProfile":
        preset = arena.DIFFICULTIES[key]
        return cls(
            speed=preset["speed"],
            error_margin=preset["error_margin"],
            label=preset["label"],
        )


@dataclass
class Settings:
    """User-facing configuration. Only ``mode`` and ``difficulty`` reach the physics."""
    mode: str = "1P"
    difficulty: str = "medium"
    color: str = arena.THEME_COLORS["cyan"]
    personality: str = "sarcastic"

    def __post_init__(self):
        if self.mode not in arena.MODES:
            raise ValueError(f"Unknown mode {self.mode!r}, expected one of {arena.MODES}")
        if self.difficulty not in arena.DIFFICULTIES:
            raise ValueError(
                f"Unknown difficulty {self.difficulty!r}, expected one of {list(arena.DIFFICULTIES)}"
            )
        if self.personality not in arena.PERSONALITIES:
            raise ValueError(
                f"Unknown personality {self.personality!r}, expected one of {arena.PERSONALITIES}"
            )

    def profile(self) -> DifficultyProfile:
        return DifficultyProfile.from_key(self.difficulty)


@dataclass
class WallBounceEvent:
    """Ball reflected off the top or bottom wall."""
    wall: str  # "top" or "bottom"
    pos: Vec2
    tick: int = 0


@dataclass
class PaddleHitEvent:
    """Ball returned by a paddle."""
    side: str  # "left" or "right"
    relative_hit: float  # -1 (top edge) .. 1 (bottom edge)
    paddle_velocity: float
    speed: float  # ball speed after the hit
    tick: int = 0


@dataclass
class RallyEvent:
    """Rally counter advanced after a paddle hit."""
    count: int
    tick: int = 0


@dataclass
class ScoreEvent:
    """Ball left the arena; ``winner`` is the side that scored."""
    winner: str  # "left" or "right"
    tick: int = 0


@dataclass(frozen=True)
class BallView:
    """Read-only copy of the ball for renderers."""
    x: float
    y: float
    radius: float
    spin: float
    vx: float = 0.0
    vy: float = 0.0


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer needs to draw one frame."""
    ball: BallView
    left: Paddle
    right: Paddle
    rally: int
    status: str
    tick: int


@dataclass
class Match:
    """Scores and clock of the current match (owned outside the engine)."""
    left_score: int = 0
    right_score: int = 0
    time_left: float = float(arena.MATCH_DURATION)
    history: list = field(default_factory=list)
    over: bool = False
    winner: Optional[str] = None
