"""Input surface — paddle target positions fed by pointer and keyboard.

Front-ends write here; the frame driver only reads. Targets are paddle-centre
y values in arena units and may lie outside the arena, the physics clamps the
paddle itself.
"""

from paddle_engine import arena

UP_KEYS = ("ArrowUp",)
DOWN_KEYS = ("ArrowDown",)


def screen_to_arena(coord: float, origin: float, container_size: float, arena_size: float) -> float:
    """Map one screen-space coordinate into arena space."""
    if container_size <= 0:
        raise ValueError(f"container_size must be positive, got {container_size}")
    return (coord - origin) * (arena_size / container_size)


class InputSurface:
    """Two target-Y slots plus the set of held keys."""

    def __init__(self, mode: str = "1P"):
        self.mode = mode
        self.left_target = arena.ARENA_HEIGHT / 2
        self.right_target = arena.ARENA_HEIGHT / 2
        self.keys_held: set[str] = set()

    def reset(self) -> None:
        self.left_target = arena.ARENA_HEIGHT / 2
        self.right_target = arena.ARENA_HEIGHT / 2
        self.keys_held.clear()

    def pointer_move(self, screen_x: float, screen_y: float, rect: tuple) -> None:
        """Handle a mouse/touch position over the game area.

        Args:
            screen_x, screen_y: Pointer position in screen pixels.
            rect: (left, top, width, height) of the game area on screen.
        """
        left, top, width, height = rect
        x = screen_to_arena(screen_x, left, width, arena.ARENA_WIDTH)
        y = screen_to_arena(screen_y, top, height, arena.ARENA_HEIGHT)

        if self.mode == "1P" or x < arena.ARENA_WIDTH / 2:
            self.left_target = y
        else:
            self.right_target = y

    def key_down(self, code: str) -> None:
        self.keys_held.add(code)

    def key_up(self, code: str) -> None:
        self.keys_held.discard(code)

    def apply_keys(self) -> None:
        """Nudge the right target for held arrow keys. Called once per tick, 2P only."""
        if self.mode != "2P":
            return
        if any(k in self.keys_held for k in UP_KEYS):
            self.right_target -= arena.KEY_NUDGE
        if any(k in self.keys_held for k in DOWN_KEYS):
            self.right_target += arena.KEY_NUDGE
        self.right_target = max(0.0, min(arena.ARENA_HEIGHT, self.right_target))
