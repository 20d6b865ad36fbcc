"""Ball and paddle physics — drag, spin curve, wall bounces, paddle contact.

One call to ``step`` advances the world by exactly one logical tick. There is no
wall-clock delta in here; the frame driver decides how many ticks to run.

Collision detection is a per-axis overlap test run once per paddle per tick. A
ball that travels further than ``PADDLE_WIDTH + 2 * radius`` in one tick can skip
a paddle entirely; the speed cap keeps that out of reach with the default tuning,
and ``swept=True`` adds a crossing test for callers that raise the cap.
"""

from typing import Optional, Union

from paddle_engine.types import Ball, Paddle, PaddleHitEvent, Vec2, WallBounceEvent
from paddle_engine import arena


def _move_toward_target(paddle: Paddle, target_y: float, gain: float = arena.PADDLE_SMOOTHING) -> Paddle:
    """Ease the paddle centre toward ``target_y`` (exponential smoothing)."""
    return paddle.moved_to(paddle.y + (target_y - paddle.center) * gain)


def _apply_spin_curve(vel: Vec2, spin: float) -> Vec2:
    return Vec2(vel.x, vel.y + spin * arena.SPIN_INFLUENCE)


def _apply_drag(ball: Ball) -> None:
    ball.vel = ball.vel * arena.AIR_DRAG
    ball.spin *= arena.SPIN_DECAY


def _check_wall_bounce(ball: Ball, tick: int = 0) -> list[WallBounceEvent]:
    """Reflect off the top/bottom walls, losing speed and spin."""
    events: list[WallBounceEvent] = []

    if ball.pos.y - ball.radius < 0:
        ball.pos.y = ball.radius
        ball.vel.y = abs(ball.vel.y) * arena.WALL_RESTITUTION
        ball.spin *= arena.WALL_SPIN_FRICTION
        events.append(WallBounceEvent(wall="top", pos=ball.pos.copy(), tick=tick))
    elif ball.pos.y + ball.radius > arena.ARENA_HEIGHT:
        ball.pos.y = arena.ARENA_HEIGHT - ball.radius
        ball.vel.y = -abs(ball.vel.y) * arena.WALL_RESTITUTION
        ball.spin *= arena.WALL_SPIN_FRICTION
        events.append(WallBounceEvent(wall="bottom", pos=ball.pos.copy(), tick=tick))

    return events


def _within_paddle(y: float, paddle: Paddle) -> bool:
    return paddle.y < y < paddle.y + paddle.height


def _contact_y(ball: Ball, paddle: Paddle, prev_pos: Vec2, swept: bool) -> Optional[float]:
    """Vertical contact point if the ball touches ``paddle`` this tick, else None."""
    r = ball.radius
    if paddle.side == "left":
        if ball.vel.x >= 0:
            return None
        overlap = ball.pos.x - r <= paddle.face_x and ball.pos.x + r >= paddle.x
        lead_before, lead_after = prev_pos.x - r, ball.pos.x - r
        crossed = lead_before >= paddle.face_x > lead_after
    else:
        if ball.vel.x <= 0:
            return None
        overlap = ball.pos.x + r >= paddle.face_x and ball.pos.x - r <= paddle.x + paddle.width
        lead_before, lead_after = prev_pos.x + r, ball.pos.x + r
        crossed = lead_before <= paddle.face_x < lead_after

    if overlap and _within_paddle(ball.pos.y, paddle):
        return ball.pos.y

    if swept and crossed:
        # Interpolate where the leading edge met the face plane
        frac = (lead_before - paddle.face_x) / (lead_before - lead_after)
        y_cross = prev_pos.y + (ball.pos.y - prev_pos.y) * frac
        if _within_paddle(y_cross, paddle):
            return y_cross

    return None


def _cap_speed(vel: Vec2) -> Vec2:
    speed = vel.magnitude()
    if speed > arena.MAX_BALL_SPEED:
        return vel * (arena.MAX_BALL_SPEED / speed)
    return vel


def _check_paddle_collision(
    ball: Ball,
    paddle: Paddle,
    prev_pos: Vec2,
    swept: bool = False,
    tick: int = 0,
) -> Optional[PaddleHitEvent]:
    """Return the ball off ``paddle`` if they touch, transferring paddle motion into spin."""
    contact_y = _contact_y(ball, paddle, prev_pos, swept)
    if contact_y is None:
        return None

    paddle_vel = paddle.velocity

    # Reverse and place flush against the face so the ball can't stick or tunnel
    ball.vel.x = -ball.vel.x
    if paddle.side == "left":
        ball.pos.x = paddle.face_x + ball.radius
    else:
        ball.pos.x = paddle.face_x - ball.radius
    ball.pos.y = contact_y

    ball.spin += paddle_vel * arena.PADDLE_FRICTION

    relative_hit = (contact_y - paddle.center) / (paddle.height / 2)
    relative_hit = max(-1.0, min(1.0, relative_hit))
    ball.vel.y += relative_hit * arena.VERTICAL_KICK + paddle_vel * arena.PADDLE_VERTICAL_DRAG

    if ball.speed() < arena.MAX_BALL_SPEED:
        ball.vel = ball.vel * arena.SPEED_INCREMENT
    ball.vel = _cap_speed(ball.vel)

    return PaddleHitEvent(
        side=paddle.side,
        relative_hit=relative_hit,
        paddle_velocity=paddle_vel,
        speed=ball.speed(),
        tick=tick,
    )


def step(
    ball: Ball,
    left: Paddle,
    right: Paddle,
    left_target: float,
    right_target: float,
    *,
    left_ai=None,
    right_ai=None,
    swept: bool = False,
    tick: int = 0,
) -> tuple[Paddle, Paddle, list[Union[WallBounceEvent, PaddleHitEvent]]]:
    """Advance the world by one tick.

    The ball is mutated in place; paddles are immutable, so the moved paddles
    are returned. ``left_ai``/``right_ai`` are opponent controllers; a side
    without one eases toward its input target instead.

    Returns (left, right, events).
    """
    # Paddles first: moved_to records the pre-move y as prev_y
    if left_ai is not None:
        left = left_ai.move(ball, left)
    else:
        left = _move_toward_target(left, left_target)

    if right_ai is not None:
        right = right_ai.move(ball, right)
    else:
        right = _move_toward_target(right, right_target)

    # Ball integration
    ball.vel = _apply_spin_curve(ball.vel, ball.spin)
    _apply_drag(ball)

    prev_pos = ball.pos.copy()
    ball.pos = ball.pos + ball.vel

    # Collisions
    events: list[Union[WallBounceEvent, PaddleHitEvent]] = []
    events.extend(_check_wall_bounce(ball, tick))

    for paddle in (left, right):
        hit = _check_paddle_collision(ball, paddle, prev_pos, swept, tick)
        if hit is not None:
            events.append(hit)

    return left, right, events


def ball_out(ball: Ball) -> Optional[str]:
    """Side that scores if the ball centre has left the arena, else None."""
    if ball.pos.x < 0:
        return "right"
    if ball.pos.x > arena.ARENA_WIDTH:
        return "left"
    return None


def simulate(
    initial_ball: Ball,
    left: Optional[Paddle] = None,
    right: Optional[Paddle] = None,
    max_ticks: int = 600,
    swept: bool = False,
) -> tuple[list[Ball], list[Union[WallBounceEvent, PaddleHitEvent]]]:
    """Fly the ball with both paddles holding still until it leaves the arena.

    Physics only: no scoring and no re-serve. Returns (positions, events) where
    positions holds a copy of the ball after every tick, starting with the
    initial state.
    """
    ball = initial_ball.copy()
    left = left or Paddle.centered("left")
    right = right or Paddle.centered("right")
    positions = [ball.copy()]
    all_events: list[Union[WallBounceEvent, PaddleHitEvent]] = []

    for tick in range(1, max_ticks + 1):
        left, right, events = step(
            ball, left, right,
            left_target=left.center,
            right_target=right.center,
            swept=swept,
            tick=tick,
        )
        all_events.extend(events)
        positions.append(ball.copy())

        if ball_out(ball) is not None:
            break

    return positions, all_events
