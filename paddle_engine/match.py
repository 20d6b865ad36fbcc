"""Match state — scores and the countdown clock.

Timed match: whoever leads when the clock reaches zero wins; equal scores are a
draw. Every function returns a new ``Match`` and leaves its argument untouched.
"""

from paddle_engine.types import Match
from paddle_engine import arena


def _copy(match: Match) -> Match:
    return Match(
        left_score=match.left_score,
        right_score=match.right_score,
        time_left=match.time_left,
        history=list(match.history),
        over=match.over,
        winner=match.winner,
    )


def create_match(duration: float = arena.MATCH_DURATION) -> Match:
    """Create a new match with the full clock."""
    return Match(time_left=float(duration))


def score_point(match: Match, winner: str) -> Match:
    """Award a point to ``winner`` ("left" or "right").

    Points scored after the clock has run out are ignored.
    """
    if winner not in ("left", "right"):
        raise ValueError(f"winner must be 'left' or 'right', got {winner!r}")

    m = _copy(match)
    if m.over:
        return m

    if winner == "left":
        m.left_score += 1
    else:
        m.right_score += 1

    m.history.append({
        "left": m.left_score,
        "right": m.right_score,
        "winner": winner,
        "time_left": round(m.time_left, 2),
    })
    return m


def tick_clock(match: Match, seconds: float) -> Match:
    """Run the clock down by ``seconds``; ends the match at zero."""
    m = _copy(match)
    if m.over:
        return m

    m.time_left = max(0.0, m.time_left - seconds)
    if m.time_left <= 0:
        m.over = True
        if m.left_score > m.right_score:
            m.winner = "left"
        elif m.right_score > m.left_score:
            m.winner = "right"
    return m


def format_clock(seconds: float) -> str:
    """Render the clock as M:SS, rounding partial seconds up."""
    whole = int(seconds) + (1 if seconds - int(seconds) > 1e-9 else 0)
    return f"{whole // 60}:{whole % 60:02d}"
