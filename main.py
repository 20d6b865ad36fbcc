#!/usr/bin/env python3
"""CLI entry point for the Neon Paddle simulation.

Usage:
    python main.py play                   Launch Pygame front-end
    python main.py match [left] [right]   Run AI-vs-AI match (text mode) and print stats
    python main.py scenario [name]        Fly a preset scenario and print the event trace
    python main.py analyze                Generate analysis charts
    python main.py test                   Run all tests
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def cmd_play():
    """Launch the Pygame front-end."""
    print("Launching Neon Paddle...")
    print("Controls: SPACE=play/pause  R=reset  M=mode  D=difficulty  P=persona  C=color  Q=quit")
    print("-" * 60)
    from paddle_sim.visualizer import run_visualizer
    run_visualizer()


def cmd_match():
    """Run an AI-vs-AI match in text mode and print stats."""
    from paddle_engine.arena import DIFFICULTIES
    from paddle_engine.game import simulate_match
    from paddle_engine.match import format_clock

    print("=" * 60)
    print("  AI PADDLE MATCH")
    print("=" * 60)

    # Parse optional arguments
    levels = list(DIFFICULTIES.keys())
    left = sys.argv[2] if len(sys.argv) > 2 and sys.argv[2] in levels else "hard"
    right = sys.argv[3] if len(sys.argv) > 3 and sys.argv[3] in levels else "medium"

    print(f"\n  LEFT:  {DIFFICULTIES[left]['label']} (speed {DIFFICULTIES[left]['speed']}, "
          f"error {DIFFICULTIES[left]['error_margin']})")
    print(f"  RIGHT: {DIFFICULTIES[right]['label']} (speed {DIFFICULTIES[right]['speed']}, "
          f"error {DIFFICULTIES[right]['error_margin']})")
    print()

    result = simulate_match(left, right)
    m = result.match
    s = result.stats

    # Print point-by-point
    for i, point in enumerate(result.points):
        score_after = m.history[i] if i < len(m.history) else {}
        ls = score_after.get("left", "?")
        rs = score_after.get("right", "?")
        clock = format_clock(score_after.get("time_left", 0.0))
        print(f"  Point {i+1:2d}: {point.winner:>5} scores after {point.rally_length} hits  "
              f"[{ls}-{rs}]  {clock} left")

    print()
    print(f"  FINAL SCORE: {m.left_score} - {m.right_score}")
    if m.winner is None:
        print("  RESULT: Draw")
    else:
        print(f"  WINNER: {m.winner} ({s['left_label'] if m.winner == 'left' else s['right_label']})")
    print()
    print(f"  Total points: {s['total_points']}")
    print(f"  Avg rally length: {s['avg_rally_length']} hits")
    print(f"  Max rally length: {s['max_rally_length']} hits")
    print(f"  Paddle hits: {s['paddle_hits']}  |  Wall bounces: {s['wall_bounces']}")
    print(f"  Top ball speed: {s['max_speed']}")
    print()
    print("  Available difficulties: " + ", ".join(levels))
    print("  Usage: python main.py match [left] [right]")
    print("=" * 60)


def cmd_scenario():
    """Fly a preset scenario with still paddles and print the event trace."""
    from paddle_engine.physics import simulate
    from paddle_engine.scenarios import SCENARIO_PRESETS, get_scenario, list_scenarios

    names = list_scenarios()
    chosen = [sys.argv[2]] if len(sys.argv) > 2 and sys.argv[2] in names else names

    for key in chosen:
        ball, left, right = get_scenario(key)
        positions, events = simulate(ball, left, right)
        last = positions[-1]

        print(f"Scenario: {SCENARIO_PRESETS[key]['label']} ({key})")
        print(f"  Ticks: {len(positions) - 1}  |  Events: {len(events)}  |  "
              f"End: ({last.pos.x:.1f}, {last.pos.y:.1f})  speed {last.speed():.2f}")
        for e in events:
            kind = type(e).__name__.replace("Event", "")
            detail = getattr(e, "wall", None) or getattr(e, "side", "")
            print(f"    t={e.tick:4d}  {kind:<10} {detail}")
        print()


def cmd_analyze():
    """Generate all analysis charts."""
    print("Generating analysis charts...")
    print("-" * 60)
    from paddle_sim.analysis import generate_all_charts
    output_dir = os.path.join(os.path.dirname(__file__), "output")
    paths = generate_all_charts(output_dir=output_dir)
    print(f"\nDone! {len(paths)} charts saved to {output_dir}/")


def cmd_test():
    """Run all tests."""
    import subprocess
    print("Running tests...")
    print("-" * 60)
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "tests/", "-v"],
        cwd=os.path.dirname(os.path.abspath(__file__)),
    )
    sys.exit(result.returncode)


COMMANDS = {
    "play": cmd_play,
    "match": cmd_match,
    "scenario": cmd_scenario,
    "analyze": cmd_analyze,
    "test": cmd_test,
}


def main():
    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print(__doc__)
        print("Available commands:")
        for name, func in COMMANDS.items():
            print(f"  {name:12s} {func.__doc__}")
        sys.exit(1)

    COMMANDS[sys.argv[1]]()


if __name__ == "__main__":
    main()
