"""Matplotlib analysis charts — difficulty matchups, rally lengths, spin curves, speed cap."""

import os

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

from paddle_engine.game import simulate_match
from paddle_engine.physics import simulate
from paddle_engine.scenarios import SCENARIO_PRESETS, get_scenario
from paddle_engine import arena

DIFFICULTY_COLORS = {"easy": "#4ade80", "medium": "#fbbf24", "hard": "#f472b6"}


def _style_chart(ax, title):
    """Apply dark theme styling to chart."""
    ax.set_facecolor("#0f172a")
    ax.set_title(title, color="#e2e8f0", fontsize=13, fontweight="bold", pad=12)
    ax.tick_params(colors="#94a3b8", labelsize=9)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.spines["bottom"].set_color("#334155")
    ax.spines["left"].set_color("#334155")
    ax.xaxis.label.set_color("#cbd5e1")
    ax.yaxis.label.set_color("#cbd5e1")


def _save(fig, save_path):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def difficulty_matrix(n_matches=2, duration=30):
    """Left-side share of points (%) for every (left, right) difficulty pairing.

    Pairings where nobody scored count as 50%.
    """
    keys = list(arena.DIFFICULTIES.keys())
    n = len(keys)
    share = np.zeros((n, n))

    for i, left in enumerate(keys):
        for j, right in enumerate(keys):
            left_pts = right_pts = 0
            for seed in range(n_matches):
                result = simulate_match(left, right, duration=duration, seed=seed * 100 + i * 10 + j)
                left_pts += result.stats["left_points"]
                right_pts += result.stats["right_points"]
            total = left_pts + right_pts
            share[i][j] = 50.0 if total == 0 else left_pts / total * 100

    return keys, share


def chart_difficulty_heatmap(n_matches=2, duration=30, save_path=None):
    """Chart 1: Difficulty Matchup Heatmap."""
    keys, share = difficulty_matrix(n_matches=n_matches, duration=duration)
    n = len(keys)

    fig, ax = plt.subplots(figsize=(7, 6))
    fig.set_facecolor("#0f172a")
    _style_chart(ax, "Left Paddle Point Share by Difficulty")

    labels = [arena.DIFFICULTIES[k]["label"] for k in keys]
    im = ax.imshow(share, cmap="RdYlGn", vmin=0, vmax=100, aspect="auto")

    ax.set_xticks(range(n))
    ax.set_yticks(range(n))
    ax.set_xticklabels(labels, fontsize=9)
    ax.set_yticklabels(labels, fontsize=9)
    ax.set_xlabel("Right Paddle")
    ax.set_ylabel("Left Paddle")

    for i in range(n):
        for j in range(n):
            val = share[i][j]
            color = "white" if val < 30 or val > 70 else "black"
            ax.text(j, i, f"{val:.0f}%", ha="center", va="center",
                    fontsize=10, fontweight="bold", color=color)

    cbar = fig.colorbar(im, ax=ax, shrink=0.8)
    cbar.set_label("Left Point Share %", color="#94a3b8")
    cbar.ax.tick_params(colors="#94a3b8")

    return _save(fig, save_path)


def chart_rally_length_distribution(n_matches=2, duration=30, save_path=None):
    """Chart 2: Rally lengths when each difficulty plays a mirror match."""
    fig, ax = plt.subplots(figsize=(8, 5))
    fig.set_facecolor("#0f172a")
    _style_chart(ax, "Rally Length Distribution (mirror matches)")

    for key, color in DIFFICULTY_COLORS.items():
        lengths = []
        for seed in range(n_matches):
            result = simulate_match(key, key, duration=duration, seed=seed * 50)
            lengths.extend(p.rally_length for p in result.points)
        if not lengths:
            continue
        bins = np.arange(0, max(lengths) + 2)
        ax.hist(lengths, bins=bins, alpha=0.6, color=color,
                label=arena.DIFFICULTIES[key]["label"], edgecolor=color)

    ax.set_xlabel("Rally Length (hits)")
    ax.set_ylabel("Points")
    ax.legend(facecolor="#1e293b", edgecolor="#334155", labelcolor="#e2e8f0", fontsize=9)
    ax.grid(True, alpha=0.15, axis="y")

    return _save(fig, save_path)


def chart_spin_curves(save_path=None):
    """Chart 3: Ball paths for the same shot with and without spin."""
    fig, ax = plt.subplots(figsize=(9, 5.6))
    fig.set_facecolor("#0f172a")
    _style_chart(ax, "Spin Curve (Magnus-like drift)")

    colors = {"straight_shot": "#e2e8f0", "topspin_curve": "#22d3ee", "backspin_curve": "#f472b6"}
    for key, color in colors.items():
        ball, left, right = get_scenario(key)
        positions, _ = simulate(ball, left, right, max_ticks=300)
        xs = np.array([p.pos.x for p in positions])
        ys = np.array([p.pos.y for p in positions])
        ax.plot(xs, ys, color=color, linewidth=2,
                label=f"{SCENARIO_PRESETS[key]['label']} (spin {SCENARIO_PRESETS[key]['spin']:+.1f})")

    ax.set_xlim(0, arena.ARENA_WIDTH)
    ax.set_ylim(arena.ARENA_HEIGHT, 0)  # screen coordinates, y grows downward
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.legend(facecolor="#1e293b", edgecolor="#334155", labelcolor="#e2e8f0", fontsize=8)
    ax.grid(True, alpha=0.15)

    return _save(fig, save_path)


def chart_speed_profile(duration=30, seed=7, save_path=None):
    """Chart 4: Ball speed over a hard-vs-hard match against the speed cap."""
    result = simulate_match("hard", "hard", duration=duration, seed=seed)
    speeds = np.array(result.speeds)
    t = np.arange(len(speeds)) / arena.TICK_RATE

    fig, ax = plt.subplots(figsize=(9, 4.5))
    fig.set_facecolor("#0f172a")
    _style_chart(ax, "Ball Speed vs Time (Insane vs Insane)")

    ax.plot(t, speeds, color="#22d3ee", linewidth=1.2)
    ax.axhline(y=arena.MAX_BALL_SPEED, color="#ef4444", linestyle="--", linewidth=1.5, alpha=0.8)
    ax.text(t[-1] if len(t) else 0, arena.MAX_BALL_SPEED + 0.4, "Speed cap",
            color="#ef4444", fontsize=9, ha="right")
    for p in result.points:
        ax.axvline(x=p.tick / arena.TICK_RATE, color="#64748b", linewidth=0.8, alpha=0.5)

    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Speed (units/tick)")
    ax.set_ylim(0, arena.MAX_BALL_SPEED + 3)
    ax.grid(True, alpha=0.15)

    return _save(fig, save_path)


def generate_all_charts(output_dir="."):
    """Generate all analysis charts and save to output directory."""
    os.makedirs(output_dir, exist_ok=True)

    paths = []

    path = os.path.join(output_dir, "chart_spin_curves.png")
    chart_spin_curves(save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    path = os.path.join(output_dir, "chart_speed_profile.png")
    print("  Generating speed profile (running AI match)...")
    chart_speed_profile(save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    path = os.path.join(output_dir, "chart_difficulty_heatmap.png")
    print("  Generating difficulty heatmap (running AI matches)...")
    chart_difficulty_heatmap(save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    path = os.path.join(output_dir, "chart_rally_distribution.png")
    print("  Generating rally distribution...")
    chart_rally_length_distribution(save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    plt.close("all")
    return paths
