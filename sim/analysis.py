"""Matplotlib analysis charts — opponent strength, rally lengths, matchups."""

import os
import random

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

from pong.types import LEFT, RIGHT
from pong.ai_player import AIOpponent, DIFFICULTIES
from pong.controls import TrackingController
from pong.game import simulate_match
from pong import field

COLORS = {"easy": "#28a745", "normal": "#ffc107", "hard": "#dc3545"}


def _style_chart(ax, title):
    """Apply dark theme styling to chart."""
    ax.set_facecolor("#0f0f1a")
    ax.set_title(title, color="#e0e0e0", fontsize=13, fontweight="bold", pad=12)
    ax.tick_params(colors="#888888", labelsize=9)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.spines["bottom"].set_color("#333333")
    ax.spines["left"].set_color("#333333")
    ax.xaxis.label.set_color("#aaaaaa")
    ax.yaxis.label.set_color("#aaaaaa")


def _bot_vs_ai(difficulty, seed, bot_speed=field.PADDLE_SPEED):
    rng = random.Random(seed)
    bot = TrackingController(LEFT, speed=bot_speed)
    ai = AIOpponent(difficulty, side=RIGHT, rng=rng)
    return simulate_match(bot, ai, rng=rng)


def chart_points_vs_bot_speed(n_games=5, save_path=None):
    """Chart 1: Goals conceded by each difficulty against a tracking bot.

    The bot's paddle speed sweeps from below the AI's cap to the human cap.
    """
    speeds = np.arange(2, field.PADDLE_SPEED + 1)

    fig, ax = plt.subplots(figsize=(8, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "AI Goals Scored vs Tracking-Bot Speed")

    for key in DIFFICULTIES:
        means = []
        for speed in speeds:
            scored = [
                _bot_vs_ai(key, seed, bot_speed=float(speed)).match.right_score
                for seed in range(n_games)
            ]
            means.append(np.mean(scored))
        ax.plot(speeds, means, color=COLORS[key], marker="o", linewidth=2,
                markersize=7, label=DIFFICULTIES[key]["label"])

    ax.set_xlabel("Bot paddle speed (px/tick)")
    ax.set_ylabel(f"AI goals (of {field.TARGET_SCORE} to win)")
    ax.set_ylim(0, field.TARGET_SCORE + 0.5)
    ax.legend(facecolor="#1a1a2e", edgecolor="#333", labelcolor="#e0e0e0", fontsize=9)
    ax.grid(True, alpha=0.15)

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def chart_matchup_heatmap(n_games=5, save_path=None):
    """Chart 2: Difficulty matchup heatmap (left AI vs right AI)."""
    keys = list(DIFFICULTIES.keys())
    n = len(keys)
    win_matrix = np.zeros((n, n))

    for i, k1 in enumerate(keys):
        for j, k2 in enumerate(keys):
            wins = 0
            for seed in range(n_games):
                rng = random.Random(seed * 100 + i * 10 + j)
                left = AIOpponent(k1, side=LEFT, rng=rng)
                right = AIOpponent(k2, side=RIGHT, rng=rng)
                result = simulate_match(left, right, rng=rng)
                if result.match.winner_side == LEFT:
                    wins += 1
            win_matrix[i][j] = wins / n_games * 100

    fig, ax = plt.subplots(figsize=(7, 6))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Difficulty Matchup Win Rates (Left vs Right)")

    labels = [DIFFICULTIES[k]["label"] for k in keys]
    im = ax.imshow(win_matrix, cmap="RdYlGn", vmin=0, vmax=100, aspect="auto")

    ax.set_xticks(range(n))
    ax.set_yticks(range(n))
    ax.set_xticklabels(labels, fontsize=9)
    ax.set_yticklabels(labels, fontsize=9)
    ax.set_xlabel("Right paddle")
    ax.set_ylabel("Left paddle")

    for i in range(n):
        for j in range(n):
            val = win_matrix[i][j]
            color = "white" if val < 30 or val > 70 else "black"
            ax.text(j, i, f"{val:.0f}%", ha="center", va="center",
                    fontsize=10, fontweight="bold", color=color)

    cbar = fig.colorbar(im, ax=ax, shrink=0.8)
    cbar.set_label("Left win rate %", color="#aaa")
    cbar.ax.tick_params(colors="#888")

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def chart_rally_length_distribution(n_games=3, save_path=None):
    """Chart 3: Rally length (paddle hits) per difficulty against the bot."""
    fig, ax = plt.subplots(figsize=(8, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Rally Length Distribution by Difficulty")

    for key in DIFFICULTIES:
        lengths = []
        for seed in range(n_games):
            result = _bot_vs_ai(key, seed * 50)
            lengths.extend(r.hits for r in result.rallies)
        bins = np.arange(0, max(lengths, default=8) + 2)
        ax.hist(lengths, bins=bins, alpha=0.6, color=COLORS[key],
                label=DIFFICULTIES[key]["label"], edgecolor=COLORS[key])

    ax.set_xlabel("Rally length (paddle hits)")
    ax.set_ylabel("Frequency")
    ax.legend(facecolor="#1a1a2e", edgecolor="#333", labelcolor="#e0e0e0", fontsize=9)
    ax.grid(True, alpha=0.15, axis="y")

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def generate_all_charts(output_dir=".", n_games=5):
    """Generate all charts and save to output_dir."""
    os.makedirs(output_dir, exist_ok=True)
    paths = []

    path = os.path.join(output_dir, "chart_points_vs_bot_speed.png")
    print("  Generating goals vs bot speed (running matches)...")
    chart_points_vs_bot_speed(n_games=n_games, save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    path = os.path.join(output_dir, "chart_matchup_heatmap.png")
    print("  Generating matchup heatmap...")
    chart_matchup_heatmap(n_games=n_games, save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    path = os.path.join(output_dir, "chart_rally_distribution.png")
    print("  Generating rally distribution...")
    chart_rally_length_distribution(n_games=n_games, save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    plt.close("all")
    return paths
