#!/usr/bin/env python3
"""CLI entry point for Pong.

Usage:
    python main.py play [-v]             Free play in a Pygame window
    python main.py tournament [-v]       Set up a 4-player bracket and play it
    python main.py simulate [difficulty] Headless bot vs AI match, print stats
    python main.py analyze               Generate opponent analysis charts
    python main.py test                  Run all tests

Settings are read from $PONG_CFG_DIR/pong.yml (default ~/.config/pong).
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def _settings():
    from pong.config import load_settings
    from pong.log import setup_logging
    setup_logging("pong", verbose="-v" in sys.argv)
    return load_settings()


def cmd_play():
    """Free play in the Pygame window."""
    settings = _settings()
    print("Launching Pong...")
    print("Controls: W/S=left  Up/Down=right  M=mode  P=pause  R=restart  H=home  Q=quit")
    print("-" * 60)
    from sim.visualizer import run_visualizer
    run_visualizer(settings)


def cmd_tournament():
    """Prompt for a bracket, then play it in the Pygame window."""
    from pong.tournament import clamp_ai_count, max_local_names

    settings = _settings()
    print("=" * 60)
    print("  NEW TOURNAMENT (4 players)")
    print("=" * 60)

    me = input(f"  Your name [{settings.player_name}]: ").strip() or settings.player_name
    ai_count = clamp_ai_count(input("  Number of AI players (0-3) [1]: ") or 1)
    allowed = max_local_names(ai_count)
    print(f"  You can add up to {allowed} local players besides you.")
    names = []
    for i in range(allowed):
        name = input(f"  Local player {i + 2} (blank to let an AI take the slot): ").strip()
        if not name:
            break
        names.append(name)
    print("-" * 60)

    from sim.visualizer import run_visualizer
    run_visualizer(settings, tournament=(me, ai_count, names))


def cmd_simulate():
    """Run a bot vs AI match in text mode and print stats."""
    import random
    from pong.ai_player import AIOpponent, DIFFICULTIES
    from pong.controls import TrackingController
    from pong.game import simulate_match
    from pong.types import LEFT, RIGHT

    settings = _settings()
    difficulties = list(DIFFICULTIES.keys())
    difficulty = sys.argv[2] if len(sys.argv) > 2 and sys.argv[2] in difficulties else settings.ai_difficulty

    print("=" * 60)
    print("  HEADLESS MATCH: tracking bot vs AI")
    print("=" * 60)

    rng = random.Random(settings.seed)
    ai = AIOpponent(difficulty, side=RIGHT, rng=rng)
    print(f"\n  Left:  tracking bot")
    print(f"  Right: AI {ai.label} (reaction 1/{ai.reaction_windows}  "
          f"noise +/-{ai.aim_noise}px  max speed {ai.max_speed})")
    print()

    result = simulate_match(TrackingController(LEFT), ai, rng=rng,
                            target_score=settings.target_score)
    m = result.match
    s = result.stats

    for i, rally in enumerate(result.rallies):
        score = m.history[i] if i < len(m.history) else {}
        print(f"  Rally {i+1:2d}: {rally.hits:3d} hits, {rally.ticks:5d} ticks, "
              f"{rally.scorer} scores  [{score.get('left', '?')}-{score.get('right', '?')}]")

    print()
    print(f"  FINAL SCORE: {m.left_score} - {m.right_score}")
    if result.finished:
        print(f"  WINNER: {m.winner_side}")
    else:
        print(f"  UNFINISHED after {result.ticks} ticks")
    print()
    print(f"  Total rallies: {s['total_rallies']}")
    print(f"  Avg rally length: {s['avg_rally_hits']} hits")
    print(f"  Max rally length: {s['max_rally_hits']} hits")
    print(f"  Paddle hits: left {s['left_hits']}  |  right {s['right_hits']}")
    print(f"  Wall bounces: {s['wall_bounces']}")
    print(f"  Duration: {s['ticks']} ticks (~{s['seconds']}s at 60fps)")
    print()
    print("  Available difficulties: " + ", ".join(difficulties))
    print("  Usage: python main.py simulate [difficulty]")
    print("=" * 60)


def cmd_analyze():
    """Generate all analysis charts."""
    print("Generating analysis charts...")
    print("-" * 60)
    from sim.analysis import generate_all_charts
    output_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "output")
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
    "tournament": cmd_tournament,
    "simulate": cmd_simulate,
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
