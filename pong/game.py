"""Headless match simulation — full matches between two controllers.

Used for analysis and for checking that scripted matches terminate:
- Both paddles are driven by controllers (scripted bot, AI, or a human
  controller fed from a fixed sampler)
- Physics runs tick by tick exactly as in a live session
- A rally is the play between two serves, measured in paddle hits
"""

import random
from dataclasses import dataclass, field
from typing import Optional

from pong.types import LEFT, RIGHT, Game, GoalEvent, InputState, MatchState, PaddleHitEvent, WallBounceEvent
from pong.physics import create_game, step
from pong import field as fld


@dataclass
class Rally:
    """Play between two serves."""
    scorer: str
    hits: int
    ticks: int
    wall_bounces: int


@dataclass
class GameResult:
    """Full match result with all rallies."""
    match: MatchState
    rallies: list  # list[Rally]
    ticks: int
    finished: bool
    stats: dict = field(default_factory=dict)


def _apply_controllers(game: Game, controllers: dict, inputs: InputState) -> None:
    for side, controller in controllers.items():
        vy = controller.velocity(game, inputs)
        if vy is not None:
            game.paddle(side).vy = vy


def simulate_match(
    left,
    right,
    rng: Optional[random.Random] = None,
    target_score: int = fld.TARGET_SCORE,
    max_ticks: int = 100_000,
    game: Optional[Game] = None,
) -> GameResult:
    """Run a match between two controllers until it ends or max_ticks pass.

    Args:
        left: Controller for the left paddle.
        right: Controller for the right paddle.
        rng: Random source for serves; seed it for reproducible runs.
        target_score: Goals needed to win.
        max_ticks: Safety limit; the result is marked unfinished if hit.
        game: Optional prepared game (e.g. with a custom paddle size).

    Returns:
        GameResult with rallies and summary stats.
    """
    rng = rng or random.Random()
    game = game or create_game(rng, target_score)
    controllers = {LEFT: left, RIGHT: right}
    inputs = InputState()

    rallies: list[Rally] = []
    hits = 0
    bounces = 0
    rally_start = game.tick
    hits_by_side = {LEFT: 0, RIGHT: 0}

    while not game.match.is_over and game.tick < max_ticks:
        _apply_controllers(game, controllers, inputs)
        for event in step(game, rng):
            if isinstance(event, PaddleHitEvent):
                hits += 1
                hits_by_side[event.side] += 1
            elif isinstance(event, WallBounceEvent):
                bounces += 1
            elif isinstance(event, GoalEvent):
                rallies.append(Rally(
                    scorer=event.scorer,
                    hits=hits,
                    ticks=game.tick - rally_start,
                    wall_bounces=bounces,
                ))
                hits = 0
                bounces = 0
                rally_start = game.tick

    stats = _compute_match_stats(rallies, hits_by_side, game.tick)

    return GameResult(
        match=game.match,
        rallies=rallies,
        ticks=game.tick,
        finished=game.match.is_over,
        stats=stats,
    )


def _compute_match_stats(rallies: list, hits_by_side: dict, ticks: int) -> dict:
    """Compute match statistics."""
    rally_hits = [r.hits for r in rallies]
    avg_hits = sum(rally_hits) / max(len(rally_hits), 1)

    return {
        "left_points": sum(1 for r in rallies if r.scorer == LEFT),
        "right_points": sum(1 for r in rallies if r.scorer == RIGHT),
        "total_rallies": len(rallies),
        "avg_rally_hits": round(avg_hits, 1),
        "max_rally_hits": max(rally_hits) if rally_hits else 0,
        "left_hits": hits_by_side[LEFT],
        "right_hits": hits_by_side[RIGHT],
        "wall_bounces": sum(r.wall_bounces for r in rallies),
        "ticks": ticks,
        "seconds": round(ticks / 60, 1),
    }
