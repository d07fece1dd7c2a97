"""Scoring rules — goals, target score, and match termination."""

from pong.types import LEFT, RIGHT, MatchState
from pong import field


def score_goal(match: MatchState, scorer: str) -> MatchState:
    """Award one goal to `scorer` ("left" or "right").

    Rules:
    - First side to reach target_score wins, no lead required
    - The terminal check runs right after the increment
    - Scoring on a finished match changes nothing
    """
    m = MatchState(
        left_score=match.left_score,
        right_score=match.right_score,
        target_score=match.target_score,
        is_over=match.is_over,
        winner_side=match.winner_side,
        history=list(match.history),
    )

    if m.is_over:
        return m

    if scorer == LEFT:
        m.left_score += 1
    elif scorer == RIGHT:
        m.right_score += 1
    else:
        raise ValueError(f"unknown side: {scorer!r}")

    m.history.append({
        "left": m.left_score,
        "right": m.right_score,
        "scorer": scorer,
    })

    if m.score_of(scorer) >= m.target_score:
        m.is_over = True
        m.winner_side = scorer

    return m


def create_match(target_score: int = field.TARGET_SCORE) -> MatchState:
    """Create a new match with zero scores."""
    if target_score < 1:
        raise ValueError("target_score must be at least 1")
    return MatchState(target_score=target_score)
