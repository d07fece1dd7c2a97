"""Tests for the referee scoring engine."""

import pytest

from pong.types import LEFT, RIGHT
from pong.referee import score_goal, create_match


def test_score_5_0_winner():
    """Score 5-0 → left declared winner."""
    match = create_match()
    for _ in range(5):
        match = score_goal(match, LEFT)

    assert match.left_score == 5
    assert match.right_score == 0
    assert match.is_over
    assert match.winner_side == LEFT


def test_no_winner_at_4_4():
    """Score 4-4 → still playing, no lead needed later."""
    match = create_match()
    for _ in range(4):
        match = score_goal(match, LEFT)
        match = score_goal(match, RIGHT)

    assert not match.is_over
    assert match.winner_side is None

    match = score_goal(match, RIGHT)
    assert match.is_over
    assert match.winner_side == RIGHT
    assert (match.left_score, match.right_score) == (4, 5)


def test_score_goal_returns_copy():
    """The input match is never mutated."""
    match = create_match()
    new = score_goal(match, LEFT)

    assert match.left_score == 0
    assert match.history == []
    assert new.left_score == 1


def test_goal_after_match_over_ignored():
    """Scoring on a finished match changes nothing."""
    match = create_match(target_score=2)
    match = score_goal(match, RIGHT)
    match = score_goal(match, RIGHT)
    assert match.is_over

    after = score_goal(match, LEFT)
    assert after.left_score == 0
    assert after.right_score == 2
    assert after.winner_side == RIGHT
    assert len(after.history) == 2


def test_custom_target_score():
    match = create_match(target_score=1)
    match = score_goal(match, LEFT)
    assert match.is_over
    assert match.winner_side == LEFT


def test_history_tracking():
    """Each goal appends the running score and the scorer."""
    match = create_match()
    match = score_goal(match, LEFT)
    match = score_goal(match, RIGHT)
    match = score_goal(match, LEFT)

    assert match.history == [
        {"left": 1, "right": 0, "scorer": LEFT},
        {"left": 1, "right": 1, "scorer": RIGHT},
        {"left": 2, "right": 1, "scorer": LEFT},
    ]


def test_unknown_side_rejected():
    with pytest.raises(ValueError):
        score_goal(create_match(), "top")


def test_create_match_rejects_zero_target():
    with pytest.raises(ValueError):
        create_match(target_score=0)
