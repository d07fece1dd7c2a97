"""Tests for the physics engine."""

import random
import pytest

from pong.types import LEFT, RIGHT, GoalEvent, PaddleHitEvent, WallBounceEvent
from pong.physics import create_game, serve, step
from pong.types import Ball
from pong import field


def _still_game(seed=0, **kwargs):
    """Game with the ball parked at the centre, so nothing scores."""
    game = create_game(random.Random(seed), **kwargs)
    game.ball.vx = 0
    game.ball.vy = 0
    return game


def _place_ball(game, x, y, vx, vy):
    game.ball.x, game.ball.y = x, y
    game.ball.vx, game.ball.vy = vx, vy


def test_paddle_clamped_at_top():
    """A paddle pushed up for many ticks stops at y=0 and keeps its velocity."""
    game = _still_game()
    game.left.vy = -50
    for _ in range(100):
        step(game)
        assert 0 <= game.left.y <= field.FIELD_HEIGHT - field.PADDLE_HEIGHT

    assert game.left.y == 0
    assert game.left.vy == -50, "Velocity should survive the clamp"


def test_paddle_clamped_at_bottom():
    game = _still_game()
    game.right.vy = field.PADDLE_SPEED
    for _ in range(200):
        step(game)
        assert 0 <= game.right.y <= field.FIELD_HEIGHT - field.PADDLE_HEIGHT

    assert game.right.y == field.FIELD_HEIGHT - field.PADDLE_HEIGHT


def test_top_wall_bounce_flips_vy():
    """Wall bounce keeps |vy| and flips its sign."""
    game = _still_game()
    _place_ball(game, 400, 10, 0, -4)

    events = step(game)

    assert game.ball.vy == 4
    assert [type(e) for e in events] == [WallBounceEvent]
    assert events[0].wall == "top"


def test_bottom_wall_bounce_flips_vy():
    game = _still_game()
    _place_ball(game, 400, 390, 3, 4)

    events = step(game)

    assert game.ball.vy == -4
    assert game.ball.vx == 3
    assert events[0].wall == "bottom"


def test_ball_stays_near_field_vertically():
    """Over a long run the ball centre never leaves [-r, H + r]."""
    rng = random.Random(3)
    game = create_game(rng, target_score=1000)
    r = field.BALL_RADIUS
    for _ in range(20_000):
        step(game, rng)
        assert -r <= game.ball.y <= field.FIELD_HEIGHT + r


def test_left_paddle_centre_hit_goes_straight():
    """Centre hit: ball sent right, vy ≈ 0, ball flush with the paddle face."""
    game = _still_game()
    centre = game.left.y + game.left.height / 2
    _place_ball(game, 36, centre, -4, 0)

    events = step(game)

    assert game.ball.vx == 4
    assert game.ball.vy == pytest.approx(0.0)
    assert game.ball.x == game.left.x + game.left.width + game.ball.radius
    assert isinstance(events[0], PaddleHitEvent)
    assert events[0].side == LEFT


def test_left_paddle_edge_hit_deflects():
    """Offset from paddle centre sets vy = offset * DEFLECTION."""
    game = _still_game()
    centre = game.left.y + game.left.height / 2
    _place_ball(game, 36, centre + 35, -4, 0)

    step(game)

    assert game.ball.vy == pytest.approx(35 / 40 * field.DEFLECTION)
    assert game.ball.vx > 0


def test_right_paddle_hit_sends_ball_left():
    game = _still_game()
    centre = game.right.y + game.right.height / 2
    _place_ball(game, 760, centre - 20, 4, 2)

    events = step(game)

    assert game.ball.vx == -4, "Speed magnitude must be preserved"
    assert game.ball.x == game.right.x - game.ball.radius
    assert game.ball.vy < 0, "Hit above centre should deflect upward"
    assert events[0].side == RIGHT


def test_ball_outside_paddle_span_passes():
    """Ball level with the paddle x but above it is not returned."""
    game = _still_game()
    game.left.y = 200
    _place_ball(game, 36, 100, -4, 0)

    events = step(game)

    assert game.ball.vx == -4
    assert events == []


def test_wall_then_paddle_in_same_tick():
    """Near a corner, the wall check runs first, then the paddle check."""
    game = _still_game()
    game.left.y = 0
    _place_ball(game, 36, 9, -4, -4)

    events = step(game)

    assert [type(e) for e in events] == [WallBounceEvent, PaddleHitEvent]
    # Paddle hit overrides the wall-bounced vy: offset (5 - 40) / 40
    assert game.ball.vy == pytest.approx(-35 / 40 * field.DEFLECTION)
    assert game.ball.vx == 4


def test_goal_right_edge_scores_left_and_resets():
    game = _still_game()
    _place_ball(game, 818, 200, 4, 0)
    game.left.y = 0

    events = step(game, random.Random(1))

    assert game.match.left_score == 1
    assert game.match.right_score == 0
    goal = events[-1]
    assert isinstance(goal, GoalEvent)
    assert goal.scorer == LEFT
    assert goal.terminal is False
    # Re-served from the centre, paddles re-centred
    assert game.ball.x == field.FIELD_WIDTH / 2
    assert game.ball.y == field.FIELD_HEIGHT / 2
    assert abs(game.ball.vx) == field.BALL_SPEED_X
    assert game.left.y == field.FIELD_HEIGHT / 2 - field.PADDLE_HEIGHT / 2


def test_goal_needs_margin():
    """Ball just past the edge (inside the margin) is not a goal yet."""
    game = _still_game()
    _place_ball(game, -10, 300, -4, 0)

    step(game)

    assert game.match.right_score == 0
    assert game.ball.x == -14


def test_goal_left_edge_scores_right():
    game = _still_game()
    _place_ball(game, -18, 300, -4, 0)

    step(game)

    assert game.match.right_score == 1


def test_terminal_goal_does_not_reset_ball():
    """The goal that ends the match leaves the ball where it is."""
    game = _still_game(target_score=1)
    _place_ball(game, 818, 200, 4, 0)

    events = step(game)

    assert game.match.is_over
    assert game.match.winner_side == LEFT
    assert events[-1].terminal is True
    assert game.ball.x == 822
    assert game.ball.vx == 4


def test_state_frozen_after_match_over():
    """Drive the left score to the target, then nothing changes any more."""
    game = _still_game()
    for _ in range(field.TARGET_SCORE):
        _place_ball(game, 818, 200, 4, 0)
        step(game)

    assert game.match.is_over
    assert game.match.left_score == field.TARGET_SCORE
    assert game.match.right_score == 0

    ball_before = game.ball.copy()
    tick_before = game.tick
    game.left.vy = 5
    for _ in range(50):
        assert step(game) == []

    assert game.ball == ball_before
    assert game.tick == tick_before
    assert game.match.left_score == field.TARGET_SCORE
    assert game.match.right_score == 0


def test_serve_randomised_within_bounds():
    rng = random.Random(42)
    vxs, vys = set(), []
    for _ in range(200):
        ball = serve(Ball(), field.FIELD_WIDTH, field.FIELD_HEIGHT, rng)
        assert abs(ball.vx) == field.BALL_SPEED_X
        assert field.BALL_SPEED_Y_MIN <= abs(ball.vy) <= field.BALL_SPEED_Y_MAX
        assert (ball.x, ball.y) == (field.FIELD_WIDTH / 2, field.FIELD_HEIGHT / 2)
        vxs.add(ball.vx)
        vys.append(ball.vy)

    assert vxs == {field.BALL_SPEED_X, -field.BALL_SPEED_X}
    assert any(v > 0 for v in vys) and any(v < 0 for v in vys)
    assert len(set(vys)) > 100, "Serves should not repeat"


def test_create_game_layout():
    game = create_game(random.Random(0))
    assert game.left.x == field.PADDLE_MARGIN
    assert game.right.x == field.FIELD_WIDTH - field.PADDLE_MARGIN - field.PADDLE_WIDTH
    assert game.match.left_score == 0
    assert game.match.right_score == 0
    assert not game.match.is_over
