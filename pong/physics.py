"""Match physics — paddle movement, wall bounces, paddle hits, goals."""

import random
from typing import Optional, Union

from pong.types import (
    LEFT,
    RIGHT,
    Ball,
    Game,
    GoalEvent,
    Paddle,
    PaddleHitEvent,
    WallBounceEvent,
)
from pong.referee import create_match, score_goal
from pong import field

Event = Union[WallBounceEvent, PaddleHitEvent, GoalEvent]


def _centered_paddle_y(height: float, paddle_h: float) -> float:
    return height / 2 - paddle_h / 2


def create_game(
    rng: Optional[random.Random] = None,
    target_score: int = field.TARGET_SCORE,
    width: float = field.FIELD_WIDTH,
    height: float = field.FIELD_HEIGHT,
    left_paddle_height: float = field.PADDLE_HEIGHT,
    right_paddle_height: float = field.PADDLE_HEIGHT,
) -> Game:
    """Build a fresh game: centred paddles, zero score, ball served."""
    left = Paddle(
        side=LEFT,
        x=field.PADDLE_MARGIN,
        y=_centered_paddle_y(height, left_paddle_height),
        height=left_paddle_height,
    )
    right = Paddle(
        side=RIGHT,
        x=width - field.PADDLE_MARGIN - field.PADDLE_WIDTH,
        y=_centered_paddle_y(height, right_paddle_height),
        height=right_paddle_height,
    )
    game = Game(
        left=left,
        right=right,
        ball=Ball(x=width / 2, y=height / 2),
        match=create_match(target_score),
        width=width,
        height=height,
    )
    reset_positions(game, rng)
    return game


def serve(ball: Ball, width: float, height: float, rng: Optional[random.Random] = None) -> Ball:
    """Put the ball at the centre with a randomised serve velocity."""
    rng = rng or random
    ball.x = width / 2
    ball.y = height / 2
    ball.vx = field.BALL_SPEED_X if rng.random() > 0.5 else -field.BALL_SPEED_X
    speed_y = rng.uniform(field.BALL_SPEED_Y_MIN, field.BALL_SPEED_Y_MAX)
    ball.vy = speed_y if rng.random() > 0.5 else -speed_y
    return ball


def reset_positions(game: Game, rng: Optional[random.Random] = None) -> None:
    """Centre both paddles and serve a new ball."""
    for paddle in (game.left, game.right):
        paddle.y = _centered_paddle_y(game.height, paddle.height)
    serve(game.ball, game.width, game.height, rng)


def _move_paddle(paddle: Paddle, height: float) -> None:
    # Velocity survives the clamp: holding into a wall just stalls the paddle
    paddle.y = max(0.0, min(height - paddle.height, paddle.y + paddle.vy))


def _check_wall_bounce(game: Game) -> list[WallBounceEvent]:
    """Reflect the ball off the top and bottom walls."""
    events: list[WallBounceEvent] = []
    ball = game.ball

    if ball.y - ball.radius < 0 and ball.vy < 0:
        ball.vy = -ball.vy
        events.append(WallBounceEvent(wall="top", tick=game.tick))
    elif ball.y + ball.radius > game.height and ball.vy > 0:
        ball.vy = -ball.vy
        events.append(WallBounceEvent(wall="bottom", tick=game.tick))

    return events


def _check_paddle_hit(game: Game, paddle: Paddle) -> list[PaddleHitEvent]:
    """Return the ball off `paddle` if it overlaps the paddle face."""
    ball = game.ball
    in_x = ball.x - ball.radius < paddle.x + paddle.width and ball.x + ball.radius > paddle.x
    in_y = paddle.y < ball.y < paddle.y + paddle.height
    if not (in_x and in_y):
        return []

    speed_x = abs(ball.vx)
    if paddle.side == LEFT:
        ball.x = paddle.x + paddle.width + ball.radius
        ball.vx = speed_x
    else:
        ball.x = paddle.x - ball.radius
        ball.vx = -speed_x

    half = paddle.height / 2
    offset = (ball.y - (paddle.y + half)) / half
    ball.vy = offset * field.DEFLECTION

    return [PaddleHitEvent(side=paddle.side, offset=offset, tick=game.tick)]


def _check_goal(game: Game) -> Optional[str]:
    """Side that scores this tick, if any."""
    if game.ball.x < -field.GOAL_MARGIN:
        return RIGHT
    if game.ball.x > game.width + field.GOAL_MARGIN:
        return LEFT
    return None


def step(game: Game, rng: Optional[random.Random] = None) -> list[Event]:
    """Advance the game by one tick.

    Order: paddles, ball, walls, left paddle, right paddle, goal. The ball is
    only re-served after a goal that does not end the match. A finished game
    is left untouched.
    """
    if game.match.is_over:
        return []

    events: list[Event] = []
    game.tick += 1

    _move_paddle(game.left, game.height)
    _move_paddle(game.right, game.height)

    game.ball.x += game.ball.vx
    game.ball.y += game.ball.vy

    events.extend(_check_wall_bounce(game))
    events.extend(_check_paddle_hit(game, game.left))
    events.extend(_check_paddle_hit(game, game.right))

    scorer = _check_goal(game)
    if scorer is not None:
        game.match = score_goal(game.match, scorer)
        events.append(GoalEvent(scorer=scorer, tick=game.tick, terminal=game.match.is_over))
        if not game.match.is_over:
            reset_positions(game, rng)

    return events
