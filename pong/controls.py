"""Input sampling and paddle controllers."""

from pong.types import LEFT, Game, InputState
from pong import field

DIRECTIONS = ("left_up", "left_down", "right_up", "right_down")


class InputSampler:
    """Polled source of directional key state. Queried once per tick."""

    def sample(self) -> InputState:
        raise NotImplementedError


class StaticSampler(InputSampler):
    """Sampler whose state is set directly (tests, scripted play)."""

    def __init__(self, **pressed):
        unknown = set(pressed) - set(DIRECTIONS)
        if unknown:
            raise ValueError(f"unknown directions: {sorted(unknown)}")
        self.state = InputState(**pressed)

    def press(self, direction: str, down: bool = True) -> None:
        if direction not in DIRECTIONS:
            raise ValueError(f"unknown direction: {direction!r}")
        setattr(self.state, direction, down)

    def sample(self) -> InputState:
        return InputState(**vars(self.state))


class HumanController:
    """Maps one side's up/down keys to a paddle velocity."""

    def __init__(self, side: str, speed: float = field.PADDLE_SPEED):
        self.side = side
        self.speed = speed

    def velocity(self, game: Game, inputs: InputState):
        if self.side == LEFT:
            up, down = inputs.left_up, inputs.left_down
        else:
            up, down = inputs.right_up, inputs.right_down
        return (-self.speed if up else 0) + (self.speed if down else 0)


class TrackingController:
    """Scripted paddle that follows the ball's y at a capped speed."""

    def __init__(self, side: str, speed: float = field.PADDLE_SPEED):
        self.side = side
        self.speed = speed

    def velocity(self, game: Game, inputs: InputState):
        paddle = game.paddle(self.side)
        diff = game.ball.y - paddle.center_y
        return max(-self.speed, min(self.speed, diff))
