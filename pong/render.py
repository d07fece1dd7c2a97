"""Render surface boundary — what a match needs from a drawable canvas."""

from pong.types import Game


class Canvas:
    """A rectangular drawing surface of known size."""

    width: int
    height: int

    def clear(self) -> None:
        raise NotImplementedError

    def draw_divider(self, x: float) -> None:
        raise NotImplementedError

    def draw_rect(self, x: float, y: float, w: float, h: float) -> None:
        raise NotImplementedError

    def draw_circle(self, x: float, y: float, r: float) -> None:
        raise NotImplementedError


class RecordingCanvas(Canvas):
    """Canvas that records draw calls instead of painting (headless runs)."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.calls: list[tuple] = []
        self.frames = 0

    def clear(self) -> None:
        self.calls = []
        self.frames += 1

    def draw_divider(self, x: float) -> None:
        self.calls.append(("divider", x))

    def draw_rect(self, x: float, y: float, w: float, h: float) -> None:
        self.calls.append(("rect", x, y, w, h))

    def draw_circle(self, x: float, y: float, r: float) -> None:
        self.calls.append(("circle", x, y, r))


def draw_game(canvas: Canvas, game: Game) -> None:
    """Draw divider, both paddles and the ball."""
    canvas.clear()
    canvas.draw_divider(game.width / 2)
    for paddle in (game.left, game.right):
        canvas.draw_rect(paddle.x, paddle.y, paddle.width, paddle.height)
    canvas.draw_circle(game.ball.x, game.ball.y, game.ball.radius)
