"""Core data types for the Pong match engine."""

from dataclasses import dataclass, field
from typing import Callable, Optional

from pong import field as fld


LEFT = "left"
RIGHT = "right"

PVP = "pvp"
AI = "ai"
MODES = (PVP, AI)


@dataclass
class Paddle:
    """One paddle. x is fixed by its side, y is the top edge."""
    side: str  # "left" or "right"
    x: float
    y: float
    vy: float = 0.0
    width: float = fld.PADDLE_WIDTH
    height: float = fld.PADDLE_HEIGHT

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


@dataclass
class Ball:
    """Ball position and per-tick velocity."""
    x: float = fld.FIELD_WIDTH / 2
    y: float = fld.FIELD_HEIGHT / 2
    vx: float = 0.0
    vy: float = 0.0
    radius: float = fld.BALL_RADIUS

    def copy(self) -> "Ball":
        return Ball(self.x, self.y, self.vx, self.vy, self.radius)


@dataclass
class MatchState:
    """Score and terminal state of one match."""
    left_score: int = 0
    right_score: int = 0
    target_score: int = fld.TARGET_SCORE
    is_over: bool = False
    winner_side: Optional[str] = None
    history: list = field(default_factory=list)

    def score_of(self, side: str) -> int:
        return self.left_score if side == LEFT else self.right_score


@dataclass
class Game:
    """Mutable simulation state owned by a single match."""
    left: Paddle
    right: Paddle
    ball: Ball
    match: MatchState
    width: float = fld.FIELD_WIDTH
    height: float = fld.FIELD_HEIGHT
    tick: int = 0

    def paddle(self, side: str) -> Paddle:
        return self.left if side == LEFT else self.right


@dataclass
class WallBounceEvent:
    """Ball bounced off the top or bottom wall."""
    wall: str  # "top" or "bottom"
    tick: int


@dataclass
class PaddleHitEvent:
    """Ball was returned by a paddle."""
    side: str
    offset: float  # -1 (top edge) .. 1 (bottom edge)
    tick: int


@dataclass
class GoalEvent:
    """Ball left the field; `scorer` gets the point."""
    scorer: str
    tick: int
    terminal: bool = False


@dataclass
class InputState:
    """Pressed state of the four logical directions."""
    left_up: bool = False
    left_down: bool = False
    right_up: bool = False
    right_down: bool = False


@dataclass(eq=False)
class Player:
    """A tournament participant. Compared by identity, not by name."""
    name: str
    is_ai: bool = False

    def label(self) -> str:
        return f"{self.name} (AI)" if self.is_ai else self.name


@dataclass
class MatchResult:
    """Outcome handed back by a finished match session."""
    winner_side: str
    left_score: int
    right_score: int
    left_name: str
    right_name: str
    mode: str

    @property
    def winner_name(self) -> str:
        return self.left_name if self.winner_side == LEFT else self.right_name


@dataclass
class GameConfig:
    """One-shot configuration for a match session.

    Empty for free play. The tournament fills in a locked mode, the seated
    names and the callback that receives the MatchResult.
    """
    locked_mode: Optional[str] = None
    player_names: dict = field(default_factory=dict)
    on_complete: Optional[Callable[[MatchResult], None]] = None

    @property
    def is_tournament(self) -> bool:
        return self.on_complete is not None
