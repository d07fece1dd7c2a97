"""AI opponent — a deliberately beatable right-paddle controller.

Three independent knobs keep it beatable:
  - reaction delay: it only re-aims in some position buckets
  - aim noise: it aims at the ball's y plus a bounded random offset
  - speed cap: its paddle is slower than a human's
"""

import random
from typing import Optional

from pong.types import RIGHT, Game, InputState
from pong import field


# Difficulty presets. "normal" is the reference opponent.
DIFFICULTIES = {
    "easy": {
        "label": "Easy",
        "reaction_windows": 5,
        "aim_noise": 14,
        "max_speed": 3,
        "gain": 0.15,
    },
    "normal": {
        "label": "Normal",
        "reaction_windows": field.AI_REACTION_WINDOWS,
        "aim_noise": field.AI_AIM_NOISE,
        "max_speed": field.AI_MAX_SPEED,
        "gain": field.AI_GAIN,
    },
    "hard": {
        "label": "Hard",
        "reaction_windows": 3,
        "aim_noise": 4,
        "max_speed": 5,
        "gain": 0.25,
    },
}


class AIOpponent:
    """Drives one paddle from a throttled, noisy read of the ball."""

    def __init__(
        self,
        difficulty: str = "normal",
        side: str = RIGHT,
        rng: Optional[random.Random] = None,
    ):
        """Create an opponent.

        Args:
            difficulty: Key from DIFFICULTIES.
            side: Paddle it drives, normally "right".
            rng: Source of aim noise; seed it for reproducible matches.
        """
        preset = DIFFICULTIES[difficulty]
        self.difficulty = difficulty
        self.side = side
        self.label = preset["label"]
        self.reaction_windows = preset["reaction_windows"]
        self.aim_noise = preset["aim_noise"]
        self.max_speed = preset["max_speed"]
        self.gain = preset["gain"]
        self.rng = rng or random.Random()

    def should_react(self, game: Game) -> bool:
        """Whether this tick falls in a decision window.

        The window is derived from the ball position rather than a clock, so
        the opponent re-aims in roughly one bucket out of `reaction_windows`.
        """
        bucket = int((game.ball.x + game.ball.y) // field.AI_BUCKET_SIZE)
        return bucket % self.reaction_windows == 0

    def aim(self, game: Game) -> float:
        """New paddle velocity toward a noisy read of the ball."""
        paddle = game.paddle(self.side)
        noise = self.rng.uniform(-self.aim_noise, self.aim_noise)
        target = game.ball.y + noise - paddle.height / 2
        diff = target - paddle.y
        return max(-self.max_speed, min(self.max_speed, diff * self.gain))

    def velocity(self, game: Game, inputs: InputState) -> Optional[float]:
        """Velocity for this tick, or None to keep the previous one."""
        if not self.should_react(game):
            return None
        return self.aim(game)
