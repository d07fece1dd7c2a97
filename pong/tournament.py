"""Tournament bracket — four players, two semifinals, one final.

Bracket order is fixed once by a shuffle at creation:
  - semifinal 1: players[0] vs players[1]
  - semifinal 2: players[2] vs players[3]
  - final: winner of semifinal 1 vs winner of semifinal 2

Matches with a human are played through a match session started by the
caller's `launch` function. AI vs AI matches are settled by a coin flip.
"""

import logging
import random
import re
from typing import Callable, Optional

from pong.types import AI, LEFT, PVP, RIGHT, GameConfig, MatchResult, Player

logger = logging.getLogger(__name__)

BRACKET_SIZE = 4
MAX_AI = 3

SEMIFINALS = "semifinals"
FINAL = "final"
DONE = "done"


class BracketConfigError(ValueError):
    pass


class BracketStateError(Exception):
    pass


def clamp_ai_count(value) -> int:
    """Normalise raw user input for the AI count into 0..3.

    Leading digits are read ("2x" is 2); anything else counts as 0.
    """
    match = re.match(r"\s*([+-]?\d+)", str(value))
    if match is None:
        return 0
    return max(0, min(MAX_AI, int(match.group(1))))


def max_local_names(ai_count: int) -> int:
    """How many local names fit next to the acting user and `ai_count` AIs."""
    return max(0, BRACKET_SIZE - ai_count - 1)


def _placeholder(number: int, taken: set) -> str:
    name = f"Player {number}"
    while name in taken:
        number += 1
        name = f"Player {number}"
    return name


def build_players(
    acting_user: str,
    ai_count: int,
    local_names=(),
    rng: Optional[random.Random] = None,
) -> list:
    """Build and shuffle the four bracket players.

    Args:
        acting_user: Name of the logged-in player; always takes a human slot.
        ai_count: Number of AI players, 0 to 3.
        local_names: Extra local players. Only the first
            `4 - ai_count - 1` are used; blank names get a placeholder.
        rng: Source for the shuffle.

    Raises:
        BracketConfigError: ai_count out of range.
    """
    if not isinstance(ai_count, int) or not 0 <= ai_count <= MAX_AI:
        raise BracketConfigError(f"ai_count must be between 0 and {MAX_AI}, got {ai_count!r}")
    rng = rng or random.Random()

    me = (acting_user or "").strip() or "Player 1"
    humans = [Player(me)]
    taken = {me}
    for i, raw in enumerate(list(local_names)[:max_local_names(ai_count)]):
        name = (raw or "").strip()
        if not name or name == me:
            name = _placeholder(i + 2, taken)
        taken.add(name)
        humans.append(Player(name))

    ais = [Player(f"AI {i + 1}", is_ai=True) for i in range(BRACKET_SIZE - len(humans))]
    players = humans + ais
    rng.shuffle(players)
    return players


def seat(a: Player, b: Player):
    """(left, right, mode) for a match between a and b.

    The human always sits left so they keep the first key mapping; the AI
    drives the right paddle. Two humans keep their bracket order.
    """
    if a.is_ai or b.is_ai:
        left, right = (b, a) if a.is_ai else (a, b)
        return left, right, AI
    return a, b, PVP


class Bracket:
    """State machine for one 4-player single-elimination tournament."""

    def __init__(
        self,
        players: list,
        on_champion: Optional[Callable[[Player], None]] = None,
        rng: Optional[random.Random] = None,
    ):
        if len(players) != BRACKET_SIZE:
            raise BracketConfigError(f"a bracket needs exactly {BRACKET_SIZE} players")
        if all(p.is_ai for p in players):
            raise BracketConfigError("a bracket needs at least one human player")
        self.players = list(players)
        self.semifinal_winners = [None, None]
        self.round = SEMIFINALS
        self.champion: Optional[Player] = None
        self.abandoned = False
        self.on_champion = on_champion
        self.rng = rng or random.Random()
        self._pending = None

    @classmethod
    def create(cls, acting_user, ai_count, local_names=(), rng=None, on_champion=None):
        rng = rng or random.Random()
        players = build_players(acting_user, ai_count, local_names, rng)
        logger.info("tournament created: %s", ", ".join(p.label() for p in players))
        return cls(players, on_champion=on_champion, rng=rng)

    @property
    def match_pending(self) -> bool:
        return self._pending is not None

    @property
    def final_ready(self) -> bool:
        return self.round == FINAL

    def pairing(self, index: int):
        """The two players of semifinal `index` (0 or 1)."""
        if index not in (0, 1):
            raise ValueError(f"no semifinal {index}")
        return self.players[2 * index], self.players[2 * index + 1]

    def final_pairing(self):
        return tuple(self.semifinal_winners)

    # --- actions ---

    def play_semifinal(self, index: int, launch) -> Optional[Player]:
        """Play semifinal `index`.

        Returns the winner when the match is settled on the spot (AI vs AI),
        None when a session was launched and the result is still to come.
        """
        if self.round != SEMIFINALS:
            raise BracketStateError(f"semifinals are closed ({self.round})")
        a, b = self.pairing(index)
        if self.semifinal_winners[index] is not None:
            raise BracketStateError(f"semifinal {index + 1} already has a winner")
        return self._play(a, b, lambda w: self._place_semifinal(index, w), launch)

    def play_final(self, launch) -> Optional[Player]:
        if self.round != FINAL:
            raise BracketStateError(f"final is not playable ({self.round})")
        a, b = self.final_pairing()
        return self._play(a, b, self._place_final, launch)

    def cancel_pending(self) -> None:
        """Forget the match in progress. Its slot stays open for a replay."""
        if self._pending is not None:
            logger.info("bracket match left before it finished")
        self._pending = None

    def abandon(self) -> None:
        """Drop the tournament. Late results from its matches are ignored."""
        logger.info("tournament abandoned")
        self.abandoned = True
        self.round = DONE
        self._clear()

    # --- internals ---

    def _play(self, a, b, place, launch):
        if self._pending is not None:
            raise BracketStateError("another bracket match is still being played")

        if a.is_ai and b.is_ai:
            winner = a if self.rng.random() < 0.5 else b
            logger.info("%s vs %s settled by coin flip: %s", a.name, b.name, winner.name)
            place(winner)
            return winner

        left, right, mode = seat(a, b)
        token = object()
        config = GameConfig(
            locked_mode=mode,
            player_names={LEFT: left.name, RIGHT: right.name},
            on_complete=lambda result: self._complete(token, result, left, right, place),
        )
        self._pending = token
        try:
            launch(config)
        except Exception:
            self._pending = None
            raise
        return None

    def _complete(self, token, result: MatchResult, left, right, place) -> None:
        if token is not self._pending:
            logger.info("ignoring result of a match from an abandoned bracket")
            return
        self._pending = None
        winner = left if result.winner_side == LEFT else right
        place(winner)

    def _place_semifinal(self, index: int, winner: Player) -> None:
        if self.semifinal_winners[index] is not None:
            raise BracketStateError(f"semifinal {index + 1} already has a winner")
        self.semifinal_winners[index] = winner
        logger.info("semifinal %d won by %s", index + 1, winner.name)
        if all(w is not None for w in self.semifinal_winners):
            self.round = FINAL

    def _place_final(self, winner: Player) -> None:
        self.champion = winner
        self.round = DONE
        logger.info("tournament champion: %s", winner.name)
        self._clear()
        if self.on_champion is not None:
            self.on_champion(winner)

    def _clear(self) -> None:
        self.players = []
        self.semifinal_winners = [None, None]
        self._pending = None
