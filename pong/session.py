"""Match session — lifecycle around one game.

States:
    configuring -> running -> over
                   running <-> paused
    any         -> stopped (player left the match)

A session drives its game from a FrameScheduler: every frame it samples
input, lets each side's controller set a paddle velocity, advances the
physics, draws, and requests the next frame. Every way out of `running`
cancels the pending frame, and frames from an earlier run are ignored.
"""

import logging
import random
from typing import Optional

from pong.types import AI, LEFT, MODES, PVP, RIGHT, GameConfig, MatchResult
from pong.ai_player import AIOpponent
from pong.controls import HumanController, InputSampler, StaticSampler
from pong.loop import FrameScheduler
from pong.persistence import MatchReport, MatchReporter, MemoryReporter, submit_report
from pong.physics import create_game, reset_positions, step
from pong.render import Canvas, draw_game
from pong import field

logger = logging.getLogger(__name__)

CONFIGURING = "configuring"
RUNNING = "running"
PAUSED = "paused"
OVER = "over"
STOPPED = "stopped"

DEFAULT_LEFT_NAME = "Player 1"
DEFAULT_RIGHT_NAME = "Player 2"


class SessionStateError(Exception):
    pass


class ModeLockedError(SessionStateError):
    pass


class MatchSession:
    """One match between two paddles, free play or tournament."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        sampler: Optional[InputSampler] = None,
        reporter: Optional[MatchReporter] = None,
        canvas: Optional[Canvas] = None,
        ai_difficulty: str = "normal",
        target_score: int = field.TARGET_SCORE,
        rng: Optional[random.Random] = None,
        report_in_background: bool = True,
    ):
        self.config = config or GameConfig()
        names = self.config.player_names or {}
        self.left_name = names.get(LEFT) or DEFAULT_LEFT_NAME
        self.right_name = names.get(RIGHT) or DEFAULT_RIGHT_NAME

        self.locked = self.config.locked_mode is not None
        if self.locked and self.config.locked_mode not in MODES:
            raise ValueError(f"unknown mode: {self.config.locked_mode!r}")
        self.mode = self.config.locked_mode or PVP

        self.sampler = sampler or StaticSampler()
        self.reporter = reporter or MemoryReporter()
        self.canvas = canvas
        self.ai_difficulty = ai_difficulty
        self.target_score = target_score
        self.rng = rng or random.Random()
        self.report_in_background = report_in_background

        self.state = CONFIGURING
        self.game = create_game(self.rng, target_score)
        self.result: Optional[MatchResult] = None
        self.report_thread = None
        self.controllers = self._make_controllers()

        self._scheduler: Optional[FrameScheduler] = None
        self._handle = None
        self._run_id = 0
        self._handed_off = False

    @property
    def is_tournament(self) -> bool:
        return self.config.is_tournament

    def _make_controllers(self) -> dict:
        right = (
            AIOpponent(self.ai_difficulty, side=RIGHT, rng=self.rng)
            if self.mode == AI
            else HumanController(RIGHT)
        )
        return {LEFT: HumanController(LEFT), RIGHT: right}

    # --- loop ---

    def start(self, scheduler: FrameScheduler) -> None:
        """Leave configuring and start ticking on `scheduler`."""
        if self.state != CONFIGURING:
            raise SessionStateError(f"cannot start a session that is {self.state}")
        self._scheduler = scheduler
        self.state = RUNNING
        logger.info("match started: %s vs %s (%s)", self.left_name, self.right_name, self.mode)
        self._schedule()

    def _schedule(self) -> None:
        run_id = self._run_id
        self._handle = self._scheduler.request_frame(lambda frame: self._on_frame(run_id))

    def _cancel(self) -> None:
        if self._scheduler is not None:
            self._scheduler.cancel_frame(self._handle)
        self._handle = None
        self._run_id += 1

    def _on_frame(self, run_id: int) -> None:
        if run_id != self._run_id or self.state != RUNNING:
            return
        self._handle = None
        self.tick()
        if self.state == RUNNING:
            self._schedule()

    def tick(self) -> list:
        """One pass: input, controllers, physics, draw. Returns physics events."""
        if self.state != RUNNING:
            raise SessionStateError(f"cannot tick a session that is {self.state}")
        inputs = self.sampler.sample()
        for side, controller in self.controllers.items():
            vy = controller.velocity(self.game, inputs)
            if vy is not None:
                self.game.paddle(side).vy = vy

        events = step(self.game, self.rng)
        if self.canvas is not None:
            draw_game(self.canvas, self.game)
        if self.game.match.is_over:
            self._finish()
        return events

    # --- termination ---

    def _finish(self) -> None:
        if self.state == OVER:
            return
        self._cancel()
        self.state = OVER
        match = self.game.match
        self.result = MatchResult(
            winner_side=match.winner_side,
            left_score=match.left_score,
            right_score=match.right_score,
            left_name=self.left_name,
            right_name=self.right_name,
            mode=self.mode,
        )
        logger.info("match over: %s wins %d-%d", self.result.winner_name,
                    match.left_score, match.right_score)

        label = field.AI_LABEL if self.mode == AI else self.right_name
        report = MatchReport(
            user_score=match.left_score,
            opponent_score=match.right_score,
            opponent_label=label,
        )
        self.report_thread = submit_report(self.reporter, report,
                                           background=self.report_in_background)

    def result_options(self) -> tuple:
        """Actions offered on the end-of-match screen."""
        if self.state != OVER:
            return ()
        if self.is_tournament:
            return ("continue",)
        return ("rematch", "home")

    def continue_tournament(self) -> MatchResult:
        """Hand the result to the tournament. Only the first call does so."""
        if not self.is_tournament:
            raise SessionStateError("not a tournament match")
        if self.state != OVER:
            raise SessionStateError("match is not over")
        if not self._handed_off:
            self._handed_off = True
            self.config.on_complete(self.result)
        return self.result

    # --- player actions ---

    def _restart(self) -> None:
        self._cancel()
        self.game = create_game(self.rng, self.target_score)
        self.result = None
        self.report_thread = None
        self.controllers = self._make_controllers()
        if self._scheduler is None:
            self.state = CONFIGURING
            return
        self.state = RUNNING
        self._schedule()

    def set_mode(self, mode: str) -> None:
        """Switch between pvp and ai. Always a full reset."""
        if mode not in MODES:
            raise ValueError(f"unknown mode: {mode!r}")
        if self.locked:
            raise ModeLockedError("mode is locked for tournament matches")
        if self.state == STOPPED:
            raise SessionStateError("session was stopped")
        self._cancel()
        self.state = PAUSED
        self.mode = mode
        logger.info("mode switched to %s, restarting", mode)
        self._restart()

    def rematch(self) -> None:
        """Play again with the same mode and names (free play only)."""
        if self.is_tournament:
            raise SessionStateError("no rematch in tournament matches")
        if self.state != OVER:
            raise SessionStateError("match is not over")
        self._restart()

    def restart_point(self) -> None:
        """Re-centre paddles and re-serve, keeping the score (free play only)."""
        if self.is_tournament:
            raise SessionStateError("cannot restart a point in tournament matches")
        if self.state not in (RUNNING, PAUSED):
            raise SessionStateError(f"cannot restart a point while {self.state}")
        reset_positions(self.game, self.rng)

    def pause(self) -> None:
        if self.state != RUNNING:
            return
        self._cancel()
        self.state = PAUSED

    def resume(self) -> None:
        if self.state != PAUSED:
            return
        self.state = RUNNING
        self._schedule()

    def stop(self) -> None:
        """Leave the match: cancel the pending frame before anything else."""
        self._cancel()
        if self.state != STOPPED:
            logger.debug("session stopped while %s", self.state)
        self.state = STOPPED
        self.canvas = None
