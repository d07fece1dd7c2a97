"""Pygame host — keyboard input, canvas drawing, free play and tournaments."""

import logging
import random

try:
    import pygame
except ImportError:
    pygame = None

from pong.types import AI, PVP, GameConfig, InputState
from pong import field
from pong.controls import InputSampler
from pong.loop import FrameScheduler
from pong.persistence import HttpMatchReporter
from pong.render import Canvas
from pong.session import OVER, PAUSED, ModeLockedError, MatchSession, SessionStateError
from pong.tournament import Bracket, BracketStateError
from pong.ai_player import DIFFICULTIES

logger = logging.getLogger(__name__)

WIN_W = 900
WIN_H = 560
CANVAS_X = (WIN_W - field.FIELD_WIDTH) // 2
CANVAS_Y = 100

# Colors
BG_COLOR = (17, 24, 39)
CANVAS_BG = (0, 0, 0)
FG = (255, 255, 255)
DIVIDER = (68, 68, 68)
ACCENT = (34, 197, 94)
CARD_BG = (31, 41, 55)
TEXT_DIM = (156, 163, 175)
GOLD = (234, 179, 8)
WARN = (239, 68, 68)


class PygameSampler(InputSampler):
    """W/S drive the left paddle, Up/Down the right one."""

    def sample(self) -> InputState:
        keys = pygame.key.get_pressed()
        return InputState(
            left_up=bool(keys[pygame.K_w]),
            left_down=bool(keys[pygame.K_s]),
            right_up=bool(keys[pygame.K_UP]),
            right_down=bool(keys[pygame.K_DOWN]),
        )


class PygameCanvas(Canvas):
    """Canvas backed by a pygame Surface."""

    def __init__(self, surface):
        self.surface = surface
        self.width, self.height = surface.get_size()

    def clear(self) -> None:
        self.surface.fill(CANVAS_BG)

    def draw_divider(self, x: float) -> None:
        dash, gap = 6, 10
        y = 0
        while y < self.height:
            pygame.draw.line(self.surface, DIVIDER, (int(x), y), (int(x), min(y + dash, self.height)), 2)
            y += dash + gap

    def draw_rect(self, x: float, y: float, w: float, h: float) -> None:
        pygame.draw.rect(self.surface, FG, (int(x), int(y), int(w), int(h)))

    def draw_circle(self, x: float, y: float, r: float) -> None:
        pygame.draw.circle(self.surface, FG, (int(x), int(y)), int(r))


def _blit_center(screen, font, text, color, y):
    img = font.render(text, True, color)
    screen.blit(img, ((WIN_W - img.get_width()) // 2, y))


def run_visualizer(settings, tournament=None):
    """Launch the Pygame window.

    Args:
        settings: pong.config.Settings.
        tournament: Optional (acting_user, ai_count, local_names) to start a
            bracket instead of free play.
    """
    if pygame is None:
        print("ERROR: pygame is not installed. Run: pip install pygame")
        return

    pygame.init()
    screen = pygame.display.set_mode((WIN_W, WIN_H))
    pygame.display.set_caption("PONG")
    clock = pygame.time.Clock()

    font_sm = pygame.font.SysFont("monospace", 14)
    font_md = pygame.font.SysFont("monospace", 18)
    font_lg = pygame.font.SysFont("monospace", 26, bold=True)
    font_xl = pygame.font.SysFont("monospace", 40, bold=True)

    rng = random.Random(settings.seed)
    scheduler = FrameScheduler()
    sampler = PygameSampler()
    reporter = HttpMatchReporter(settings.api_url, settings.api_token, settings.request_timeout)
    canvas = PygameCanvas(pygame.Surface((field.FIELD_WIDTH, field.FIELD_HEIGHT)))

    session = None
    bracket = None
    view = "game"
    message = ""
    champion_msg = ""

    def launch(config: GameConfig):
        nonlocal session, view
        if session is not None:
            session.stop()
        session = MatchSession(
            config=config,
            sampler=sampler,
            reporter=reporter,
            canvas=canvas,
            ai_difficulty=settings.ai_difficulty,
            target_score=settings.target_score,
            rng=rng,
        )
        session.start(scheduler)
        view = "game"

    def on_champion(player):
        nonlocal champion_msg, view
        champion_msg = f"Tournament winner: {player.name}"
        view = "champion"

    def leave_session():
        nonlocal session
        if session is not None:
            session.stop()
        session = None

    def free_play():
        nonlocal bracket, message
        bracket = None
        message = ""
        launch(GameConfig())

    if tournament is not None:
        acting_user, ai_count, local_names = tournament
        bracket = Bracket.create(acting_user, ai_count, local_names, rng=rng, on_champion=on_champion)
        view = "bracket"
    else:
        launch(GameConfig())

    running = True
    while running:
        clock.tick(60)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type != pygame.KEYDOWN:
                continue
            elif event.key == pygame.K_q:
                running = False

            elif view == "game" and session is not None:
                if event.key == pygame.K_m:
                    try:
                        session.set_mode(AI if session.mode == PVP else PVP)
                        message = f"Mode: {session.mode}"
                    except ModeLockedError:
                        message = "Mode is locked in tournament matches"
                elif event.key == pygame.K_p:
                    if session.state == PAUSED:
                        session.resume()
                    else:
                        session.pause()
                elif event.key == pygame.K_r:
                    try:
                        if session.state == OVER:
                            session.rematch()
                        else:
                            session.restart_point()
                    except SessionStateError as e:
                        logger.debug("restart refused: %s", e)
                        message = str(e)
                elif event.key == pygame.K_c and session.state == OVER and session.is_tournament:
                    finished = session
                    view = "bracket"
                    finished.continue_tournament()
                    leave_session()
                elif event.key in (pygame.K_h, pygame.K_ESCAPE):
                    was_tournament = session.is_tournament
                    leave_session()
                    if was_tournament and bracket is not None:
                        bracket.cancel_pending()
                        view = "bracket"
                        message = "Match left, it can be replayed from the bracket"
                    else:
                        free_play()

            elif view == "bracket" and bracket is not None:
                message = ""
                try:
                    if event.key == pygame.K_1:
                        bracket.play_semifinal(0, launch)
                    elif event.key == pygame.K_2:
                        bracket.play_semifinal(1, launch)
                    elif event.key == pygame.K_f:
                        bracket.play_final(launch)
                    elif event.key in (pygame.K_n, pygame.K_h, pygame.K_ESCAPE):
                        bracket.abandon()
                        free_play()
                except BracketStateError as e:
                    logger.debug("bracket action refused: %s", e)
                    message = str(e)

            elif view == "champion":
                free_play()

        scheduler.run_frame()

        # ---- DRAW ----
        screen.fill(BG_COLOR)

        if view == "game" and session is not None:
            mode_txt = f"{session.mode.upper()}"
            if session.mode == AI:
                mode_txt += f" ({DIFFICULTIES[session.ai_difficulty]['label']})"
            if session.locked:
                mode_txt += "  locked"
            _blit_center(screen, font_lg, "PONG", FG, 12)
            _blit_center(screen, font_sm, mode_txt, ACCENT, 44)
            score = f"{session.left_name} {session.game.match.left_score}  |  " \
                    f"{session.game.match.right_score} {session.right_name}"
            _blit_center(screen, font_md, score, FG, 68)

            screen.blit(canvas.surface, (CANVAS_X, CANVAS_Y))
            pygame.draw.rect(screen, FG, (CANVAS_X - 2, CANVAS_Y - 2,
                                          field.FIELD_WIDTH + 4, field.FIELD_HEIGHT + 4), 2)

            if session.state == PAUSED:
                _blit_center(screen, font_lg, "PAUSED", GOLD, CANVAS_Y + field.FIELD_HEIGHT // 2 - 14)

            if session.state == OVER:
                result = session.result
                overlay = pygame.Surface((field.FIELD_WIDTH, field.FIELD_HEIGHT), pygame.SRCALPHA)
                overlay.fill((0, 0, 0, 200))
                screen.blit(overlay, (CANVAS_X, CANVAS_Y))
                cy = CANVAS_Y + 120
                _blit_center(screen, font_xl, f"{result.winner_name} wins!", FG, cy)
                _blit_center(screen, font_md,
                             f"Final score: {result.left_name} {result.left_score} - "
                             f"{result.right_score} {result.right_name}", TEXT_DIM, cy + 56)
                options = session.result_options()
                hint = "C: continue" if "continue" in options else "R: rematch   H: home"
                _blit_center(screen, font_md, hint, ACCENT, cy + 96)

            controls = "W/S: left  Up/Down: right  M: mode  P: pause  R: restart  H: home  Q: quit"
            _blit_center(screen, font_sm, controls, TEXT_DIM, WIN_H - 48)

        elif view == "bracket" and bracket is not None:
            _blit_center(screen, font_lg, "TOURNAMENT BRACKET", FG, 30)
            y = 110
            for i in (0, 1):
                a, b = bracket.pairing(i)
                pygame.draw.rect(screen, CARD_BG, (60, y, 380, 110), border_radius=6)
                screen.blit(font_md.render(f"Semifinal {i + 1}", True, FG), (76, y + 12))
                screen.blit(font_sm.render(f"{a.label()} vs {b.label()}", True, TEXT_DIM), (76, y + 44))
                winner = bracket.semifinal_winners[i]
                line = f"Winner: {winner.name}" if winner else f"Press {i + 1} to play"
                screen.blit(font_sm.render(line, True, ACCENT), (76, y + 76))
                y += 140

            pygame.draw.rect(screen, CARD_BG, (480, 180, 360, 120), border_radius=6)
            screen.blit(font_md.render("Final", True, FG), (496, 192))
            s1, s2 = bracket.final_pairing()
            screen.blit(font_sm.render(f"{s1.name if s1 else '-'} vs {s2.name if s2 else '-'}",
                                       True, TEXT_DIM), (496, 226))
            ready = "Press F to play the final" if bracket.final_ready else "Waiting for semifinals"
            screen.blit(font_sm.render(ready, True, GOLD if bracket.final_ready else TEXT_DIM),
                        (496, 260))
            _blit_center(screen, font_sm, "1/2: semifinal  F: final  N: new game  Q: quit",
                         TEXT_DIM, WIN_H - 48)

        elif view == "champion":
            _blit_center(screen, font_xl, champion_msg, GOLD, WIN_H // 2 - 40)
            _blit_center(screen, font_sm, "Press any key", TEXT_DIM, WIN_H // 2 + 20)

        if message:
            _blit_center(screen, font_sm, message, WARN, WIN_H - 24)

        pygame.display.flip()

    leave_session()
    pygame.quit()
