# app.py
# pygame front end: window, OS timers, keyboard, end-of-game dialogs and
# the command line entry point.

import argparse
import logging
import sys
import time
import traceback

import pygame

from .difficulty import DIFFICULTY_NAMES, get_profile
from .leaderboard import LeaderboardClient, LeaderboardError, MAX_NAME_LENGTH, ScoreSubmission
from .maze import Direction, Maze
from .records import LocalRecordStore
from .renderer import HUD_HEIGHT, TILE, Renderer
from .rng import LCG
from .session import FAST_TICK_MS, SECOND_TICK_MS, GameSession
from .settings import data_dir, load_settings, save_settings

logger = logging.getLogger(__name__)

FPS = 60

FAST_TICK_EVENT = pygame.USEREVENT + 1
SECOND_TICK_EVENT = pygame.USEREVENT + 2
ONE_SHOT_EVENT = pygame.USEREVENT + 3

KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP, pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN, pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT, pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT, pygame.K_d: Direction.RIGHT,
}

KEY_DIFFICULTIES = {
    pygame.K_1: DIFFICULTY_NAMES[0],
    pygame.K_2: DIFFICULTY_NAMES[1],
    pygame.K_3: DIFFICULTY_NAMES[2],
    pygame.K_4: DIFFICULTY_NAMES[3],
}

# None lists every difficulty
LEADERBOARD_FILTERS = (None,) + DIFFICULTY_NAMES


def leaderboard_allowed(snap):
    # the score service is only contacted between games, never while ticks run
    return not snap.playing


def next_filter(current, step=1):
    i = LEADERBOARD_FILTERS.index(current)
    return LEADERBOARD_FILTERS[(i + step) % len(LEADERBOARD_FILTERS)]


def score_lines(entries, show_mode=False):
    """One text row per leaderboard entry, with a mode column when several modes are mixed."""
    rows = []
    for i, e in enumerate(entries):
        row = f"{i + 1:>2}. {e.name:<20} {e.score:>6}  {e.time:>4}s"
        if show_mode:
            row += f"  {e.mode}"
        rows.append(row)
    return rows


class PygameScheduler:
    """One-shot callbacks on top of pygame's event timers.

    pygame keeps one timer per event type, so a new one-shot replaces a
    pending one. The session only ever has a single expiry outstanding.
    """

    def call_later(self, delay_ms, callback):
        pygame.time.set_timer(pygame.event.Event(ONE_SHOT_EVENT, callback=callback), int(delay_ms), loops=1)


class AsciiManApp:
    def __init__(self, settings, seed=None):
        pygame.init()
        self.settings = settings
        maze = Maze.default()
        info = pygame.display.Info()
        map_w, map_h = maze.width * TILE, maze.height * TILE
        win_w = min(max(720, map_w + 200), info.current_w - 40)
        win_h = min(map_h + HUD_HEIGHT + 40, info.current_h - 60)
        if settings["windowed"]:
            self.screen = pygame.display.set_mode((win_w, win_h))
        else:
            self.screen = pygame.display.set_mode((info.current_w, info.current_h), pygame.FULLSCREEN)
        pygame.display.set_caption("AsciiMan")
        self.clock = pygame.time.Clock()
        self.renderer = Renderer(self.screen)

        base = data_dir()
        self.records_store = LocalRecordStore(base / "records.json")
        self.records = self.records_store.load()
        self.leaderboard = LeaderboardClient(settings["leaderboard_url"])

        rng = LCG(seed) if seed is not None else LCG.from_time()
        self.session = GameSession(settings["difficulty"], maze=maze, rng=rng,
                                   clock=pygame.time.get_ticks, scheduler=PygameScheduler())
        self.session.on_finish(self._on_finish)
        self.finished = None
        logger.info("[app] initialized (seed=%s, difficulty=%s)", rng.seed, self.session.profile.name)

    # -----------------------
    # Session hooks
    # -----------------------
    def _on_finish(self, result):
        try:
            self.records = self.records_store.record(result)
        except OSError as e:
            logger.warning("[app] could not save records: %s", e)
        # handled by the main loop once the current event has settled
        self.finished = result

    def _select_difficulty(self, name):
        self.session.select_difficulty(name)
        self.settings["difficulty"] = self.session.profile.name
        save_settings(self.settings)

    # -----------------------
    # Main loop
    # -----------------------
    def run(self):
        pygame.time.set_timer(FAST_TICK_EVENT, FAST_TICK_MS)
        pygame.time.set_timer(SECOND_TICK_EVENT, SECOND_TICK_MS)
        running = True
        while running:
            self.clock.tick(FPS)
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                elif ev.type == FAST_TICK_EVENT:
                    self.session.on_fast_tick()
                elif ev.type == SECOND_TICK_EVENT:
                    self.session.on_second_tick()
                elif ev.type == ONE_SHOT_EVENT:
                    ev.callback()
                elif ev.type == pygame.KEYDOWN:
                    if ev.key == pygame.K_ESCAPE:
                        running = False
                    elif ev.key in KEY_DIRECTIONS:
                        self.session.on_input(KEY_DIRECTIONS[ev.key])
                    elif ev.key == pygame.K_r:
                        self.session.restart()
                    elif ev.key in KEY_DIFFICULTIES:
                        self._select_difficulty(KEY_DIFFICULTIES[ev.key])
                    elif ev.key == pygame.K_l and leaderboard_allowed(self.session.snapshot()):
                        self.leaderboard_blocking()
            if self.finished is not None:
                result, self.finished = self.finished, None
                self.draw()
                self.submit_score_blocking(result)
            self.draw()
        pygame.quit()
        save_settings(self.settings)

    def draw(self):
        snap = self.session.snapshot()
        self.renderer.draw(snap, self.records, pygame.time.get_ticks())
        if not snap.playing:
            hint = self.renderer.small.render("R: play again   1-4: difficulty   L: high scores   Esc: quit",
                                              True, (200, 200, 200))
            self.screen.blit(hint, (self.screen.get_width() // 2 - hint.get_width() // 2, HUD_HEIGHT - 16))
        pygame.display.flip()

    # -----------------------
    # Blocking dialogs
    # -----------------------
    def submit_score_blocking(self, result):
        """Ask for a name and post the score. Esc skips; failures can be retried."""
        name = ""
        message = None
        background = self.screen.copy()
        title = "YOU WON!" if result.won else "GAME OVER"
        while True:
            self.screen.blit(background, (0, 0))
            lines = [
                (f"Score: {result.score}    Time: {result.time}s", (255, 255, 255)),
                (f"Best: {self.records.best_score} ({self.records.best_time}s)", (200, 200, 200)),
                ("Name for the global high scores:", (255, 255, 255)),
                ((name or "_"), (255, 255, 0)),
            ]
            if message:
                lines.append(message)
            self.renderer.draw_dialog(title, lines, footer="Enter: submit   Esc: skip")
            pygame.display.flip()
            ev = pygame.event.wait()
            if ev.type == pygame.QUIT:
                pygame.event.post(pygame.event.Event(pygame.QUIT))
                return
            if ev.type != pygame.KEYDOWN:
                continue
            if ev.key == pygame.K_ESCAPE:
                return
            if ev.key == pygame.K_BACKSPACE:
                name = name[:-1]
            elif ev.key == pygame.K_RETURN:
                try:
                    submission = ScoreSubmission.from_result(name, result)
                except ValueError as e:
                    message = (str(e), (255, 120, 120))
                    continue
                try:
                    self.leaderboard.submit(submission)
                except LeaderboardError as e:
                    logger.warning("[app] %s", e)
                    message = (f"{e} - Enter to retry", (255, 120, 120))
                    continue
                return
            elif ev.unicode and ev.unicode.isalnum() and len(name) < MAX_NAME_LENGTH:
                name += ev.unicode

    def leaderboard_blocking(self):
        """High score table. Left/Right switch between all modes and each difficulty."""
        mode = self.session.profile.name
        background = self.screen.copy()
        while True:
            try:
                entries = self.leaderboard.fetch_scores(mode)
                lines = [(row, (255, 255, 255)) for row in score_lines(entries, show_mode=mode is None)]
                if not lines:
                    lines = [("No scores yet", (200, 200, 200))]
            except LeaderboardError as e:
                logger.warning("[app] %s", e)
                lines = [("Failed to load scores", (255, 120, 120))]
            self.screen.blit(background, (0, 0))
            title = f"TOP {(mode or 'all').upper()}"
            self.renderer.draw_dialog(title, lines, footer="Left/Right: mode   any other key: back")
            pygame.display.flip()
            while True:
                ev = pygame.event.wait()
                if ev.type == pygame.QUIT:
                    pygame.event.post(pygame.event.Event(pygame.QUIT))
                    return
                if ev.type == pygame.KEYDOWN:
                    break
            if ev.key == pygame.K_LEFT:
                mode = next_filter(mode, -1)
            elif ev.key == pygame.K_RIGHT:
                mode = next_filter(mode)
            else:
                return


# -----------------------
# Entrypoint
# -----------------------
def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="asciiman", description="AsciiMan maze chase game")
    p.add_argument("--seed", type=int, help="seed for ghost decisions")
    p.add_argument("--difficulty", choices=DIFFICULTY_NAMES, help="starting difficulty")
    p.add_argument("--fullscreen", action="store_true", help="use the whole screen")
    p.add_argument("--leaderboard-url", help="base URL of the high score service")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = load_settings()
    if args.difficulty:
        settings["difficulty"] = args.difficulty
    settings["difficulty"] = get_profile(settings["difficulty"]).name
    if args.leaderboard_url:
        settings["leaderboard_url"] = args.leaderboard_url
    seed = args.seed if args.seed is not None else settings["seed"]
    save_settings(settings)
    if args.fullscreen:
        # one-off, not remembered
        settings["windowed"] = False

    # unhandled errors also go to a log file in the data dir
    try:
        AsciiManApp(settings, seed=seed).run()
    except Exception:
        logp = data_dir() / "asciiman_error.log"
        try:
            with open(logp, "a", encoding="utf-8") as f:
                f.write("=== Exception on run: " + time.strftime("%Y-%m-%d %H:%M:%S") + " ===\n")
                traceback.print_exc(file=f)
                f.write("\n")
        except OSError:
            pass
        logger.exception("[app] crashed, details in %s", logp)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
