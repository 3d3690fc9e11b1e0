# session.py
# Game session state machine: owns the single SessionState and turns
# input, clock ticks and invincibility expiry into state transitions.

import logging
from collections import namedtuple
from enum import Enum

from .clock import monotonic_ms
from .difficulty import DifficultyProfile, get_profile
from .ghosts import Ghost, move_ghosts
from .maze import Maze, Position
from .movement import is_valid_position, move
from .pickups import PickupKind, PickupTracker
from .rng import LCG

logger = logging.getLogger(__name__)

# -----------------------
# Timing
# -----------------------
FAST_TICK_MS = 100
SECOND_TICK_MS = 1000
INVINCIBILITY_MS = 5000

PLAYER_START = Position(14, 23)


class Status(Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


# -----------------------
# Events
# -----------------------
Input = namedtuple("Input", ["direction"])
FastTick = namedtuple("FastTick", [])
SecondTick = namedtuple("SecondTick", [])
InvincibilityExpired = namedtuple("InvincibilityExpired", ["token"])
Restart = namedtuple("Restart", [])
SelectDifficulty = namedtuple("SelectDifficulty", ["name"])


# -----------------------
# Read-only views
# -----------------------
GhostView = namedtuple("GhostView", ["name", "color", "position", "direction", "lock_on", "lock_on_timer"])

GameResult = namedtuple("GameResult", ["score", "time", "won", "difficulty"])


class Snapshot(namedtuple("Snapshot", [
        "status", "player", "player_direction", "ghosts", "pickups", "special_pickups",
        "score", "timer", "invincible", "difficulty", "maze"])):
    __slots__ = ()

    @property
    def game_over(self) -> bool:
        return self.status is Status.LOST

    @property
    def won(self) -> bool:
        return self.status is Status.WON

    @property
    def playing(self) -> bool:
        return self.status is Status.PLAYING


class SessionState:
    """Everything that changes during one game. Replaced wholesale on reset."""

    def __init__(self, profile, maze, player_start, now):
        self.profile = profile
        self.player = player_start
        self.player_direction = None
        self.ghosts = [Ghost.from_spec(spec, now) for spec in profile.ghosts]
        self.pickups = PickupTracker.from_maze(maze)
        self.score = 0
        self.timer = 0
        self.status = Status.PLAYING
        self.invincible = False
        self.invincible_until = 0
        self.invincible_window = 0


class GameSession:
    """Drives one game at a time.

    The session never sleeps or polls. Whoever owns the loop calls
    ``on_fast_tick`` (~100 ms), ``on_second_tick`` (1 s) and ``on_input``;
    the invincibility expiry is scheduled through ``scheduler.call_later``.
    ``clock`` returns milliseconds. Pass a seeded ``rng`` for repeatable
    ghost paths.
    """

    def __init__(self, difficulty=None, maze=None, rng=None, clock=None, scheduler=None,
                 player_start=None, invincibility_ms=INVINCIBILITY_MS):
        self.maze = maze or Maze.default()
        self.rng = rng or LCG.from_time()
        self.clock = clock or monotonic_ms
        if scheduler is None and hasattr(self.clock, "call_later"):
            scheduler = self.clock
        self.scheduler = scheduler
        self.player_start = player_start or PLAYER_START
        self.invincibility_ms = invincibility_ms
        self._listeners = []
        self._finish_listeners = []
        self._generation = 0
        self.state = None
        self._reset(self._resolve_profile(difficulty))

    # -----------------------
    # Lifecycle
    # -----------------------
    @staticmethod
    def _resolve_profile(difficulty):
        if isinstance(difficulty, DifficultyProfile):
            return difficulty
        return get_profile(difficulty)

    def _reset(self, profile):
        # bumping the generation turns any expiry scheduled for the old
        # state into a no-op
        self._generation += 1
        self.state = SessionState(profile, self.maze, self.player_start, self.clock())
        assert is_valid_position(self.maze, self.player_start), "player start is a wall"
        logger.info("[session] new game (difficulty=%s, pickups=%d)",
                    profile.name, self.state.pickups.remaining)

    def restart(self):
        self._reset(self.state.profile)
        self._publish()

    def select_difficulty(self, name):
        self._reset(self._resolve_profile(name))
        self._publish()

    @property
    def profile(self):
        return self.state.profile

    @property
    def status(self):
        return self.state.status

    @property
    def is_invincible(self) -> bool:
        return self.state.invincible and self.clock() < self.state.invincible_until

    # -----------------------
    # Subscriptions
    # -----------------------
    def subscribe(self, listener):
        """Call ``listener(snapshot)`` after every handled event. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def on_finish(self, listener):
        """Call ``listener(GameResult)`` once each time a game is won or lost."""
        self._finish_listeners.append(listener)

    def _publish(self):
        self.check_invariants()
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    def snapshot(self) -> Snapshot:
        s = self.state
        ghosts = tuple(GhostView(g.name, g.color, g.position, g.direction, g.lock_on, g.lock_on_timer)
                       for g in s.ghosts)
        return Snapshot(s.status, s.player, s.player_direction, ghosts, s.pickups.regular,
                        s.pickups.special, s.score, s.timer, self.is_invincible,
                        s.profile.name, self.maze)

    # -----------------------
    # Event entry points
    # -----------------------
    def dispatch(self, event) -> Snapshot:
        """Apply one event object and return the resulting snapshot."""
        if isinstance(event, Input):
            self.on_input(event.direction)
        elif isinstance(event, FastTick):
            self.on_fast_tick()
        elif isinstance(event, SecondTick):
            self.on_second_tick()
        elif isinstance(event, InvincibilityExpired):
            self.on_invincibility_expiry(event.token)
        elif isinstance(event, Restart):
            self.restart()
        elif isinstance(event, SelectDifficulty):
            self.select_difficulty(event.name)
        else:
            raise TypeError(f"unknown event {event!r}")
        return self.snapshot()

    def on_input(self, direction):
        s = self.state
        if s.status is not Status.PLAYING:
            return
        candidate = move(self.maze, s.player, direction)
        if not is_valid_position(self.maze, candidate):
            return

        gained = 0
        kind = s.pickups.collect_at(candidate)
        if kind is PickupKind.REGULAR:
            gained += s.profile.pickup_score
        elif kind is PickupKind.SPECIAL:
            gained += s.profile.special_score
            self._start_invincibility()
        s.score += gained
        s.player = candidate
        s.player_direction = direction

        self._arbitrate_collisions()
        if s.status is Status.PLAYING and s.pickups.is_all_collected():
            self._finish(Status.WON)
        self._publish()

    def on_fast_tick(self):
        s = self.state
        if s.status is not Status.PLAYING:
            return
        move_ghosts(s.ghosts, self.maze, s.player, self.clock(), self.rng)
        self._arbitrate_collisions()
        self._publish()

    def on_second_tick(self):
        s = self.state
        if s.status is not Status.PLAYING:
            return
        s.timer += 1
        for ghost in s.ghosts:
            ghost.decay_lock_on()
        self._publish()

    def on_invincibility_expiry(self, token):
        if token != self._invincibility_token():
            # stale window or previous game
            return
        self.state.invincible = False
        logger.debug("[session] invincibility over")
        self._publish()

    # -----------------------
    # Rules
    # -----------------------
    def _invincibility_token(self):
        return (self._generation, self.state.invincible_window)

    def _start_invincibility(self):
        s = self.state
        s.invincible_window += 1
        s.invincible = True
        s.invincible_until = self.clock() + self.invincibility_ms
        token = self._invincibility_token()
        if self.scheduler is not None:
            self.scheduler.call_later(self.invincibility_ms,
                                      lambda: self.dispatch(InvincibilityExpired(token)))

    def _arbitrate_collisions(self):
        s = self.state
        for ghost in s.ghosts:
            if ghost.position != s.player:
                ghost.respawned = False
                continue
            if ghost.respawned:
                # same contact as the one that sent it home
                continue
            if self.is_invincible:
                ghost.reset(self.clock())
                ghost.respawned = ghost.position == s.player
                # eating a ghost pays the special pickup value
                s.score += s.profile.special_score
                logger.debug("[session] %s eaten, score=%d", ghost.name, s.score)
            else:
                self._finish(Status.LOST)
                return

    def _finish(self, status):
        s = self.state
        s.status = status
        result = GameResult(s.score, s.timer, status is Status.WON, s.profile.name)
        logger.info("[session] game %s (score=%d, time=%ds)", status.value, s.score, s.timer)
        for listener in list(self._finish_listeners):
            listener(result)

    def check_invariants(self):
        s = self.state
        assert self.maze.is_walkable(s.player), f"player on unwalkable cell {s.player}"
        assert len(s.ghosts) == len(s.profile.ghosts), "ghost roster changed mid-game"
        for ghost in s.ghosts:
            assert self.maze.is_walkable(ghost.position), f"{ghost.name} on unwalkable cell {ghost.position}"
            assert ghost.lock_on_timer >= 0, f"{ghost.name} has negative lock-on timer"
        s.pickups.check_invariants(self.maze)
        assert s.score >= 0, "negative score"
        assert s.timer >= 0, "negative timer"
        if s.status is Status.WON:
            assert s.pickups.is_all_collected(), "won with pickups left"
        if s.invincible:
            assert s.invincible_window > 0, "invincible without a special pickup"
