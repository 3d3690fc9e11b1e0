"""AsciiMan: maze chase game simulation core plus a pygame front end."""

from .difficulty import DEFAULT_DIFFICULTY, PROFILES, DifficultyProfile, GhostSpec, get_profile
from .maze import Cell, Direction, Maze, Position
from .pickups import PickupKind, PickupTracker
from .rng import LCG
from .session import GameResult, GameSession, Snapshot, Status

__version__ = "0.1.0"
