# difficulty.py
# Named difficulty profiles selected before a session starts.

import logging
from collections import namedtuple

from .maze import Position

logger = logging.getLogger(__name__)

GhostSpec = namedtuple("GhostSpec", ["name", "color", "spawn", "speed", "lock_on_duration"])

DifficultyProfile = namedtuple("DifficultyProfile", ["name", "pickup_score", "special_score", "ghosts"])

DEFAULT_DIFFICULTY = "easy"

# ghost colours as (r, g, b); only the renderer looks at them
BLINKY = ("Blinky", (255, 0, 0), Position(13, 13))
PINKY = ("Pinky", (255, 184, 255), Position(14, 13))
INKY = ("Inky", (0, 255, 255), Position(13, 14))
CLYDE = ("Clyde", (255, 184, 82), Position(14, 14))


def _ghosts(*tuning):
    # tuning: (speed ms per move, lock-on seconds) for Blinky, Pinky, Inky, Clyde
    identities = (BLINKY, PINKY, INKY, CLYDE)
    return tuple(GhostSpec(name, color, spawn, speed, lock)
                 for (name, color, spawn), (speed, lock) in zip(identities, tuning))


PROFILES = {
    "easy": DifficultyProfile("easy", 10, 50, _ghosts((400, 6), (420, 10), (450, 12), (450, 15))),
    "medium": DifficultyProfile("medium", 12, 60, _ghosts((320, 10), (340, 12), (380, 12), (380, 15))),
    "hard": DifficultyProfile("hard", 15, 75, _ghosts((250, 15), (270, 15), (300, 12), (300, 12))),
    "insane": DifficultyProfile("insane", 20, 100, _ghosts((180, 30), (200, 30), (250, 20), (250, 20))),
}

DIFFICULTY_NAMES = tuple(PROFILES)


def get_profile(name=None):
    """Look up a profile by name (case-insensitive).

    Missing or unknown names fall back to the default profile so a bad
    selection can never produce a session without ghosts or scores.
    """
    key = (name or "").strip().lower() if isinstance(name, str) else ""
    profile = PROFILES.get(key)
    if profile is None:
        if name is not None:
            logger.warning("[difficulty] unknown difficulty %r, using %s", name, DEFAULT_DIFFICULTY)
        return PROFILES[DEFAULT_DIFFICULTY]
    return profile


def next_difficulty(name):
    """Cycle through the profiles in declaration order (menu helper)."""
    names = list(DIFFICULTY_NAMES)
    current = get_profile(name).name
    return names[(names.index(current) + 1) % len(names)]
