from asciiman.difficulty import DifficultyProfile, GhostSpec
from asciiman.maze import Position

NEVER = 10**9


class PickLast:
    """Stand-in rng: always takes the last option, shuffles by reversing."""

    def choice(self, seq):
        return seq[-1]

    def shuffled(self, seq):
        return list(reversed(seq))


class NoRandom:
    def choice(self, seq):
        raise AssertionError("rng consulted")

    def shuffled(self, seq):
        raise AssertionError("rng consulted")


def ghost_spec(x, y, speed=NEVER, lock=6, name="Blinky"):
    return GhostSpec(name, (255, 0, 0), Position(x, y), speed, lock)


def profile(*ghosts, pickup=10, special=50, name="easy"):
    return DifficultyProfile(name, pickup, special, tuple(ghosts))
