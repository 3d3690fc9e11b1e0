# pickups.py
# Remaining regular/special pickups for one session.

from enum import Enum

from .maze import Cell


class PickupKind(Enum):
    NONE = "none"
    REGULAR = "regular"
    SPECIAL = "special"


class PickupTracker:
    """Two sets of positions that only ever shrink during a session."""

    def __init__(self, regular=(), special=()):
        self._regular = set(regular)
        self._special = set(special)
        assert not (self._regular & self._special), "pickup listed as both regular and special"

    @classmethod
    def from_maze(cls, maze):
        return cls(maze.positions_of(Cell.PICKUP), maze.positions_of(Cell.SPECIAL_PICKUP))

    def collect_at(self, pos) -> PickupKind:
        if pos in self._regular:
            self._regular.remove(pos)
            return PickupKind.REGULAR
        if pos in self._special:
            self._special.remove(pos)
            return PickupKind.SPECIAL
        return PickupKind.NONE

    def has_regular(self, pos) -> bool:
        return pos in self._regular

    def has_special(self, pos) -> bool:
        return pos in self._special

    def is_all_collected(self) -> bool:
        return not self._regular and not self._special

    @property
    def regular(self):
        return frozenset(self._regular)

    @property
    def special(self):
        return frozenset(self._special)

    @property
    def remaining(self) -> int:
        return len(self._regular) + len(self._special)

    def check_invariants(self, maze):
        assert not (self._regular & self._special), "pickup listed as both regular and special"
        for pos in self._regular | self._special:
            assert maze.is_walkable(pos), f"pickup on unwalkable cell {pos}"
