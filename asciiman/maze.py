# maze.py
# Static maze model: cell kinds, positions, directions and the classic layout.

from collections import namedtuple
from enum import Enum

# -----------------------
# Layout
# -----------------------
MAZE_WIDTH = 28
MAZE_HEIGHT = 31
TUNNEL_ROW = 14

# '#' wall, '.' pickup, 'o' special pickup, ' ' floor
DEFAULT_LAYOUT = (
    "############################",
    "#............##............#",
    "#.####.#####.##.#####.####.#",
    "#o####.#####.##.#####.####o#",
    "#.####.#####.##.#####.####.#",
    "#..........................#",
    "#.####.##.########.##.####.#",
    "#.####.##.########.##.####.#",
    "#......##....##....##......#",
    "######.##### ## #####.######",
    "######.##### ## #####.######",
    "######.##          ##.######",
    "######.## ###  ### ##.######",
    "######.## #      # ##.######",
    "      .   #      #   .      ",
    "######.## #      # ##.######",
    "######.## ######## ##.######",
    "######.##          ##.######",
    "######.## ######## ##.######",
    "######.## ######## ##.######",
    "#............##............#",
    "#.####.#####.##.#####.####.#",
    "#.####.#####.##.#####.####.#",
    "#o..##.......  .......##..o#",
    "###.##.##.########.##.##.###",
    "###.##.##.########.##.##.###",
    "#......##....##....##......#",
    "#.##########.##.##########.#",
    "#.##########.##.##########.#",
    "#..........................#",
    "############################",
)


Position = namedtuple("Position", ["x", "y"])


class Cell(Enum):
    WALL = "#"
    FLOOR = " "
    PICKUP = "."
    SPECIAL_PICKUP = "o"


class Direction(Enum):
    # declaration order is the fixed scan order used by ghosts
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @property
    def angle(self) -> float:
        """Canonical heading in degrees, screen coordinates (y grows downwards)."""
        return _ANGLES[self]


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_ANGLES = {
    Direction.RIGHT: 0.0,
    Direction.DOWN: 90.0,
    Direction.LEFT: 180.0,
    Direction.UP: -90.0,
}

DIRECTIONS = tuple(Direction)


class Maze:
    """Immutable grid of cells plus the single horizontal tunnel row.

    Pickups are tracked separately (see pickups.PickupTracker); ``cell_at``
    always answers with the static layout.
    """

    def __init__(self, layout, tunnel_row=None):
        rows = [str(line) for line in layout]
        if not rows:
            raise ValueError("maze layout is empty")
        width = len(rows[0])
        for i, line in enumerate(rows):
            if len(line) != width:
                raise ValueError(f"row {i} has width {len(line)}, expected {width}")
        self._cells = tuple(tuple(Cell(ch) for ch in line) for line in rows)
        self.width = width
        self.height = len(rows)
        if tunnel_row is not None and not (0 <= tunnel_row < self.height):
            raise ValueError(f"tunnel row {tunnel_row} outside maze")
        self.tunnel_row = tunnel_row

    @classmethod
    def default(cls):
        return _DEFAULT_MAZE

    def in_bounds(self, pos) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def cell_at(self, pos) -> Cell:
        return self._cells[pos.y][pos.x]

    def base_cell(self, pos) -> Cell:
        # what is left once a pickup has been eaten
        cell = self.cell_at(pos)
        if cell in (Cell.PICKUP, Cell.SPECIAL_PICKUP):
            return Cell.FLOOR
        return cell

    def is_walkable(self, pos) -> bool:
        return self.in_bounds(pos) and self.cell_at(pos) is not Cell.WALL

    def positions_of(self, cell):
        return [Position(x, y)
                for y, row in enumerate(self._cells)
                for x, c in enumerate(row) if c is cell]

    def rows(self):
        """Layout as strings, handy for text renderers and debugging."""
        return ["".join(c.value for c in row) for row in self._cells]


_DEFAULT_MAZE = Maze(DEFAULT_LAYOUT, tunnel_row=TUNNEL_ROW)
