# movement.py
# Single-step movement with horizontal tunnel wraparound.

from .maze import DIRECTIONS, Position


def move(maze, pos, direction):
    """Return the cell one step from ``pos`` in ``direction``.

    Only the maze's tunnel row wraps: LEFT from column 0 lands on the last
    column and RIGHT from the last column lands on column 0. Anything else
    is a plain unit step, which may leave the grid; callers must check
    ``is_valid_position`` before committing.
    """
    x, y = pos.x + direction.dx, pos.y + direction.dy
    if pos.y == maze.tunnel_row and direction.dy == 0:
        if x < 0:
            x = maze.width - 1
        elif x >= maze.width:
            x = 0
    return Position(x, y)


def inverse_move(maze, pos, direction):
    return move(maze, pos, direction.opposite)


def is_valid_position(maze, pos) -> bool:
    return maze.is_walkable(pos)


def available_directions(maze, pos, heading=None):
    """Valid exits from ``pos`` in scan order, never reversing ``heading``."""
    out = []
    for d in DIRECTIONS:
        if heading is not None and d is heading.opposite:
            continue
        if is_valid_position(maze, move(maze, pos, d)):
            out.append(d)
    return out


def is_junction(maze, pos, heading) -> bool:
    return len(available_directions(maze, pos, heading)) > 1
