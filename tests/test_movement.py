from asciiman.maze import DIRECTIONS, TUNNEL_ROW, Direction, Maze, Position
from asciiman.movement import available_directions, inverse_move, is_junction, is_valid_position, move

# row 0 reaches column 0 but is not the tunnel; row 2 is
SMALL = Maze([
    ".....",
    "#.#.#",
    ".....",
], tunnel_row=2)


def all_positions(maze):
    return [Position(x, y) for y in range(maze.height) for x in range(maze.width)]


def test_move_is_a_unit_step_in_open_space():
    maze = Maze.default()
    assert move(maze, Position(5, 5), Direction.UP) == Position(5, 4)
    assert move(maze, Position(5, 5), Direction.DOWN) == Position(5, 6)
    assert move(maze, Position(5, 5), Direction.LEFT) == Position(4, 5)
    assert move(maze, Position(5, 5), Direction.RIGHT) == Position(6, 5)


def test_move_then_inverse_returns_to_start():
    for maze in (Maze.default(), SMALL):
        for p in all_positions(maze):
            for d in DIRECTIONS:
                assert inverse_move(maze, move(maze, p, d), d) == p


def test_tunnel_boundary_is_the_only_non_unit_step():
    maze = Maze.default()
    odd = []
    for p in all_positions(maze):
        for d in DIRECTIONS:
            q = move(maze, p, d)
            if q != Position(p.x + d.dx, p.y + d.dy):
                odd.append((p, d, q))
    assert sorted(odd, key=lambda t: t[0]) == [
        (Position(0, TUNNEL_ROW), Direction.LEFT, Position(maze.width - 1, TUNNEL_ROW)),
        (Position(maze.width - 1, TUNNEL_ROW), Direction.RIGHT, Position(0, TUNNEL_ROW)),
    ]


def test_tunnel_row_wraps_left_and_right():
    assert move(SMALL, Position(0, 2), Direction.LEFT) == Position(4, 2)
    assert move(SMALL, Position(4, 2), Direction.RIGHT) == Position(0, 2)


def test_other_rows_do_not_wrap():
    dest = move(SMALL, Position(0, 0), Direction.LEFT)
    assert dest == Position(-1, 0)
    assert not is_valid_position(SMALL, dest)


def test_no_vertical_wrap():
    dest = move(SMALL, Position(0, 2), Direction.DOWN)
    assert dest == Position(0, 3)
    assert not is_valid_position(SMALL, dest)


def test_walls_are_invalid():
    assert not is_valid_position(SMALL, Position(0, 1))
    assert is_valid_position(SMALL, Position(1, 1))


def test_available_directions_skips_reverse():
    assert available_directions(SMALL, Position(1, 0)) == [Direction.DOWN, Direction.LEFT, Direction.RIGHT]
    assert available_directions(SMALL, Position(1, 0), Direction.LEFT) == [Direction.DOWN, Direction.LEFT]


def test_available_directions_follow_tunnel():
    assert Direction.LEFT in available_directions(SMALL, Position(0, 2))


def test_is_junction():
    assert is_junction(SMALL, Position(1, 0), Direction.RIGHT)
    # corridor cell in row 1 heading down: only down remains
    assert not is_junction(SMALL, Position(1, 1), Direction.DOWN)
