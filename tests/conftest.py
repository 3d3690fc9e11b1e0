import pytest

from asciiman.clock import VirtualClock
from asciiman.maze import Maze, Position
from asciiman.rng import LCG
from asciiman.session import GameSession

from .helpers import profile


@pytest.fixture
def clock():
    return VirtualClock()


@pytest.fixture
def make_session(clock):
    def factory(layout, player, ghosts, tunnel_row=None, pickup=10, special=50, seed=7):
        maze = Maze(layout, tunnel_row=tunnel_row)
        return GameSession(profile(*ghosts, pickup=pickup, special=special), maze=maze,
                           rng=LCG(seed), clock=clock, player_start=Position(*player))
    return factory
