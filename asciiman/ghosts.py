# ghosts.py
# Ghost state and the per-tick ghost behaviour: sight lines, lock-on,
# junction choice and ghost-ghost collision avoidance.

import math

from .maze import DIRECTIONS
from .movement import available_directions, is_valid_position, move


class Ghost:
    def __init__(self, name, color, spawn, speed: int, lock_on_duration: int, now: int = 0):
        self.name = name
        self.color = color
        self.spawn = spawn
        # ms per move
        self.speed = speed
        # seconds of pursuit after the player drops out of sight
        self.lock_on_duration = lock_on_duration
        self.reset(now)

    @classmethod
    def from_spec(cls, spec, now=0):
        return cls(spec.name, spec.color, spec.spawn, spec.speed, spec.lock_on_duration, now)

    def reset(self, now):
        self.position = self.spawn
        self.direction = None
        self.lock_on = False
        self.lock_on_timer = 0
        self.last_moved = now
        # set while an eaten ghost still shares its spawn cell with the player
        self.respawned = False

    def is_due(self, now) -> bool:
        return now - self.last_moved >= self.speed

    def lock_onto(self, direction):
        self.lock_on = True
        self.direction = direction
        self.lock_on_timer = self.lock_on_duration

    def decay_lock_on(self):
        if self.lock_on_timer > 0:
            self.lock_on_timer -= 1
        if self.lock_on_timer <= 0:
            self.lock_on = False

    def __repr__(self):
        return (f"Ghost({self.name!r}, pos={tuple(self.position)}, dir={self.direction}, "
                f"lock_on={self.lock_on}, timer={self.lock_on_timer})")


# -----------------------
# Geometry helpers
# -----------------------
def find_visible_direction(maze, pos, target):
    """First direction (scan order UP, DOWN, LEFT, RIGHT) with a clear line to ``target``."""
    for d in DIRECTIONS:
        p = pos
        while True:
            p = move(maze, p, d)
            if not is_valid_position(maze, p):
                break
            if p == target:
                return d
            if p == pos:
                # looped all the way round an open tunnel row
                break
    return None


def bearing_to(src, dst) -> float:
    """Angle in degrees from ``src`` to ``dst``; 0 is RIGHT, +90 is DOWN."""
    return math.degrees(math.atan2(dst.y - src.y, dst.x - src.x))


def angle_between(a, b) -> float:
    diff = (a - b + 180.0) % 360.0 - 180.0
    return abs(diff)


def closest_to_bearing(directions, bearing):
    # min() keeps the first of equal candidates, i.e. scan order wins ties
    return min(directions, key=lambda d: angle_between(d.angle, bearing))


def _by_bearing(directions, bearing):
    return sorted(directions, key=lambda d: angle_between(d.angle, bearing))


# -----------------------
# Decision making
# -----------------------
def choose_heading(ghost, maze, target, rng, sighted=False):
    """Pick the direction the ghost will try this step, or None when it cannot move."""
    pos = ghost.position
    heading = ghost.direction
    if heading is None:
        options = available_directions(maze, pos)
        if not options:
            return None
        heading = rng.choice(options)
    if sighted:
        return heading

    straight_ok = is_valid_position(maze, move(maze, pos, heading))
    options = available_directions(maze, pos, heading)
    if straight_ok and len(options) <= 1:
        # corridor: keep going until a wall or an opening
        return heading
    if not options:
        # dead end: turning back is the only way out
        back = heading.opposite
        return back if is_valid_position(maze, move(maze, pos, back)) else None
    if ghost.lock_on:
        return closest_to_bearing(options, bearing_to(pos, target))
    return rng.choice(options)


def step_ghost(ghost, maze, target, occupied, rng):
    """Advance one ghost by at most one cell.

    ``occupied`` holds the cells of ghosts already processed this tick.
    When the chosen cell is taken the other non-reversing exits are tried;
    if every one is taken the ghost holds position and keeps its heading.
    Returns True when the ghost moved.
    """
    sighted = find_visible_direction(maze, ghost.position, target)
    if sighted is not None:
        ghost.lock_onto(sighted)

    heading = choose_heading(ghost, maze, target, rng, sighted=sighted is not None)
    if heading is None:
        return False

    dest = move(maze, ghost.position, heading)
    if dest in occupied:
        alternatives = [d for d in available_directions(maze, ghost.position, ghost.direction)
                        if d is not heading]
        if ghost.lock_on:
            alternatives = _by_bearing(alternatives, bearing_to(ghost.position, target))
        elif len(alternatives) > 1:
            alternatives = rng.shuffled(alternatives)
        for d in alternatives:
            candidate = move(maze, ghost.position, d)
            if candidate not in occupied:
                heading, dest = d, candidate
                break
        else:
            return False

    ghost.direction = heading
    ghost.position = dest
    return True


def move_ghosts(ghosts, maze, target, now, rng):
    """Run one ghost-movement phase.

    Ghosts are handled in list order, so lower indexes get first pick of a
    contested cell. Each ghost only gets a step once its own ``speed`` has
    elapsed since it last moved. A ghost joins the occupancy set after its
    turn; a ghost that has not had its turn yet is not in it, so an earlier
    ghost can step onto a later ghost's cell and, if the later one cannot
    leave, both share it until the next phase.
    Returns the indexes of ghosts that moved.
    """
    occupied = set()
    moved = []
    for i, ghost in enumerate(ghosts):
        if ghost.is_due(now):
            if step_ghost(ghost, maze, target, occupied, rng):
                moved.append(i)
            ghost.last_moved = now
        occupied.add(ghost.position)
    return moved
