# rng.py
# Reproducible pseudo-random source injected into the ghost AI.

import time


class LCG:
    """Linear congruential generator (Numerical Recipes constants).

    Same seed, same ghost paths: sessions and tests hand one of these to
    the ghost AI instead of touching the global ``random`` module.
    """

    def __init__(self, seed=12345):
        self.m = 2**32
        self.a = 1664525
        self.c = 1013904223
        self.seed = seed & 0xFFFFFFFF
        self.state = self.seed

    @classmethod
    def from_time(cls):
        return cls(int(time.time() * 1000) & 0xFFFFFFFF)

    def next(self) -> int:
        self.state = (self.a * self.state + self.c) % self.m
        return self.state

    def randint(self, a, b):
        # inclusive on both ends, like random.randint
        return a + (self.next() % (b - a + 1))

    def rand(self):
        return self.randint(0, 2**31 - 1) / (2**31 - 1)

    def choice(self, seq):
        if not seq:
            raise IndexError("cannot choose from an empty sequence")
        return seq[self.randint(0, len(seq) - 1)]

    def shuffled(self, seq):
        out = list(seq)
        # Fisher-Yates
        for i in range(len(out) - 1, 0, -1):
            j = self.randint(0, i)
            out[i], out[j] = out[j], out[i]
        return out

    def fork(self):
        """Independent generator derived from this one's stream."""
        return LCG(self.next())
