from enum import Enum


class SimStatus(Enum):
    IDLE    = "idle"      # path editable, not yet run
    RUNNING = "running"   # advancing one tile per tick
    SUCCESS = "success"   # every order served
    FAILED  = "failed"    # path exhausted with orders left


class Direction(Enum):
    LEFT  = "left"
    RIGHT = "right"
    UP    = "up"
    DOWN  = "down"

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]


_DELTAS = {
    Direction.LEFT:  (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.UP:    (0, -1),
    Direction.DOWN:  (0, 1),
}


class SolveOutcome(Enum):
    SOLVED       = "solved"
    UNSOLVABLE   = "unsolvable"     # frontier exhausted
    INCONCLUSIVE = "inconclusive"   # visited-state cap hit
