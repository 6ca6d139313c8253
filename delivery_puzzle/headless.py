"""Headless (no-GUI) runner: solve a level and replay a path to the end."""

from __future__ import annotations

import logging
import time as _time
from typing import Iterable

from .constants import DEFAULT_MAX_VISITED
from .enums import SimStatus
from .game import GameState, load_path, start, step
from .models import Cell, Level
from .solver import solve_level

logger = logging.getLogger(__name__)


def run_path(state: GameState) -> GameState:
    """Start *state* if Idle and step it until it reaches a terminal state.

    Plays the role of the UI timer: one :func:`step` per tick, no waiting.
    """
    state = start(state)
    # One step per path cell plus the exhaustion check
    for _ in range(len(state.path) + 1):
        if state.status != SimStatus.RUNNING:
            break
        state = step(state)
    return state


def run_headless(
    level: Level,
    path: Iterable[Cell] | None = None,
    max_visited: int = DEFAULT_MAX_VISITED,
) -> dict:
    """Solve *level*, replay *path* (or the optimal one) and report metrics.

    Returns a dict of results; ``status`` is ``None`` when there was nothing
    to replay (no path given and the level has no solution).
    """
    wall_start = _time.monotonic()

    result = solve_level(level, max_visited=max_visited)
    if path is None:
        path = result.path

    final: GameState | None = None
    if path is not None:
        final = run_path(load_path(level, path))
        logger.info(
            "Level %s: %s after %d steps",
            level.level_id or "(unnamed)", final.status.value, final.steps_taken,
        )
    else:
        logger.info(
            "Level %s: %s, nothing to replay (%d states searched)",
            level.level_id or "(unnamed)", result.outcome.value, result.visited_states,
        )

    wall_elapsed = _time.monotonic() - wall_start

    return {
        "level_id": level.level_id,
        "solvable": result.solvable,
        "outcome": result.outcome.value,
        "optimal_moves": result.optimal_moves,
        "visited_states": result.visited_states,
        "status": final.status.value if final else None,
        "steps_taken": final.steps_taken if final else None,
        "path_length": len(final.path) if final else None,
        "wall_clock_seconds": wall_elapsed,
    }
