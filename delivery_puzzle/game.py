"""Game state, path authoring and the step-by-step simulation.

Every transition takes a :class:`GameState` and returns a new one; invalid
actions return the state they were given, unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable

from .constants import (
    MSG_FAILED, MSG_OPTIMAL, MSG_READY, MSG_RESET, MSG_RUNNING, MSG_SUCCESS,
)
from .enums import SimStatus
from .models import Cell, Level, is_adjacent
from .rules import Inventory, all_served, apply_tile_effects

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    """One snapshot of a level being edited or played."""

    level: Level
    path: tuple[Cell, ...]
    position: Cell
    status: SimStatus = SimStatus.IDLE
    cursor: int = 0
    steps_taken: int = 0
    inventory: Inventory = ()
    remaining: dict[str, tuple[str, ...]] = field(default_factory=dict)
    message: str = MSG_READY

    @property
    def last_cell(self) -> Cell:
        return self.path[-1]

    @property
    def is_terminal(self) -> bool:
        return self.status in (SimStatus.SUCCESS, SimStatus.FAILED)


def _full_orders(level: Level) -> dict[str, tuple[str, ...]]:
    return {cid: tuple(items) for cid, items in level.orders.items()}


def init_game(level: Level, message: str = MSG_READY) -> GameState:
    """Fresh Idle state: path ``[start]``, empty inventory, all orders owed."""
    return GameState(
        level=level,
        path=(level.start,),
        position=level.start,
        remaining=_full_orders(level),
        message=message,
    )


def load_path(level: Level, path: Iterable[Cell], message: str = MSG_OPTIMAL) -> GameState:
    """Idle state with a precomputed *path* laid out, ready to run."""
    cells = tuple(path) or (level.start,)
    return replace(init_game(level, message), path=cells, position=cells[0])


# ------------------------------------------------------------------
# Path authoring
# ------------------------------------------------------------------

def can_extend(state: GameState, cell: Cell) -> bool:
    if state.status != SimStatus.IDLE:
        return False
    if not is_adjacent(state.last_cell, cell):
        return False
    # Revisits are fine
    return state.level.is_walkable(cell)


def try_extend(state: GameState, cell: Cell) -> GameState:
    if not can_extend(state, cell):
        return state
    return replace(state, path=state.path + (cell,))


def reset(state: GameState) -> GameState:
    return init_game(state.level, MSG_RESET)


def undo_last_step(state: GameState) -> GameState:
    if state.status != SimStatus.IDLE or len(state.path) <= 1:
        return state
    return replace(state, path=state.path[:-1])


# ------------------------------------------------------------------
# Simulation
# ------------------------------------------------------------------

def start(state: GameState) -> GameState:
    """Idle → Running. The agent begins on the first path cell."""
    if state.status != SimStatus.IDLE:
        return state
    logger.debug("Run started: %d path cells", len(state.path))
    return replace(
        state,
        status=SimStatus.RUNNING,
        cursor=0,
        steps_taken=0,
        position=state.path[0],
        inventory=(),
        remaining=_full_orders(state.level),
        message=MSG_RUNNING,
    )


def _success(state: GameState, **changes) -> GameState:
    steps = changes.get("steps_taken", state.steps_taken)
    logger.debug("Run succeeded after %d steps", steps)
    return replace(
        state,
        status=SimStatus.SUCCESS,
        message=MSG_SUCCESS.format(steps=steps),
        **changes,
    )


def step(state: GameState) -> GameState:
    """Advance the agent by one path cell."""
    if state.status != SimStatus.RUNNING:
        return state

    cursor = state.cursor + 1
    if cursor >= len(state.path):
        if all_served(state.remaining):
            return _success(state)
        logger.debug("Run failed: orders left %s", state.remaining)
        return replace(state, status=SimStatus.FAILED, message=MSG_FAILED)

    cell = state.path[cursor]
    if not state.level.is_walkable(cell):
        # Authoring never produces this; skip the tile without moving
        return replace(state, cursor=cursor, steps_taken=state.steps_taken + 1)

    inventory, remaining = apply_tile_effects(
        state.level, cell, state.inventory, state.remaining,
    )
    changes = dict(
        cursor=cursor,
        steps_taken=state.steps_taken + 1,
        position=cell,
        inventory=inventory,
        remaining=dict(remaining),
    )
    if all_served(remaining):
        return _success(state, **changes)
    return replace(state, **changes)
