"""Breadth-first solvability search.

A search state is ``(agent cell, inventory, remaining orders)``. The
inventory is kept in pickup order because it decides what gets evicted
next; remaining orders are kept as sorted tuples since only their
multiset matters. Every move costs one step, so the first goal state
dequeued lies at the end of a shortest path.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass

from .constants import DEFAULT_MAX_VISITED, NEIGHBOR_OFFSETS
from .enums import SolveOutcome
from .models import Cell, Level
from .rules import Inventory, all_served, apply_tile_effects

logger = logging.getLogger(__name__)

# (packed cell index, inventory, remaining items per customer in customer order)
StateKey = tuple[int, Inventory, tuple[tuple[str, ...], ...]]


@dataclass(frozen=True)
class SolveResult:
    solvable: bool
    visited_states: int
    path: tuple[Cell, ...] | None = None
    truncated: bool = False

    @property
    def outcome(self) -> SolveOutcome:
        if self.solvable:
            return SolveOutcome.SOLVED
        if self.truncated:
            return SolveOutcome.INCONCLUSIVE
        return SolveOutcome.UNSOLVABLE

    @property
    def optimal_moves(self) -> int | None:
        """Moves in the shortest solution (the start cell is not a move)."""
        if self.path is None:
            return None
        return len(self.path) - 1


def _neighbors(level: Level, cell: Cell) -> list[Cell]:
    x, y = cell
    return [
        (x + dx, y + dy) for dx, dy in NEIGHBOR_OFFSETS
        if level.is_walkable((x + dx, y + dy))
    ]


def solve_level(level: Level, max_visited: int = DEFAULT_MAX_VISITED) -> SolveResult:
    """Decide whether *level* can be completed and find a shortest path.

    Expands at most *max_visited* states. Hitting that cap yields
    ``solvable=False`` with ``truncated=True``: the level may still be
    solvable.
    """
    customer_ids = level.customer_ids

    def encode(cell: Cell, inventory: Inventory, remaining: dict) -> StateKey:
        return (
            level.index_of(cell),
            inventory,
            tuple(remaining[cid] for cid in customer_ids),
        )

    start_remaining = {cid: tuple(sorted(level.orders[cid])) for cid in customer_ids}
    start_key = encode(level.start, (), start_remaining)

    queue: deque[tuple[Cell, Inventory, dict, StateKey]] = deque(
        [(level.start, (), start_remaining, start_key)]
    )
    # key -> (parent key, cell); doubles as the visited set
    parents: dict[StateKey, tuple[StateKey | None, Cell]] = {start_key: (None, level.start)}
    visited = 0

    while queue:
        cell, inventory, remaining, key = queue.popleft()
        visited += 1
        if visited > max_visited:
            logger.debug(
                "Search for %r truncated after %d states", level.level_id, max_visited,
            )
            return SolveResult(solvable=False, visited_states=visited, truncated=True)

        if all_served(remaining):
            path = _reconstruct(parents, key)
            logger.debug(
                "Level %r solved in %d moves (%d states)",
                level.level_id, len(path) - 1, visited,
            )
            return SolveResult(solvable=True, visited_states=visited, path=path)

        for nxt in _neighbors(level, cell):
            next_inventory, next_remaining = apply_tile_effects(level, nxt, inventory, remaining)
            next_remaining = {cid: tuple(sorted(items)) for cid, items in next_remaining.items()}
            next_key = encode(nxt, next_inventory, next_remaining)
            if next_key in parents:
                continue
            parents[next_key] = (key, nxt)
            queue.append((nxt, next_inventory, next_remaining, next_key))

    logger.debug("Level %r is unsolvable (%d states)", level.level_id, visited)
    return SolveResult(solvable=False, visited_states=visited)


def _reconstruct(
    parents: dict[StateKey, tuple[StateKey | None, Cell]],
    goal: StateKey,
) -> tuple[Cell, ...]:
    path: list[Cell] = []
    key: StateKey | None = goal
    while key is not None:
        key, cell = parents[key]
        path.append(cell)
    path.reverse()
    return tuple(path)
