"""Level-data validation run before a level reaches the engine.

:func:`validate_level_data` collects every problem it finds so a level
builder can show them all at once. The engine itself never re-checks.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Mapping

from .constants import (
    ITEM_IDS, MAX_ORDER_ITEMS, MIN_ORDER_ITEMS, NEIGHBOR_OFFSETS,
    OBSTACLE_TYPES, WINDOW_PREFIX,
)
from .enums import Direction
from .models import Cell, border_cells, standing_cell


class LevelValidationError(ValueError):
    """Raised when level data breaks one or more level invariants."""

    def __init__(self, errors: list[str], level_id: str = "") -> None:
        self.errors = list(errors)
        self.level_id = level_id
        name = f"level {level_id!r}" if level_id else "level"
        super().__init__(f"{name} is invalid: " + "; ".join(self.errors))


def parse_cell(raw: Any) -> Cell | None:
    """``(x, y)`` from ``{"x": .., "y": ..}``, or ``None`` if malformed."""
    if not isinstance(raw, Mapping):
        return None
    x, y = raw.get("x"), raw.get("y")
    if not isinstance(x, int) or not isinstance(y, int) or isinstance(x, bool) or isinstance(y, bool):
        return None
    return (x, y)


def entries(data: Mapping[str, Any], key: str) -> list:
    """The list stored under *key*, or an empty list if absent or not a list."""
    raw = data.get(key)
    return raw if isinstance(raw, list) else []


def wall_cells(data: Mapping[str, Any]) -> set[Cell]:
    walls = {c for c in (parse_cell(w) for w in entries(data, "walls")) if c is not None}
    if data.get("border_walls"):
        walls |= border_cells(int(data["width"]), int(data["height"]))
    return walls


def _reachable(
    start: Cell,
    width: int,
    height: int,
    blocked: set[Cell],
) -> set[Cell]:
    """4-connected flood fill from *start* over unblocked, in-bounds cells."""
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for dx, dy in NEIGHBOR_OFFSETS:
            nxt = (x + dx, y + dy)
            if nxt in seen or nxt in blocked:
                continue
            if not (0 <= nxt[0] < width and 0 <= nxt[1] < height):
                continue
            seen.add(nxt)
            queue.append(nxt)
    return seen


def validate_level_data(data: Mapping[str, Any]) -> list[str]:
    """Return a list of problems with *data*; empty means valid."""
    errors: list[str] = []

    width, height = data.get("width"), data.get("height")
    if (
        not isinstance(width, int) or not isinstance(height, int)
        or isinstance(width, bool) or isinstance(height, bool)
        or width <= 0 or height <= 0
    ):
        return ["width/height must be positive integers"]

    def in_bounds(cell: Cell) -> bool:
        return 0 <= cell[0] < width and 0 <= cell[1] < height

    def where(cell: Cell) -> str:
        return f"({cell[0]},{cell[1]})"

    start = parse_cell(data.get("start"))
    if start is None:
        errors.append("start is missing or malformed")
    elif not in_bounds(start):
        errors.append("start is out of bounds")

    for key in ("walls", "obstacles", "stations", "customers"):
        if key in data and not isinstance(data[key], list):
            errors.append(f"{key} must be a list")

    # Walls
    for raw in entries(data, "walls"):
        cell = parse_cell(raw)
        if cell is None:
            errors.append(f"malformed wall entry: {raw!r}")
        elif not in_bounds(cell):
            errors.append(f"wall out of bounds at {where(cell)}")
    walls = wall_cells(data)

    # Obstacles
    obstacles: set[Cell] = set()
    for raw in entries(data, "obstacles"):
        cell = parse_cell(raw)
        if cell is None:
            errors.append(f"malformed obstacle entry: {raw!r}")
            continue
        kind = raw.get("type")
        if kind not in OBSTACLE_TYPES:
            errors.append(f"unknown obstacle type {kind!r} at {where(cell)}")
        if not in_bounds(cell):
            errors.append(f"obstacle out of bounds at {where(cell)}")
        if isinstance(kind, str) and kind.startswith(WINDOW_PREFIX):
            on_top_border = cell[1] == 0 and 0 < cell[0] < width - 1
            if not on_top_border:
                errors.append(f"window must be on the top wall at {where(cell)}")
            if cell not in walls:
                errors.append(f"window must overlap a wall at {where(cell)}")
        elif cell in walls:
            errors.append(f"obstacle overlaps wall at {where(cell)}")
        if cell == start:
            errors.append(f"obstacle overlaps start at {where(cell)}")
        if cell in obstacles:
            errors.append(f"multiple obstacles on {where(cell)}")
        obstacles.add(cell)

    # Stations
    stations: set[Cell] = set()
    for raw in entries(data, "stations"):
        cell = parse_cell(raw)
        if cell is None:
            errors.append(f"malformed station entry: {raw!r}")
            continue
        item = raw.get("item")
        if item not in ITEM_IDS:
            errors.append(f"unknown station item {item!r} at {where(cell)}")
        if not in_bounds(cell):
            errors.append(f"station out of bounds at {where(cell)}")
        if cell in walls:
            errors.append(f"station overlaps wall at {where(cell)}")
        if cell in obstacles:
            errors.append(f"station overlaps obstacle at {where(cell)}")
        if cell == start:
            errors.append(f"station overlaps start at {where(cell)}")
        if cell in stations:
            errors.append(f"multiple stations on {where(cell)}")
        stations.add(cell)

    # Customers and their standing cells
    customers: dict[Cell, str] = {}
    stands: dict[Cell, str] = {}
    seen_ids: set[str] = set()
    for raw in entries(data, "customers"):
        cell = parse_cell(raw)
        cid = raw.get("id") if isinstance(raw, Mapping) else None
        if cell is None or not isinstance(cid, str) or not cid:
            errors.append(f"malformed customer entry: {raw!r}")
            continue
        if not in_bounds(cell):
            errors.append(f"customer {cid} out of bounds at {where(cell)}")
        if cell in walls:
            errors.append(f"customer {cid} overlaps wall at {where(cell)}")
        if cell in obstacles:
            errors.append(f"customer {cid} overlaps obstacle at {where(cell)}")
        if cell in stations:
            errors.append(f"customer {cid} overlaps station at {where(cell)}")
        if cell == start:
            errors.append(f"customer {cid} overlaps start at {where(cell)}")
        if cell in customers:
            errors.append(f"multiple customers on {where(cell)}")
        if cid in seen_ids:
            errors.append(f"customer {cid} appears multiple times")
        seen_ids.add(cid)
        customers[cell] = cid

        try:
            direction = Direction(raw.get("stand"))
        except ValueError:
            errors.append(f"customer {cid} has invalid stand direction {raw.get('stand')!r}")
            continue
        stand = standing_cell(cell, direction)
        if not in_bounds(stand):
            errors.append(f"customer {cid} stand tile is out of bounds")
        if stand in walls:
            errors.append(f"customer {cid} stand tile overlaps wall")
        if stand in obstacles:
            errors.append(f"customer {cid} stand tile overlaps obstacle")
        if stand in stations:
            errors.append(f"customer {cid} stand tile overlaps station")
        if stand == start:
            errors.append(f"customer {cid} stand tile overlaps start")
        if stand in stands:
            errors.append(f"customer {cid} shares a stand tile with customer {stands[stand]}")
        stands[stand] = cid

    # A stand tile may only be checked against customers once all are known
    for stand, cid in stands.items():
        if stand in customers:
            errors.append(f"customer {cid} stand tile overlaps a customer")

    # Orders
    orders = data.get("orders", {})
    if not isinstance(orders, Mapping):
        errors.append("orders must be a mapping of customer id to items")
        orders = {}
    for cid in sorted(seen_ids):
        order = orders.get(cid)
        if not isinstance(order, list):
            errors.append(f"missing order for {cid}")
            continue
        if not MIN_ORDER_ITEMS <= len(order) <= MAX_ORDER_ITEMS:
            errors.append(
                f"order for {cid} must have {MIN_ORDER_ITEMS} to {MAX_ORDER_ITEMS} items"
            )
        for item in order:
            if item not in ITEM_IDS:
                errors.append(f"order for {cid} has invalid item: {item!r}")
    for cid in orders:
        if cid not in seen_ids:
            errors.append(f"order for unknown customer {cid}")
    if not seen_ids:
        errors.append("level has no customers")

    # Reachability
    if start is not None and in_bounds(start):
        if start in walls:
            errors.append("start overlaps a wall")
        else:
            reachable = _reachable(start, width, height, walls | obstacles | set(customers))
            for stand, cid in stands.items():
                if in_bounds(stand) and stand not in reachable:
                    errors.append(f"customer {cid} stand tile is unreachable from start")

    return errors
