"""Level builders: level data (parsed JSON) to :class:`Level`."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .enums import Direction
from .models import Cell, Level, standing_cell
from .validation import LevelValidationError, validate_level_data, wall_cells

logger = logging.getLogger(__name__)


def _cell(raw: Mapping[str, Any]) -> Cell:
    return (int(raw["x"]), int(raw["y"]))


def build_level(data: Mapping[str, Any]) -> Level:
    """Create a :class:`Level` from level data. No validation is done."""
    customers: dict[Cell, str] = {}
    standing: dict[Cell, str] = {}
    for raw in data.get("customers", []):
        pos = _cell(raw)
        cid = str(raw["id"])
        customers[pos] = cid
        standing[standing_cell(pos, Direction(raw["stand"]))] = cid

    return Level(
        width=int(data["width"]),
        height=int(data["height"]),
        start=_cell(data["start"]),
        walls=frozenset(wall_cells(data)),
        obstacles={_cell(o): str(o["type"]) for o in data.get("obstacles", [])},
        stations={_cell(s): str(s["item"]) for s in data.get("stations", [])},
        customers=customers,
        standing=standing,
        orders={
            str(cid): tuple(str(item) for item in items)
            for cid, items in data.get("orders", {}).items()
        },
        level_id=str(data.get("id", "")),
    )


def load_level(data: Mapping[str, Any]) -> Level:
    """Validate *data* and build it. Raises :class:`LevelValidationError`."""
    errors = validate_level_data(data)
    if errors:
        raise LevelValidationError(errors, level_id=str(data.get("id", "")))
    return build_level(data)


def describe_level(level: Level) -> None:
    """Log grid stats for *level*."""
    walkable = sum(
        1 for x in range(level.width) for y in range(level.height)
        if level.is_walkable((x, y))
    )
    logger.info("--- Level %s ---", level.level_id or "(unnamed)")
    logger.info("Grid:      %dx%d, %d walkable tiles", level.width, level.height, walkable)
    logger.info("Stations:  %d  Customers: %d", len(level.stations), len(level.customers))
    for cid in level.customer_ids:
        logger.info("  %s wants %s", cid, ", ".join(level.orders[cid]))
