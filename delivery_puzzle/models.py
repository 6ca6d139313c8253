"""Data models: Level and the standing-cell computation."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .enums import Direction

Cell = tuple[int, int]


def standing_cell(customer: Cell, direction: Direction) -> Cell:
    """Return the tile *direction* of *customer* from which it is served."""
    dx, dy = direction.delta
    return (customer[0] + dx, customer[1] + dy)


def border_cells(width: int, height: int) -> set[Cell]:
    """Every cell on the outer edge of a ``width`` x ``height`` grid."""
    cells: set[Cell] = set()
    for x in range(width):
        cells.add((x, 0))
        cells.add((x, height - 1))
    for y in range(height):
        cells.add((0, y))
        cells.add((width - 1, y))
    return cells


def is_adjacent(a: Cell, b: Cell) -> bool:
    """``True`` if *a* and *b* are exactly one orthogonal step apart."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


@dataclass(frozen=True)
class Level:
    """Static puzzle definition.

    Every game state holds a reference to the same instance, so the lookup
    tables are wrapped in read-only mapping proxies on construction.
    """

    width: int
    height: int
    start: Cell
    walls: frozenset[Cell] = frozenset()
    obstacles: Mapping[Cell, str] = field(default_factory=dict)
    stations: Mapping[Cell, str] = field(default_factory=dict)
    customers: Mapping[Cell, str] = field(default_factory=dict)
    standing: Mapping[Cell, str] = field(default_factory=dict)
    orders: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    level_id: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "walls", frozenset(self.walls))
        for name in ("obstacles", "stations", "customers", "standing"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))
        orders = {cid: tuple(items) for cid, items in self.orders.items()}
        object.__setattr__(self, "orders", MappingProxyType(orders))

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def is_blocked(self, cell: Cell) -> bool:
        """Walls, obstacles and customer cells can never be stepped on."""
        return cell in self.walls or cell in self.obstacles or cell in self.customers

    def is_walkable(self, cell: Cell) -> bool:
        return self.in_bounds(cell) and not self.is_blocked(cell)

    def index_of(self, cell: Cell) -> int:
        """Pack *cell* into a single integer (row-major)."""
        return cell[1] * self.width + cell[0]

    @property
    def customer_ids(self) -> tuple[str, ...]:
        return tuple(sorted(self.orders))
