"""Tile-effect rules shared by the simulation and the solver.

Inventories are tuples in pickup order (oldest first); remaining orders map
a customer id to the tuple of items still owed. Every function returns new
values and never mutates its arguments.
"""

from __future__ import annotations

from collections import Counter
from typing import Mapping

from .constants import INVENTORY_CAPACITY
from .models import Cell, Level

Inventory = tuple[str, ...]
Remaining = Mapping[str, tuple[str, ...]]


def push_item(inventory: Inventory, item: str) -> Inventory:
    """Append *item*, evicting the oldest entry first when full."""
    if len(inventory) >= INVENTORY_CAPACITY:
        inventory = inventory[len(inventory) - INVENTORY_CAPACITY + 1:]
    return inventory + (item,)


def can_serve_fully(inventory: Inventory, needs: tuple[str, ...]) -> bool:
    """``True`` if *inventory*, as a multiset, covers every item in *needs*."""
    have = Counter(inventory)
    have.subtract(needs)
    return all(count >= 0 for count in have.values())


def serve_customer(
    inventory: Inventory,
    needs: tuple[str, ...],
) -> tuple[Inventory, tuple[str, ...]]:
    """Hand over what the customer still needs.

    A full serve removes exactly the needed items and clears the order.
    Otherwise every inventory item (oldest first) that is still needed is
    handed over one instance at a time. Returns ``(inventory, needs)``.
    """
    if not needs:
        return inventory, needs

    if can_serve_fully(inventory, needs):
        left = list(inventory)
        for item in needs:
            left.remove(item)
        return tuple(left), ()

    left = list(inventory)
    owed = list(needs)
    for item in inventory:
        if item in owed:
            owed.remove(item)
            left.remove(item)
    return tuple(left), tuple(owed)


def _serve_at(
    level: Level,
    cell: Cell,
    inventory: Inventory,
    remaining: Remaining,
) -> tuple[Inventory, Remaining]:
    customer_id = level.standing.get(cell)
    if customer_id is None:
        return inventory, remaining
    needs = remaining.get(customer_id, ())
    if not needs:
        return inventory, remaining

    new_inventory, new_needs = serve_customer(inventory, needs)
    if new_needs == needs:
        return inventory, remaining
    updated = dict(remaining)
    updated[customer_id] = new_needs
    return new_inventory, updated


def apply_tile_effects(
    level: Level,
    cell: Cell,
    inventory: Inventory,
    remaining: Remaining,
) -> tuple[Inventory, Remaining]:
    """Apply the effects of entering *cell*.

    Order matters: serve, then pick up from a station, then serve again so
    an item picked up here can complete a delivery on the same tile.
    """
    inventory, remaining = _serve_at(level, cell, inventory, remaining)

    item = level.stations.get(cell)
    if item is not None:
        inventory = push_item(inventory, item)

    return _serve_at(level, cell, inventory, remaining)


def all_served(remaining: Remaining) -> bool:
    return all(len(needs) == 0 for needs in remaining.values())
