"""
Tests for the level model and the tile-effect rules shared by the simulation
and the solver.
"""

import dataclasses

import pytest

from delivery_puzzle import (
    Direction, Level, build_level, border_cells, standing_cell, is_adjacent,
    push_item, can_serve_fully, serve_customer, apply_tile_effects, all_served,
)


# -- Helpers ----------------------------------------------------------

def _stand_on_station_level():
    """
    5x5, border walls. Customer A at (2,3) is served from (2,2), which is
    also an F1 station.
    """
    return build_level({
        "id": "stand-on-station",
        "width": 5, "height": 5, "border_walls": True,
        "start": {"x": 1, "y": 1},
        "stations": [{"x": 2, "y": 2, "item": "F1"}],
        "customers": [{"x": 2, "y": 3, "id": "A", "stand": "up"}],
        "orders": {"A": ["D2"]},
    })


# -- Level model ------------------------------------------------------

def test_standing_cell_directions():
    assert standing_cell((3, 3), Direction.LEFT) == (2, 3)
    assert standing_cell((3, 3), Direction.RIGHT) == (4, 3)
    assert standing_cell((3, 3), Direction.UP) == (3, 2)
    assert standing_cell((3, 3), Direction.DOWN) == (3, 4)


def test_is_adjacent_is_manhattan_one():
    assert is_adjacent((1, 1), (2, 1))
    assert is_adjacent((1, 1), (1, 0))
    assert not is_adjacent((1, 1), (1, 1))
    assert not is_adjacent((1, 1), (2, 2))
    assert not is_adjacent((1, 1), (3, 1))


def test_border_cells():
    cells = border_cells(4, 3)
    assert len(cells) == 10
    assert (0, 0) in cells and (3, 2) in cells
    assert (1, 1) not in cells


def test_build_level_derives_standing_cells():
    level = _stand_on_station_level()
    assert level.customers == {(2, 3): "A"}
    assert level.standing == {(2, 2): "A"}
    assert level.orders == {"A": ("D2",)}
    assert (0, 0) in level.walls and (4, 4) in level.walls
    assert level.level_id == "stand-on-station"


def test_level_walkability_and_bounds():
    level = _stand_on_station_level()
    assert level.is_walkable((1, 1))
    assert level.is_walkable((2, 2))
    assert not level.is_walkable((0, 1))     # wall
    assert not level.is_walkable((2, 3))     # customer
    assert not level.is_walkable((5, 1))     # out of bounds
    assert not level.in_bounds((-1, 0))
    assert level.index_of((2, 3)) == 3 * 5 + 2


def test_level_is_frozen():
    level = _stand_on_station_level()
    with pytest.raises(dataclasses.FrozenInstanceError):
        level.width = 9


def test_level_tables_are_read_only():
    level = _stand_on_station_level()
    with pytest.raises(TypeError):
        level.orders["A"] = ()
    with pytest.raises(TypeError):
        level.stations[(1, 1)] = "F1"
    with pytest.raises(TypeError):
        level.standing.clear()


def test_level_copies_caller_tables():
    orders = {"A": ["D1"]}
    level = Level(width=3, height=3, start=(1, 1), orders=orders)
    orders["A"].append("D2")
    orders["B"] = ["F1"]
    assert level.orders == {"A": ("D1",)}


# -- Inventory --------------------------------------------------------

def test_push_item_drops_oldest():
    inv = ()
    inv = push_item(inv, "D1")
    inv = push_item(inv, "D2")
    assert inv == ("D1", "D2")
    inv = push_item(inv, "F1")
    assert inv == ("D2", "F1")
    assert "D1" not in inv


def test_inventory_never_exceeds_capacity():
    inv = ()
    for i, item in enumerate(["D1", "D2", "F1", "F2", "F3", "D1", "D1"]):
        inv = push_item(inv, item)
        assert len(inv) <= 2
        if i >= 2:
            assert inv[-1] == item


def test_push_item_keeps_duplicates():
    inv = push_item(push_item((), "D1"), "D1")
    assert inv == ("D1", "D1")


# -- Serving ----------------------------------------------------------

def test_can_serve_fully_is_multiset_check():
    assert can_serve_fully(("D2", "D1"), ("D1", "D2"))
    assert can_serve_fully(("D1", "D1"), ("D1", "D1"))
    assert not can_serve_fully(("D1",), ("D1", "D1"))
    assert not can_serve_fully((), ("D1",))


def test_full_serve_removes_only_needed_items():
    inv, needs = serve_customer(("F1", "D1"), ("D1",))
    assert inv == ("F1",)
    assert needs == ()


def test_partial_serve_hands_over_what_matches():
    inv, needs = serve_customer(("D1", "F2"), ("D1", "D2"))
    assert inv == ("F2",)
    assert needs == ("D2",)


def test_partial_serve_takes_one_instance_per_need():
    inv, needs = serve_customer(("D1", "D1"), ("D1", "D2"))
    assert inv == ("D1",)
    assert needs == ("D2",)


def test_serve_with_nothing_useful_changes_nothing():
    inv, needs = serve_customer(("F1", "F2"), ("D1",))
    assert inv == ("F1", "F2")
    assert needs == ("D1",)


def test_serve_already_served_customer_is_noop():
    assert serve_customer(("D1",), ()) == (("D1",), ())


# -- Tile effects -----------------------------------------------------

def test_pickup_then_serve_on_same_tile():
    level = build_level({
        "width": 5, "height": 5, "border_walls": True,
        "start": {"x": 1, "y": 1},
        "stations": [{"x": 2, "y": 2, "item": "D1"}],
        "customers": [{"x": 2, "y": 3, "id": "A", "stand": "up"}],
        "orders": {"A": ["D1"]},
    })
    inv, remaining = apply_tile_effects(level, (2, 2), (), {"A": ("D1",)})
    assert inv == ()
    assert remaining == {"A": ()}


def test_serve_happens_before_pickup_evicts():
    # Without the pre-pickup serve, picking up F1 would evict the D2 first
    level = _stand_on_station_level()
    inv, remaining = apply_tile_effects(level, (2, 2), ("D2", "D1"), {"A": ("D2",)})
    assert remaining == {"A": ()}
    assert inv == ("D1", "F1")


def test_plain_tile_has_no_effect():
    level = _stand_on_station_level()
    remaining = {"A": ("D2",)}
    inv, new_remaining = apply_tile_effects(level, (1, 1), ("D1",), remaining)
    assert inv == ("D1",)
    assert new_remaining is remaining


def test_tile_effects_do_not_mutate_inputs():
    level = _stand_on_station_level()
    remaining = {"A": ("D2",)}
    apply_tile_effects(level, (2, 2), ("D2",), remaining)
    assert remaining == {"A": ("D2",)}


def test_all_served():
    assert all_served({"A": (), "B": ()})
    assert not all_served({"A": (), "B": ("D1",)})
