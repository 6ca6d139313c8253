"""
Tests for level-data validation and load_level.
"""

import copy

import pytest

from delivery_puzzle import LevelValidationError, load_level, validate_level_data


# -- Helpers ----------------------------------------------------------

VALID = {
    "id": "valid",
    "width": 7, "height": 6, "border_walls": True,
    "start": {"x": 1, "y": 1},
    "walls": [],
    "obstacles": [{"x": 3, "y": 3, "type": "plant_a"}],
    "stations": [
        {"x": 3, "y": 1, "item": "D1"},
        {"x": 5, "y": 1, "item": "D2"},
    ],
    "customers": [
        {"x": 5, "y": 4, "id": "A", "stand": "up"},
        {"x": 1, "y": 4, "id": "B", "stand": "right"},
    ],
    "orders": {"A": ["D1"], "B": ["D2", "D2"]},
}


def _variant(**changes):
    data = copy.deepcopy(VALID)
    data.update(changes)
    return data


def _has_error(errors, fragment):
    return any(fragment in e for e in errors)


# -- Tests ------------------------------------------------------------

def test_valid_level_has_no_errors():
    assert validate_level_data(VALID) == []


def test_load_level_builds_valid_data():
    level = load_level(VALID)
    assert level.level_id == "valid"
    assert level.standing == {(5, 3): "A", (2, 4): "B"}
    assert level.orders["B"] == ("D2", "D2")


def test_load_level_raises_with_all_errors():
    data = _variant(start={"x": 0, "y": 0}, orders={"A": [], "B": ["D2"]})
    with pytest.raises(LevelValidationError) as exc:
        load_level(data)
    assert exc.value.level_id == "valid"
    assert len(exc.value.errors) >= 2
    assert isinstance(exc.value, ValueError)


def test_bad_dimensions():
    assert validate_level_data(_variant(width=0)) == ["width/height must be positive integers"]
    assert validate_level_data(_variant(height="5")) == ["width/height must be positive integers"]
    assert validate_level_data(_variant(width=True)) == ["width/height must be positive integers"]


def test_out_of_bounds_cells():
    errors = validate_level_data(_variant(
        start={"x": 9, "y": 1},
        walls=[{"x": -1, "y": 2}],
        stations=[{"x": 3, "y": 8, "item": "D1"}],
    ))
    assert _has_error(errors, "start is out of bounds")
    assert _has_error(errors, "wall out of bounds")
    assert _has_error(errors, "station out of bounds")


def test_start_on_wall():
    errors = validate_level_data(_variant(start={"x": 0, "y": 2}))
    assert _has_error(errors, "start overlaps a wall")


def test_unknown_items_and_obstacles():
    errors = validate_level_data(_variant(
        stations=[{"x": 3, "y": 1, "item": "X9"}],
        obstacles=[{"x": 3, "y": 3, "type": "piano"}],
        orders={"A": ["D1"], "B": ["Z1"]},
    ))
    assert _has_error(errors, "unknown station item")
    assert _has_error(errors, "unknown obstacle type")
    assert _has_error(errors, "invalid item")


def test_overlaps_rejected():
    errors = validate_level_data(_variant(
        obstacles=[{"x": 3, "y": 1, "type": "plant_a"}, {"x": 1, "y": 1, "type": "stool"}],
    ))
    assert _has_error(errors, "station overlaps obstacle")
    assert _has_error(errors, "obstacle overlaps start")


def test_customer_overlaps():
    data = _variant()
    data["customers"][0] = {"x": 5, "y": 1, "id": "A", "stand": "down"}
    errors = validate_level_data(data)
    assert _has_error(errors, "customer A overlaps station")


def test_duplicate_customer_id():
    data = _variant()
    data["customers"][1]["id"] = "A"
    errors = validate_level_data(data)
    assert _has_error(errors, "customer A appears multiple times")


def test_stand_tile_checks():
    data = _variant()
    data["customers"][0]["stand"] = "down"     # (5,5) is the border wall
    data["customers"][1]["stand"] = "sideways"
    errors = validate_level_data(data)
    assert _has_error(errors, "customer A stand tile overlaps wall")
    assert _has_error(errors, "invalid stand direction")


def test_stand_tile_on_station_or_start_rejected():
    data = _variant()
    data["customers"][0] = {"x": 3, "y": 2, "id": "A", "stand": "up"}       # (3,1) station
    data["customers"][1] = {"x": 1, "y": 2, "id": "B", "stand": "up"}       # (1,1) start
    errors = validate_level_data(data)
    assert _has_error(errors, "customer A stand tile overlaps station")
    assert _has_error(errors, "customer B stand tile overlaps start")


def test_shared_stand_tile_rejected():
    data = _variant()
    data["customers"] = [
        {"x": 2, "y": 3, "id": "A", "stand": "right"},
        {"x": 4, "y": 3, "id": "B", "stand": "left"},
    ]
    data["obstacles"] = []
    errors = validate_level_data(data)
    assert _has_error(errors, "shares a stand tile")


def test_stand_tile_on_other_customer_rejected():
    data = _variant()
    data["customers"] = [
        {"x": 2, "y": 3, "id": "A", "stand": "right"},
        {"x": 3, "y": 3, "id": "B", "stand": "down"},
    ]
    data["obstacles"] = []
    errors = validate_level_data(data)
    assert _has_error(errors, "customer A stand tile overlaps a customer")


def test_order_rules():
    errors = validate_level_data(_variant(orders={"A": [], "B": ["D1", "D1", "D2"], "C": ["D1"]}))
    assert _has_error(errors, "order for A must have 1 to 2 items")
    assert _has_error(errors, "order for B must have 1 to 2 items")
    assert _has_error(errors, "order for unknown customer C")

    errors = validate_level_data(_variant(orders={"A": ["D1"]}))
    assert _has_error(errors, "missing order for B")


def test_no_customers():
    errors = validate_level_data(_variant(customers=[], orders={}))
    assert _has_error(errors, "level has no customers")


def test_unreachable_stand_tile():
    data = _variant(walls=[{"x": 4, "y": y} for y in range(1, 5)])
    data["stations"] = [{"x": 3, "y": 1, "item": "D1"}]
    errors = validate_level_data(data)
    assert _has_error(errors, "customer A stand tile is unreachable from start")
    assert not _has_error(errors, "customer B stand tile is unreachable")


def test_window_must_sit_on_top_wall():
    ok = _variant(obstacles=[{"x": 3, "y": 0, "type": "window_single_a"}])
    assert validate_level_data(ok) == []

    errors = validate_level_data(_variant(obstacles=[{"x": 3, "y": 2, "type": "window_single_a"}]))
    assert _has_error(errors, "window must be on the top wall")
    assert _has_error(errors, "window must overlap a wall")

    errors = validate_level_data(_variant(obstacles=[{"x": 0, "y": 0, "type": "window_single_a"}]))
    assert _has_error(errors, "window must be on the top wall")


def test_non_window_obstacle_on_wall_rejected():
    errors = validate_level_data(_variant(obstacles=[{"x": 3, "y": 0, "type": "plant_a"}]))
    assert _has_error(errors, "obstacle overlaps wall")


def test_malformed_entries_reported_not_raised():
    errors = validate_level_data(_variant(
        start=None,
        walls=[{"x": "1", "y": 2}],
        stations=[["not", "a", "dict"]],
        customers=[{"x": 5, "y": 4}],
        orders={},
    ))
    assert _has_error(errors, "start is missing or malformed")
    assert _has_error(errors, "malformed wall entry")
    assert _has_error(errors, "malformed station entry")
    assert _has_error(errors, "malformed customer entry")


def test_null_or_non_list_collections_reported():
    errors = validate_level_data(_variant(stations=None, walls=None))
    assert _has_error(errors, "stations must be a list")
    assert _has_error(errors, "walls must be a list")

    errors = validate_level_data(_variant(customers={"id": "A"}, obstacles="plant_a"))
    assert _has_error(errors, "customers must be a list")
    assert _has_error(errors, "obstacles must be a list")
    assert _has_error(errors, "level has no customers")


def test_load_level_rejects_null_stations():
    with pytest.raises(LevelValidationError) as exc:
        load_level(_variant(stations=None))
    assert "stations must be a list" in exc.value.errors
