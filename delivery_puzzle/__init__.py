"""
Delivery puzzle engine.

Public API re-exports. Nothing here imports pygame; the interactive front
end lives in ``delivery_puzzle.__main__`` and ``delivery_puzzle.renderer``.
"""

from .enums import SimStatus, Direction, SolveOutcome
from .constants import *  # noqa: F401,F403
from .models import Cell, Level, standing_cell, is_adjacent, border_cells
from .rules import push_item, can_serve_fully, serve_customer, apply_tile_effects, all_served
from .game import (
    GameState, init_game, load_path,
    can_extend, try_extend, reset, undo_last_step,
    start, step,
)
from .solver import SolveResult, solve_level
from .validation import LevelValidationError, validate_level_data
from .level_builder import build_level, load_level, describe_level
from .catalog import load_level_catalog, daily_level, find_level, day_number
from .headless import run_path, run_headless

__all__ = [
    "SimStatus", "Direction", "SolveOutcome",
    "Cell", "Level", "standing_cell", "is_adjacent", "border_cells",
    "push_item", "can_serve_fully", "serve_customer", "apply_tile_effects", "all_served",
    "GameState", "init_game", "load_path",
    "can_extend", "try_extend", "reset", "undo_last_step",
    "start", "step",
    "SolveResult", "solve_level",
    "LevelValidationError", "validate_level_data",
    "build_level", "load_level", "describe_level",
    "load_level_catalog", "daily_level", "find_level", "day_number",
    "run_path", "run_headless",
]
