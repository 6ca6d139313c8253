"""Interactive pygame entry point.

Run with::

    python -m delivery_puzzle
    python -m delivery_puzzle --level-id rush-hour
    python -m delivery_puzzle --levels my_levels.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pygame

from .enums import SimStatus
from .constants import FPS, LEVELS_FILE, STEP_INTERVAL
from .catalog import daily_level, find_level, load_level_catalog
from .game import init_game, load_path, reset, start, step, try_extend, undo_last_step
from .level_builder import describe_level
from .renderer import cell_at, render, window_size
from .solver import solve_level

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Draw a path, serve every customer.")
    parser.add_argument("--levels", type=Path, default=LEVELS_FILE,
                        help="JSON level catalog (default: bundled levels)")
    parser.add_argument("--level-id", type=str, default=None,
                        help="Play this level instead of the level of the day")
    parser.add_argument("--debug", action="store_true",
                        help="Log engine transitions")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Launch the interactive puzzle."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(message)s",
    )

    levels = load_level_catalog(args.levels)
    if args.level_id:
        level = find_level(levels, args.level_id)
        if level is None:
            logger.error("No level %r in %s", args.level_id, args.levels)
            sys.exit(1)
    else:
        level = daily_level(levels)

    describe_level(level)
    result = solve_level(level)
    if result.solvable:
        logger.info("Optimal: %d moves (%d states searched)", result.optimal_moves, result.visited_states)
    else:
        logger.info("No solution found: %s (%d states searched)", result.outcome.value, result.visited_states)
    logger.info("Controls: drag=draw path, Space=run, R=reset, Ctrl+Z=undo, O=optimal path, Q=quit")

    pygame.init()
    screen = pygame.display.set_mode(window_size(level))
    pygame.display.set_caption(f"Delivery Puzzle - {level.level_id}")
    clock = pygame.time.Clock()

    font_sm = pygame.font.SysFont("Arial", 11)
    font_md = pygame.font.SysFont("Arial", 14, bold=True)

    state = init_game(level)
    drawing = False
    showing_optimal = False
    step_timer = 0.0

    running = True
    while running:
        dt = clock.tick(FPS) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_q, pygame.K_ESCAPE):
                    running = False

                elif event.key == pygame.K_SPACE:
                    if state.status == SimStatus.IDLE:
                        state = start(state)
                        step_timer = 0.0
                        logger.info("Running %d moves", len(state.path) - 1)

                elif event.key == pygame.K_r:
                    state = reset(state)
                    showing_optimal = False

                elif event.key == pygame.K_z and event.mod & pygame.KMOD_CTRL:
                    if not showing_optimal:
                        state = undo_last_step(state)

                elif event.key == pygame.K_o:
                    if result.path is not None and state.status != SimStatus.RUNNING:
                        state = load_path(level, result.path)
                        showing_optimal = True

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                drawing = state.status == SimStatus.IDLE and not showing_optimal
                cell = cell_at(level, event.pos)
                if drawing and cell is not None:
                    state = try_extend(state, cell)

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                drawing = False

            elif event.type == pygame.MOUSEMOTION and drawing:
                cell = cell_at(level, event.pos)
                if cell is not None:
                    state = try_extend(state, cell)

        if state.status == SimStatus.RUNNING:
            step_timer += dt
            while step_timer >= STEP_INTERVAL and state.status == SimStatus.RUNNING:
                step_timer -= STEP_INTERVAL
                state = step(state)
                if state.is_terminal:
                    logger.info("%s: %s", state.status.value.upper(), state.message)

        render(
            screen, state, font_sm, font_md,
            optimal_moves=result.optimal_moves,
            showing_optimal=showing_optimal,
        )
        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
