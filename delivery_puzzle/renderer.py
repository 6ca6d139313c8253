"""All pygame rendering functions for the delivery puzzle.

Rendering only reads :class:`GameState`; it never changes it.
"""

from __future__ import annotations

import pygame

from .enums import SimStatus
from .constants import (
    TILE_SIZE, PANEL_WIDTH, MIN_MAP_HEIGHT,
    BG_COLOR, FLOOR_COLOR, WALL_COLOR, OBSTACLE_COLOR, STATION_COLOR,
    CUSTOMER_COLOR, STAND_COLOR, OUTLINE_COLOR, LABEL_COLOR,
    PATH_COLOR, OPTIMAL_PATH_COLOR, AGENT_COLOR, SERVED_COLOR, ITEM_COLORS,
    PANEL_BG, PANEL_TEXT, PANEL_HEADER, PANEL_SEPARATOR,
    PANEL_GREEN, PANEL_YELLOW, PANEL_RED,
)
from .game import GameState
from .models import Cell, Level


def window_size(level: Level) -> tuple[int, int]:
    """Pixel size of the window for *level*: map plus side panel."""
    return (
        level.width * TILE_SIZE + PANEL_WIDTH,
        max(level.height * TILE_SIZE, MIN_MAP_HEIGHT),
    )


def cell_at(level: Level, pixel: tuple[int, int]) -> Cell | None:
    """Grid cell under *pixel*, or ``None`` if it is outside the map."""
    gx = pixel[0] // TILE_SIZE
    gy = pixel[1] // TILE_SIZE
    if not level.in_bounds((gx, gy)):
        return None
    return (gx, gy)


def _center(cell: Cell) -> tuple[int, int]:
    return (cell[0] * TILE_SIZE + TILE_SIZE // 2, cell[1] * TILE_SIZE + TILE_SIZE // 2)


def draw_item(surface: pygame.Surface, item: str, center: tuple[int, int],
              font: pygame.font.Font, radius: int = 9) -> None:
    """Draw one item as a coloured token with its id."""
    color = ITEM_COLORS.get(item, (200, 200, 200))
    pygame.draw.circle(surface, color, center, radius)
    pygame.draw.circle(surface, (0, 0, 0), center, radius, 1)
    txt = font.render(item, True, LABEL_COLOR)
    surface.blit(txt, txt.get_rect(center=center))


def draw_grid(surface: pygame.Surface, level: Level, font: pygame.font.Font) -> None:
    """Floor, walls, obstacles, stations and standing tiles."""
    for x in range(level.width):
        for y in range(level.height):
            cell = (x, y)
            rect = pygame.Rect(x * TILE_SIZE, y * TILE_SIZE, TILE_SIZE, TILE_SIZE)
            if cell in level.walls:
                pygame.draw.rect(surface, WALL_COLOR, rect)
            elif cell in level.standing:
                pygame.draw.rect(surface, STAND_COLOR, rect)
            else:
                pygame.draw.rect(surface, FLOOR_COLOR, rect)
            pygame.draw.rect(surface, OUTLINE_COLOR, rect, 1)

            if cell in level.obstacles:
                pygame.draw.rect(surface, OBSTACLE_COLOR, rect.inflate(-10, -10), border_radius=6)
            if cell in level.stations:
                pygame.draw.rect(surface, STATION_COLOR, rect.inflate(-6, -6), border_radius=4)
                draw_item(surface, level.stations[cell], rect.center, font)


def draw_customers(surface: pygame.Surface, state: GameState,
                   font_sm: pygame.font.Font, font_md: pygame.font.Font) -> None:
    """Customers with their id and the items they still want."""
    for cell, cid in state.level.customers.items():
        cx, cy = _center(cell)
        needs = state.remaining.get(cid, ())
        color = SERVED_COLOR if not needs else CUSTOMER_COLOR
        radius = TILE_SIZE // 2 - 4
        pygame.draw.circle(surface, color, (cx, cy), radius)
        pygame.draw.circle(surface, (0, 0, 0), (cx, cy), radius, 2)
        label = font_md.render(cid, True, LABEL_COLOR)
        surface.blit(label, label.get_rect(center=(cx, cy - 8)))
        for i, item in enumerate(needs):
            offset = (i - (len(needs) - 1) / 2) * 16
            draw_item(surface, item, (int(cx + offset), cy + 10), font_sm, radius=7)


def draw_path(surface: pygame.Surface, state: GameState, optimal: bool = False) -> None:
    """The authored path as a polyline; already walked cells are dimmed."""
    color = OPTIMAL_PATH_COLOR if optimal else PATH_COLOR
    points = [_center(c) for c in state.path]
    if len(points) >= 2:
        pygame.draw.lines(surface, color, False, points, 4)
    walked = state.cursor if state.status != SimStatus.IDLE else 0
    for i, point in enumerate(points):
        dot = (150, 150, 150) if i < walked else color
        pygame.draw.circle(surface, dot, point, 4)


def draw_agent(surface: pygame.Surface, state: GameState, font: pygame.font.Font) -> None:
    """The agent plus the items it carries (oldest on the left)."""
    cx, cy = _center(state.position)
    radius = TILE_SIZE // 2 - 8
    pygame.draw.circle(surface, AGENT_COLOR, (cx, cy), radius)
    pygame.draw.circle(surface, (0, 0, 0), (cx, cy), radius, 2)
    for i, item in enumerate(state.inventory):
        draw_item(surface, item, (cx - 8 + i * 16, cy - radius - 4), font, radius=7)


def draw_panel(
    surface: pygame.Surface,
    state: GameState,
    font_sm: pygame.font.Font,
    font_md: pygame.font.Font,
    optimal_moves: int | None = None,
) -> None:
    """Side panel: status, message, inventory, orders and controls."""
    level = state.level
    px = level.width * TILE_SIZE
    height = surface.get_height()
    pygame.draw.rect(surface, PANEL_BG, pygame.Rect(px, 0, PANEL_WIDTH, height))

    y = 10
    line_h = 16

    def header(text: str) -> None:
        nonlocal y
        pygame.draw.line(surface, PANEL_SEPARATOR, (px + 10, y), (px + PANEL_WIDTH - 10, y))
        y += 4
        surface.blit(font_md.render(text, True, PANEL_HEADER), (px + 10, y))
        y += line_h + 4

    def row(label_text: str, value: str, color: tuple = PANEL_TEXT) -> None:
        nonlocal y
        surface.blit(font_sm.render(f"  {label_text}: {value}", True, color), (px + 8, y))
        y += line_h

    header(f"LEVEL {level.level_id}" if level.level_id else "LEVEL")
    status_colors = {
        SimStatus.IDLE: PANEL_TEXT,
        SimStatus.RUNNING: PANEL_YELLOW,
        SimStatus.SUCCESS: PANEL_GREEN,
        SimStatus.FAILED: PANEL_RED,
    }
    row("Status", state.status.value, status_colors[state.status])
    row("Message", state.message)
    row("Path", f"{len(state.path) - 1} moves")
    row("Steps", str(state.steps_taken))
    row("Optimal", str(optimal_moves) if optimal_moves is not None else "--")
    y += 8

    header("CARRYING")
    row("Inventory", ", ".join(state.inventory) or "(empty)")
    y += 8

    header("ORDERS")
    for cid in level.customer_ids:
        needs = state.remaining.get(cid, ())
        if needs:
            row(cid, ", ".join(needs))
        else:
            row(cid, "served", PANEL_GREEN)

    controls = font_sm.render("Drag:path Space:run R:reset ^Z:undo O:optimal", True, PANEL_SEPARATOR)
    surface.blit(controls, (px + 10, height - 20))


def render(
    screen: pygame.Surface,
    state: GameState,
    font_sm: pygame.font.Font,
    font_md: pygame.font.Font,
    optimal_moves: int | None = None,
    showing_optimal: bool = False,
) -> None:
    """Full frame render: grid → path → customers → agent → panel."""
    screen.fill(BG_COLOR)
    draw_grid(screen, state.level, font_sm)
    draw_path(screen, state, optimal=showing_optimal)
    draw_customers(screen, state, font_sm, font_md)
    draw_agent(screen, state, font_sm)
    draw_panel(screen, state, font_sm, font_md, optimal_moves)
