from datetime import date
from pathlib import Path

# ============================================================
# RULES
# ============================================================
INVENTORY_CAPACITY = 2      # drop-oldest FIFO
MIN_ORDER_ITEMS    = 1
MAX_ORDER_ITEMS    = 2

# Drinks (D*) and food (F*) handed out by stations
ITEM_IDS = ("D1", "D2", "F1", "F2", "F3")

OBSTACLE_TYPES = (
    "plant_a", "plant_b", "plant_two", "shelf_a", "shelf_b", "bookshelf",
    "stool", "chair_l", "chair_r", "table_single", "table_l", "table_m",
    "table_r", "window_single_a", "window_double_a", "window_double_b", "cat",
)
# Window obstacles sit on top of the top border wall
WINDOW_PREFIX = "window"

NEIGHBOR_OFFSETS = [(1, 0), (-1, 0), (0, 1), (0, -1)]

# ============================================================
# SOLVER
# ============================================================
DEFAULT_MAX_VISITED = 50_000

# ============================================================
# MESSAGES
# ============================================================
MSG_READY   = "draw a path"
MSG_RESET   = "try a new path"
MSG_RUNNING = "running"
MSG_OPTIMAL = "optimal path"
MSG_FAILED  = "customers left unhappy"
MSG_SUCCESS = "all orders served in {steps} steps"

# ============================================================
# LEVEL CATALOG
# ============================================================
LEVELS_FILE = Path(__file__).parent / "data" / "levels.json"
EPOCH_DAY = date(1970, 1, 1)

# ============================================================
# DISPLAY
# ============================================================
TILE_SIZE     = 48
PANEL_WIDTH   = 260
MIN_MAP_HEIGHT = 360       # room for the side panel on tiny levels
FPS           = 30
STEP_INTERVAL = 0.25       # seconds between simulation steps while running

BG_COLOR        = (210, 215, 222)
FLOOR_COLOR     = (236, 226, 206)
WALL_COLOR      = (92, 74, 62)
OBSTACLE_COLOR  = (120, 150, 90)
STATION_COLOR   = (255, 200, 50)
CUSTOMER_COLOR  = (175, 165, 225)
STAND_COLOR     = (200, 235, 200)
OUTLINE_COLOR   = (175, 180, 188)
LABEL_COLOR     = (35, 35, 35)
PATH_COLOR      = (80, 140, 255)
OPTIMAL_PATH_COLOR = (60, 200, 60)
AGENT_COLOR     = (255, 60, 60)
SERVED_COLOR    = (80, 220, 100)

ITEM_COLORS = {
    "D1": (90, 170, 240),
    "D2": (230, 120, 60),
    "F1": (240, 210, 90),
    "F2": (200, 90, 150),
    "F3": (140, 100, 60),
}

PANEL_BG        = (30, 30, 40)
PANEL_TEXT      = (200, 200, 210)
PANEL_HEADER    = (140, 160, 255)
PANEL_SEPARATOR = (60, 60, 80)
PANEL_GREEN     = (80, 220, 100)
PANEL_YELLOW    = (230, 200, 60)
PANEL_RED       = (230, 70, 70)
