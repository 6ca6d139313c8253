"""Level catalog: loading levels from JSON and picking the level of the day."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path

from .constants import EPOCH_DAY, LEVELS_FILE
from .level_builder import build_level
from .models import Level
from .validation import validate_level_data

logger = logging.getLogger(__name__)


def load_level_catalog(path: Path = LEVELS_FILE) -> list[Level]:
    """Load every valid level from the JSON list at *path*, in file order.

    Invalid entries are logged and skipped. File and JSON errors propagate.
    """
    raw = json.loads(Path(path).read_text())
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a JSON list of levels")

    levels: list[Level] = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict):
            logger.warning("Skipping entry %d in %s: not an object", i, path)
            continue
        errors = validate_level_data(entry)
        if errors:
            logger.warning(
                "Skipping level %r in %s: %s",
                entry.get("id", i), path, "; ".join(errors),
            )
            continue
        levels.append(build_level(entry))

    logger.debug("Loaded %d/%d levels from %s", len(levels), len(raw), path)
    return levels


def day_number(day: date) -> int:
    """Days since 1970-01-01."""
    return (day - EPOCH_DAY).days


def daily_level(levels: list[Level], day: date | None = None) -> Level:
    """The level for *day* (UTC today by default), cycling through *levels*."""
    if not levels:
        raise ValueError("level catalog is empty")
    if day is None:
        day = datetime.now(timezone.utc).date()
    return levels[day_number(day) % len(levels)]


def find_level(levels: list[Level], level_id: str) -> Level | None:
    for level in levels:
        if level.level_id == level_id:
            return level
    return None
