"""Level description loading.

Level files are JSON objects with three keys::

    {"tiles": [[0, 1, ...], ...], "targetScore": 1000, "moves": 15}

``tiles`` is row-major with the top row first; the resulting TileMask stores
row 0 at the bottom.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping

from cookie_crunch.components.tile_mask import TileMask
from cookie_crunch.constants import LEVELS_DIR, NUM_COLUMNS, NUM_LEVELS, NUM_ROWS

logger = logging.getLogger(__name__)


class LevelLoadError(ValueError):
    """Raised when a level description is missing or malformed."""


@dataclass(frozen=True, slots=True)
class LevelDescription:
    tile_mask: TileMask
    target_score: int
    maximum_moves: int
    name: str = ""


def level_name(number: int) -> str:
    return f"Level_{number}"


def available_levels(levels_dir: Path | None = None) -> List[str]:
    directory = Path(levels_dir) if levels_dir is not None else LEVELS_DIR
    return sorted(path.stem for path in directory.glob("Level_*.json"))


def next_level_number(number: int) -> int:
    """Level after ``number``, wrapping back to 1 after the last level."""
    return number + 1 if number < NUM_LEVELS else 1


def _require_int(data: Mapping[str, Any], key: str, *, minimum: int) -> int:
    if key not in data:
        raise LevelLoadError(f"Level description missing '{key}'")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise LevelLoadError(f"'{key}' must be an integer, got {value!r}")
    if value < minimum:
        raise LevelLoadError(f"'{key}' must be at least {minimum}, got {value}")
    return value


def parse_level_description(
    data: Any,
    *,
    columns: int = NUM_COLUMNS,
    rows: int = NUM_ROWS,
    name: str = "",
) -> LevelDescription:
    """Validate a decoded level description and build its TileMask."""
    if not isinstance(data, Mapping):
        raise LevelLoadError(f"Level description must be an object, got {type(data).__name__}")
    tiles = data.get("tiles")
    if not isinstance(tiles, list) or not tiles:
        raise LevelLoadError("Level description missing 'tiles' array")
    if len(tiles) != rows:
        raise LevelLoadError(f"'tiles' has {len(tiles)} rows, expected {rows}")
    for index, tile_row in enumerate(tiles):
        if not isinstance(tile_row, list) or len(tile_row) != columns:
            raise LevelLoadError(f"'tiles' row {index} must list {columns} flags")
        for flag in tile_row:
            if isinstance(flag, (bool, float)) or flag not in (0, 1):
                raise LevelLoadError(f"'tiles' row {index} holds non 0/1 flag {flag!r}")
    mask = TileMask.from_rows(tiles)
    if mask.enabled_count() == 0:
        raise LevelLoadError("'tiles' enables no cells")
    return LevelDescription(
        tile_mask=mask,
        target_score=_require_int(data, "targetScore", minimum=0),
        maximum_moves=_require_int(data, "moves", minimum=1),
        name=name,
    )


def load_level_description(
    name: str,
    levels_dir: Path | None = None,
    *,
    columns: int = NUM_COLUMNS,
    rows: int = NUM_ROWS,
) -> LevelDescription:
    """Read ``<name>.json`` from the levels directory."""
    directory = Path(levels_dir) if levels_dir is not None else LEVELS_DIR
    path = directory / f"{name}.json"
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except json.JSONDecodeError as exc:
        raise LevelLoadError(f"Level file {path} is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise LevelLoadError(f"Could not read level file {path}") from exc
    description = parse_level_description(payload, columns=columns, rows=rows, name=name)
    logger.info(
        "Loaded %s: %d playable cells, target %d in %d moves",
        name,
        description.tile_mask.enabled_count(),
        description.target_score,
        description.maximum_moves,
    )
    return description
