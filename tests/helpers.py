from __future__ import annotations

import random
from typing import Iterable, Sequence

from esper import World

from cookie_crunch.components.cookie_type import CookieType
from cookie_crunch.components.swap import Swap
from cookie_crunch.factories.level_loader import parse_level_description
from cookie_crunch.systems.level import Level
from cookie_crunch.world import create_world

SPAWNABLE = CookieType.spawnable()

LETTER_TYPES = {
    'C': CookieType.CROISSANT,
    'U': CookieType.CUPCAKE,
    'D': CookieType.DANISH,
    'O': CookieType.DONUT,
    'M': CookieType.MACAROON,
    'S': CookieType.SUGAR_COOKIE,
}


class ScriptedRandom(random.Random):
    """Random whose choice() replays a fixed sequence of values."""

    def __init__(self, values: Iterable):
        super().__init__(0)
        self._values = iter(values)

    def choice(self, seq):
        value = next(self._values)
        assert value in seq, f"Scripted value {value!r} not among choices"
        return value


def make_level(
    world: World | None = None,
    *,
    columns: int = 9,
    rows: int = 9,
    tiles: Sequence[Sequence[int]] | None = None,
    target_score: int = 1000,
    moves: int = 15,
    seed: int = 1234,
    rng: random.Random | None = None,
) -> Level:
    """Build a Level from an inline description; tiles are listed top row first."""
    world = world or create_world(rng=random.Random(seed))
    if tiles is None:
        tiles = [[1] * columns for _ in range(rows)]
    description = parse_level_description(
        {"tiles": [list(row) for row in tiles], "targetScore": target_score, "moves": moves},
        columns=columns,
        rows=rows,
        name="test",
    )
    return Level(world, description, columns=columns, rows=rows, rng=rng)


def stalemate_type(column: int, row: int) -> CookieType:
    return SPAWNABLE[(column + 2 * row) % len(SPAWNABLE)]


def fill_stalemate_pattern(level: Level) -> None:
    """Fill enabled cells with a pattern holding no chains and no legal swaps."""
    level.clear_cookies()
    for row in range(level.rows):
        for column in range(level.columns):
            if level.tile_at(column, row):
                level.place_cookie(column, row, stalemate_type(column, row))


def fill_board(level: Level, rows_top_first: Sequence[str]) -> None:
    """Place cookies from letter rows (top row first); '.' leaves a cell empty."""
    level.clear_cookies()
    height = len(rows_top_first)
    for index, letters in enumerate(rows_top_first):
        row = height - 1 - index
        for column, letter in enumerate(letters):
            if letter == '.':
                continue
            level.place_cookie(column, row, LETTER_TYPES[letter])


def grid_types(level: Level) -> dict:
    return {
        (column, row): cookie.cookie_type
        for column in range(level.columns)
        for row in range(level.rows)
        if (cookie := level.cookie_at(column, row)) is not None
    }


def fill_near_match(level: Level) -> Swap:
    """Stalemate board with sugar cookies at (0,0), (1,0) and (3,0).

    Returns the single swap of (2,0) and (3,0) that completes a horizontal run
    of three along the bottom row.
    """
    fill_stalemate_pattern(level)
    for column in (0, 1, 3):
        level.place_cookie(column, 0, CookieType.SUGAR_COOKIE)
    return Swap(level.cookie_at(2, 0), level.cookie_at(3, 0))


def empty_enabled_cells(level: Level) -> list:
    return [
        (column, row)
        for column in range(level.columns)
        for row in range(level.rows)
        if level.tile_at(column, row) and level.cookie_at(column, row) is None
    ]
