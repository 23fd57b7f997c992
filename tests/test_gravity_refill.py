import random

import pytest

from cookie_crunch.components.cookie_type import CookieType
from tests.helpers import (
    LETTER_TYPES,
    ScriptedRandom,
    empty_enabled_cells,
    fill_board,
    fill_stalemate_pattern,
    make_level,
)


def assert_no_floating_holes(level):
    for column in range(level.columns):
        for row in range(level.rows):
            if not level.tile_at(column, row) or level.cookie_at(column, row) is not None:
                continue
            above = [level.cookie_at(column, r) for r in range(row + 1, level.rows)]
            assert all(cookie is None for cookie in above), f'Hole at {(column, row)} below a cookie'


def test_fill_holes_drops_nearest_cookie_into_each_hole():
    level = make_level(columns=5, rows=5)
    fill_board(level, [
        "CU...",
        ".D...",
        "O....",
        "..M..",
        "M.U..",
    ])
    columns = level.fill_holes()
    assert [[cookie.cookie_type for cookie in column] for column in columns] == [
        [LETTER_TYPES['O'], LETTER_TYPES['C']],
        [LETTER_TYPES['D'], LETTER_TYPES['U']],
    ]
    assert [(c.column, c.row) for c in columns[0]] == [(0, 1), (0, 2)]
    assert [(c.column, c.row) for c in columns[1]] == [(1, 0), (1, 1)]
    for column in columns:
        for cookie in column:
            assert level.cookie_at(cookie.column, cookie.row) is cookie
    assert level.cookie_at(0, 4) is None
    assert_no_floating_holes(level)


def test_fill_holes_without_holes_returns_nothing():
    level = make_level()
    fill_stalemate_pattern(level)
    assert level.fill_holes() == []


def test_cookies_fall_through_disabled_cells():
    tiles = [[1] * 9 for _ in range(9)]
    tiles[9 - 1 - 3][4] = 0  # disable (4, 3)
    level = make_level(tiles=tiles)
    fill_stalemate_pattern(level)
    for column in (3, 4, 5):
        level.place_cookie(column, 2, CookieType.DONUT)
    falling = level.cookie_at(4, 4)
    chains = level.remove_matches()
    assert len(chains) == 1 and next(iter(chains)).length == 3

    columns = level.fill_holes()
    lengths = sorted(len(column) for column in columns)
    assert lengths == [5, 6, 6]
    assert level.cookie_at(4, 2) is falling
    assert falling.row == 2
    assert level.cookie_at(4, 3) is None
    assert_no_floating_holes(level)


def test_top_up_fills_every_empty_enabled_cell():
    level = make_level(columns=5, rows=5)
    fill_board(level, [
        "CU...",
        ".D...",
        "O....",
        "..M..",
        "M.U..",
    ])
    level.fill_holes()
    columns = level.top_up_cookies()
    assert sum(len(column) for column in columns) == 18
    assert empty_enabled_cells(level) == []
    for column in columns:
        rows = [cookie.row for cookie in column]
        assert rows == sorted(rows, reverse=True), 'Created top to bottom'
        for cookie in column:
            assert level.cookie_at(cookie.column, cookie.row) is cookie


def test_top_up_skips_disabled_cells():
    tiles = [
        [0, 1, 1],
        [1, 1, 1],
        [1, 1, 1],
    ]
    level = make_level(columns=3, rows=3, tiles=tiles)
    columns = level.top_up_cookies()
    assert level.cookie_at(0, 2) is None
    assert [len(column) for column in columns] == [2, 3, 3]
    assert empty_enabled_cells(level) == []


def test_top_up_never_repeats_the_previous_type():
    C, U, D = CookieType.CROISSANT, CookieType.CUPCAKE, CookieType.DANISH
    O, M, S = CookieType.DONUT, CookieType.MACAROON, CookieType.SUGAR_COOKIE
    rng = ScriptedRandom([C, C, U, U, D, D, O, M, S])
    level = make_level(columns=3, rows=3, rng=rng)
    fill_board(level, [
        "...",
        "...",
        "CUD",
    ])
    columns = level.top_up_cookies()
    assert [[cookie.cookie_type for cookie in column] for column in columns] == [
        [C, U],
        [D, O],
        [M, S],
    ]


@pytest.mark.parametrize("seed", range(5))
def test_random_top_up_has_no_consecutive_duplicates(seed):
    level = make_level(seed=seed, rng=random.Random(seed))
    columns = level.top_up_cookies()
    created = [cookie.cookie_type for column in columns for cookie in column]
    assert len(created) == 81
    assert all(a != b for a, b in zip(created, created[1:]))
