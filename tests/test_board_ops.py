from cookie_crunch.components.cookie_type import CookieType
from cookie_crunch.systems import board_ops
from tests.helpers import fill_board, fill_near_match, grid_types, make_level


def test_cookie_type_at_prefers_overrides():
    level = make_level(columns=3, rows=3)
    fill_board(level, [
        "CUD",
        "UD.",
        "DOM",
    ])
    grid = level._cookies
    assert board_ops.cookie_type_at(grid, 0, 0) is CookieType.DANISH
    assert board_ops.cookie_type_at(grid, 2, 1) is None
    overrides = {(2, 1): CookieType.DONUT}
    assert board_ops.cookie_type_at(grid, 2, 1, overrides) is CookieType.DONUT


def test_has_chain_at_empty_cell_is_false():
    level = make_level(columns=3, rows=3)
    fill_board(level, [
        "CCC",
        "...",
        "...",
    ])
    assert board_ops.has_chain_at(level._cookies, 1, 2)
    assert not board_ops.has_chain_at(level._cookies, 1, 1)


def test_swap_prediction_does_not_mutate_the_grid():
    level = make_level()
    swap = fill_near_match(level)
    before = grid_types(level)
    assert board_ops.swap_creates_chain(level._cookies, swap.cookie_a, swap.cookie_b)
    assert grid_types(level) == before
    assert (swap.cookie_a.column, swap.cookie_a.row) == (2, 0)


def test_chain_score_formula():
    level = make_level(columns=5, rows=5)
    fill_board(level, [
        "UDOMC",
        "DOMCU",
        "OMCUD",
        "MCUDO",
        "SSSSO",
    ])
    chain = board_ops.detect_horizontal_matches(level._cookies)[0]
    assert board_ops.chain_score(chain, 1) == 120
    assert board_ops.chain_score(chain, 3) == 360
