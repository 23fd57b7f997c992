from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

from cookie_crunch.components.chain import Chain, ChainType
from cookie_crunch.components.cookie import Cookie
from cookie_crunch.components.cookie_type import CookieType
from cookie_crunch.components.swap import Swap
from cookie_crunch.constants import BASE_CHAIN_SCORE, MIN_CHAIN_LENGTH
from cookie_crunch.utils.array2d import Array2D

Position = Tuple[int, int]
CookieGrid = Array2D[Cookie]
TypeOverrides = Dict[Position, CookieType]


def cookie_type_at(
    grid: CookieGrid, column: int, row: int, overrides: TypeOverrides | None = None
) -> Optional[CookieType]:
    """Type of the cookie at a cell, honouring hypothetical overrides."""
    if overrides and (column, row) in overrides:
        return overrides[(column, row)]
    cookie = grid.get(column, row)
    return cookie.cookie_type if cookie is not None else None


def _run_length(
    grid: CookieGrid,
    column: int,
    row: int,
    step: Position,
    cookie_type: CookieType,
    overrides: TypeOverrides | None,
) -> int:
    d_col, d_row = step
    length = 0
    c, r = column + d_col, row + d_row
    while grid.in_bounds(c, r) and cookie_type_at(grid, c, r, overrides) == cookie_type:
        length += 1
        c += d_col
        r += d_row
    return length


def has_chain_at(
    grid: CookieGrid, column: int, row: int, overrides: TypeOverrides | None = None
) -> bool:
    """Return True if the cell sits in a horizontal or vertical run of three or more."""
    cookie_type = cookie_type_at(grid, column, row, overrides)
    if cookie_type is None:
        return False
    horizontal = 1 + _run_length(grid, column, row, (-1, 0), cookie_type, overrides) \
        + _run_length(grid, column, row, (1, 0), cookie_type, overrides)
    if horizontal >= MIN_CHAIN_LENGTH:
        return True
    vertical = 1 + _run_length(grid, column, row, (0, -1), cookie_type, overrides) \
        + _run_length(grid, column, row, (0, 1), cookie_type, overrides)
    return vertical >= MIN_CHAIN_LENGTH


def swap_creates_chain(grid: CookieGrid, cookie_a: Cookie, cookie_b: Cookie) -> bool:
    """Predict whether exchanging two cookies would leave either in a chain.

    The live grid is untouched; the exchange is modelled as a type override on
    the two cells.
    """
    pos_a = (cookie_a.column, cookie_a.row)
    pos_b = (cookie_b.column, cookie_b.row)
    overrides = {pos_a: cookie_b.cookie_type, pos_b: cookie_a.cookie_type}
    return has_chain_at(grid, *pos_a, overrides) or has_chain_at(grid, *pos_b, overrides)


def find_possible_swaps(grid: CookieGrid) -> Set[Swap]:
    """Enumerate right- and up-neighbour swaps that would produce a chain."""
    swaps: Set[Swap] = set()
    for row in range(grid.rows):
        for column in range(grid.columns):
            cookie = grid.get(column, row)
            if cookie is None:
                continue
            if column + 1 < grid.columns:
                right = grid.get(column + 1, row)
                if right is not None and swap_creates_chain(grid, cookie, right):
                    swaps.add(Swap(cookie, right))
            if row + 1 < grid.rows:
                above = grid.get(column, row + 1)
                if above is not None and swap_creates_chain(grid, cookie, above):
                    swaps.add(Swap(cookie, above))
    return swaps


def detect_horizontal_matches(grid: CookieGrid) -> List[Chain]:
    chains: List[Chain] = []
    for row in range(grid.rows):
        column = 0
        while column < grid.columns - 2:
            cookie = grid.get(column, row)
            if cookie is not None:
                match_type = cookie.cookie_type
                if (cookie_type_at(grid, column + 1, row) == match_type
                        and cookie_type_at(grid, column + 2, row) == match_type):
                    chain = Chain(ChainType.HORIZONTAL)
                    while column < grid.columns and cookie_type_at(grid, column, row) == match_type:
                        chain.add_cookie(grid.get(column, row))
                        column += 1
                    chains.append(chain)
                    continue
            column += 1
    return chains


def detect_vertical_matches(grid: CookieGrid) -> List[Chain]:
    chains: List[Chain] = []
    for column in range(grid.columns):
        row = 0
        while row < grid.rows - 2:
            cookie = grid.get(column, row)
            if cookie is not None:
                match_type = cookie.cookie_type
                if (cookie_type_at(grid, column, row + 1) == match_type
                        and cookie_type_at(grid, column, row + 2) == match_type):
                    chain = Chain(ChainType.VERTICAL)
                    while row < grid.rows and cookie_type_at(grid, column, row) == match_type:
                        chain.add_cookie(grid.get(column, row))
                        row += 1
                    chains.append(chain)
                    continue
            row += 1
    return chains


def chain_score(chain: Chain, combo_multiplier: int) -> int:
    return BASE_CHAIN_SCORE * (chain.length - 2) * combo_multiplier
