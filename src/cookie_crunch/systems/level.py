from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional, Set

from esper import World

from cookie_crunch.components.board import Board
from cookie_crunch.components.chain import Chain
from cookie_crunch.components.cookie import Cookie
from cookie_crunch.components.cookie_type import CookieType
from cookie_crunch.components.level_state import LevelState
from cookie_crunch.components.swap import Swap
from cookie_crunch.components.tile_mask import TileMask
from cookie_crunch.constants import MAX_SHUFFLE_ATTEMPTS, NUM_COLUMNS, NUM_ROWS
from cookie_crunch.factories.level_loader import LevelDescription, LevelLoadError
from cookie_crunch.systems import board_ops
from cookie_crunch.utils.array2d import Array2D
from cookie_crunch.world import world_random

logger = logging.getLogger(__name__)


class Level:
    """Grid, match and cascade engine for one level.

    Cookies are esper entities carrying a ``Cookie`` component; the level keeps
    them in an ``Array2D`` for positional lookup. The board itself is an entity
    holding ``Board``, ``TileMask`` and ``LevelState``.

    Every operation is synchronous. Callers drive a turn as
    ``is_possible_swap`` -> ``perform_swap`` -> (``remove_matches`` ->
    ``fill_holes`` -> ``top_up_cookies``) until no chains remain ->
    ``detect_possible_swaps``.
    """

    def __init__(
        self,
        world: World,
        description: LevelDescription,
        *,
        columns: int = NUM_COLUMNS,
        rows: int = NUM_ROWS,
        rng: random.Random | None = None,
    ) -> None:
        if not isinstance(description, LevelDescription):
            raise TypeError(f"Level requires a LevelDescription, got {type(description).__name__}")
        mask = description.tile_mask
        if (mask.columns, mask.rows) != (columns, rows):
            raise LevelLoadError(
                f"Tile mask is {mask.columns}x{mask.rows}, expected {columns}x{rows}"
            )
        self.world = world
        self.random = rng or world_random(world)
        self._cookies: Array2D[Cookie] = Array2D(columns, rows)
        self.board_entity = world.create_entity(
            Board(columns=columns, rows=rows, level_name=description.name),
            mask,
            LevelState(
                target_score=description.target_score,
                maximum_moves=description.maximum_moves,
            ),
        )

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    @property
    def columns(self) -> int:
        return self.board.columns

    @property
    def rows(self) -> int:
        return self.board.rows

    @property
    def name(self) -> str:
        return self.board.level_name

    @property
    def tile_mask(self) -> TileMask:
        return self.world.component_for_entity(self.board_entity, TileMask)

    @property
    def state(self) -> LevelState:
        return self.world.component_for_entity(self.board_entity, LevelState)

    @property
    def target_score(self) -> int:
        return self.state.target_score

    @property
    def maximum_moves(self) -> int:
        return self.state.maximum_moves

    @property
    def combo_multiplier(self) -> int:
        return self.state.combo_multiplier

    @property
    def possible_swaps(self) -> Set[Swap]:
        return set(self.state.possible_swaps)

    def cookie_at(self, column: int, row: int) -> Optional[Cookie]:
        return self._cookies.get(column, row)

    def tile_at(self, column: int, row: int) -> bool:
        return self.tile_mask.is_enabled(column, row)

    def cookies(self) -> Set[Cookie]:
        return set(self._cookies.values())

    # ------------------------------------------------------------------
    # Cookie lifecycle
    # ------------------------------------------------------------------
    def _random_type(self) -> CookieType:
        return CookieType.random(self.random)

    def _create_cookie(self, column: int, row: int, cookie_type: CookieType) -> Cookie:
        entity = self.world.create_entity()
        cookie = Cookie(column=column, row=row, cookie_type=cookie_type, entity=entity)
        self.world.add_component(entity, cookie)
        self._cookies.set(column, row, cookie)
        return cookie

    def _discard_cookie(self, cookie: Cookie) -> None:
        if self._cookies.get(cookie.column, cookie.row) is cookie:
            self._cookies.set(cookie.column, cookie.row, None)
        self.world.delete_entity(cookie.entity, immediate=True)

    def clear_cookies(self) -> None:
        for cookie in list(self._cookies.values()):
            self._discard_cookie(cookie)

    def place_cookie(self, column: int, row: int, cookie_type: CookieType) -> Cookie:
        """Put a cookie of a specific type on an enabled cell, replacing any occupant."""
        if not self.tile_at(column, row):
            raise ValueError(f"Cell ({column}, {row}) is disabled by the tile mask")
        if cookie_type is CookieType.UNKNOWN:
            raise ValueError("UNKNOWN cookies cannot be placed on the board")
        existing = self._cookies.get(column, row)
        if existing is not None:
            self._discard_cookie(existing)
        return self._create_cookie(column, row, cookie_type)

    def create_initial_cookies(self) -> Set[Cookie]:
        """Fill every enabled cell without completing a run with the cells to the left or below."""
        self.clear_cookies()
        created: Set[Cookie] = set()
        for row in range(self.rows):
            for column in range(self.columns):
                if not self.tile_at(column, row):
                    continue
                while True:
                    cookie_type = self._random_type()
                    completes_row = (
                        column >= 2
                        and board_ops.cookie_type_at(self._cookies, column - 1, row) == cookie_type
                        and board_ops.cookie_type_at(self._cookies, column - 2, row) == cookie_type
                    )
                    completes_column = (
                        row >= 2
                        and board_ops.cookie_type_at(self._cookies, column, row - 1) == cookie_type
                        and board_ops.cookie_type_at(self._cookies, column, row - 2) == cookie_type
                    )
                    if not (completes_row or completes_column):
                        break
                created.add(self._create_cookie(column, row, cookie_type))
        return created

    def shuffle(self, *, max_attempts: int = MAX_SHUFFLE_ATTEMPTS) -> Set[Cookie]:
        """Regenerate the board until at least one legal swap exists."""
        for attempt in range(1, max_attempts + 1):
            created = self.create_initial_cookies()
            if self.detect_possible_swaps():
                logger.debug(
                    "Shuffled board after %d attempt(s); %d legal swaps",
                    attempt,
                    len(self.state.possible_swaps),
                )
                return created
        raise RuntimeError(f"Unable to shuffle a board with a legal swap in {max_attempts} attempts")

    # ------------------------------------------------------------------
    # Swaps
    # ------------------------------------------------------------------
    def has_chain_at(self, column: int, row: int) -> bool:
        return board_ops.has_chain_at(self._cookies, column, row)

    def detect_possible_swaps(self) -> Set[Swap]:
        swaps = board_ops.find_possible_swaps(self._cookies)
        self.state.possible_swaps = swaps
        return set(swaps)

    def is_possible_swap(self, swap: Swap) -> bool:
        return swap in self.state.possible_swaps

    def perform_swap(self, swap: Swap) -> None:
        """Exchange two cookies' cells without checking legality."""
        cookie_a, cookie_b = swap.cookie_a, swap.cookie_b
        col_a, row_a = cookie_a.column, cookie_a.row
        col_b, row_b = cookie_b.column, cookie_b.row
        self._cookies.set(col_a, row_a, cookie_b)
        cookie_b.column, cookie_b.row = col_a, row_a
        self._cookies.set(col_b, row_b, cookie_a)
        cookie_a.column, cookie_a.row = col_b, row_b

    def swap_for_delta(
        self, column: int, row: int, horizontal_delta: int, vertical_delta: int
    ) -> Optional[Swap]:
        """Build the swap a swipe from (column, row) asks for.

        Returns None unless the swipe moves exactly one cell horizontally or
        vertically onto another cookie.
        """
        if abs(horizontal_delta) + abs(vertical_delta) != 1:
            return None
        to_column = column + horizontal_delta
        to_row = row + vertical_delta
        if not self._cookies.in_bounds(to_column, to_row):
            return None
        from_cookie = self.cookie_at(column, row)
        to_cookie = self.cookie_at(to_column, to_row)
        if from_cookie is None or to_cookie is None:
            return None
        return Swap(from_cookie, to_cookie)

    # ------------------------------------------------------------------
    # Matches
    # ------------------------------------------------------------------
    def detect_horizontal_matches(self) -> List[Chain]:
        return board_ops.detect_horizontal_matches(self._cookies)

    def detect_vertical_matches(self) -> List[Chain]:
        return board_ops.detect_vertical_matches(self._cookies)

    def _remove_cookies(self, chains: Iterable[Chain], removed: Set[Cookie]) -> None:
        for chain in chains:
            for cookie in chain:
                if cookie in removed:
                    continue
                removed.add(cookie)
                self._discard_cookie(cookie)

    def remove_matches(self) -> Set[Chain]:
        """Clear every chain on the board and score them, horizontal chains first."""
        horizontal_chains = self.detect_horizontal_matches()
        vertical_chains = self.detect_vertical_matches()
        removed: Set[Cookie] = set()
        self._remove_cookies(horizontal_chains, removed)
        self._remove_cookies(vertical_chains, removed)
        self.calculate_scores(horizontal_chains)
        self.calculate_scores(vertical_chains)
        return set(horizontal_chains) | set(vertical_chains)

    def calculate_scores(self, chains: Iterable[Chain]) -> None:
        state = self.state
        for chain in chains:
            chain.score = board_ops.chain_score(chain, state.combo_multiplier)
            state.combo_multiplier += 1

    def reset_combo_multiplier(self) -> None:
        self.state.combo_multiplier = 1

    # ------------------------------------------------------------------
    # Gravity and refill
    # ------------------------------------------------------------------
    def fill_holes(self) -> List[List[Cookie]]:
        """Drop cookies into the empty enabled cells below them.

        Returns the moved cookies per column, bottom to top, for columns where
        anything fell.
        """
        columns: List[List[Cookie]] = []
        for column in range(self.columns):
            moved: List[Cookie] = []
            for row in range(self.rows):
                if not self.tile_at(column, row) or self._cookies.get(column, row) is not None:
                    continue
                for lookup in range(row + 1, self.rows):
                    cookie = self._cookies.get(column, lookup)
                    if cookie is None:
                        continue
                    self._cookies.set(column, lookup, None)
                    self._cookies.set(column, row, cookie)
                    cookie.row = row
                    moved.append(cookie)
                    break
            if moved:
                columns.append(moved)
        return columns

    def top_up_cookies(self) -> List[List[Cookie]]:
        """Spawn new cookies in the empty cells at the top of each column.

        A new cookie never repeats the type of the one created just before it.
        Returns the new cookies per column, top to bottom.
        """
        columns: List[List[Cookie]] = []
        previous_type = CookieType.UNKNOWN
        for column in range(self.columns):
            created: List[Cookie] = []
            row = self.rows - 1
            while row >= 0 and self._cookies.get(column, row) is None:
                if self.tile_at(column, row):
                    cookie_type = self._random_type()
                    while cookie_type == previous_type:
                        cookie_type = self._random_type()
                    previous_type = cookie_type
                    created.append(self._create_cookie(column, row, cookie_type))
                row -= 1
            if created:
                columns.append(created)
        return columns
