from __future__ import annotations

import logging
from typing import Set

from esper import World

from cookie_crunch.components.cookie import Cookie
from cookie_crunch.components.game_state import GameMode
from cookie_crunch.components.swap import Swap
from cookie_crunch.components.turn_state import TurnState
from cookie_crunch.events.bus import (
    EventBus,
    EVENT_BOARD_SHUFFLED,
    EVENT_CASCADE_COMPLETE,
    EVENT_GAME_STARTED,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_CLEARED,
    EVENT_REFILL_COMPLETED,
    EVENT_SCORE_CHANGED,
    EVENT_SWAP_INVALID,
    EVENT_SWAP_PERFORMED,
    EVENT_SWAP_REQUEST,
    EVENT_SWIPE,
    EVENT_TURN_ENDED,
)
from cookie_crunch.systems.level import Level
from cookie_crunch.utils.game_state import get_game_state, set_game_mode

logger = logging.getLogger(__name__)


def get_or_create_turn_state(world: World) -> TurnState:
    """Return the shared TurnState component, creating it if absent."""
    for _, state in world.get_component(TurnState):
        return state
    state = TurnState()
    world.create_entity(state)
    return state


class TurnSystem:
    """Runs one full game step per swap request.

    A legal swap is performed and its cascades resolved to completion before
    the next request is looked at; illegal swaps only produce
    ``EVENT_SWAP_INVALID`` so the renderer can animate the rejection.
    """

    def __init__(self, world: World, event_bus: EventBus, level: Level):
        self.world = world
        self.event_bus = event_bus
        self.level = level
        self.event_bus.subscribe(EVENT_SWAP_REQUEST, self.on_swap_request)
        self.event_bus.subscribe(EVENT_SWIPE, self.on_swipe)

    @property
    def state(self) -> TurnState:
        return get_or_create_turn_state(self.world)

    def begin_game(self) -> Set[Cookie]:
        state = self.state
        state.score = 0
        state.turns_taken = 0
        state.moves_left = self.level.maximum_moves
        state.cascade_active = False
        state.cascade_depth = 0
        self.level.reset_combo_multiplier()
        cookies = self.level.shuffle()
        logger.info(
            "%s started: target %d in %d moves",
            self.level.name or "Level",
            self.level.target_score,
            self.level.maximum_moves,
        )
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        self.event_bus.emit(
            EVENT_GAME_STARTED,
            level_name=self.level.name,
            cookies=cookies,
            target_score=self.level.target_score,
            moves=state.moves_left,
        )
        return cookies

    def on_swipe(self, sender, **kwargs):
        column = kwargs.get('column')
        row = kwargs.get('row')
        if column is None or row is None:
            return
        swap = self.level.swap_for_delta(
            column,
            row,
            kwargs.get('horizontal_delta', 0),
            kwargs.get('vertical_delta', 0),
        )
        if swap is None:
            return
        self.handle_swap(swap)

    def on_swap_request(self, sender, **kwargs):
        swap = kwargs.get('swap')
        if swap is None:
            return
        self.handle_swap(swap)

    def handle_swap(self, swap: Swap) -> bool:
        """Apply a swap if it is legal; returns whether it was performed."""
        if get_game_state(self.world).mode != GameMode.PLAYING or self.state.cascade_active:
            return False
        if not self.level.is_possible_swap(swap):
            self.event_bus.emit(EVENT_SWAP_INVALID, swap=swap)
            return False
        self.level.perform_swap(swap)
        self.event_bus.emit(EVENT_SWAP_PERFORMED, swap=swap)
        self.resolve_cascades()
        self.end_turn()
        return True

    def resolve_cascades(self) -> int:
        """Remove chains, collapse and refill until the board settles; returns the depth."""
        state = self.state
        state.cascade_active = True
        state.cascade_depth = 0
        try:
            while True:
                chains = self.level.remove_matches()
                if not chains:
                    break
                state.cascade_depth += 1
                self.event_bus.emit(EVENT_MATCH_CLEARED, chains=chains, depth=state.cascade_depth)
                gained = sum(chain.score for chain in chains)
                state.score += gained
                self.event_bus.emit(
                    EVENT_SCORE_CHANGED,
                    score=state.score,
                    delta=gained,
                    target_score=self.level.target_score,
                )
                self.event_bus.emit(EVENT_GRAVITY_APPLIED, columns=self.level.fill_holes())
                self.event_bus.emit(EVENT_REFILL_COMPLETED, columns=self.level.top_up_cookies())
        finally:
            state.cascade_active = False
        logger.debug("Cascade settled at depth %d, score %d", state.cascade_depth, state.score)
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=state.cascade_depth)
        return state.cascade_depth

    def end_turn(self) -> None:
        state = self.state
        swaps = self.level.detect_possible_swaps()
        state.moves_left -= 1
        state.turns_taken += 1
        self.event_bus.emit(
            EVENT_TURN_ENDED,
            moves_left=state.moves_left,
            score=state.score,
            possible_swaps=len(swaps),
        )
        if state.score >= self.level.target_score:
            logger.info("Level complete with %d points after %d turns", state.score, state.turns_taken)
            set_game_mode(self.world, self.event_bus, GameMode.LEVEL_COMPLETE)
        elif state.moves_left <= 0:
            logger.info("Out of moves with %d of %d points", state.score, self.level.target_score)
            set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER)
        elif not swaps:
            logger.info("No legal swaps left; reshuffling")
            cookies = self.level.shuffle()
            self.event_bus.emit(EVENT_BOARD_SHUFFLED, cookies=cookies, reason="stalemate")
