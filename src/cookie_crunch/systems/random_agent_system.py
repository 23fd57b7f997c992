from __future__ import annotations

import random
from typing import List, Optional

from esper import World

from cookie_crunch.components.game_state import GameMode
from cookie_crunch.components.swap import Swap
from cookie_crunch.events.bus import EventBus, EVENT_SWIPE, EVENT_TICK
from cookie_crunch.systems.level import Level
from cookie_crunch.systems.turn_system import get_or_create_turn_state
from cookie_crunch.utils.game_state import get_game_state


class RandomAgentSystem:
    """Plays legal swaps at random, swiping the way a player would.

    Acts on ``EVENT_TICK`` once ``decision_delay`` seconds have passed since its
    last move, and only while the game is in ``GameMode.PLAYING``.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        level: Level,
        rng: Optional[random.Random] = None,
        *,
        decision_delay: float = 0.0,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.level = level
        self.random = rng or random.Random()
        self.decision_delay = decision_delay
        self.delay_remaining = decision_delay
        self.swipes_sent = 0
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **payload) -> None:
        if get_game_state(self.world).mode != GameMode.PLAYING:
            return
        if get_or_create_turn_state(self.world).cascade_active:
            return
        dt = float(payload.get("dt", 0.0))
        if self.delay_remaining > 0.0:
            self.delay_remaining = max(0.0, self.delay_remaining - dt)
            if self.delay_remaining > 0.0:
                return
        swap = self._choose_swap()
        if swap is None:
            return
        self.delay_remaining = self.decision_delay
        self.swipes_sent += 1
        source, target = swap.cookie_a, swap.cookie_b
        self.event_bus.emit(
            EVENT_SWIPE,
            column=source.column,
            row=source.row,
            horizontal_delta=target.column - source.column,
            vertical_delta=target.row - source.row,
        )

    def _choose_swap(self) -> Optional[Swap]:
        # Order candidates by position so a seeded rng replays the same game.
        candidates: List[Swap] = sorted(
            self.level.possible_swaps,
            key=lambda swap: (
                swap.cookie_a.row,
                swap.cookie_a.column,
                swap.cookie_b.row,
                swap.cookie_b.column,
            ),
        )
        if not candidates:
            return None
        return self.random.choice(candidates)
