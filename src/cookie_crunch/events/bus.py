from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"


# ============================================================================
# INPUT
# ============================================================================
EVENT_SWIPE = "swipe"                      # payload: column=int, row=int, horizontal_delta=int, vertical_delta=int
EVENT_SWAP_REQUEST = "swap_request"        # payload: swap=Swap


# ============================================================================
# SWAPS & BOARD MECHANICS
# ============================================================================
EVENT_SWAP_PERFORMED = "swap_performed"        # payload: swap=Swap
EVENT_SWAP_INVALID = "swap_invalid"            # payload: swap=Swap
EVENT_MATCH_CLEARED = "match_cleared"          # payload: chains=set[Chain], depth=int
EVENT_GRAVITY_APPLIED = "gravity_applied"      # payload: columns=list[list[Cookie]]
EVENT_REFILL_COMPLETED = "refill_completed"    # payload: columns=list[list[Cookie]]
EVENT_CASCADE_COMPLETE = "cascade_complete"    # payload: depth=int
EVENT_BOARD_SHUFFLED = "board_shuffled"        # payload: cookies=set[Cookie], reason=str


# ============================================================================
# SCORE & TURN FLOW
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"          # payload: score=int, delta=int, target_score=int
EVENT_TURN_ENDED = "turn_ended"                # payload: moves_left=int, score=int, possible_swaps=int


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_GAME_STARTED = "game_started"            # payload: cookies=set[Cookie], target_score=int, moves=int
EVENT_GAME_MODE_CHANGED = "game_mode_changed"  # payload: previous_mode=GameMode|None, new_mode=GameMode
