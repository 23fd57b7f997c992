from dataclasses import dataclass, field
from typing import Set

from cookie_crunch.components.swap import Swap


@dataclass(slots=True)
class LevelState:
    """Scoring and move-budget state attached to the board entity.

    ``possible_swaps`` is only refreshed by ``Level.detect_possible_swaps``.
    """
    target_score: int
    maximum_moves: int
    combo_multiplier: int = 1
    possible_swaps: Set[Swap] = field(default_factory=set)
