from dataclasses import dataclass


@dataclass(slots=True)
class TurnState:
    """Tracks score and per-turn progress shared across systems."""

    score: int = 0
    moves_left: int = 0
    turns_taken: int = 0
    cascade_active: bool = False
    cascade_depth: int = 0
