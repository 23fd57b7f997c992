import random

from esper import World

from cookie_crunch.components.game_state import GameMode, GameState
from cookie_crunch.components.turn_state import TurnState


def create_world(
    *,
    initial_mode: GameMode = GameMode.IDLE,
    rng: random.Random | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())

    # Register the global game state and turn bookkeeping resources.
    world.create_entity(GameState(mode=initial_mode), TurnState())
    return world


def world_random(world: World) -> random.Random:
    """Return the Random instance attached by ``create_world``."""
    candidate = getattr(world, "random", None)
    if isinstance(candidate, random.Random):
        return candidate
    candidate = random.Random()
    setattr(world, "random", candidate)
    return candidate
