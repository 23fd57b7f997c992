"""Entry point for a headless Cookie Crunch session.

Sets up the ECS world, event bus and systems, then lets the random agent play
from the chosen level. Each completed level advances to the next one, wrapping
after the last, until ``--levels`` have been played or a level is lost.
"""
import argparse
import logging
import random

from cookie_crunch.components.game_state import GameMode
from cookie_crunch.events.bus import EVENT_TICK, EVENT_SCORE_CHANGED, EventBus
from cookie_crunch.factories.level_loader import (
    available_levels,
    level_name,
    load_level_description,
    next_level_number,
)
from cookie_crunch.systems.level import Level
from cookie_crunch.systems.random_agent_system import RandomAgentSystem
from cookie_crunch.systems.turn_system import TurnSystem
from cookie_crunch.utils.game_state import get_game_state
from cookie_crunch.world import create_world

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Let a random agent play Cookie Crunch levels.")
    parser.add_argument("--level", type=int, default=1, help="level number to start from")
    parser.add_argument("--levels", type=int, default=1, help="how many levels to play in a row")
    parser.add_argument("--seed", type=int, default=None, help="seed for board generation and agent")
    parser.add_argument("--max-ticks", type=int, default=10_000, help="safety cap on simulated ticks per level")
    parser.add_argument("--verbose", action="store_true", help="log every cascade")
    args = parser.parse_args(argv)
    if level_name(args.level) not in available_levels():
        parser.error(f"unknown level {args.level}; choose from {', '.join(available_levels())}")
    if args.levels < 1:
        parser.error("--levels must be at least 1")
    return args


def play_level(number: int, rng: random.Random, *, max_ticks: int = 10_000) -> GameMode:
    """Play one level with the random agent and return the mode it ended in."""
    event_bus = EventBus()
    world = create_world(rng=rng)
    level = Level(world, load_level_description(level_name(number)))
    turn_system = TurnSystem(world, event_bus, level)
    RandomAgentSystem(world, event_bus, level, rng=rng)
    event_bus.subscribe(
        EVENT_SCORE_CHANGED,
        lambda sender, **payload: print(f"score {payload['score']} (+{payload['delta']})"),
    )

    turn_system.begin_game()
    for _ in range(max_ticks):
        if get_game_state(world).mode != GameMode.PLAYING:
            break
        event_bus.emit(EVENT_TICK, dt=1 / 60)

    state = turn_system.state
    outcome = get_game_state(world).mode
    print(f"{level.name}: {outcome.name} with {state.score}/{level.target_score} "
          f"points, {state.moves_left} moves left")
    return outcome


def play_levels(start: int, count: int, rng: random.Random, *, max_ticks: int = 10_000):
    """Play up to ``count`` levels from ``start``; returns ``(number, outcome)`` pairs."""
    results = []
    number = start
    for _ in range(count):
        outcome = play_level(number, rng, max_ticks=max_ticks)
        results.append((number, outcome))
        if outcome != GameMode.LEVEL_COMPLETE:
            break
        number = next_level_number(number)
        logger.info("Advancing to %s", level_name(number))
    return results


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    rng = random.Random(args.seed)
    results = play_levels(args.level, args.levels, rng, max_ticks=args.max_ticks)
    won = len(results) == args.levels and results[-1][1] == GameMode.LEVEL_COMPLETE
    return 0 if won else 1


if __name__ == "__main__":
    raise SystemExit(main())
