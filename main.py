"""
Main entry point for the Blok City Warz minion tracker engine.
Plays through a short simulated scenario with a seeded random source and prints the result.

Usage: python main.py [--seed N] [--turns N] [--save path.json] [--verbose]
"""

import argparse
import logging
import random

from blokcity.config import configure_logging
from blokcity.engine.actions import advance_turn, defeat_enemy, update_stat, reroll_intent
from blokcity.engine.definitions import Intent, type_display_name, intent_display_name
from blokcity.engine.ids import IdGenerator
from blokcity.engine.queries import active_enemies, commanding_orders_targets
from blokcity.engine.reducer import apply_action
from blokcity.engine.utils import (
    initialize_game_state,
    print_game_state,
    resolve_commanding_orders_reroll,
    resolve_commanding_orders_spawn,
    resolve_spawn,
    slugify,
)

logger = logging.getLogger("blokcity.demo")


def describe(result) -> str:
    edge = f"edge {result.edge}" if result.edge is not None else "placed by player"
    if result.spawn_roll is not None:
        type_roll = f"d12={result.spawn_roll}"
    else:
        type_roll = f"d6={result.commanding_roll}"
    return (f"{type_display_name(result.enemy_type)} ({edge}) intent {intent_display_name(result.intent)} "
            f"[{type_roll}, d4={result.edge_roll}, d12={result.intent_roll}]")


def main():
    parser = argparse.ArgumentParser(description="Simulate a Blok City Warz scenario")
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--turns", type=int, default=10)
    parser.add_argument("--save", help="Write the final state to this JSON file")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    configure_logging("DEBUG" if args.verbose else None)
    rng = random.Random(args.seed)
    ids = IdGenerator()

    name = "Demo Night"
    state = initialize_game_state(name, slugify(name))
    print("Blok City Warz - Minion Tracker")
    print("=" * 60)

    for _ in range(args.turns):
        print(f"\n[TURN {state.turn}]")

        # Two Buff Tokens triggered each turn
        for _ in range(2):
            state, events, result = resolve_spawn(state, ids, rng.random)
            if result is None:
                print("  No spawns on the final turn.")
                break
            print(f"  Spawned: {describe(result)}")

        # Enemies with Commanding Orders either re-roll a minion or call in reinforcements
        for enemy in list(active_enemies(state)):
            if enemy.intent != Intent.COMMANDING_ORDERS:
                continue
            targets = commanding_orders_targets(state, enemy)
            if targets:
                target = rng.choice(targets)
                state, _, roll = resolve_commanding_orders_reroll(state, enemy.id, target.id, rng.random)
                print(f"  {enemy.display_name} commands {target.display_name} (d12={roll}) -> "
                      f"{intent_display_name(state.find_enemy(target.id).intent)}")
            else:
                state, _, result = resolve_commanding_orders_spawn(state, enemy.id, ids, rng.random)
                if result is not None:
                    print(f"  {enemy.display_name} calls in: {describe(result)}")

        # The players fight back: the oldest active enemy takes a hit, a mauled one goes down
        active = active_enemies(state)
        if active:
            target = active[0]
            state, _ = apply_action(state, update_stat(target.id, "condition", -6))
            if state.find_enemy(target.id).condition == 0:
                state, _ = apply_action(state, defeat_enemy(target.id))
                print(f"  {target.display_name} defeated")
            else:
                state, _ = apply_action(state, reroll_intent(target.id), rng.random)

        state, _ = apply_action(state, advance_turn())

    print_game_state(state, verbose=args.verbose)

    if args.save:
        state.save(args.save)
        logger.info("Saved final state to %s", args.save)


if __name__ == "__main__":
    main()
