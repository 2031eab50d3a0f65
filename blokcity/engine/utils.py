"""
Utility functions for the game engine.
"""

import re
import time

from blokcity.engine.actions import set_intent, spawn_enemy
from blokcity.engine.definitions import EnemyType, intent_display_name
from blokcity.engine.dice import RandomSource, roll_d12
from blokcity.engine.events import GameEvent
from blokcity.engine.ids import IdGenerator
from blokcity.engine.queries import commanding_orders_targets, count_active_non_unique, sorted_enemies
from blokcity.engine.reducer import apply_action
from blokcity.engine.spawner import (
    CommandingOrdersContext,
    CommandingOrdersResult,
    SpawnContext,
    SpawnResult,
    create_enemy,
    perform_commanding_orders_spawn,
    perform_spawn,
)
from blokcity.engine.state import GameState
from blokcity.engine.tables import lookup_intent

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """
    Turn a game name into a URL/storage-safe slug.
    "Friday Night Warz!" -> "friday-night-warz". Returns "" if nothing usable is left.
    """
    return _NON_ALNUM.sub("-", (name or "").strip().lower()).strip("-")


def initialize_game_state(game_name: str, slug: str, created_at: int | None = None) -> GameState:
    """Fresh game: turn 1, no enemies, all counters at zero, both spawn flags off."""
    if created_at is None:
        created_at = int(time.time() * 1000)
    return GameState(game_name=game_name, slug=slug, created_at=created_at)


def resolve_spawn(
    state: GameState,
    ids: IdGenerator,
    random: RandomSource | None = None,
) -> tuple[GameState, list[GameEvent], SpawnResult | None]:
    """
    Buff Token spawn: resolve, build the enemy, and apply spawn_enemy.
    On turn 10 nothing spawns and the state comes back unchanged with result None.
    """
    result = perform_spawn(
        SpawnContext(
            turn=state.turn,
            lieutenant_spawned=state.lieutenant_spawned,
            unique_citizen_spawned=state.unique_citizen_spawned,
        ),
        random,
    )
    if result is None:
        return state, [], None
    enemy = create_enemy(result, state.turn, state.enemy_numbers[result.enemy_type] + 1, ids)
    new_state, events = apply_action(state, spawn_enemy(enemy, result.enemy_type))
    return new_state, events, result


def resolve_commanding_orders_spawn(
    state: GameState,
    source_id: str,
    ids: IdGenerator,
    random: RandomSource | None = None,
) -> tuple[GameState, list[GameEvent], CommandingOrdersResult | None]:
    """Reinforcement spawn called in by the enemy source_id. Unknown source: nothing happens."""
    source = state.find_enemy(source_id)
    if source is None:
        return state, [], None
    result = perform_commanding_orders_spawn(
        CommandingOrdersContext(
            source_type=source.type,
            turn=state.turn,
            active_non_uc_count=count_active_non_unique(state),
        ),
        random,
    )
    if result is None:
        return state, [], None
    enemy = create_enemy(result, state.turn, state.enemy_numbers[result.enemy_type] + 1, ids)
    new_state, events = apply_action(state, spawn_enemy(enemy, result.enemy_type))
    return new_state, events, result


def resolve_commanding_orders_reroll(
    state: GameState,
    source_id: str,
    target_id: str,
    random: RandomSource | None = None,
) -> tuple[GameState, list[GameEvent], int | None]:
    """
    Re-roll the intent of another enemy on the commander's orders and commit it with set_intent.
    Returns the d12 used, or None if the source or target is not valid.
    """
    source = state.find_enemy(source_id)
    if source is None:
        return state, [], None
    target = next((e for e in commanding_orders_targets(state, source) if e.id == target_id), None)
    if target is None:
        return state, [], None
    roll = roll_d12(random)
    new_state, events = apply_action(state, set_intent(target.id, lookup_intent(target.type, roll)))
    for event in events:
        event.payload["roll"] = roll
    return new_state, events, roll


def print_game_state(state: GameState, verbose: bool = False) -> None:
    """
    Pretty-print the current game state.

    Args:
        state: Current game state
        verbose: If True, show every stat for each enemy
    """
    print(f"\n{'='*60}")
    print(f"{state.game_name or state.slug} | Turn {state.turn}")
    flags = []
    if state.lieutenant_spawned:
        flags.append("Lieutenant spawned")
    if state.unique_citizen_spawned:
        flags.append("Unique Citizen spawned")
    if flags:
        print(" | ".join(flags))
    print(f"{'='*60}")

    if not state.enemies:
        print("  - No enemies")
    for enemy in sorted_enemies(state):
        edge = f"edge {enemy.edge}" if enemy.edge is not None else "placed"
        status = " [DEFEATED]" if enemy.defeated else ""
        print(f"  - {enemy.display_name} ({edge}, {intent_display_name(enemy.intent)}){status}")
        if verbose:
            print(f"      STR {enemy.strike}  CON {enemy.condition}  AGI {enemy.agility}  "
                  f"RNG {enemy.range}  ENG {enemy.energy}  DMG {enemy.damage}  RDY {enemy.ready}")

    print("\nSpawned so far:")
    for enemy_type in EnemyType:
        print(f"  {enemy_type.value}: {state.enemy_numbers.get(enemy_type, 0)}")
