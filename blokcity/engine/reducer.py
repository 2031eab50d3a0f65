"""
Main game reducer.
Applies actions to state, enforcing the game's invariants and producing new state.
Returns (new_state, events) where events describe what happened.

The reducer is total over its action set: an action whose target does not exist,
or which would push the turn out of bounds, is a no-op that returns the input state
unchanged with no events.
"""

import logging
from copy import deepcopy
from typing import Callable

from blokcity.engine import MAX_TURN, MIN_TURN, READY_MAX
from blokcity.engine.actions import (
    Action,
    LOAD,
    ADVANCE_TURN,
    RETREAT_TURN,
    SPAWN_ENEMY,
    DEFEAT_ENEMY,
    REVIVE_ENEMY,
    UPDATE_STAT,
    REROLL_INTENT,
    SET_INTENT,
    RENAME_ENEMY,
)
from blokcity.engine.definitions import STAT_NAMES, EnemyType, Intent
from blokcity.engine.dice import RandomSource, roll_d12
from blokcity.engine.events import (
    GameEvent,
    state_loaded,
    turn_changed,
    enemy_spawned,
    enemy_defeated,
    enemy_revived,
    enemy_renamed,
    stat_changed,
    intent_changed,
)
from blokcity.engine.state import Enemy, GameState
from blokcity.engine.tables import lookup_intent

logger = logging.getLogger(__name__)

Result = tuple[GameState, list[GameEvent]]


def _unchanged(state: GameState, reason: str) -> Result:
    logger.debug("No-op: %s", reason)
    return state, []


def apply_action(
    state: GameState,
    action: Action,
    random: RandomSource | None = None,
) -> Result:
    """
    Apply a single action to the current state, returning new state and events.

    Args:
        state: Current game state (never mutated)
        action: Action to apply
        random: Random source for actions that roll dice (reroll_intent without a supplied roll)

    Returns:
        Tuple of (new_state, events) where events describe what happened

    Raises:
        ValueError: if action.type is not one of the known action types
    """
    handler = _HANDLERS.get(action.type)
    if handler is None:
        raise ValueError(f"Unknown action type: {action.type}")
    return handler(state, action, random)


def _handle_load(state: GameState, action: Action, random: RandomSource | None) -> Result:
    loaded = action.payload.get("state")
    if isinstance(loaded, dict):
        loaded = GameState.from_dict(loaded)
    if not isinstance(loaded, GameState):
        return _unchanged(state, "load without a state")
    new_state = loaded.copy()
    return new_state, [state_loaded(new_state.slug, new_state.turn, len(new_state.enemies))]


def _handle_advance_turn(state: GameState, action: Action, random: RandomSource | None) -> Result:
    if state.turn >= MAX_TURN:
        return _unchanged(state, f"already on turn {MAX_TURN}")
    new_state = state.copy()
    new_state.turn = state.turn + 1
    return new_state, [turn_changed(state.turn, new_state.turn)]


def _handle_retreat_turn(state: GameState, action: Action, random: RandomSource | None) -> Result:
    if state.turn <= MIN_TURN:
        return _unchanged(state, f"already on turn {MIN_TURN}")
    new_state = state.copy()
    new_state.turn = state.turn - 1
    return new_state, [turn_changed(state.turn, new_state.turn)]


def _handle_spawn_enemy(state: GameState, action: Action, random: RandomSource | None) -> Result:
    """
    Append the enemy and bump its type's counter.
    Spawning a Lieutenant or Unique Citizen latches the matching flag on.
    """
    enemy = action.payload.get("enemy")
    if not isinstance(enemy, Enemy):
        return _unchanged(state, "spawn without an enemy")
    if state.find_enemy(enemy.id) is not None:
        return _unchanged(state, f"enemy id {enemy.id} already in play")
    enemy_type = EnemyType(action.payload.get("enemy_type") or enemy.type)

    new_state = state.copy()
    new_state.enemies.append(deepcopy(enemy))
    new_state.enemy_numbers[enemy_type] = new_state.enemy_numbers.get(enemy_type, 0) + 1
    if enemy_type == EnemyType.LIEUTENANT:
        new_state.lieutenant_spawned = True
    if enemy_type == EnemyType.UNIQUE_CITIZEN:
        new_state.unique_citizen_spawned = True

    return new_state, [enemy_spawned(
        enemy.id,
        enemy_type.value,
        enemy.number,
        enemy.edge,
        Intent(enemy.intent).value,
        enemy.spawned_on_turn,
    )]


def _with_enemy(
    state: GameState,
    action: Action,
    update: Callable[[Enemy], list[GameEvent] | None],
) -> Result:
    """
    Copy the state and run update on the copy of the targeted enemy.
    Unknown ids, or an update that returns None, leave the state untouched.
    """
    enemy_id = action.payload.get("enemy_id")
    if state.find_enemy(enemy_id) is None:
        return _unchanged(state, f"{action.type}: no enemy {enemy_id!r}")
    new_state = state.copy()
    events = update(new_state.find_enemy(enemy_id))
    if events is None:
        return _unchanged(state, f"{action.type}: nothing to apply to {enemy_id!r}")
    return new_state, events


def _handle_defeat_enemy(state: GameState, action: Action, random: RandomSource | None) -> Result:
    def update(enemy: Enemy) -> list[GameEvent]:
        enemy.defeated = True
        return [enemy_defeated(enemy.id, enemy.display_name)]
    return _with_enemy(state, action, update)


def _handle_revive_enemy(state: GameState, action: Action, random: RandomSource | None) -> Result:
    def update(enemy: Enemy) -> list[GameEvent]:
        enemy.defeated = False
        return [enemy_revived(enemy.id, enemy.display_name)]
    return _with_enemy(state, action, update)


def _handle_update_stat(state: GameState, action: Action, random: RandomSource | None) -> Result:
    stat = action.payload.get("stat")
    if stat not in STAT_NAMES:
        return _unchanged(state, f"unknown stat {stat!r}")
    try:
        delta = int(action.payload.get("delta", 0))
    except (TypeError, ValueError):
        return _unchanged(state, f"bad delta {action.payload.get('delta')!r}")

    def update(enemy: Enemy) -> list[GameEvent]:
        old_value = getattr(enemy, stat)
        new_value = max(0, old_value + delta)
        if stat == "ready":
            new_value = min(READY_MAX, new_value)
        setattr(enemy, stat, new_value)
        return [stat_changed(enemy.id, stat, old_value, new_value)]
    return _with_enemy(state, action, update)


def _handle_reroll_intent(state: GameState, action: Action, random: RandomSource | None) -> Result:
    """Roll (or take the supplied) d12 and look up a new intent. The board edge never changes."""
    def update(enemy: Enemy) -> list[GameEvent]:
        roll = action.payload.get("roll")
        if roll is None:
            roll = roll_d12(random)
        old_intent = Intent(enemy.intent)
        enemy.intent = lookup_intent(enemy.type, roll)
        return [intent_changed(enemy.id, old_intent.value, enemy.intent.value, roll)]
    return _with_enemy(state, action, update)


def _handle_set_intent(state: GameState, action: Action, random: RandomSource | None) -> Result:
    try:
        intent = Intent(action.payload.get("intent"))
    except ValueError:
        return _unchanged(state, f"unknown intent {action.payload.get('intent')!r}")

    def update(enemy: Enemy) -> list[GameEvent]:
        old_intent = Intent(enemy.intent)
        enemy.intent = intent
        if old_intent == intent:
            return []
        return [intent_changed(enemy.id, old_intent.value, intent.value)]
    return _with_enemy(state, action, update)


def _handle_rename_enemy(state: GameState, action: Action, random: RandomSource | None) -> Result:
    display_name = action.payload.get("display_name")
    if not isinstance(display_name, str):
        return _unchanged(state, "rename without a name")

    def update(enemy: Enemy) -> list[GameEvent]:
        old_name = enemy.display_name
        enemy.display_name = display_name
        return [enemy_renamed(enemy.id, old_name, display_name)]
    return _with_enemy(state, action, update)


_HANDLERS = {
    LOAD: _handle_load,
    ADVANCE_TURN: _handle_advance_turn,
    RETREAT_TURN: _handle_retreat_turn,
    SPAWN_ENEMY: _handle_spawn_enemy,
    DEFEAT_ENEMY: _handle_defeat_enemy,
    REVIVE_ENEMY: _handle_revive_enemy,
    UPDATE_STAT: _handle_update_stat,
    REROLL_INTENT: _handle_reroll_intent,
    SET_INTENT: _handle_set_intent,
    RENAME_ENEMY: _handle_rename_enemy,
}


def replay_from_actions(
    initial_state: GameState,
    actions: list[Action],
    random: RandomSource | None = None,
) -> Result:
    """
    Replay a series of actions from an initial state.
    Event sourcing: state is derived from action log.

    Returns:
        Tuple of (final_state, all_events) after all actions applied
    """
    current_state = initial_state.copy()
    all_events: list[GameEvent] = []

    for action in actions:
        current_state, events = apply_action(current_state, action, random)
        all_events.extend(events)

    return current_state, all_events
