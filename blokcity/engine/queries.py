"""
Query functions for UI integration.
These functions help the UI understand what is in play and what actions are available
without mutating game state.
"""

from typing import Any

from blokcity.engine import MAX_TURN, MIN_TURN
from blokcity.engine.definitions import EnemyType, Intent
from blokcity.engine.state import Enemy, GameState

# Types a non-Unique-Citizen commander can re-roll
MINOR_TYPES = (EnemyType.GOON, EnemyType.HENCHMAN)


def active_enemies(state: GameState) -> list[Enemy]:
    return [e for e in state.enemies if not e.defeated]


def defeated_enemies(state: GameState) -> list[Enemy]:
    return [e for e in state.enemies if e.defeated]


def sorted_enemies(state: GameState) -> list[Enemy]:
    """Display order: active enemies newest first, then defeated ones in spawn order."""
    return list(reversed(active_enemies(state))) + defeated_enemies(state)


def count_active_non_unique(state: GameState) -> int:
    return sum(1 for e in active_enemies(state) if e.type != EnemyType.UNIQUE_CITIZEN)


def commanding_orders_targets(state: GameState, source: Enemy) -> list[Enemy]:
    """
    Enemies whose intent a Commanding Orders activation may re-roll.
    Unique Citizens can pick any active non-UC enemy; everyone else only Goons and Henchmen.
    The commander never targets itself.
    """
    if source.type == EnemyType.UNIQUE_CITIZEN:
        allowed = tuple(t for t in EnemyType if t != EnemyType.UNIQUE_CITIZEN)
    else:
        allowed = MINOR_TYPES
    return [
        e for e in active_enemies(state)
        if e.type in allowed and e.id != source.id
    ]


def can_spawn(state: GameState) -> bool:
    return state.turn < MAX_TURN


def can_issue_commanding_orders(enemy: Enemy) -> bool:
    return not enemy.defeated and enemy.intent == Intent.COMMANDING_ORDERS


def get_available_actions(state: GameState) -> dict[str, Any]:
    """Turn controls, spawn availability, and which enemies can currently issue Commanding Orders."""
    return {
        "turn": state.turn,
        "can_advance_turn": state.turn < MAX_TURN,
        "can_retreat_turn": state.turn > MIN_TURN,
        "can_spawn": can_spawn(state),
        "commanders": [e.id for e in state.enemies if can_issue_commanding_orders(e)],
        "active_count": len(active_enemies(state)),
        "defeated_count": len(defeated_enemies(state)),
    }
