"""
Game events for UI hooks and logging.
Events describe what happened during action processing.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class GameEvent:
    """Base event class. All events have a type and payload."""
    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameEvent":
        return cls(type=data["type"], payload=data["payload"])


# ===== Event Type Constants =====

STATE_LOADED = "state_loaded"
TURN_CHANGED = "turn_changed"

ENEMY_SPAWNED = "enemy_spawned"
ENEMY_DEFEATED = "enemy_defeated"
ENEMY_REVIVED = "enemy_revived"
ENEMY_RENAMED = "enemy_renamed"

STAT_CHANGED = "stat_changed"
INTENT_CHANGED = "intent_changed"


# ===== Event Factory Functions =====

def state_loaded(slug: str, turn: int, enemy_count: int) -> GameEvent:
    return GameEvent(STATE_LOADED, {
        "slug": slug,
        "turn": turn,
        "enemy_count": enemy_count,
    })


def turn_changed(old_turn: int, new_turn: int) -> GameEvent:
    return GameEvent(TURN_CHANGED, {
        "old_turn": old_turn,
        "new_turn": new_turn,
    })


def enemy_spawned(
    enemy_id: str,
    enemy_type: str,
    number: int,
    edge: int | None,
    intent: str,
    turn: int,
) -> GameEvent:
    return GameEvent(ENEMY_SPAWNED, {
        "enemy_id": enemy_id,
        "enemy_type": enemy_type,
        "number": number,
        "edge": edge,  # None for Unique Citizens
        "intent": intent,
        "turn": turn,
    })


def enemy_defeated(enemy_id: str, display_name: str) -> GameEvent:
    return GameEvent(ENEMY_DEFEATED, {
        "enemy_id": enemy_id,
        "display_name": display_name,
    })


def enemy_revived(enemy_id: str, display_name: str) -> GameEvent:
    return GameEvent(ENEMY_REVIVED, {
        "enemy_id": enemy_id,
        "display_name": display_name,
    })


def enemy_renamed(enemy_id: str, old_name: str, new_name: str) -> GameEvent:
    return GameEvent(ENEMY_RENAMED, {
        "enemy_id": enemy_id,
        "old_name": old_name,
        "new_name": new_name,
    })


def stat_changed(enemy_id: str, stat: str, old_value: int, new_value: int) -> GameEvent:
    return GameEvent(STAT_CHANGED, {
        "enemy_id": enemy_id,
        "stat": stat,
        "old_value": old_value,
        "new_value": new_value,
        "change": new_value - old_value,
    })


def intent_changed(
    enemy_id: str,
    old_intent: str,
    new_intent: str,
    roll: int | None = None,
) -> GameEvent:
    """roll is the d12 behind a re-roll; None when the intent was set directly."""
    return GameEvent(INTENT_CHANGED, {
        "enemy_id": enemy_id,
        "old_intent": old_intent,
        "new_intent": new_intent,
        "roll": roll,
    })
