"""
Action definitions for the game.
Actions are immutable, deterministic instructions.
"""

from dataclasses import dataclass, field

from blokcity.engine.definitions import EnemyType, Intent
from blokcity.engine.state import Enemy, GameState

LOAD = "load"
ADVANCE_TURN = "advance_turn"
RETREAT_TURN = "retreat_turn"
SPAWN_ENEMY = "spawn_enemy"
DEFEAT_ENEMY = "defeat_enemy"
REVIVE_ENEMY = "revive_enemy"
UPDATE_STAT = "update_stat"
REROLL_INTENT = "reroll_intent"
SET_INTENT = "set_intent"
RENAME_ENEMY = "rename_enemy"

ACTION_TYPES = (
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


@dataclass(frozen=True)
class Action:
    """Base action class. All actions have a type and payload."""
    type: str  # one of ACTION_TYPES
    payload: dict = field(default_factory=dict)


def load_state(state: GameState) -> Action:
    """Replace the whole state (hydrate from storage)."""
    return Action(type=LOAD, payload={"state": state})


def advance_turn() -> Action:
    return Action(type=ADVANCE_TURN)


def retreat_turn() -> Action:
    return Action(type=RETREAT_TURN)


def spawn_enemy(enemy: Enemy, enemy_type: EnemyType | None = None) -> Action:
    """
    Add a freshly created enemy to the game.
    enemy_type defaults to the enemy's own type; it drives the counters and spawn flags.
    """
    return Action(
        type=SPAWN_ENEMY,
        payload={"enemy": enemy, "enemy_type": EnemyType(enemy_type or enemy.type)},
    )


def defeat_enemy(enemy_id: str) -> Action:
    return Action(type=DEFEAT_ENEMY, payload={"enemy_id": enemy_id})


def revive_enemy(enemy_id: str) -> Action:
    return Action(type=REVIVE_ENEMY, payload={"enemy_id": enemy_id})


def update_stat(enemy_id: str, stat: str, delta: int) -> Action:
    """
    Adjust one stat by delta. Result is clamped to >= 0 (and <= 6 for ready).
    Example: update_stat("enemy-1700000000000-0", "condition", -2)
    """
    return Action(
        type=UPDATE_STAT,
        payload={"enemy_id": enemy_id, "stat": stat, "delta": delta},
    )


def reroll_intent(enemy_id: str, roll: int | None = None) -> Action:
    """
    Re-roll an enemy's intent on its type's intent table.
    roll may be supplied (a d12 already rolled by the caller); otherwise the reducer rolls.
    """
    payload = {"enemy_id": enemy_id}
    if roll is not None:
        payload["roll"] = roll
    return Action(type=REROLL_INTENT, payload=payload)


def set_intent(enemy_id: str, intent: Intent) -> Action:
    """Commit an intent resolved elsewhere (e.g. a Commanding Orders re-roll on another enemy)."""
    return Action(type=SET_INTENT, payload={"enemy_id": enemy_id, "intent": Intent(intent)})


def rename_enemy(enemy_id: str, display_name: str) -> Action:
    return Action(type=RENAME_ENEMY, payload={"enemy_id": enemy_id, "display_name": display_name})
