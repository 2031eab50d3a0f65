"""
Spawn resolution and enemy creation.

perform_spawn is the Buff Token spawn: d12 on the spawn table, d4 for the board edge,
d12 on the intent table. perform_commanding_orders_spawn is the reinforcement spawn
an enemy with the Commanding Orders intent can call in.
Results carry the raw dice so callers can show how they were reached.
"""

from dataclasses import dataclass
from typing import Any

from blokcity.engine.definitions import BaseStats, EnemyType, Intent, ENEMY_DEFINITIONS
from blokcity.engine.dice import RandomSource, roll_d4, roll_d6, roll_d12
from blokcity.engine.ids import IdGenerator
from blokcity.engine.state import Enemy
from blokcity.engine.tables import lookup_intent, lookup_spawn_type


@dataclass
class SpawnContext:
    """The parts of the game state a standard spawn depends on."""
    turn: int
    lieutenant_spawned: bool = False
    unique_citizen_spawned: bool = False


@dataclass
class CommandingOrdersContext:
    source_type: EnemyType  # Type of the enemy issuing the orders
    turn: int
    active_non_uc_count: int  # Active enemies that are not Unique Citizens


@dataclass
class SpawnResult:
    """Outcome of a spawn. Not part of GameState; kept for display and audit."""
    enemy_type: EnemyType
    edge: int | None
    intent: Intent
    spawn_roll: int | None  # None when a Commanding Orders d6 chose the type
    edge_roll: int | None  # None when no edge was rolled (Unique Citizen)
    intent_roll: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "enemy_type": EnemyType(self.enemy_type).value,
            "edge": self.edge,
            "intent": Intent(self.intent).value,
            "rolls": {
                "spawn_roll": self.spawn_roll,
                "edge_roll": self.edge_roll,
                "intent_roll": self.intent_roll,
            },
        }


@dataclass
class CommandingOrdersResult(SpawnResult):
    commanding_roll: int = 0  # The d6, or the d12 spawn roll when the standard spawn was used
    used_standard_spawn: bool = False

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["commanding_roll"] = self.commanding_roll
        out["used_standard_spawn"] = self.used_standard_spawn
        return out


def _resolve_placement(
    enemy_type: EnemyType,
    spawn_roll: int | None,
    random: RandomSource | None,
) -> SpawnResult:
    """Roll edge (unless Unique Citizen) and intent for an already-chosen type."""
    if enemy_type == EnemyType.UNIQUE_CITIZEN:
        edge_roll = None
    else:
        edge_roll = roll_d4(random)
    intent_roll = roll_d12(random)
    return SpawnResult(
        enemy_type=enemy_type,
        edge=edge_roll,
        intent=lookup_intent(enemy_type, intent_roll),
        spawn_roll=spawn_roll,
        edge_roll=edge_roll,
        intent_roll=intent_roll,
    )


def perform_spawn(context: SpawnContext, random: RandomSource | None = None) -> SpawnResult | None:
    """
    Resolve a standard spawn.

    Once a Lieutenant has spawned, the next spawn is forced to be the Unique Citizen
    (whatever the spawn table said), and only once. Returns None on turn 10,
    where the spawn table has no entries.
    """
    spawn_roll = roll_d12(random)
    base_type = lookup_spawn_type(context.turn, spawn_roll)
    if base_type is None:
        return None

    if context.lieutenant_spawned and not context.unique_citizen_spawned:
        enemy_type = EnemyType.UNIQUE_CITIZEN
    else:
        enemy_type = base_type

    return _resolve_placement(enemy_type, spawn_roll, random)


def perform_standard_spawn(turn: int, random: RandomSource | None = None) -> SpawnResult | None:
    """Spawn straight off the spawn table with no Unique Citizen override."""
    spawn_roll = roll_d12(random)
    base_type = lookup_spawn_type(turn, spawn_roll)
    if base_type is None:
        return None
    return _resolve_placement(base_type, spawn_roll, random)


def perform_commanding_orders_spawn(
    context: CommandingOrdersContext,
    random: RandomSource | None = None,
) -> CommandingOrdersResult | None:
    """
    Resolve a Commanding Orders reinforcement.

    A Unique Citizen with no other enemies in play falls back to the standard spawn
    table (and so returns None on turn 10). Everyone else rolls a d6:
    1-3 Goon, 4-6 Henchman, then edge and intent as usual.
    """
    if EnemyType(context.source_type) == EnemyType.UNIQUE_CITIZEN and context.active_non_uc_count == 0:
        standard = perform_standard_spawn(context.turn, random)
        if standard is None:
            return None
        return CommandingOrdersResult(
            enemy_type=standard.enemy_type,
            edge=standard.edge,
            intent=standard.intent,
            spawn_roll=standard.spawn_roll,
            edge_roll=standard.edge_roll,
            intent_roll=standard.intent_roll,
            commanding_roll=standard.spawn_roll,
            used_standard_spawn=True,
        )

    commanding_roll = roll_d6(random)
    enemy_type = EnemyType.GOON if commanding_roll <= 3 else EnemyType.HENCHMAN
    placed = _resolve_placement(enemy_type, None, random)
    return CommandingOrdersResult(
        enemy_type=placed.enemy_type,
        edge=placed.edge,
        intent=placed.intent,
        spawn_roll=placed.spawn_roll,
        edge_roll=placed.edge_roll,
        intent_roll=placed.intent_roll,
        commanding_roll=commanding_roll,
        used_standard_spawn=False,
    )


def get_base_stats(enemy_type: EnemyType) -> BaseStats:
    return ENEMY_DEFINITIONS[EnemyType(enemy_type)].base_stats


def create_enemy(result: SpawnResult, turn: int, enemy_number: int, ids: IdGenerator) -> Enemy:
    """Build a fresh enemy from a spawn result with its type's base stats and ready at 0."""
    definition = ENEMY_DEFINITIONS[EnemyType(result.enemy_type)]
    stats = definition.base_stats
    return Enemy(
        id=ids.next_id(),
        type=definition.type,
        number=enemy_number,
        display_name=f"{definition.display_name} {enemy_number}",
        edge=result.edge,
        intent=result.intent,
        spawned_on_turn=turn,
        defeated=False,
        strike=stats.strike,
        condition=stats.condition,
        agility=stats.agility,
        range=stats.range,
        energy=stats.energy,
        damage=stats.damage,
        ready=0,
    )
