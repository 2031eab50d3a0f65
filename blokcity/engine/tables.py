"""
Spawn and intent lookup tables.

Both tables are cumulative thresholds over a d12: entries are (outcome, max_roll)
in ascending order and the first entry whose max_roll >= roll wins.
Every list ends at 12, so the last-entry fallback should never be reached.
"""

from typing import TypeVar

from blokcity.engine import MAX_TURN, MIN_TURN
from blokcity.engine.definitions import EnemyType, Intent

T = TypeVar("T")


def _spawn_row(goon_max: int, henchman_max: int) -> list[tuple[EnemyType, int]]:
    return [(EnemyType.GOON, goon_max), (EnemyType.HENCHMAN, henchman_max), (EnemyType.LIEUTENANT, 12)]


# turn -> thresholds; None means nothing spawns (turn 10 ends spawning)
# Lieutenants are least likely at turn 5 and most likely at the extremes.
SPAWN_TABLE: dict[int, list[tuple[EnemyType, int]] | None] = {
    1: _spawn_row(8, 11),
    2: _spawn_row(7, 10),
    3: _spawn_row(6, 10),
    4: _spawn_row(5, 9),
    5: _spawn_row(4, 6),
    6: _spawn_row(5, 9),
    7: _spawn_row(6, 10),
    8: _spawn_row(7, 10),
    9: _spawn_row(8, 11),
    10: None,
}

INTENT_TABLE: dict[EnemyType, list[tuple[Intent, int]]] = {
    EnemyType.GOON: [
        (Intent.COMBAT, 6),
        (Intent.SLAM, 9),
        (Intent.BUFF_TOKEN_DENIAL, 12),
    ],
    EnemyType.HENCHMAN: [
        (Intent.COMBAT, 8),
        (Intent.SLAM, 12),
    ],
    EnemyType.LIEUTENANT: [
        (Intent.COMBAT, 6),
        (Intent.SLAM, 8),
        (Intent.COMMANDING_ORDERS, 12),
    ],
    EnemyType.UNIQUE_CITIZEN: [
        (Intent.COMBAT, 3),
        (Intent.SLAM, 6),
        (Intent.EVASIVE_MANOEUVRES, 8),
        (Intent.COMMANDING_ORDERS, 12),
    ],
}


def _first_at_or_above(ranges: list[tuple[T, int]], roll: int) -> T:
    for outcome, max_roll in ranges:
        if roll <= max_roll:
            return outcome
    return ranges[-1][0]


def lookup_spawn_type(turn: int, d12_roll: int) -> EnemyType | None:
    """Base enemy type for a spawn roll on the given turn, or None if nothing spawns."""
    turn = max(MIN_TURN, min(MAX_TURN, turn))
    ranges = SPAWN_TABLE[turn]
    if ranges is None:
        return None
    return _first_at_or_above(ranges, d12_roll)


def lookup_intent(enemy_type: EnemyType, d12_roll: int) -> Intent:
    """Intent for an intent roll, using the row for this enemy type."""
    return _first_at_or_above(INTENT_TABLE[EnemyType(enemy_type)], d12_roll)


def intents_for(enemy_type: EnemyType) -> list[Intent]:
    """Intents this enemy type can roll, in table order."""
    return [intent for intent, _ in INTENT_TABLE[EnemyType(enemy_type)]]
