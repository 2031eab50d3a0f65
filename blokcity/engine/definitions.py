"""
Static definitions for enemy types and intents.
Base stat blocks are scenario data: each enemy type has exactly one.
"""

from dataclasses import dataclass, asdict
from enum import Enum


class EnemyType(str, Enum):
    GOON = "Goon"
    HENCHMAN = "Henchman"
    LIEUTENANT = "Lieutenant"
    UNIQUE_CITIZEN = "UniqueCitizen"


class Intent(str, Enum):
    COMBAT = "Combat"
    SLAM = "Slam"
    BUFF_TOKEN_DENIAL = "BuffTokenDenial"
    EVASIVE_MANOEUVRES = "EvasiveManoeuvres"
    COMMANDING_ORDERS = "CommandingOrders"


INTENT_DISPLAY: dict[Intent, str] = {
    Intent.COMBAT: "Combat",
    Intent.SLAM: "Slam",
    Intent.BUFF_TOKEN_DENIAL: "Buff Token Denial",
    Intent.EVASIVE_MANOEUVRES: "Evasive Manoeuvres",
    Intent.COMMANDING_ORDERS: "Commanding Orders",
}

# Order matters: this is the order stats are shown and validated in
STAT_NAMES = ("strike", "condition", "agility", "range", "energy", "damage", "ready")
BASE_STAT_NAMES = STAT_NAMES[:-1]


@dataclass(frozen=True)
class BaseStats:
    """Starting stat block for a freshly spawned enemy (ready always starts at 0)."""
    strike: int
    condition: int
    agility: int
    range: int
    energy: int
    damage: int

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class EnemyDefinition:
    """Defines immutable properties of an enemy type."""
    type: EnemyType
    display_name: str
    base_stats: BaseStats


GOON_STATS = BaseStats(strike=0, condition=6, agility=0, range=4, energy=6, damage=0)
STANDARD_STATS = BaseStats(strike=0, condition=12, agility=0, range=4, energy=6, damage=0)

ENEMY_DEFINITIONS: dict[EnemyType, EnemyDefinition] = {
    EnemyType.GOON: EnemyDefinition(EnemyType.GOON, "Goon", GOON_STATS),
    EnemyType.HENCHMAN: EnemyDefinition(EnemyType.HENCHMAN, "Henchman", STANDARD_STATS),
    EnemyType.LIEUTENANT: EnemyDefinition(EnemyType.LIEUTENANT, "Lieutenant", STANDARD_STATS),
    EnemyType.UNIQUE_CITIZEN: EnemyDefinition(EnemyType.UNIQUE_CITIZEN, "Unique Citizen", STANDARD_STATS),
}


def type_display_name(enemy_type: EnemyType) -> str:
    return ENEMY_DEFINITIONS[EnemyType(enemy_type)].display_name


def intent_display_name(intent: Intent) -> str:
    return INTENT_DISPLAY[Intent(intent)]
