"""
Game state representation.
Reducer transitions never mutate a state in place; they work on copies.
Includes JSON serialization for save/load functionality.
"""

import json
from collections import Counter
from dataclasses import dataclass, field
from copy import deepcopy
from typing import Any

from blokcity.engine import MAX_TURN, MIN_TURN, READY_MAX
from blokcity.engine.definitions import EnemyType, Intent, type_display_name


def _int(value: Any, default: int) -> int:
    try:
        return int(value) if value is not None else default
    except (TypeError, ValueError):
        return default


def _stat(value: Any, default: int = 0, maximum: int | None = None) -> int:
    """Parse a stat: non-negative, optionally capped."""
    result = max(0, _int(value, default))
    if maximum is not None:
        result = min(maximum, result)
    return result


def clamp_turn(value: Any) -> int:
    return max(MIN_TURN, min(MAX_TURN, _int(value, MIN_TURN)))


def _parse_edge(value: Any) -> int | None:
    edge = _int(value, 0)
    return edge if 1 <= edge <= 4 else None


def _empty_enemy_numbers() -> dict[EnemyType, int]:
    return {t: 0 for t in EnemyType}


@dataclass
class Enemy:
    """A spawned enemy. Never removed from the game, only marked defeated."""
    id: str
    type: EnemyType
    number: int  # Per-type spawn ordinal (Goon 1, Goon 2, ...)
    display_name: str
    edge: int | None  # Board edge 1-4; None for Unique Citizens (placed by the player)
    intent: Intent
    spawned_on_turn: int
    defeated: bool = False
    strike: int = 0
    condition: int = 0
    agility: int = 0
    range: int = 0
    energy: int = 0
    damage: int = 0
    ready: int = 0  # 0..READY_MAX

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": EnemyType(self.type).value,
            "number": self.number,
            "display_name": self.display_name,
            "edge": self.edge,
            "intent": Intent(self.intent).value,
            "spawned_on_turn": self.spawned_on_turn,
            "defeated": self.defeated,
            "strike": self.strike,
            "condition": self.condition,
            "agility": self.agility,
            "range": self.range,
            "energy": self.energy,
            "damage": self.damage,
            "ready": self.ready,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Enemy":
        """Build an Enemy; raises ValueError if the type is not a known EnemyType."""
        if not isinstance(data, dict):
            data = {}
        enemy_type = EnemyType(data.get("type"))
        try:
            intent = Intent(data.get("intent"))
        except ValueError:
            intent = Intent.COMBAT
        number = max(1, _int(data.get("number"), 1))
        display_name = data.get("display_name")
        if not isinstance(display_name, str):
            display_name = f"{type_display_name(enemy_type)} {number}"
        return cls(
            id=str(data.get("id") or ""),
            type=enemy_type,
            number=number,
            display_name=display_name,
            edge=None if enemy_type == EnemyType.UNIQUE_CITIZEN else _parse_edge(data.get("edge")),
            intent=intent,
            spawned_on_turn=clamp_turn(data.get("spawned_on_turn")),
            defeated=bool(data.get("defeated", False)),
            strike=_stat(data.get("strike")),
            condition=_stat(data.get("condition")),
            agility=_stat(data.get("agility")),
            range=_stat(data.get("range")),
            energy=_stat(data.get("energy")),
            damage=_stat(data.get("damage")),
            ready=_stat(data.get("ready"), maximum=READY_MAX),
        )


@dataclass
class GameState:
    """Complete state of one tracked game."""
    game_name: str
    slug: str  # Stable identifier; storage key is derived from it
    created_at: int  # Epoch milliseconds
    turn: int = MIN_TURN  # MIN_TURN..MAX_TURN
    # Spawn gating flags: once True they stay True for the rest of the game
    lieutenant_spawned: bool = False
    unique_citizen_spawned: bool = False
    # EnemyType -> how many of that type have ever spawned (never decremented)
    enemy_numbers: dict[EnemyType, int] = field(default_factory=_empty_enemy_numbers)
    # Every enemy ever spawned, in spawn order
    enemies: list[Enemy] = field(default_factory=list)

    def copy(self) -> "GameState":
        """Return a deep copy of this game state."""
        return deepcopy(self)

    def find_enemy(self, enemy_id: str) -> Enemy | None:
        for enemy in self.enemies:
            if enemy.id == enemy_id:
                return enemy
        return None

    # ===== Serialization Methods =====

    def to_dict(self) -> dict[str, Any]:
        """Convert GameState to a dictionary for JSON serialization."""
        return {
            "game_name": self.game_name,
            "slug": self.slug,
            "created_at": self.created_at,
            "turn": self.turn,
            "lieutenant_spawned": self.lieutenant_spawned,
            "unique_citizen_spawned": self.unique_citizen_spawned,
            "enemy_numbers": {
                EnemyType(t).value: count for t, count in self.enemy_numbers.items()
            },
            "enemies": [e.to_dict() for e in self.enemies],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameState":
        """
        Create GameState from a dictionary (handles missing/None fields).
        Enemies with an unknown type are dropped. Counters and flags are never
        allowed to fall below what the enemy list proves has already spawned.
        """
        if not isinstance(data, dict):
            data = {}
        enemies_raw = data.get("enemies") or []
        if not isinstance(enemies_raw, list):
            enemies_raw = []
        enemies = []
        for raw in enemies_raw:
            try:
                enemies.append(Enemy.from_dict(raw))
            except ValueError:
                continue

        spawned = Counter(e.type for e in enemies)
        numbers_raw = data.get("enemy_numbers") or {}
        if not isinstance(numbers_raw, dict):
            numbers_raw = {}
        enemy_numbers = {
            t: max(spawned[t], _int(numbers_raw.get(t.value), 0)) for t in EnemyType
        }

        return cls(
            game_name=str(data.get("game_name") or ""),
            slug=str(data.get("slug") or ""),
            created_at=_int(data.get("created_at"), 0),
            turn=clamp_turn(data.get("turn")),
            lieutenant_spawned=bool(data.get("lieutenant_spawned")) or spawned[EnemyType.LIEUTENANT] > 0,
            unique_citizen_spawned=bool(data.get("unique_citizen_spawned")) or spawned[EnemyType.UNIQUE_CITIZEN] > 0,
            enemy_numbers=enemy_numbers,
            enemies=enemies,
        )

    def to_json(self, indent: int = 2) -> str:
        """Serialize GameState to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> "GameState":
        """Deserialize GameState from a JSON string."""
        return cls.from_dict(json.loads(json_str))

    def save(self, filepath: str) -> None:
        """Save GameState to a JSON file."""
        with open(filepath, "w") as f:
            f.write(self.to_json())

    @classmethod
    def load(cls, filepath: str) -> "GameState":
        """Load GameState from a JSON file."""
        with open(filepath, "r") as f:
            return cls.from_json(f.read())
