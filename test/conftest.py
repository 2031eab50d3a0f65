"""
Shared helpers: deterministic dice and a ready-made game with a few enemies.
"""

import pytest

from blokcity.engine.actions import spawn_enemy
from blokcity.engine.definitions import EnemyType, Intent
from blokcity.engine.ids import IdGenerator
from blokcity.engine.reducer import apply_action
from blokcity.engine.spawner import SpawnResult, create_enemy
from blokcity.engine.utils import initialize_game_state


def rolls(*faces):
    """
    Random source that makes successive dice land on the given faces.
    Each face is (value, sides), e.g. rolls((5, 12), (2, 4), (1, 12)).
    """
    values = iter([(value - 0.5) / sides for value, sides in faces])

    def source():
        return next(values)
    return source


def make_result(enemy_type, intent=Intent.COMBAT, edge=1):
    edge = None if enemy_type == EnemyType.UNIQUE_CITIZEN else edge
    return SpawnResult(
        enemy_type=enemy_type,
        edge=edge,
        intent=intent,
        spawn_roll=1,
        edge_roll=edge,
        intent_roll=1,
    )


def add_enemy(state, enemy_type, ids, intent=Intent.COMBAT, edge=1):
    """Create an enemy of the given type and spawn it through the reducer."""
    number = state.enemy_numbers[enemy_type] + 1
    enemy = create_enemy(make_result(enemy_type, intent, edge), state.turn, number, ids)
    state, _ = apply_action(state, spawn_enemy(enemy, enemy_type))
    return state, enemy


@pytest.fixture
def ids():
    return IdGenerator(clock=lambda: 1700000000.0)


@pytest.fixture
def empty_state():
    return initialize_game_state("Test Night", "test-night", created_at=1700000000000)


@pytest.fixture
def populated_state(empty_state, ids):
    state, _ = add_enemy(empty_state, EnemyType.GOON, ids)
    state, _ = add_enemy(state, EnemyType.HENCHMAN, ids, intent=Intent.SLAM, edge=3)
    state, _ = add_enemy(state, EnemyType.LIEUTENANT, ids, intent=Intent.COMMANDING_ORDERS, edge=2)
    return state
