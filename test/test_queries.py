"""
Read-only queries and intent behaviour text.
"""

from blokcity.engine.actions import advance_turn, defeat_enemy
from blokcity.engine.behaviours import get_intent_behaviour
from blokcity.engine.definitions import EnemyType, Intent
from blokcity.engine.queries import (
    commanding_orders_targets,
    count_active_non_unique,
    get_available_actions,
    sorted_enemies,
)
from blokcity.engine.reducer import replay_from_actions
from blokcity.engine.utils import print_game_state, resolve_commanding_orders_reroll, slugify

from conftest import add_enemy, rolls


def test_sorted_enemies_newest_active_first(populated_state):
    goon, henchman, lieutenant = populated_state.enemies
    state, _ = replay_from_actions(populated_state, [defeat_enemy(goon.id)])
    assert [e.id for e in sorted_enemies(state)] == [lieutenant.id, henchman.id, goon.id]


def test_count_active_non_unique(populated_state, ids):
    state, _ = add_enemy(populated_state, EnemyType.UNIQUE_CITIZEN, ids)
    assert count_active_non_unique(state) == 3
    state, _ = replay_from_actions(state, [defeat_enemy(state.enemies[0].id)])
    assert count_active_non_unique(state) == 2


def test_lieutenant_commands_only_goons_and_henchmen(populated_state, ids):
    state, _ = add_enemy(populated_state, EnemyType.LIEUTENANT, ids)
    source = state.enemies[2]
    targets = commanding_orders_targets(state, source)
    assert {e.type for e in targets} == {EnemyType.GOON, EnemyType.HENCHMAN}


def test_unique_citizen_commands_any_non_unique(populated_state, ids):
    state, uc = add_enemy(populated_state, EnemyType.UNIQUE_CITIZEN, ids, intent=Intent.COMMANDING_ORDERS)
    targets = commanding_orders_targets(state, uc)
    assert {e.type for e in targets} == {EnemyType.GOON, EnemyType.HENCHMAN, EnemyType.LIEUTENANT}


def test_commanding_reroll_commits_new_intent(populated_state):
    goon, henchman, lieutenant = populated_state.enemies
    state, events, roll = resolve_commanding_orders_reroll(
        populated_state, lieutenant.id, henchman.id, rolls((1, 12))
    )
    assert roll == 1
    assert state.find_enemy(henchman.id).intent == Intent.COMBAT
    assert events[0].payload["roll"] == 1


def test_commanding_reroll_rejects_invalid_target(populated_state):
    goon, henchman, lieutenant = populated_state.enemies
    state, events, roll = resolve_commanding_orders_reroll(populated_state, goon.id, lieutenant.id)
    assert roll is None
    assert state is populated_state


def test_available_actions(populated_state):
    actions = get_available_actions(populated_state)
    assert actions["can_retreat_turn"] is False
    assert actions["can_spawn"] is True
    assert actions["commanders"] == [populated_state.enemies[2].id]
    state, _ = replay_from_actions(populated_state, [advance_turn()] * 9)
    actions = get_available_actions(state)
    assert actions["can_spawn"] is False
    assert actions["can_advance_turn"] is False


def test_unique_citizen_commanding_orders_text():
    regular = get_intent_behaviour(Intent.COMMANDING_ORDERS, EnemyType.LIEUTENANT)
    unique = get_intent_behaviour(Intent.COMMANDING_ORDERS, EnemyType.UNIQUE_CITIZEN)
    assert "D6" in regular.actions[0].detail
    assert "Standard Spawn" in unique.actions[0].detail
    assert get_intent_behaviour(Intent.EVASIVE_MANOEUVRES).to_dict()["note"] == "Unique Citizen only"


def test_slugify():
    assert slugify("Friday Night Warz!") == "friday-night-warz"
    assert slugify("  --Blok  City-- ") == "blok-city"
    assert slugify("!!!") == ""


def test_print_game_state_lists_enemies(populated_state, capsys):
    print_game_state(populated_state, verbose=True)
    out = capsys.readouterr().out
    for enemy in populated_state.enemies:
        assert enemy.display_name in out
    assert "CON" in out
