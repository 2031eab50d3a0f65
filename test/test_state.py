"""
GameState serialization: JSON round trip and tolerant loading of damaged records.
"""

from blokcity.engine.actions import rename_enemy
from blokcity.engine.definitions import EnemyType, Intent
from blokcity.engine.reducer import apply_action
from blokcity.engine.state import GameState


def test_round_trip_is_field_for_field_equal(populated_state):
    restored = GameState.from_json(populated_state.to_json())
    assert restored == populated_state
    assert restored.to_dict() == populated_state.to_dict()


def test_round_trip_keeps_defeated_and_renamed_enemies(populated_state):
    populated_state.enemies[0].defeated = True
    populated_state.enemies[0].display_name = "Knuckles"
    populated_state.enemies[1].ready = 4
    restored = GameState.from_dict(populated_state.to_dict())
    assert restored.enemies[0].defeated is True
    assert restored.enemies[0].display_name == "Knuckles"
    assert restored.enemies[1].ready == 4


def test_to_dict_uses_plain_names(populated_state):
    data = populated_state.to_dict()
    assert data["enemy_numbers"] == {"Goon": 1, "Henchman": 1, "Lieutenant": 1, "UniqueCitizen": 0}
    assert data["enemies"][2]["type"] == "Lieutenant"
    assert data["enemies"][2]["intent"] == "CommandingOrders"


def test_from_dict_defaults_for_empty_record():
    state = GameState.from_dict({})
    assert state.turn == 1
    assert state.enemies == []
    assert state.enemy_numbers == {t: 0 for t in EnemyType}
    assert state.lieutenant_spawned is False


def test_from_dict_clamps_and_repairs():
    state = GameState.from_dict({
        "game_name": "Broken",
        "slug": "broken",
        "turn": 42,
        "enemy_numbers": {"Goon": "x"},
        "enemies": [
            {"id": "a", "type": "Lieutenant", "number": 1, "intent": "Dance", "edge": 9,
             "ready": 11, "condition": -3},
            {"id": "b", "type": "Dragon"},
            {"id": "c", "type": "UniqueCitizen", "number": 1, "edge": 2, "intent": "Slam"},
        ],
    })
    assert state.turn == 10
    assert [e.id for e in state.enemies] == ["a", "c"]
    lieutenant = state.enemies[0]
    assert lieutenant.intent == Intent.COMBAT
    assert lieutenant.edge is None
    assert lieutenant.ready == 6
    assert lieutenant.condition == 0
    assert lieutenant.display_name == "Lieutenant 1"
    assert state.enemies[1].edge is None
    assert state.lieutenant_spawned is True
    assert state.unique_citizen_spawned is True
    assert state.enemy_numbers[EnemyType.LIEUTENANT] == 1
    assert state.enemy_numbers[EnemyType.GOON] == 0


def test_round_trip_keeps_blank_rename(populated_state):
    goon = populated_state.enemies[0]
    state, _ = apply_action(populated_state, rename_enemy(goon.id, ""))
    restored = GameState.from_json(state.to_json())
    assert restored.enemies[0].display_name == ""
    assert restored == state


def test_missing_display_name_gets_default():
    state = GameState.from_dict({"enemies": [{"id": "a", "type": "Henchman", "number": 3}]})
    assert state.enemies[0].display_name == "Henchman 3"
