"""
Spawn and intent tables: every roll 1-12 resolves, turn 10 never spawns.
"""

import pytest

from blokcity.engine.definitions import EnemyType, Intent
from blokcity.engine.tables import INTENT_TABLE, intents_for, lookup_intent, lookup_spawn_type


@pytest.mark.parametrize("turn", range(1, 10))
def test_every_roll_spawns_something_before_turn_10(turn):
    for roll in range(1, 13):
        assert lookup_spawn_type(turn, roll) in (EnemyType.GOON, EnemyType.HENCHMAN, EnemyType.LIEUTENANT)


def test_turn_10_never_spawns():
    assert all(lookup_spawn_type(10, roll) is None for roll in range(1, 13))


def test_turn_1_thresholds():
    assert lookup_spawn_type(1, 8) == EnemyType.GOON
    assert lookup_spawn_type(1, 9) == EnemyType.HENCHMAN
    assert lookup_spawn_type(1, 11) == EnemyType.HENCHMAN
    assert lookup_spawn_type(1, 12) == EnemyType.LIEUTENANT


@pytest.mark.parametrize("turn,goon_max,henchman_max", [
    (1, 8, 11),
    (2, 7, 10),
    (3, 6, 10),
    (4, 5, 9),
    (5, 4, 6),
    (6, 5, 9),
    (7, 6, 10),
    (8, 7, 10),
    (9, 8, 11),
])
def test_spawn_thresholds_per_turn(turn, goon_max, henchman_max):
    assert lookup_spawn_type(turn, 1) == EnemyType.GOON
    assert lookup_spawn_type(turn, goon_max) == EnemyType.GOON
    assert lookup_spawn_type(turn, goon_max + 1) == EnemyType.HENCHMAN
    assert lookup_spawn_type(turn, henchman_max) == EnemyType.HENCHMAN
    assert lookup_spawn_type(turn, henchman_max + 1) == EnemyType.LIEUTENANT
    assert lookup_spawn_type(turn, 12) == EnemyType.LIEUTENANT


def test_turn_5_is_hardest():
    goons = {t: sum(lookup_spawn_type(t, r) == EnemyType.GOON for r in range(1, 13)) for t in range(1, 10)}
    lieutenants = {t: sum(lookup_spawn_type(t, r) == EnemyType.LIEUTENANT for r in range(1, 13)) for t in range(1, 10)}
    assert goons[5] == min(goons.values()) == 4
    assert lieutenants[5] == 6
    assert lookup_spawn_type(5, 6) == EnemyType.HENCHMAN
    assert lookup_spawn_type(5, 7) == EnemyType.LIEUTENANT


def test_mirrored_turns_match():
    for early, late in [(1, 9), (2, 8), (3, 7), (4, 6)]:
        assert [lookup_spawn_type(early, r) for r in range(1, 13)] == [
            lookup_spawn_type(late, r) for r in range(1, 13)
        ]


@pytest.mark.parametrize("enemy_type", list(EnemyType))
def test_intent_ranges_cover_every_roll(enemy_type):
    ranges = INTENT_TABLE[enemy_type]
    assert ranges[-1][1] == 12
    maxes = [m for _, m in ranges]
    assert maxes == sorted(maxes)
    for roll in range(1, 13):
        assert lookup_intent(enemy_type, roll) in intents_for(enemy_type)


def test_out_of_range_roll_falls_back_to_last_intent():
    assert lookup_intent(EnemyType.HENCHMAN, 13) == Intent.SLAM
    assert lookup_intent(EnemyType.UNIQUE_CITIZEN, 99) == Intent.COMMANDING_ORDERS


def test_only_commanders_get_commanding_orders():
    assert Intent.COMMANDING_ORDERS not in intents_for(EnemyType.GOON)
    assert Intent.COMMANDING_ORDERS not in intents_for(EnemyType.HENCHMAN)
    assert Intent.COMMANDING_ORDERS in intents_for(EnemyType.LIEUTENANT)
    assert intents_for(EnemyType.UNIQUE_CITIZEN) == [
        Intent.COMBAT, Intent.SLAM, Intent.EVASIVE_MANOEUVRES, Intent.COMMANDING_ORDERS,
    ]
    assert all(
        Intent.EVASIVE_MANOEUVRES not in intents_for(t)
        for t in EnemyType if t != EnemyType.UNIQUE_CITIZEN
    )


def test_unique_citizen_intent_boundaries():
    assert lookup_intent(EnemyType.UNIQUE_CITIZEN, 3) == Intent.COMBAT
    assert lookup_intent(EnemyType.UNIQUE_CITIZEN, 4) == Intent.SLAM
    assert lookup_intent(EnemyType.UNIQUE_CITIZEN, 7) == Intent.EVASIVE_MANOEUVRES
    assert lookup_intent(EnemyType.UNIQUE_CITIZEN, 9) == Intent.COMMANDING_ORDERS
