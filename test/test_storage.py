"""
Storage against an in-memory SQLite database: index, save/load by slug, legacy migration.
"""

import json

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from blokcity.api.database import init_db
from blokcity.api.models import GameRecord
from blokcity.api.storage import (
    create_game_summary,
    delete_game,
    game_key,
    list_game_summaries,
    load_game_state,
    migrate_record,
    save_game_state,
)
from blokcity.engine.definitions import EnemyType


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()


def test_missing_game_loads_as_none(db):
    assert load_game_state(db, "nothing-here") is None


def test_save_then_load(db, populated_state):
    save_game_state(db, populated_state)
    assert load_game_state(db, populated_state.slug) == populated_state


def test_save_overwrites_by_slug(db, populated_state, empty_state):
    save_game_state(db, populated_state)
    save_game_state(db, empty_state)
    assert load_game_state(db, "test-night") == empty_state
    assert db.query(GameRecord).count() == 1
    assert db.get(GameRecord, game_key("test-night")) is not None
    assert game_key("test-night") == "bcw-game-test-night"


def test_corrupt_state_loads_as_none(db):
    db.add(GameRecord(storage_key=game_key("bad"), slug="bad", game_state="{not json"))
    db.commit()
    assert load_game_state(db, "bad") is None


def test_game_index(db):
    create_game_summary(db, "First Game", "first-game", created_at=100)
    create_game_summary(db, "Second Game", "second-game", created_at=50)
    create_game_summary(db, "First Game Again", "first-game", created_at=200)
    games = list_game_summaries(db)
    assert [g["slug"] for g in games] == ["second-game", "first-game"]
    assert games[1] == {"game_name": "First Game", "slug": "first-game", "created_at": 100}


def test_delete_game_removes_index_and_state(db, populated_state):
    create_game_summary(db, populated_state.game_name, populated_state.slug)
    save_game_state(db, populated_state)
    delete_game(db, populated_state.slug)
    assert list_game_summaries(db) == []
    assert load_game_state(db, populated_state.slug) is None


def test_legacy_record_is_migrated(db):
    legacy = {
        "gameName": "Old Save",
        "slug": "old-save",
        "createdAt": 1690000000000,
        "turn": 3,
        "minionCounter": 3,
        "uniqueCitizenSpawned": False,
        "enemyNumbers": {"Minion": 3, "Muscle": 1, "Lieutenant": 1, "UniqueCitizen": 0},
        "enemies": [
            {"id": "enemy-1-0", "type": "Minion", "number": 1, "edge": 2, "intent": "Combat",
             "spawnedOnTurn": 1, "defeated": False, "strike": 0, "condition": 6, "agility": 0,
             "range": 4, "energy": 6, "damage": 0},
            {"id": "enemy-1-1", "type": "Lieutenant", "number": 1, "edge": 4, "intent": "Slam",
             "spawnedOnTurn": 2, "defeated": False, "strike": 0, "condition": 12, "agility": 0,
             "range": 4, "energy": 6, "damage": 0},
        ],
    }
    db.add(GameRecord(storage_key=game_key("old-save"), slug="old-save", game_state=json.dumps(legacy)))
    db.commit()

    state = load_game_state(db, "old-save")
    assert state.game_name == "Old Save"
    assert state.turn == 3
    assert state.enemies[0].type == EnemyType.GOON
    assert state.enemies[0].display_name == "Goon 1"
    assert state.enemies[0].ready == 0
    assert state.enemy_numbers[EnemyType.GOON] == 3
    assert state.enemy_numbers[EnemyType.HENCHMAN] == 1
    assert state.lieutenant_spawned is True


def test_migrate_record_ignores_non_dicts():
    assert migrate_record(None) == {}
    assert migrate_record({"enemies": ["junk"]})["enemies"] == []
