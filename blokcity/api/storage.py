"""
Persistence for games: the game index and saved state per slug.

Storage is best effort. A missing, corrupt or unreadable record loads as None and
the caller starts a fresh game; a failed save is logged and dropped. Nothing here
raises into the engine.
"""

import json
import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blokcity.config import GAME_KEY_PREFIX
from blokcity.engine.state import GameState
from blokcity.engine.utils import initialize_game_state

from .models import GameRecord, GameSummary

logger = logging.getLogger(__name__)

# Older saves used camelCase and earlier enemy type names
_LEGACY_KEYS = {
    "gameName": "game_name",
    "createdAt": "created_at",
    "lieutenantSpawned": "lieutenant_spawned",
    "uniqueCitizenSpawned": "unique_citizen_spawned",
    "enemyNumbers": "enemy_numbers",
    "spawnedOnTurn": "spawned_on_turn",
    "displayName": "display_name",
}
_LEGACY_TYPES = {"Minion": "Goon", "Muscle": "Henchman"}
_DROPPED_KEYS = ("minionCounter", "goonCounter", "minion_counter", "goon_counter")


def game_key(slug: str) -> str:
    return f"{GAME_KEY_PREFIX}{slug}"


def _rename_keys(data: dict[str, Any]) -> dict[str, Any]:
    out = {}
    for key, value in data.items():
        if key in _DROPPED_KEYS:
            continue
        out[_LEGACY_KEYS.get(key, key)] = value
    return out


def migrate_record(raw: Any) -> dict[str, Any]:
    """
    Bring a stored record up to the current schema before GameState.from_dict.
    Counter-based gating (minionCounter/goonCounter) is dropped; the spawn flags are
    rebuilt from the enemy list by GameState.from_dict.
    """
    if not isinstance(raw, dict):
        return {}
    data = _rename_keys(raw)

    numbers = data.get("enemy_numbers")
    if isinstance(numbers, dict):
        migrated: dict[str, Any] = {}
        for type_name, count in numbers.items():
            new_name = _LEGACY_TYPES.get(type_name, type_name)
            try:
                migrated[new_name] = migrated.get(new_name, 0) + int(count)
            except (TypeError, ValueError):
                continue
        data["enemy_numbers"] = migrated

    enemies = data.get("enemies")
    if isinstance(enemies, list):
        data["enemies"] = [
            {**_rename_keys(e), "type": _LEGACY_TYPES.get(e.get("type"), e.get("type"))}
            for e in enemies
            if isinstance(e, dict)
        ]
    return data


def load_game_state(db: Session, slug: str) -> GameState | None:
    """Saved state for slug, or None if there is none or it cannot be read."""
    try:
        row = db.query(GameRecord).filter(GameRecord.storage_key == game_key(slug)).first()
    except SQLAlchemyError:
        logger.warning("Could not read game state for %r", slug, exc_info=True)
        return None
    if row is None:
        return None
    try:
        raw = json.loads(row.game_state) if isinstance(row.game_state, str) else row.game_state
    except (TypeError, json.JSONDecodeError):
        logger.warning("Corrupt game state for %r; ignoring it", slug)
        return None
    if not isinstance(raw, dict):
        logger.warning("Game state for %r is not an object; ignoring it", slug)
        return None
    return GameState.from_dict(migrate_record(raw))


def save_game_state(db: Session, state: GameState) -> None:
    """Write state under its slug's key, replacing what was there."""
    key = game_key(state.slug)
    try:
        row = db.query(GameRecord).filter(GameRecord.storage_key == key).first()
        payload = json.dumps(state.to_dict())
        if row is None:
            db.add(GameRecord(storage_key=key, slug=state.slug, game_state=payload))
        else:
            row.game_state = payload
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning("Could not save game state for %r", state.slug, exc_info=True)


def create_game_summary(db: Session, game_name: str, slug: str, created_at: int | None = None) -> None:
    """Register a game in the index. Does nothing if the slug is already registered."""
    try:
        if db.get(GameSummary, slug) is not None:
            return
        if created_at is None:
            created_at = initialize_game_state(game_name, slug).created_at
        db.add(GameSummary(slug=slug, game_name=game_name, created_at=created_at))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning("Could not register game %r", slug, exc_info=True)


def get_game_summary(db: Session, slug: str) -> dict[str, Any] | None:
    try:
        row = db.get(GameSummary, slug)
    except SQLAlchemyError:
        logger.warning("Could not read game index entry %r", slug, exc_info=True)
        return None
    return _summary_to_dict(row) if row is not None else None


def list_game_summaries(db: Session) -> list[dict[str, Any]]:
    """All registered games, oldest first."""
    try:
        rows = db.query(GameSummary).order_by(GameSummary.created_at, GameSummary.slug).all()
    except SQLAlchemyError:
        logger.warning("Could not read game index", exc_info=True)
        return []
    return [_summary_to_dict(row) for row in rows]


def delete_game(db: Session, slug: str) -> None:
    """Remove a game's index entry and its saved state."""
    try:
        db.query(GameRecord).filter(GameRecord.storage_key == game_key(slug)).delete()
        db.query(GameSummary).filter(GameSummary.slug == slug).delete()
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning("Could not delete game %r", slug, exc_info=True)


def _summary_to_dict(row: GameSummary) -> dict[str, Any]:
    return {"game_name": row.game_name, "slug": row.slug, "created_at": row.created_at}
