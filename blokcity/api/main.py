"""
FastAPI backend for the Blok City Warz minion tracker.
Local, single-user REST API over the rules engine; every change is saved after it is applied.
"""

import logging
import traceback
from typing import Any, Literal

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from blokcity.config import CORS_ORIGINS, configure_logging
from blokcity.engine.actions import (
    Action,
    advance_turn,
    retreat_turn,
    defeat_enemy,
    revive_enemy,
    update_stat,
    reroll_intent,
    set_intent,
    rename_enemy,
)
from blokcity.engine.behaviours import get_intent_behaviour
from blokcity.engine.definitions import Intent
from blokcity.engine.events import GameEvent
from blokcity.engine.ids import IdGenerator
from blokcity.engine.queries import (
    can_issue_commanding_orders,
    commanding_orders_targets,
    get_available_actions,
    sorted_enemies,
)
from blokcity.engine.reducer import apply_action
from blokcity.engine.state import Enemy, GameState
from blokcity.engine.utils import (
    initialize_game_state,
    resolve_commanding_orders_reroll,
    resolve_commanding_orders_spawn,
    resolve_spawn,
    slugify,
)

from .database import get_db, init_db
from .storage import (
    create_game_summary,
    delete_game as delete_stored_game,
    get_game_summary,
    list_game_summaries,
    load_game_state,
    save_game_state,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Blok City Warz Minion Tracker API",
    description="Spawn, intent and turn tracking for Blok City Warz co-op scenarios",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# One id generator per running app; seeded from every game it loads
app.state.id_generator = IdGenerator()
# None = random.random; tests swap in a deterministic source
app.state.random = None


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method and path so 500s can be traced to the failing endpoint."""
    try:
        response = await call_next(request)
        if response.status_code >= 500:
            logger.error("[500] %s %s", request.method, request.url.path)
        return response
    except Exception:
        logger.exception("[500] %s %s (exception)", request.method, request.url.path)
        raise


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Return 500 as JSON with the traceback so the frontend can show the error."""
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "traceback": traceback.format_exc()},
    )


# ===== Pydantic Models =====

StatName = Literal["strike", "condition", "agility", "range", "energy", "damage", "ready"]


class CreateGameRequest(BaseModel):
    name: str


class StatRequest(BaseModel):
    stat: StatName
    delta: int


class IntentRequest(BaseModel):
    intent: Intent


class RenameRequest(BaseModel):
    display_name: str


class CommandingRerollRequest(BaseModel):
    target_id: str


# ===== Helpers =====

def get_game(slug: str, db: Session) -> GameState:
    """
    Load a registered game's state; raise 404 if the slug is not registered.
    A registered game whose saved state is missing or unreadable starts over fresh.
    """
    summary = get_game_summary(db, slug)
    if summary is None:
        raise HTTPException(status_code=404, detail=f"Game {slug} not found")
    state = load_game_state(db, slug)
    if state is None:
        logger.info("No usable saved state for %r; starting fresh", slug)
        state = initialize_game_state(summary["game_name"], slug, summary["created_at"])
        save_game_state(db, state)
    app.state.id_generator.seed_from(e.id for e in state.enemies)
    return state


def get_enemy(state: GameState, enemy_id: str) -> Enemy:
    enemy = state.find_enemy(enemy_id)
    if enemy is None:
        raise HTTPException(status_code=404, detail=f"Enemy {enemy_id} not found")
    return enemy


def state_for_response(state: GameState) -> dict[str, Any]:
    """State dict plus display order and available actions for the UI."""
    out = state.to_dict()
    out["display_order"] = [e.id for e in sorted_enemies(state)]
    out["available_actions"] = get_available_actions(state)
    return out


def _respond(state: GameState, events: list[GameEvent], **extra: Any) -> dict[str, Any]:
    return {
        "state": state_for_response(state),
        "events": [e.to_dict() for e in events],
        **extra,
    }


def _apply(state: GameState, action: Action, db: Session) -> dict[str, Any]:
    new_state, events = apply_action(state, action, app.state.random)
    save_game_state(db, new_state)
    return _respond(new_state, events)


def _apply_to_enemy(slug: str, enemy_id: str, action: Action, db: Session) -> dict[str, Any]:
    state = get_game(slug, db)
    get_enemy(state, enemy_id)
    return _apply(state, action, db)


@app.on_event("startup")
def on_startup():
    configure_logging()
    init_db()


# ===== API Endpoints =====

@app.get("/")
def root():
    return {"message": "Blok City Warz Minion Tracker API", "version": "1.0.0"}


@app.get("/games")
def list_games(db: Session = Depends(get_db)):
    return {"games": list_game_summaries(db)}


@app.post("/games")
def create_game(request: CreateGameRequest, db: Session = Depends(get_db)):
    """Register a game by name. Re-using a name that slugifies to an existing game opens that game."""
    name = request.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Please enter a game name.")
    slug = slugify(name)
    if not slug:
        raise HTTPException(status_code=400, detail="Please enter a valid name with at least one letter or number.")
    create_game_summary(db, name, slug)
    state = get_game(slug, db)
    return {"slug": slug, "state": state_for_response(state)}


@app.get("/games/{slug}")
def get_game_state(slug: str, db: Session = Depends(get_db)):
    return {"slug": slug, "state": state_for_response(get_game(slug, db))}


@app.delete("/games/{slug}")
def delete_game(slug: str, db: Session = Depends(get_db)):
    if get_game_summary(db, slug) is None:
        raise HTTPException(status_code=404, detail="Game not found")
    delete_stored_game(db, slug)
    return {"message": f"Game {slug} deleted"}


@app.post("/games/{slug}/turn/advance")
def do_advance_turn(slug: str, db: Session = Depends(get_db)):
    return _apply(get_game(slug, db), advance_turn(), db)


@app.post("/games/{slug}/turn/retreat")
def do_retreat_turn(slug: str, db: Session = Depends(get_db)):
    return _apply(get_game(slug, db), retreat_turn(), db)


@app.post("/games/{slug}/spawn")
def do_spawn(slug: str, db: Session = Depends(get_db)):
    """Buff Token spawn. On turn 10 nothing spawns and spawned is false."""
    state = get_game(slug, db)
    new_state, events, result = resolve_spawn(state, app.state.id_generator, app.state.random)
    if result is None:
        return _respond(state, [], spawned=False, result=None)
    save_game_state(db, new_state)
    return _respond(new_state, events, spawned=True, result=result.to_dict())


@app.post("/games/{slug}/enemies/{enemy_id}/defeat")
def do_defeat(slug: str, enemy_id: str, db: Session = Depends(get_db)):
    return _apply_to_enemy(slug, enemy_id, defeat_enemy(enemy_id), db)


@app.post("/games/{slug}/enemies/{enemy_id}/revive")
def do_revive(slug: str, enemy_id: str, db: Session = Depends(get_db)):
    return _apply_to_enemy(slug, enemy_id, revive_enemy(enemy_id), db)


@app.post("/games/{slug}/enemies/{enemy_id}/stat")
def do_update_stat(slug: str, enemy_id: str, request: StatRequest, db: Session = Depends(get_db)):
    return _apply_to_enemy(slug, enemy_id, update_stat(enemy_id, request.stat, request.delta), db)


@app.post("/games/{slug}/enemies/{enemy_id}/reroll-intent")
def do_reroll_intent(slug: str, enemy_id: str, db: Session = Depends(get_db)):
    return _apply_to_enemy(slug, enemy_id, reroll_intent(enemy_id), db)


@app.post("/games/{slug}/enemies/{enemy_id}/intent")
def do_set_intent(slug: str, enemy_id: str, request: IntentRequest, db: Session = Depends(get_db)):
    return _apply_to_enemy(slug, enemy_id, set_intent(enemy_id, request.intent), db)


@app.post("/games/{slug}/enemies/{enemy_id}/rename")
def do_rename(slug: str, enemy_id: str, request: RenameRequest, db: Session = Depends(get_db)):
    display_name = request.display_name.strip()
    if not display_name:
        raise HTTPException(status_code=400, detail="Name cannot be empty")
    return _apply_to_enemy(slug, enemy_id, rename_enemy(enemy_id, display_name), db)


@app.get("/games/{slug}/enemies/{enemy_id}/behaviour")
def get_behaviour(slug: str, enemy_id: str, db: Session = Depends(get_db)):
    enemy = get_enemy(get_game(slug, db), enemy_id)
    return get_intent_behaviour(enemy.intent, enemy.type).to_dict()


def _require_commander(state: GameState, enemy_id: str) -> Enemy:
    enemy = get_enemy(state, enemy_id)
    if not can_issue_commanding_orders(enemy):
        raise HTTPException(status_code=400, detail=f"{enemy.display_name} is not issuing Commanding Orders")
    return enemy


@app.get("/games/{slug}/enemies/{enemy_id}/commanding-orders/targets")
def get_commanding_targets(slug: str, enemy_id: str, db: Session = Depends(get_db)):
    state = get_game(slug, db)
    source = _require_commander(state, enemy_id)
    return {"targets": [e.id for e in commanding_orders_targets(state, source)]}


@app.post("/games/{slug}/enemies/{enemy_id}/commanding-orders/spawn")
def do_commanding_spawn(slug: str, enemy_id: str, db: Session = Depends(get_db)):
    """Reinforcement spawn. Can come back with spawned false on turn 10 (standard spawn fallback)."""
    state = get_game(slug, db)
    _require_commander(state, enemy_id)
    new_state, events, result = resolve_commanding_orders_spawn(
        state, enemy_id, app.state.id_generator, app.state.random
    )
    if result is None:
        return _respond(state, [], spawned=False, result=None)
    save_game_state(db, new_state)
    return _respond(new_state, events, spawned=True, result=result.to_dict())


@app.post("/games/{slug}/enemies/{enemy_id}/commanding-orders/reroll")
def do_commanding_reroll(
    slug: str,
    enemy_id: str,
    request: CommandingRerollRequest,
    db: Session = Depends(get_db),
):
    state = get_game(slug, db)
    _require_commander(state, enemy_id)
    new_state, events, roll = resolve_commanding_orders_reroll(
        state, enemy_id, request.target_id, app.state.random
    )
    if roll is None:
        raise HTTPException(status_code=400, detail=f"{request.target_id} cannot be commanded by {enemy_id}")
    save_game_state(db, new_state)
    return _respond(new_state, events, roll=roll)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
