"""REST service to play Hearts against three computer seats."""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, fields
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from bots import Difficulty
from hearts.cards import CardError
from hearts.events import Event
from hearts.game import Game
from hearts.rules_schema import GameRules
from hearts.service import GameService

logger = logging.getLogger(__name__)


class CardPayload(BaseModel):
    rank: str
    suit: str


class StartRequest(BaseModel):
    difficulty: Difficulty = Difficulty.MEDIUM
    seed: Optional[int] = None
    rules: Optional[GameRules] = None


class PassRequest(BaseModel):
    cards: List[CardPayload] = Field(..., description="Exactly three cards from the human hand.")


class PlayRequest(BaseModel):
    card: CardPayload


sessions: Dict[str, GameService] = {}


app = FastAPI(title="Hearts Play Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def describe_events(events: List[Event]) -> List[Dict[str, object]]:
    described = []
    for event in events:
        values = {field.name: str(getattr(event, field.name)) for field in fields(event)}
        described.append({"type": type(event).__name__, "fields": values})
    return described


def serialize_state(service: GameService) -> Dict[str, object]:
    stats = service.statistics
    return {
        "table": asdict(service.get_table_view()),
        "events": describe_events(service.last_events),
        "statistics": {
            "gamesPlayed": stats.games_played,
            "gamesWon": stats.games_won,
            "winRate": stats.win_rate,
            "averageScore": stats.average_score,
            "bestScore": stats.best_score,
            "moonShots": stats.moon_shots,
        },
    }


def ensure_session(session_id: str) -> GameService:
    service = sessions.get(session_id)
    if service is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return service


@app.post("/session/start")
def start_session(request: StartRequest) -> Dict[str, object]:
    game = Game(seed=request.seed, rules=request.rules, difficulty=request.difficulty)
    service = GameService(game)
    service.start_new_game()
    session_id = uuid.uuid4().hex
    sessions[session_id] = service
    logger.info("Started session %s (difficulty=%s)", session_id, request.difficulty.value)
    return {"session_id": session_id, "state": serialize_state(service)}


@app.get("/session/{session_id}")
def get_session(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    return {"state": serialize_state(service)}


@app.post("/session/{session_id}/pass")
def pass_cards(session_id: str, request: PassRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    try:
        service.pass_cards([card.model_dump() for card in request.cards])
    except CardError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return {"accepted": bool(service.last_events), "state": serialize_state(service)}


@app.post("/session/{session_id}/play")
def play_card(session_id: str, request: PlayRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    try:
        service.play_card(request.card.model_dump())
    except CardError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return {"accepted": bool(service.last_events), "state": serialize_state(service)}


@app.post("/session/{session_id}/undo")
def undo(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    service.undo()
    return {"accepted": bool(service.last_events), "state": serialize_state(service)}
