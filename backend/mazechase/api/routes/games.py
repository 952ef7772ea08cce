"""
Game Routes

REST API endpoints for game management:
- Create/list/get games
- Submit evader actions
- Let the pursuer take its turn
- Inspect game history
"""

from fastapi import APIRouter, HTTPException, Query, Path, Body
from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Any
from enum import Enum
import time

from ...core import (
    create_game, GameEngine, Action, ActionResult, Difficulty,
    GamePhase, MazeAlgorithm
)
from ...core.enums import parse_enum

router = APIRouter()


# =============================================================================
# Pydantic Models for Request/Response
# =============================================================================

class DifficultyLevel(str, Enum):
    """Difficulty levels for API"""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"


class CreateGameRequest(BaseModel):
    """Request model for creating a new game"""
    difficulty: DifficultyLevel = DifficultyLevel.MEDIUM
    algorithm: str = Field(default="pure_recursive", description="Maze carving algorithm")
    rows: Optional[int] = Field(default=None, ge=2, le=40, description="Override maze rows")
    columns: Optional[int] = Field(default=None, ge=2, le=40, description="Override maze columns")
    search_depth: Optional[int] = Field(default=None, ge=0, le=4, description="Override pursuer depth")
    seed: Optional[int] = Field(default=None, description="Random seed for a reproducible game")

    class Config:
        json_schema_extra = {
            "example": {
                "difficulty": "easy",
                "algorithm": "random_tree",
                "seed": 42
            }
        }


class ActionRequest(BaseModel):
    """Request model for an evader action"""
    action_type: str = Field(..., description="MOVE or USE_POWERUP")
    direction: Optional[str] = Field(default=None, description="front, back, right or left")
    powerup_slot: Optional[int] = Field(default=None, ge=0, description="Inventory slot to spend")

    class Config:
        json_schema_extra = {
            "example": {
                "action_type": "MOVE",
                "direction": "front"
            }
        }


class GameStateResponse(BaseModel):
    """Response model for game state"""
    game_id: str
    turn_number: int
    phase: str
    current_actor: Optional[str] = None
    rows: int
    columns: int
    goal: Dict[str, int]
    pursuer_position: Dict[str, int]
    evader_position: Dict[str, int]
    pursuer_frozen_turns: int
    evader_frozen_turns: int
    pursuer_powerups: List[Dict[str, Any]]
    evader_powerups: List[Dict[str, Any]]
    maze: Dict[str, Any]
    valid_actions: List[Dict[str, Any]]
    game_over: bool
    winner: Optional[str] = None
    victory_condition: Optional[str] = None


class ActionResultResponse(BaseModel):
    """Response model for action result"""
    success: bool
    message: str
    result: Dict[str, Any]
    game_state: GameStateResponse


# =============================================================================
# Game Storage (In-Memory)
# =============================================================================

games_store: Dict[str, Dict] = {}


def get_difficulty_enum(level: DifficultyLevel) -> Difficulty:
    """Convert API difficulty to game enum"""
    mapping = {
        DifficultyLevel.EASY: Difficulty.EASY,
        DifficultyLevel.MEDIUM: Difficulty.MEDIUM,
        DifficultyLevel.HARD: Difficulty.HARD,
        DifficultyLevel.EXPERT: Difficulty.EXPERT
    }
    return mapping.get(level, Difficulty.MEDIUM)


def get_engine(game_id: str) -> GameEngine:
    if game_id not in games_store:
        raise HTTPException(status_code=404, detail="Game not found")
    return games_store[game_id]["engine"]


def game_state_to_response(engine: GameEngine) -> GameStateResponse:
    """Convert game engine state to API response"""
    state = engine.state
    actor = engine.get_current_actor()

    return GameStateResponse(
        game_id=state.game_id,
        turn_number=state.turn_number,
        phase=state.phase.name,
        current_actor=actor.name if actor else None,
        rows=state.rows,
        columns=state.columns,
        goal=state.goal.to_dict(),
        pursuer_position=state.pursuer_position.to_dict(),
        evader_position=state.evader_position.to_dict(),
        pursuer_frozen_turns=state.pursuer_frozen_turns,
        evader_frozen_turns=state.evader_frozen_turns,
        pursuer_powerups=[p.to_dict() for p in state.pursuer_powerups],
        evader_powerups=[p.to_dict() for p in state.evader_powerups],
        maze=state.grid.to_dict(),
        valid_actions=[a.to_dict() for a in engine.get_valid_actions()],
        game_over=state.game_over,
        winner=state.winner.name if state.winner else None,
        victory_condition=state.victory_condition.name if state.victory_condition else None
    )


def result_to_response(engine: GameEngine, result: ActionResult) -> ActionResultResponse:
    return ActionResultResponse(
        success=result.success,
        message=result.message,
        result=result.to_dict(),
        game_state=game_state_to_response(engine)
    )


# =============================================================================
# API Endpoints
# =============================================================================

@router.post("/", response_model=GameStateResponse)
async def create_new_game(request: CreateGameRequest):
    """
    Create a new game session.

    Returns the initial game state, waiting on the evader.
    """
    overrides = {
        name: value
        for name, value in (
            ("rows", request.rows),
            ("columns", request.columns),
            ("search_depth", request.search_depth),
        )
        if value is not None
    }
    try:
        engine = create_game(
            difficulty=get_difficulty_enum(request.difficulty),
            algorithm=parse_enum(MazeAlgorithm, request.algorithm),
            seed=request.seed,
            **overrides
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    games_store[engine.state.game_id] = {
        "engine": engine,
        "created_at": time.time(),
    }

    return game_state_to_response(engine)


@router.get("/", response_model=List[Dict[str, Any]])
async def list_games(
    active_only: bool = Query(default=True, description="Only return active games")
):
    """
    List all game sessions.
    """
    games = []
    for game_id, game_data in games_store.items():
        engine = game_data["engine"]
        is_active = not engine.is_game_over()

        if active_only and not is_active:
            continue

        actor = engine.get_current_actor()
        games.append({
            "game_id": game_id,
            "turn_number": engine.state.turn_number,
            "current_actor": actor.name if actor else None,
            "difficulty": engine.config.difficulty.name,
            "created_at": game_data["created_at"],
            "is_active": is_active
        })

    return games


@router.get("/{game_id}", response_model=GameStateResponse)
async def get_game(game_id: str = Path(..., description="Game ID")):
    """
    Get the current state of a game.
    """
    return game_state_to_response(get_engine(game_id))


@router.post("/{game_id}/action", response_model=ActionResultResponse)
async def execute_action(
    game_id: str = Path(..., description="Game ID"),
    request: ActionRequest = Body(...)
):
    """
    Execute an evader action in the game.

    Returns the result and updated game state. The pursuer does not move
    until /ai-move is called.
    """
    engine = get_engine(game_id)

    if engine.is_game_over():
        raise HTTPException(status_code=400, detail="Game is already over")

    try:
        action = Action.from_dict(request.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid action: {e}")

    result = engine.perform_evader_action(action)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.message)

    return result_to_response(engine, result)


@router.post("/{game_id}/ai-move", response_model=ActionResultResponse)
async def execute_ai_move(game_id: str = Path(..., description="Game ID")):
    """
    Let the pursuer take its turn.

    Returns the pursuer's action (none when it was frozen) and the updated
    game state.
    """
    engine = get_engine(game_id)

    if engine.is_game_over():
        raise HTTPException(status_code=400, detail="Game is already over")
    if engine.state.phase != GamePhase.PURSUER_TURN:
        raise HTTPException(status_code=400, detail="Not the pursuer's turn")

    result = engine.take_pursuer_turn()
    return result_to_response(engine, result)


@router.delete("/{game_id}")
async def delete_game(game_id: str = Path(..., description="Game ID")):
    """
    Delete a game session.
    """
    get_engine(game_id)
    del games_store[game_id]

    return {"message": "Game deleted", "game_id": game_id}


@router.get("/{game_id}/history", response_model=List[Dict[str, Any]])
async def get_game_history(
    game_id: str = Path(..., description="Game ID"),
    limit: Optional[int] = Query(default=None, ge=1, description="Only the most recent events")
):
    """
    Get the event history of a game.
    """
    engine = get_engine(game_id)

    history = []
    for i, event in enumerate(engine.get_event_history(limit=limit)):
        history.append({
            "index": i,
            "type": event.event_type.name,
            "turn": event.turn,
            "actor": event.actor.name if event.actor else None,
            "action": str(event.action) if event.action else None,
            "message": event.message
        })

    return history


@router.get("/{game_id}/stats", response_model=Dict[str, Any])
async def get_game_stats(game_id: str = Path(..., description="Game ID")):
    """
    Get action counters and the pursuer's last search statistics.
    """
    engine = get_engine(game_id)
    search = engine.agent.get_search_stats() if hasattr(engine.agent, "get_search_stats") else {}
    winner = engine.get_winner()

    return {
        "game_id": game_id,
        "turn_number": engine.state.turn_number,
        "winner": winner.name if winner else None,
        "stats": engine.get_stats(),
        "last_search": search
    }
