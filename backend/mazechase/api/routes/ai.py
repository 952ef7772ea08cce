"""
AI Routes

REST API endpoints for the pursuer:
- List available agents
- Get the pursuer's decision for any snapshot
- Score a snapshot with the evaluator
"""

from fastapi import APIRouter, HTTPException, Path, Body
from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Any
import time

from ...core import GameState
from ...ai import MinimaxAgent, StateEvaluator, MAX_SEARCH_DEPTH

router = APIRouter()


# =============================================================================
# Pydantic Models
# =============================================================================

class AIAgentInfo(BaseModel):
    """Information about an AI agent"""
    name: str
    type: str
    role: str
    description: str
    parameters: Dict[str, Any]
    strengths: List[str]


class MoveRequest(BaseModel):
    """Request for a pursuer decision"""
    state: Dict[str, Any] = Field(..., description="Game state snapshot as returned by GameState.to_dict()")
    depth: int = Field(default=2, ge=0, le=MAX_SEARCH_DEPTH, description="Search depth in plies")

    class Config:
        json_schema_extra = {
            "example": {
                "depth": 2
            }
        }


class EvaluateRequest(BaseModel):
    """Request for a static evaluation"""
    state: Dict[str, Any] = Field(..., description="Game state snapshot as returned by GameState.to_dict()")


class MoveResponse(BaseModel):
    """Response with the pursuer's chosen move"""
    action: Optional[Dict[str, Any]]
    description: str
    score: float
    depth: int
    nodes_searched: int
    willingness: float
    immediate_capture: bool
    time_taken: float


class EvaluationResponse(BaseModel):
    """Evaluator score for a snapshot"""
    score: float
    is_terminal: bool
    winner: Optional[str] = None


# =============================================================================
# Available Agents
# =============================================================================

AGENT_INFO = {
    "minimax": AIAgentInfo(
        name="Minimax Agent",
        type="minimax",
        role="pursuer",
        description="Bounded-depth minimax over every legal move and power-up",
        parameters={
            "depth": f"Search depth in plies (0-{MAX_SEARCH_DEPTH})"
        },
        strengths=[
            "Optimal play within search depth",
            "Predictable and explainable decisions",
            "Spends power-ups only when they shorten the chase"
        ]
    ),
    "random": AIAgentInfo(
        name="Random Agent",
        type="random",
        role="evader",
        description="Selects random valid actions (baseline)",
        parameters={
            "seed": "Random seed"
        },
        strengths=[
            "Simple baseline for comparison"
        ]
    ),
    "greedy": AIAgentInfo(
        name="Greedy Evader",
        type="greedy",
        role="evader",
        description="Runs the shortest route to the goal and freezes a nearby pursuer",
        parameters={
            "freeze_radius": "Chase distance at which the pursuer gets frozen"
        },
        strengths=[
            "Fast decision making",
            "Reasonable demo opponent"
        ]
    )
}


def parse_state(data: Dict[str, Any]) -> GameState:
    try:
        return GameState.from_dict(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid game state: {e}")


# =============================================================================
# API Endpoints
# =============================================================================

@router.get("/agents", response_model=List[AIAgentInfo])
async def list_agents():
    """
    List all available AI agents.
    """
    return list(AGENT_INFO.values())


@router.get("/agents/{agent_type}", response_model=AIAgentInfo)
async def get_agent_info(agent_type: str = Path(..., description="Agent type")):
    """
    Get detailed information about a specific AI agent.
    """
    if agent_type not in AGENT_INFO:
        raise HTTPException(status_code=404, detail=f"Agent type '{agent_type}' not found")

    return AGENT_INFO[agent_type]


@router.post("/move", response_model=MoveResponse)
async def get_minimax_move(request: MoveRequest = Body(...)):
    """
    Get the pursuer's best action for a snapshot.

    The snapshot is not stored; use /games/{game_id}/ai-move to play
    the move in a running game.
    """
    state = parse_state(request.state)
    agent = MinimaxAgent(depth=request.depth)

    start_time = time.time()
    action = agent.get_best_action(state)
    time_taken = time.time() - start_time

    stats = agent.last_stats
    return MoveResponse(
        action=action.to_dict() if action else None,
        description=str(action) if action else "No legal action",
        score=action.score if action else 0.0,
        depth=request.depth,
        nodes_searched=stats.nodes_searched if stats else 0,
        willingness=stats.willingness if stats else 0.0,
        immediate_capture=stats.immediate_capture if stats else False,
        time_taken=time_taken
    )


@router.post("/evaluate", response_model=EvaluationResponse)
async def evaluate_state(request: EvaluateRequest = Body(...)):
    """
    Score a snapshot from the pursuer's point of view.
    """
    state = parse_state(request.state)
    score = StateEvaluator().evaluate(state)
    victory = state.check_victory_conditions()

    return EvaluationResponse(
        score=score,
        is_terminal=StateEvaluator.is_terminal_score(score),
        winner=victory[0].name if victory else None
    )
