"""
Game Routes

REST API endpoints for the live game:
- Start a new game
- Submit attacker moves
- Trigger the AI defender
- Read state, history and AI statistics
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from ...session import GameSession

# Handlers are sync: they run in the threadpool and serialize on the session lock
router = APIRouter()


# =============================================================================
# Pydantic Models for Request/Response
# =============================================================================

class AttackRequest(BaseModel):
    """Request model for an attacker move"""
    attack_id: int = Field(..., alias="attackId", description="Attack catalog id")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "attackId": 1
            }
        }


class InitResponse(BaseModel):
    """Response model for a new game"""
    state: Dict[str, Any]
    attacks: List[Dict[str, Any]]
    defenses: List[Dict[str, Any]]
    config: Dict[str, Any]


class StateResponse(BaseModel):
    """Response model for game state"""
    state: Dict[str, Any]


class DefenseResponse(BaseModel):
    """Response model for the AI defender's move"""
    state: Dict[str, Any]
    defense: Dict[str, Any]


class AIStatsResponse(BaseModel):
    """Response model for the last search"""
    depth: int
    use_alpha_beta: bool
    chosen_history: List[int]
    last_search: Optional[Dict[str, Any]] = None


# =============================================================================
# Dependencies
# =============================================================================

def get_session(request: Request) -> GameSession:
    """The session owned by the running application"""
    return request.app.state.session


# =============================================================================
# API Endpoints
# =============================================================================

@router.get("/init", response_model=InitResponse)
def init_game(session: GameSession = Depends(get_session)):
    """
    Start a new game.

    Returns the initial state, both catalogs and the game constants.
    """
    return session.initialize()


@router.post("/new", response_model=InitResponse)
def new_game(session: GameSession = Depends(get_session)):
    """Alias of /init for clients that prefer POST for resets"""
    return session.initialize()


@router.get("/state", response_model=StateResponse)
def get_state(session: GameSession = Depends(get_session)):
    """Get the current state of the game"""
    return {"state": session.snapshot()}


@router.post("/attack", response_model=StateResponse)
def submit_attack(request: AttackRequest, session: GameSession = Depends(get_session)):
    """
    Apply an attacker move.

    Rejected moves (wrong turn, unknown id, not enough resources) come back
    as 400 with an error message.
    """
    state = session.apply_attack(request.attack_id)
    return {"state": state.to_dict()}


@router.post("/defend", response_model=DefenseResponse)
def submit_defense(session: GameSession = Depends(get_session)):
    """
    Let the AI choose and apply the defender's move.

    Returns the updated state and a summary of the defense actually applied.
    """
    state, summary = session.apply_defense()
    return {"state": state.to_dict(), "defense": summary.to_dict()}


@router.get("/history", response_model=List[Dict[str, Any]])
def get_history(session: GameSession = Depends(get_session)):
    """Get the event log of the current game"""
    return session.get_history()


@router.get("/ai/stats", response_model=AIStatsResponse)
def get_ai_stats(session: GameSession = Depends(get_session)):
    """Statistics from the AI's most recent search"""
    agent = session.agent
    return {
        "depth": agent.max_depth,
        "use_alpha_beta": agent.use_alpha_beta,
        "chosen_history": list(agent.chosen_history),
        "last_search": agent.get_search_stats() or None,
    }
