# =============================================================================
# Core Game Module
# =============================================================================
"""
Core game components including:
- Game state representation
- Move catalogs
- Move validation and the state transition function
- Victory conditions
"""

from .enums import (
    PlayerRole, AttackCategory, DefenseCategory,
    VictoryCondition, EvaluationScheme
)
from .data_structures import (
    AttackMove, DefenseMove, Move, ActorState, NetworkState,
    EvaluationWeights, GameConfig, MoveOutcome, DefenseSummary
)
from .exceptions import (
    GameError, InvalidTurnError, UnknownMoveError,
    InsufficientResourcesError, NoLegalMoveError
)
from .game_state import GameState
from .catalogs import ATTACK_CATALOG, DEFENSE_CATALOG, find_attack, find_defense
from .actions import MoveValidator, MoveExecutor, apply_move, check_game_end

__all__ = [
    # Enums
    "PlayerRole", "AttackCategory", "DefenseCategory",
    "VictoryCondition", "EvaluationScheme",
    # Data structures
    "AttackMove", "DefenseMove", "Move", "ActorState", "NetworkState",
    "EvaluationWeights", "GameConfig", "MoveOutcome", "DefenseSummary",
    # Errors
    "GameError", "InvalidTurnError", "UnknownMoveError",
    "InsufficientResourcesError", "NoLegalMoveError",
    # Core classes
    "GameState", "MoveValidator", "MoveExecutor",
    # Catalogs
    "ATTACK_CATALOG", "DEFENSE_CATALOG", "find_attack", "find_defense",
    # Convenience functions
    "apply_move", "check_game_end",
]
