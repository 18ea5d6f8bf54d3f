# =============================================================================
# AI Module
# =============================================================================
"""
AI agents for Cyber Duel.

Contains:
- MinimaxAgent: Hand-coded MinMax with Alpha-Beta pruning, plays the defender
- StateEvaluator: Deterministic heuristic used at the search horizon
- RandomAttacker / GreedyAttacker: Baseline opponents for demos and tests
"""

from .evaluation import StateEvaluator
from .minimax_agent import (
    MinimaxAgent,
    create_minimax_agent,
    MoveOrderer,
    SearchStats,
)
from .baseline_agents import RandomAttacker, GreedyAttacker

__all__ = [
    # Evaluation
    "StateEvaluator",

    # MinMax Agent
    "MinimaxAgent",
    "create_minimax_agent",
    "MoveOrderer",
    "SearchStats",

    # Baselines
    "RandomAttacker",
    "GreedyAttacker",
]
