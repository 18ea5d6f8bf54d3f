# =============================================================================
# Cyber Duel - State Evaluation
# =============================================================================
"""
Heuristic scoring of game states from the defender's perspective.

The evaluator is a pure function of the state and its weights: the search
compares sibling branches that were produced with different random rolls,
so the score itself must never add noise.
"""

from typing import Dict, Optional

from ..core import GameState, PlayerRole, EvaluationScheme, EvaluationWeights
from ..core.data_structures import AttackMove, DefenseMove


class StateEvaluator:
    """
    Evaluates game states.
    Higher values favor the defender.

    Components (each capped by its weight):
    - security: how close the network is to fully secured
    - resources: defender's resource lead over the attacker (deficits unbounded)
    - posture: how well the defense answers the current threat
    """

    def __init__(self, weights: Optional[EvaluationWeights] = None):
        self.weights = weights or EvaluationWeights()

    def evaluate(self, state: GameState) -> float:
        """
        Score a state.

        Terminal states saturate at +/- win_score so they dominate every
        non-terminal score.
        """
        if state.game_over:
            if state.winner == PlayerRole.DEFENDER:
                return self.weights.win_score
            return -self.weights.win_score

        components = self.components(state)
        return sum(components.values())

    def components(self, state: GameState) -> Dict[str, float]:
        """Breakdown of a non-terminal score, useful for debugging and the UI"""
        w = self.weights
        components = {
            "security": self._security_score(state),
            "resources": self._resource_score(state),
        }
        if w.scheme == EvaluationScheme.RICH:
            components["posture"] = self._counter_posture_score(state)
            components["repetition"] = -self._repetition_penalty(state)
        else:
            components["posture"] = self._defense_count_score(state)
        return components

    def _security_score(self, state: GameState) -> float:
        max_security = state.config.max_security
        if max_security <= 0:
            return 0.0
        return (state.network.security_level / max_security) * self.weights.security

    def _resource_score(self, state: GameState) -> float:
        """Capped reward for a resource lead; a deficit is not floored"""
        w = self.weights
        diff = state.defender.resources - state.attacker.resources
        return min(w.resources, diff / w.resource_divisor * w.resources)

    def _counter_posture_score(self, state: GameState) -> float:
        """Does the defender's latest measure counter the attacker's latest technique"""
        last_attack = state.attacker.last_move
        last_defense = state.defender.last_move
        if not isinstance(last_attack, AttackMove) or not isinstance(last_defense, DefenseMove):
            return 0.0
        return last_defense.counter_effectiveness(last_attack.category) * self.weights.posture

    def _defense_count_score(self, state: GameState) -> float:
        w = self.weights
        return min(w.posture, len(state.defender.history) * w.defense_count_factor)

    def _repetition_penalty(self, state: GameState) -> float:
        """Penalize a defender that keeps playing the same move"""
        w = self.weights
        recent = state.defender.recent_move_ids(w.repetition_window)
        if w.repetition_window > 0 and len(recent) == w.repetition_window and len(set(recent)) == 1:
            return w.repetition_penalty
        return 0.0
