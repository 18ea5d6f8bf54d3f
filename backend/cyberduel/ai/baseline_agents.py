# =============================================================================
# Cyber Duel - Baseline Attackers
# =============================================================================
"""
Simple attacker policies used to drive demo games and self-play checks
against the MinMax defender.
"""

from typing import Optional, Sequence

import numpy as np

from ..core import GameState, PlayerRole, MoveValidator, ATTACK_CATALOG
from ..core.data_structures import AttackMove


class RandomAttacker:
    """Picks a uniformly random affordable attack"""

    def __init__(self, rng: Optional[np.random.Generator] = None,
                 attacks: Sequence[AttackMove] = ATTACK_CATALOG):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.validator = MoveValidator(attacks=attacks)

    def select_attack(self, state: GameState) -> Optional[AttackMove]:
        """Get a random legal attack, or None if nothing is affordable"""
        legal = self.validator.get_legal_moves(state, PlayerRole.ATTACKER)
        if not legal:
            return None
        return legal[int(self.rng.integers(len(legal)))]


class GreedyAttacker:
    """
    Always plays the attack with the highest expected damage it can afford.
    Ties go to the cheaper attack.
    """

    def __init__(self, attacks: Sequence[AttackMove] = ATTACK_CATALOG):
        self.validator = MoveValidator(attacks=attacks)

    def select_attack(self, state: GameState) -> Optional[AttackMove]:
        legal = self.validator.get_legal_moves(state, PlayerRole.ATTACKER)
        if not legal:
            return None
        return max(legal, key=lambda a: (a.expected_effect, -a.cost))
