# =============================================================================
# Cyber Duel - Actions Module
# =============================================================================
"""
Handles move validation, execution, and end-of-turn resolution.
All moves flow through MoveValidator -> MoveExecutor.

The executor is the single state transition function of the game: the
session uses it on the live state and the search uses it on clones, so both
see exactly the same rules.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from .enums import PlayerRole, VictoryCondition
from .data_structures import (
    AttackMove, DefenseMove, Move, MoveOutcome, GameConfig
)
from .game_state import GameState
from .catalogs import ATTACK_CATALOG, DEFENSE_CATALOG
from .exceptions import InvalidTurnError, InsufficientResourcesError


# =============================================================================
# Move Validation
# =============================================================================

class MoveValidator:
    """
    Validates moves before execution.

    Checks:
    - The game is still running
    - The move belongs to the side whose turn it is
    - The side can pay for the move
    """

    def __init__(
        self,
        attacks: Sequence[AttackMove] = ATTACK_CATALOG,
        defenses: Sequence[DefenseMove] = DEFENSE_CATALOG
    ):
        self.attacks = tuple(attacks)
        self.defenses = tuple(defenses)

    def validate(self, state: GameState, move: Move) -> Tuple[bool, str]:
        """
        Validate if a move can be applied.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if state.game_over:
            return False, "Game has ended"

        if move.role != state.current_player:
            return False, "Not your turn"

        actor = state.get_player_state(move.role)
        if not actor.can_afford(move.cost):
            return False, (f"Not enough resources: need {move.cost}, "
                           f"have {actor.resources:g}")

        return True, ""

    def catalog_for(self, role: PlayerRole) -> Sequence[Move]:
        if role == PlayerRole.ATTACKER:
            return self.attacks
        return self.defenses

    def get_legal_moves(self, state: GameState, role: Optional[PlayerRole] = None) -> List[Move]:
        """All affordable moves for a side (defaults to the side to move)"""
        if state.game_over:
            return []
        role = role or state.current_player
        actor = state.get_player_state(role)
        return [m for m in self.catalog_for(role) if actor.can_afford(m.cost)]


# =============================================================================
# Move Execution
# =============================================================================

class MoveExecutor:
    """
    Applies moves to a game state.

    Every call draws its own effectiveness roll from the generator it was
    given; search branches never share a draw.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config

    def execute(self, state: GameState, move: Move, rng) -> MoveOutcome:
        """
        Apply a move in place, then run end-of-turn processing.

        Args:
            state: State to mutate (the live state or a search clone)
            move: Attack or defense to apply
            rng: Source of uniform draws in [0, 1), usually a numpy Generator

        Returns:
            MoveOutcome describing what actually happened
        """
        config = self.config or state.config

        if state.game_over:
            raise InvalidTurnError("Game has ended")
        if move.role != state.current_player:
            raise InvalidTurnError(f"Not {move.role}'s turn")

        actor = state.get_player_state(move.role)
        if not actor.can_afford(move.cost):
            raise InsufficientResourcesError(
                f"Not enough resources: need {move.cost}, have {actor.resources:g}"
            )

        outcome = MoveOutcome(
            role=move.role,
            move=move,
            turn=state.turn,
            security_before=state.network.security_level,
        )

        if isinstance(move, DefenseMove):
            self._execute_defense(state, move, config, rng, outcome)
        else:
            self._execute_attack(state, move, config, rng, outcome)

        self._end_turn(state, config)

        outcome.security_after = state.network.security_level
        outcome.ended_game = state.game_over
        return outcome

    def _execute_defense(self, state: GameState, move: DefenseMove,
                         config: GameConfig, rng, outcome: MoveOutcome):
        """Raise security by the rolled boost"""
        state.defender.spend_resources(move.cost)

        roll = self._roll(move.effectiveness, config.roll_band_for(move.role), rng)
        boost = move.security_boost * roll
        before = state.network.security_level
        state.network.raise_security(boost, config.max_security)
        outcome.applied_effect = state.network.security_level - before

        state.defender.record_move(move)
        state.switch_player()

        outcome.realized_effect = boost
        outcome.realized_effectiveness = roll

    def _execute_attack(self, state: GameState, move: AttackMove,
                        config: GameConfig, rng, outcome: MoveOutcome):
        """Lower security by the rolled damage"""
        state.attacker.spend_resources(move.cost)

        roll = self._roll(move.effectiveness, config.roll_band_for(move.role), rng)
        damage = move.damage * roll
        before = state.network.security_level
        state.network.lower_security(damage, config.min_security)
        outcome.applied_effect = before - state.network.security_level

        state.attacker.record_move(move)
        state.switch_player()

        outcome.realized_effect = damage
        outcome.realized_effectiveness = roll

    @staticmethod
    def _roll(effectiveness: float, band: Tuple[float, float], rng) -> float:
        """Nominal effectiveness scaled by a uniform factor from the band"""
        low, high = band
        return effectiveness * (low + float(rng.random()) * (high - low))

    def _end_turn(self, state: GameState, config: GameConfig):
        """Turn counter, income for the side about to move, decay, win check"""
        state.turn += 1

        state.get_current_player_state().regenerate_resources(
            config.regen_for(state.current_player)
        )

        # A move that drove security to a bound decides the game before decay
        if config.min_security < state.network.security_level < config.max_security:
            state.network.lower_security(config.security_decay, config.min_security)

        check_game_end(state, config)


# =============================================================================
# Victory Check
# =============================================================================

def check_game_end(state: GameState, config: Optional[GameConfig] = None) -> bool:
    """
    Evaluate the terminal conditions in order; the first match decides.

    Returns:
        True if the game is over after the check
    """
    if state.game_over:
        return True

    config = config or state.config
    security = state.network.security_level

    if security <= config.min_security:
        state.end_game(PlayerRole.ATTACKER, VictoryCondition.NETWORK_BREACHED)
    elif security >= config.max_security:
        state.end_game(PlayerRole.DEFENDER, VictoryCondition.NETWORK_SECURED)
    elif state.attacker.resources <= 0 and state.defender.resources <= 0:
        winner = (PlayerRole.DEFENDER if security >= config.security_baseline
                  else PlayerRole.ATTACKER)
        state.end_game(winner, VictoryCondition.RESOURCES_EXHAUSTED)

    return state.game_over


# =============================================================================
# Convenience Functions
# =============================================================================

_default_executor = MoveExecutor()


def apply_move(state: GameState, move: Move,
               rng: Optional[np.random.Generator] = None) -> Tuple[GameState, MoveOutcome]:
    """
    The state transition function: apply `move` to `state` in place.

    Args:
        state: State to mutate
        move: Attack or defense
        rng: Random source; a fresh unseeded generator when omitted

    Returns:
        Tuple of (state, outcome)
    """
    if rng is None:
        rng = np.random.default_rng()
    outcome = _default_executor.execute(state, move, rng)
    return state, outcome
