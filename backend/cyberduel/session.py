# =============================================================================
# Cyber Duel - Game Session
# =============================================================================
"""
The game session controller.

Owns the single authoritative game state of one game, the MinMax defender
that plays it, and a lock that serializes every mutation. Moves reach the
state only through the shared transition function.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .core import (
    GameState, GameConfig, PlayerRole, MoveExecutor, MoveOutcome, DefenseSummary,
    GameError, InvalidTurnError, UnknownMoveError, InsufficientResourcesError,
    NoLegalMoveError, ATTACK_CATALOG, DEFENSE_CATALOG, find_attack,
)
from .core.data_structures import AttackMove, DefenseMove
from .ai import MinimaxAgent, RandomAttacker

logger = logging.getLogger(__name__)


class GameEventType(Enum):
    """Types of events that can be emitted by a session"""
    GAME_STARTED = auto()
    MOVE_APPLIED = auto()
    MOVE_REJECTED = auto()
    VICTORY = auto()


@dataclass
class GameEvent:
    """Represents a game event for logging and UI updates"""
    event_type: GameEventType
    turn: int
    player_role: Optional[PlayerRole] = None
    outcome: Optional[MoveOutcome] = None
    message: str = ""
    data: dict = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.event_type.name,
            "turn": self.turn,
            "player": self.player_role.name.lower() if self.player_role else None,
            "message": self.message,
            "data": self.data,
            "timestamp": self.timestamp,
        }


class GameSession:
    """
    One live game between a human (or scripted) attacker and the AI defender.

    Responsibilities:
    - Hold the authoritative game state
    - Enforce turn order, catalog membership and affordability
    - Ask the MinMax agent for the defender's move
    - Emit events for UI/logging

    All public operations take the session lock, so two overlapping requests
    can never apply moves for the same turn.

    Example usage:
        session = GameSession()
        session.apply_attack(1)
        state, summary = session.apply_defense()
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        agent: Optional[MinimaxAgent] = None,
        rng: Optional[np.random.Generator] = None,
        attacks: Sequence[AttackMove] = ATTACK_CATALOG,
        defenses: Sequence[DefenseMove] = DEFENSE_CATALOG
    ):
        self.config = config or GameConfig()
        self.attacks = tuple(attacks)
        self.defenses = tuple(defenses)

        # Independent streams for real moves and search look-ahead
        play_seed, search_seed = np.random.SeedSequence(self.config.seed).spawn(2)
        self.rng = rng if rng is not None else np.random.default_rng(play_seed)
        if agent is None:
            agent = MinimaxAgent(
                max_depth=self.config.search_depth,
                use_alpha_beta=self.config.use_alpha_beta,
                config=self.config,
                rng=np.random.default_rng(search_seed),
                attacks=self.attacks,
                defenses=self.defenses,
            )
        self.agent = agent
        self.executor = MoveExecutor(self.config)

        self._lock = threading.RLock()

        # Event system
        self.event_listeners: Dict[GameEventType, List[Callable]] = {}
        self.event_history: List[GameEvent] = []
        self.outcomes: List[MoveOutcome] = []

        self.reset()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def reset(self) -> GameState:
        """
        Replace the live state with a fresh opening state.

        The AI's memory of chosen defenses survives unless the configuration
        asks for it to be cleared.
        """
        with self._lock:
            self.state = GameState.initial(self.config)
            self.outcomes = []
            self.event_history = []
            if self.config.reset_ai_memory_on_new_game:
                self.agent.clear_memory()

            self._emit_event(GameEvent(
                event_type=GameEventType.GAME_STARTED,
                turn=0,
                message="Game started!",
                data={"game_id": self.state.game_id},
            ))
            logger.info("New game %s", self.state.game_id)
            return self.state

    def initialize(self) -> Dict[str, Any]:
        """Reset and return everything a client needs to render a game"""
        with self._lock:
            self.reset()
            return {
                "state": self.state.to_dict(),
                "attacks": [a.to_dict() for a in self.attacks],
                "defenses": [d.to_dict() for d in self.defenses],
                "config": self.config.to_dict(),
            }

    # =========================================================================
    # Moves
    # =========================================================================

    def apply_attack(self, attack_id: int) -> GameState:
        """
        Apply the attacker's chosen attack.

        Raises:
            InvalidTurnError: game over or not the attacker's turn
            UnknownMoveError: id not in the attack catalog
            InsufficientResourcesError: attack costs more than available
        """
        with self._lock:
            self._check_turn(PlayerRole.ATTACKER)

            attack = find_attack(attack_id, self.attacks)
            if attack is None:
                self._reject(PlayerRole.ATTACKER, UnknownMoveError(f"Invalid attack: {attack_id}"))
            if not self.state.attacker.can_afford(attack.cost):
                self._reject(PlayerRole.ATTACKER, InsufficientResourcesError(
                    f"Not enough resources: {attack.name} costs {attack.cost}, "
                    f"attacker has {self.state.attacker.resources:g}"
                ))

            outcome = self.executor.execute(self.state, attack, self.rng)
            self._record(outcome, f"Attacked with {attack.name}: "
                                  f"security -{outcome.applied_effect:.1f}")
            return self.state

    def apply_defense(self) -> Tuple[GameState, DefenseSummary]:
        """
        Let the MinMax agent pick and apply the defender's move.

        Raises:
            InvalidTurnError: game over or not the defender's turn
            NoLegalMoveError: no affordable defense
        """
        with self._lock:
            self._check_turn(PlayerRole.DEFENDER)

            # The agent only ever sees a copy of the live state
            defense = self.agent.select_defender_move(self.state.clone())
            if defense is None or not self.state.defender.can_afford(defense.cost):
                self._reject(PlayerRole.DEFENDER, NoLegalMoveError("Cannot defend"))

            outcome = self.executor.execute(self.state, defense, self.rng)
            summary = DefenseSummary.from_outcome(outcome)
            self._record(outcome, summary.message)
            return self.state, summary

    def _check_turn(self, role: PlayerRole):
        if self.state.game_over:
            self._reject(role, InvalidTurnError("Game has ended"))
        if self.state.current_player != role:
            self._reject(role, InvalidTurnError("Not your turn"))

    def _reject(self, role: PlayerRole, error: GameError):
        self._emit_event(GameEvent(
            event_type=GameEventType.MOVE_REJECTED,
            turn=self.state.turn,
            player_role=role,
            message=error.message,
            data={"error": type(error).__name__},
        ))
        logger.info("Rejected %s move: %s", role, error.message)
        raise error

    def _record(self, outcome: MoveOutcome, message: str):
        self.outcomes.append(outcome)
        self._emit_event(GameEvent(
            event_type=GameEventType.MOVE_APPLIED,
            turn=self.state.turn,
            player_role=outcome.role,
            outcome=outcome,
            message=message,
            data=outcome.to_dict(),
        ))
        logger.info("Turn %d: %s (security %.1f -> %.1f)", self.state.turn, message,
                    outcome.security_before, outcome.security_after)

        if self.state.game_over:
            winner = self.state.winner
            condition = self.state.victory_condition
            self._emit_event(GameEvent(
                event_type=GameEventType.VICTORY,
                turn=self.state.turn,
                player_role=winner,
                message=f"Game Over! {winner.name} wins by {condition.name}!",
                data={"winner": winner.name, "condition": condition.name},
            ))
            logger.info("Game %s over: %s wins (%s)", self.state.game_id, winner, condition)

    # =========================================================================
    # State Queries
    # =========================================================================

    def snapshot(self) -> Dict[str, Any]:
        """Serialized copy of the live state"""
        with self._lock:
            return self.state.to_dict()

    def is_game_over(self) -> bool:
        return self.state.game_over

    def get_winner(self) -> Optional[PlayerRole]:
        return self.state.winner if self.state.game_over else None

    def get_history(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [event.to_dict() for event in self.event_history]

    # =========================================================================
    # Event System
    # =========================================================================

    def add_event_listener(self, event_type: GameEventType, callback: Callable[[GameEvent], None]):
        """Register a callback for a specific event type"""
        self.event_listeners.setdefault(event_type, []).append(callback)

    def remove_event_listener(self, event_type: GameEventType, callback: Callable):
        """Remove a registered callback"""
        if event_type in self.event_listeners:
            self.event_listeners[event_type] = [
                cb for cb in self.event_listeners[event_type] if cb != callback
            ]

    def _emit_event(self, event: GameEvent):
        self.event_history.append(event)
        for callback in self.event_listeners.get(event.event_type, []):
            callback(event)


# =============================================================================
# Convenience Functions
# =============================================================================

def play_demo_game(
    config: Optional[GameConfig] = None,
    attacker=None,
    max_moves: int = 200
) -> Dict[str, Any]:
    """
    Play a full game between a scripted attacker and the MinMax defender.

    Args:
        config: Game configuration (seed it for a reproducible game)
        attacker: Object with select_attack(state); RandomAttacker by default
        max_moves: Safety cap on applied moves

    Returns:
        Summary dict with winner, turns, final security and the move log
    """
    config = config or GameConfig()
    session = GameSession(config=config)
    if attacker is None:
        attacker = RandomAttacker(rng=np.random.default_rng(config.seed))

    stalled = False
    moves = 0
    while not session.is_game_over() and moves < max_moves:
        try:
            if session.state.current_player == PlayerRole.ATTACKER:
                attack = attacker.select_attack(session.state.clone())
                if attack is None:
                    stalled = True
                    break
                session.apply_attack(attack.id)
            else:
                session.apply_defense()
        except NoLegalMoveError:
            stalled = True
            break
        moves += 1

    winner = session.get_winner()
    return {
        "winner": winner.name if winner else None,
        "victory_condition": (session.state.victory_condition.name
                              if session.state.victory_condition else None),
        "turns": session.state.turn,
        "security_level": session.state.security_level,
        "stalled": stalled,
        "moves": [
            {"turn": o.turn, "role": o.role.name, "move": o.move.name,
             "effect": round(o.applied_effect, 2)}
            for o in session.outcomes
        ],
    }


__all__ = [
    "GameSession", "GameEvent", "GameEventType", "play_demo_game",
]
