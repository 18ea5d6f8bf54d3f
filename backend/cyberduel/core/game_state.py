# =============================================================================
# Cyber Duel - Game State
# =============================================================================
"""
The complete game state representation.
This is the central data structure that captures everything about a game.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Any
import uuid

from .enums import PlayerRole, VictoryCondition
from .data_structures import ActorState, NetworkState, GameConfig


@dataclass
class GameState:
    """
    Complete state of a game instance.

    This class encapsulates all information needed to:
    - Display the game
    - Determine legal moves
    - Apply moves
    - Check victory conditions

    The state is designed to be cheaply cloneable for AI search: every
    search branch works on its own copy and never touches the live state.
    """

    # ==========================================================================
    # Identifiers
    # ==========================================================================
    game_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    # ==========================================================================
    # Actors and Network
    # ==========================================================================
    attacker: ActorState = field(default_factory=lambda: ActorState(PlayerRole.ATTACKER))
    defender: ActorState = field(default_factory=lambda: ActorState(PlayerRole.DEFENDER))
    network: NetworkState = field(default_factory=NetworkState)
    current_player: PlayerRole = PlayerRole.ATTACKER

    # ==========================================================================
    # Game Progress
    # ==========================================================================
    turn: int = 0

    # ==========================================================================
    # Victory/End State
    # ==========================================================================
    game_over: bool = False
    winner: Optional[PlayerRole] = None
    victory_condition: Optional[VictoryCondition] = None

    # ==========================================================================
    # Configuration
    # ==========================================================================
    config: GameConfig = field(default_factory=GameConfig)

    @classmethod
    def initial(cls, config: Optional[GameConfig] = None) -> 'GameState':
        """Build the opening state: attacker to move, both sides fully funded"""
        config = config or GameConfig()
        return cls(
            attacker=ActorState(PlayerRole.ATTACKER, resources=config.initial_resources),
            defender=ActorState(PlayerRole.DEFENDER, resources=config.initial_resources),
            network=NetworkState(security_level=config.initial_security),
            current_player=PlayerRole.ATTACKER,
            config=config,
        )

    # ==========================================================================
    # Properties
    # ==========================================================================

    @property
    def security_level(self) -> float:
        return self.network.security_level

    # ==========================================================================
    # Player Access
    # ==========================================================================

    def get_player_state(self, role: PlayerRole) -> ActorState:
        """Get state for a specific player role"""
        if role == PlayerRole.ATTACKER:
            return self.attacker
        return self.defender

    def get_current_player_state(self) -> ActorState:
        """Get the state of the current player"""
        return self.get_player_state(self.current_player)

    # ==========================================================================
    # Turn Management
    # ==========================================================================

    def switch_player(self):
        """Hand the move to the other side"""
        self.current_player = self.current_player.opponent

    def end_game(self, winner: PlayerRole, condition: VictoryCondition):
        """Mark the game as finished. A finished game is never reopened."""
        if self.game_over:
            return
        self.game_over = True
        self.winner = winner
        self.victory_condition = condition

    # ==========================================================================
    # Cloning / Serialization
    # ==========================================================================

    def clone(self) -> 'GameState':
        """Create an independent copy of this state for simulation"""
        return GameState(
            game_id=self.game_id,
            attacker=self.attacker.clone(),
            defender=self.defender.clone(),
            network=self.network.clone(),
            current_player=self.current_player,
            turn=self.turn,
            game_over=self.game_over,
            winner=self.winner,
            victory_condition=self.victory_condition,
            config=self.config,  # Shared, never mutated during play
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "game_id": self.game_id,
            "turn": self.turn,
            "attacker": self.attacker.to_dict(),
            "defender": self.defender.to_dict(),
            "network": self.network.to_dict(),
            "current_player": self.current_player.name.lower(),
            "game_over": self.game_over,
            "winner": self.winner.name.lower() if self.winner else None,
            "victory_condition": self.victory_condition.name if self.victory_condition else None,
        }

    def __str__(self) -> str:
        status = f"winner={self.winner}" if self.game_over else f"to move={self.current_player}"
        return (f"GameState(turn={self.turn}, security={self.security_level:.1f}, "
                f"attacker={self.attacker.resources}, defender={self.defender.resources}, "
                f"{status})")
