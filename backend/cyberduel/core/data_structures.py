# =============================================================================
# Cyber Duel - Core Data Structures
# =============================================================================
"""
Core data structures for representing game elements.
These are the fundamental building blocks of the game state.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple, Any, Union

from .enums import (
    PlayerRole, AttackCategory, DefenseCategory, EvaluationScheme
)


# =============================================================================
# Moves
# =============================================================================

@dataclass(frozen=True)
class AttackMove:
    """
    An offensive move from the attack catalog.

    Attributes:
        id: Catalog identifier
        name: Human-readable name
        category: Technique family, matched against defense counters
        cost: Resource units spent when applied
        damage: Base reduction of the security level
        effectiveness: Nominal multiplier applied to the damage (0.0 - 1.0)
    """
    id: int
    name: str
    category: AttackCategory
    cost: int
    damage: float
    effectiveness: float

    @property
    def role(self) -> PlayerRole:
        return PlayerRole.ATTACKER

    @property
    def expected_effect(self) -> float:
        """Damage at nominal effectiveness"""
        return self.damage * self.effectiveness

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.category.name,
            "cost": self.cost,
            "damage": self.damage,
            "effectiveness": self.effectiveness,
        }


@dataclass(frozen=True)
class DefenseMove:
    """
    A defensive move from the defense catalog.

    Attributes:
        id: Catalog identifier
        name: Human-readable name
        category: Measure family
        cost: Resource units spent when applied
        security_boost: Base increase of the security level
        effectiveness: Nominal multiplier applied to the boost (0.0 - 1.0)
        effective_against: Attack categories this defense counters
    """
    id: int
    name: str
    category: DefenseCategory
    cost: int
    security_boost: float
    effectiveness: float
    effective_against: FrozenSet[AttackCategory] = frozenset()

    @property
    def role(self) -> PlayerRole:
        return PlayerRole.DEFENDER

    @property
    def expected_effect(self) -> float:
        """Boost at nominal effectiveness"""
        return self.security_boost * self.effectiveness

    def counters(self, category: Optional[AttackCategory]) -> bool:
        return category is not None and category in self.effective_against

    def counter_effectiveness(self, category: Optional[AttackCategory]) -> float:
        """How well this defense answers an attack category (0.0 if it doesn't)"""
        return self.effectiveness if self.counters(category) else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.category.name,
            "cost": self.cost,
            "security_boost": self.security_boost,
            "effectiveness": self.effectiveness,
            "effective_against": sorted(c.name for c in self.effective_against),
        }


Move = Union[AttackMove, DefenseMove]


# =============================================================================
# Actor State
# =============================================================================

@dataclass
class ActorState:
    """
    Resources and move record of one side.

    Resources are not clamped at zero: a move is only selected when it is
    affordable, but regeneration and cost bookkeeping may leave the counter
    below zero between turns.
    """
    role: PlayerRole
    resources: float = 0
    last_move: Optional[Move] = None
    history: List[Move] = field(default_factory=list)

    def can_afford(self, cost: float) -> bool:
        """Check if the actor can pay for a move"""
        return self.resources >= cost

    def spend_resources(self, cost: float):
        """Deduct the cost of a move"""
        self.resources -= cost

    def regenerate_resources(self, amount: float):
        """Credit the per-turn income"""
        self.resources += amount

    def record_move(self, move: Move):
        self.last_move = move
        self.history.append(move)

    def recent_move_ids(self, count: int) -> List[int]:
        """Ids of the last `count` applied moves, oldest first"""
        if count <= 0:
            return []
        return [m.id for m in self.history[-count:]]

    def clone(self) -> 'ActorState':
        """Create a deep copy of this actor state"""
        # Moves are frozen, so sharing the references is safe
        return ActorState(
            role=self.role,
            resources=self.resources,
            last_move=self.last_move,
            history=list(self.history),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "role": self.role.name,
            "resources": self.resources,
            "last_move": self.last_move.to_dict() if self.last_move else None,
            "history": [m.id for m in self.history],
        }


# =============================================================================
# Network State
# =============================================================================

@dataclass
class NetworkState:
    """The shared network whose integrity both sides fight over"""
    security_level: float = 50.0

    def raise_security(self, amount: float, ceiling: float):
        self.security_level = min(ceiling, self.security_level + amount)

    def lower_security(self, amount: float, floor: float):
        self.security_level = max(floor, self.security_level - amount)

    def clone(self) -> 'NetworkState':
        return NetworkState(security_level=self.security_level)

    def to_dict(self) -> Dict[str, Any]:
        return {"security_level": self.security_level}


# =============================================================================
# Configuration
# =============================================================================

@dataclass(frozen=True)
class EvaluationWeights:
    """
    Weights of the heuristic evaluation.

    Each component contributes at most its weight; the three weights sum to
    the scale of a non-terminal score.
    """
    scheme: EvaluationScheme = EvaluationScheme.RICH
    security: float = 60.0
    resources: float = 20.0
    posture: float = 20.0
    resource_divisor: float = 10.0
    repetition_window: int = 3
    repetition_penalty: float = 10.0
    defense_count_factor: float = 2.0
    win_score: float = 1000.0

    @classmethod
    def simple(cls) -> 'EvaluationWeights':
        """Weights of the plain count-based variant"""
        return cls(
            scheme=EvaluationScheme.SIMPLE,
            security=50.0,
            resources=30.0,
            posture=20.0,
            resource_divisor=20.0,
            repetition_penalty=0.0,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scheme": self.scheme.name,
            "security": self.security,
            "resources": self.resources,
            "posture": self.posture,
            "resource_divisor": self.resource_divisor,
            "repetition_window": self.repetition_window,
            "repetition_penalty": self.repetition_penalty,
            "defense_count_factor": self.defense_count_factor,
            "win_score": self.win_score,
        }


@dataclass
class GameConfig:
    """
    Configuration settings for a game instance.
    """
    # Security scale
    max_security: float = 100.0
    min_security: float = 0.0
    initial_security: float = 50.0
    security_baseline: float = 50.0  # Tie-break when both sides are exhausted
    security_decay: float = 3.0      # Lost after every move

    # Resource settings
    initial_resources: int = 15
    attacker_regen: int = 2
    defender_regen: int = 3

    # Effectiveness rolls, as fractions of nominal effectiveness
    attack_roll_band: Tuple[float, float] = (0.8, 1.2)
    defense_roll_band: Tuple[float, float] = (0.9, 1.1)

    # Search settings
    search_depth: int = 3
    use_alpha_beta: bool = True
    chosen_history_length: int = 5
    counter_bonus_weight: float = 5.0
    repeat_penalty_weight: float = 3.0
    reset_ai_memory_on_new_game: bool = False
    evaluation: EvaluationWeights = field(default_factory=EvaluationWeights)

    # Random seed for reproducibility
    seed: Optional[int] = None

    def regen_for(self, role: PlayerRole) -> int:
        """Per-turn resource income of a side"""
        if role == PlayerRole.ATTACKER:
            return self.attacker_regen
        return self.defender_regen

    def roll_band_for(self, role: PlayerRole) -> Tuple[float, float]:
        if role == PlayerRole.ATTACKER:
            return self.attack_roll_band
        return self.defense_roll_band

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "MAX_SECURITY": self.max_security,
            "MIN_SECURITY": self.min_security,
            "INITIAL_SECURITY": self.initial_security,
            "SECURITY_BASELINE": self.security_baseline,
            "SECURITY_DECAY": self.security_decay,
            "INITIAL_RESOURCES": self.initial_resources,
            "TURN_RESOURCES": {
                "attacker": self.attacker_regen,
                "defender": self.defender_regen,
            },
            "ATTACK_ROLL_BAND": list(self.attack_roll_band),
            "DEFENSE_ROLL_BAND": list(self.defense_roll_band),
            "SEARCH_DEPTH": self.search_depth,
            "EVALUATION": self.evaluation.to_dict(),
        }


# =============================================================================
# Results
# =============================================================================

@dataclass
class MoveOutcome:
    """
    What a single transition actually did.
    Filled by the transition function, consumed by the session and the UI.
    """
    role: PlayerRole
    move: Move
    turn: int
    realized_effect: float = 0.0         # Rolled boost or damage
    applied_effect: float = 0.0          # Security actually moved, after clamping
    realized_effectiveness: float = 0.0  # Rolled multiplier
    security_before: float = 0.0
    security_after: float = 0.0
    ended_game: bool = False

    @property
    def security_delta(self) -> float:
        return self.security_after - self.security_before

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role.name,
            "move": self.move.to_dict(),
            "turn": self.turn,
            "realized_effect": self.realized_effect,
            "applied_effect": self.applied_effect,
            "realized_effectiveness": self.realized_effectiveness,
            "security_before": self.security_before,
            "security_after": self.security_after,
            "security_delta": self.security_delta,
            "ended_game": self.ended_game,
        }


@dataclass
class DefenseSummary:
    """Human-facing description of the defense the AI actually applied"""
    id: int
    name: str
    cost: int
    boost: float
    rolled_boost: float
    effectiveness: float
    message: str = ""

    @classmethod
    def from_outcome(cls, outcome: MoveOutcome) -> 'DefenseSummary':
        move = outcome.move
        message = (
            f"AI deployed {move.name}: security +{outcome.applied_effect:.1f} "
            f"({outcome.realized_effectiveness * 100:.0f}% effective, cost {move.cost})"
        )
        return cls(
            id=move.id,
            name=move.name,
            cost=move.cost,
            boost=outcome.applied_effect,
            rolled_boost=outcome.realized_effect,
            effectiveness=outcome.realized_effectiveness,
            message=message,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "cost": self.cost,
            "boost": self.boost,
            "rolled_boost": self.rolled_boost,
            "effectiveness": self.effectiveness,
            "message": self.message,
        }
