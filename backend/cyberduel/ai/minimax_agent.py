# =============================================================================
# Cyber Duel - MinMax AI Agent
# =============================================================================
"""
Hand-coded MinMax search that picks the defender's move.

Key Features:
1. Full-width look-ahead over alternating defender/attacker plies
2. Alpha-Beta Pruning below the root - never changes the chosen move
3. Move Ordering - examine the strongest-looking moves first
4. Root bonuses - reward moves that counter the attacker's last technique
5. Repetition memory - discourage replaying the same defense turn after turn

Every simulated move is applied to a fresh clone with its own effectiveness
roll, so the live game state is never touched by the search. A node's roll
is drawn from a generator keyed by the search seed and the moves leading to
it, so pruning and move ordering never change the roll any node sees.
"""

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..core import (
    GameState, GameConfig, PlayerRole,
    MoveValidator, MoveExecutor, InvalidTurnError,
    ATTACK_CATALOG, DEFENSE_CATALOG,
)
from ..core.data_structures import AttackMove, DefenseMove, Move
from .evaluation import StateEvaluator

logger = logging.getLogger(__name__)


# =============================================================================
# Move Ordering
# =============================================================================

class MoveOrderer:
    """
    Orders moves to maximize alpha-beta pruning efficiency.
    Better move ordering = more pruning = faster search.
    """

    def order_moves(self, state: GameState, moves: Sequence[Move]) -> List[Move]:
        """
        Order moves from most to least promising.

        Order:
        1. Defenses that counter the attacker's last technique
        2. Larger expected security swing
        3. Cheaper moves
        """
        if not moves:
            return list(moves)

        scored_moves = [(self._score_move(state, move), index, move)
                        for index, move in enumerate(moves)]
        scored_moves.sort(key=lambda x: (-x[0], x[1]))
        return [move for _, _, move in scored_moves]

    def _score_move(self, state: GameState, move: Move) -> float:
        """Calculate priority score for a move"""
        score = move.expected_effect - move.cost * 0.1

        if isinstance(move, DefenseMove):
            last_attack = state.attacker.last_move
            if isinstance(last_attack, AttackMove) and move.counters(last_attack.category):
                score += 100

        return score


# =============================================================================
# MinMax Agent
# =============================================================================

@dataclass
class SearchStats:
    """Statistics for one root search"""
    nodes_searched: int = 0
    nodes_pruned: int = 0
    depth: int = 0
    time_ms: float = 0.0
    best_move: Optional[DefenseMove] = None
    best_score: float = 0.0
    root_scores: Dict[int, float] = field(default_factory=dict)


class MinimaxAgent:
    """
    MinMax AI agent playing the defender.

    The defender maximizes, the attacker minimizes. The agent owns a short
    memory of the defenses it actually chose; it lives as long as the agent
    (one agent per game session) and is cleared with `clear_memory()`.

    Example usage:
        agent = MinimaxAgent(max_depth=3)
        move = agent.select_defender_move(game_state)
    """

    # Constants
    INF = float('inf')
    NEG_INF = float('-inf')

    def __init__(
        self,
        max_depth: int = 3,
        use_alpha_beta: bool = True,
        config: Optional[GameConfig] = None,
        evaluator: Optional[StateEvaluator] = None,
        rng: Optional[np.random.Generator] = None,
        attacks: Sequence[AttackMove] = ATTACK_CATALOG,
        defenses: Sequence[DefenseMove] = DEFENSE_CATALOG
    ):
        """
        Initialize the MinMax agent.

        Args:
            max_depth: Plies searched from the root (the root move included)
            use_alpha_beta: Whether to prune below the root
            config: Root bonus weights and memory length
            evaluator: Leaf scorer; built from config.evaluation when omitted
            rng: Seeds each search; simulated rolls derive from that draw
            attacks: Attack catalog the simulated attacker draws from
            defenses: Defense catalog the agent chooses from
        """
        self.config = config or GameConfig()
        self.max_depth = max_depth
        self.use_alpha_beta = use_alpha_beta
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

        # Initialize components
        self.validator = MoveValidator(attacks, defenses)
        self.executor = MoveExecutor()
        self.evaluator = evaluator or StateEvaluator(self.config.evaluation)
        self.move_orderer = MoveOrderer()

        # Defenses actually played, newest last
        self.chosen_history: Deque[int] = deque(maxlen=self.config.chosen_history_length)

        # Search state
        self.nodes_searched = 0
        self.search_seed = 0
        self.nodes_pruned = 0
        self.last_stats: Optional[SearchStats] = None

    def select_defender_move(self, state: GameState,
                             depth: Optional[int] = None) -> Optional[DefenseMove]:
        """
        Find the best defense for the current state.

        Args:
            state: Current game state (not modified)
            depth: Search depth, defaults to max_depth

        Returns:
            The chosen defense, or None if nothing is affordable
        """
        if state.game_over:
            return None
        if state.current_player != PlayerRole.DEFENDER:
            raise InvalidTurnError("Not the defender's turn")

        depth = max(1, depth if depth is not None else self.max_depth)
        start_time = time.time()
        self.nodes_searched = 0
        self.nodes_pruned = 0
        # One draw per search; every simulated roll derives from it
        self.search_seed = int(float(self.rng.random()) * 2 ** 32)

        best_move, best_score, root_scores = self._search_root(state, depth)

        self.last_stats = SearchStats(
            nodes_searched=self.nodes_searched,
            nodes_pruned=self.nodes_pruned,
            depth=depth,
            time_ms=(time.time() - start_time) * 1000,
            best_move=best_move,
            best_score=best_score if best_move is not None else 0.0,
            root_scores=root_scores,
        )

        if best_move is None:
            logger.debug("No affordable defense (resources=%s)", state.defender.resources)
            return None

        self.chosen_history.append(best_move.id)
        logger.debug("Selected %s (score %.2f, %d nodes, %d pruned)",
                     best_move.name, best_score, self.nodes_searched, self.nodes_pruned)
        return best_move

    def _search_root(self, state: GameState, depth: int):
        """
        Search from the root position.
        Returns (best_move, best_score, scores by defense id).
        """
        legal = self.validator.get_legal_moves(state, PlayerRole.DEFENDER)
        best_move: Optional[DefenseMove] = None
        best_score = self.NEG_INF
        root_scores: Dict[int, float] = {}

        for move in legal:
            path = (move.id,)
            new_state = self._simulate_move(state, move, path)
            # Full window per root child keeps every root value exact
            value = self._minimax(new_state, depth - 1, self.NEG_INF, self.INF, False, path)
            score = value + self._root_adjustment(state, move)
            root_scores[move.id] = score

            if (best_move is None or score > best_score
                    or (score == best_score and move.cost < best_move.cost)):
                best_move = move
                best_score = score

        return best_move, best_score, root_scores

    def _root_adjustment(self, state: GameState, move: DefenseMove) -> float:
        """Counter bonus minus the penalty for recently chosen defenses"""
        bonus = 0.0
        last_attack = state.attacker.last_move
        if isinstance(last_attack, AttackMove):
            bonus = move.counter_effectiveness(last_attack.category) * self.config.counter_bonus_weight

        repeats = sum(1 for chosen in self.chosen_history if chosen == move.id)
        return bonus - repeats * self.config.repeat_penalty_weight

    def _minimax(
        self, state: GameState, depth: int,
        alpha: float, beta: float, maximizing: bool,
        path: Tuple[int, ...] = ()
    ) -> float:
        """
        The core MinMax recursion.

        Args:
            state: Simulated game state
            depth: Remaining search depth
            alpha: Best score for the defender found so far
            beta: Best score for the attacker found so far
            maximizing: True on defender plies
            path: Move ids from the root to this node

        Returns:
            Evaluation score for this position
        """
        self.nodes_searched += 1

        if depth <= 0 or state.game_over:
            return self.evaluator.evaluate(state)

        role = PlayerRole.DEFENDER if maximizing else PlayerRole.ATTACKER
        moves = self.validator.get_legal_moves(state, role)
        if not moves:
            # Side to move is out of options - treat as a leaf
            return self.evaluator.evaluate(state)

        if self.use_alpha_beta:
            moves = self.move_orderer.order_moves(state, moves)

        if maximizing:
            best_score = self.NEG_INF
            for move in moves:
                child_path = path + (move.id,)
                new_state = self._simulate_move(state, move, child_path)
                score = self._minimax(new_state, depth - 1, alpha, beta, False, child_path)
                best_score = max(best_score, score)

                if self.use_alpha_beta:
                    alpha = max(alpha, score)
                    if beta <= alpha:
                        # Beta cutoff
                        self.nodes_pruned += 1
                        break
        else:
            best_score = self.INF
            for move in moves:
                child_path = path + (move.id,)
                new_state = self._simulate_move(state, move, child_path)
                score = self._minimax(new_state, depth - 1, alpha, beta, True, child_path)
                best_score = min(best_score, score)

                if self.use_alpha_beta:
                    beta = min(beta, score)
                    if beta <= alpha:
                        # Alpha cutoff
                        self.nodes_pruned += 1
                        break

        return best_score

    def _simulate_move(self, state: GameState, move: Move,
                       path: Tuple[int, ...]) -> GameState:
        """Clone the state and apply the move with the roll owned by its path"""
        new_state = state.clone()
        self.executor.execute(new_state, move, self._branch_rng(path))
        return new_state

    def _branch_rng(self, path: Tuple[int, ...]) -> np.random.Generator:
        # Path length goes first so (a,) and (a, 0) never share entropy
        return np.random.default_rng([self.search_seed, len(path), *path])

    def get_search_stats(self) -> Dict:
        """Get statistics from the most recent search"""
        if self.last_stats is None:
            return {}

        latest = self.last_stats
        return {
            "nodes_searched": latest.nodes_searched,
            "nodes_pruned": latest.nodes_pruned,
            "depth": latest.depth,
            "time_ms": latest.time_ms,
            "best_move": latest.best_move.id if latest.best_move else None,
            "best_score": latest.best_score,
            "root_scores": dict(latest.root_scores),
            "chosen_history": list(self.chosen_history),
        }

    def clear_memory(self):
        """Forget previously chosen defenses (for a new game)"""
        self.chosen_history.clear()
        self.last_stats = None


# =============================================================================
# Convenience Functions
# =============================================================================

def create_minimax_agent(
    config: Optional[GameConfig] = None,
    rng: Optional[np.random.Generator] = None
) -> MinimaxAgent:
    """
    Create a MinMax agent with the search settings of a game configuration.

    Args:
        config: Game configuration (depth, pruning, weights)
        rng: Random source for simulated rolls

    Returns:
        Configured MinimaxAgent instance
    """
    config = config or GameConfig()
    return MinimaxAgent(
        max_depth=config.search_depth,
        use_alpha_beta=config.use_alpha_beta,
        config=config,
        rng=rng,
    )
