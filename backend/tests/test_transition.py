"""
Transition Function Tests

Tests for applying moves to a game state:
- Attack and defense effects
- End-of-turn regeneration and decay
- Victory conditions
- Rejected moves
"""

import numpy as np
import pytest

from cyberduel.core import (
    GameState, GameConfig, PlayerRole, VictoryCondition,
    AttackCategory, DefenseCategory, AttackMove, DefenseMove,
    MoveValidator, MoveExecutor, apply_move, check_game_end,
    InvalidTurnError, InsufficientResourcesError,
    ATTACK_CATALOG, DEFENSE_CATALOG, find_attack, find_defense, DefenseSummary,
)

from conftest import FixedRoll


TEST_ATTACK = AttackMove(99, "Test Attack", AttackCategory.EXPLOIT,
                         cost=2, damage=20, effectiveness=1.0)
NULL_ATTACK = AttackMove(98, "Port Scan", AttackCategory.EXPLOIT,
                         cost=2, damage=0, effectiveness=1.0)
LOCKDOWN = DefenseMove(99, "Lockdown", DefenseCategory.HARDENING,
                       cost=1, security_boost=1000, effectiveness=1.0)


# =============================================================================
# Catalog Tests
# =============================================================================

def test_catalog_lookup():
    """Catalog ids resolve to their moves, unknown ids to None"""
    assert find_attack(3).name == "Zero-Day Exploit"
    assert find_defense(4).name == "Awareness Training"
    assert find_attack(42) is None
    assert len(ATTACK_CATALOG) == 5
    assert len(DEFENSE_CATALOG) == 5


def test_defense_counters():
    """Counter effectiveness is the defense's effectiveness or zero"""
    firewall = find_defense(1)
    assert firewall.counter_effectiveness(AttackCategory.DENIAL_OF_SERVICE) == 0.9
    assert firewall.counter_effectiveness(AttackCategory.SOCIAL_ENGINEERING) == 0.0
    assert firewall.counter_effectiveness(None) == 0.0


# =============================================================================
# Attack / Defense Effects
# =============================================================================

def test_nominal_attack(state, nominal_rng):
    """A nominal-roll attack removes damage plus decay, hands the turn over"""
    state, outcome = apply_move(state, TEST_ATTACK, nominal_rng)

    assert state.security_level == pytest.approx(27.0)
    assert state.turn == 1
    assert state.current_player == PlayerRole.DEFENDER
    assert state.attacker.resources == 13
    # Defender collects its income at the start of its turn
    assert state.defender.resources == 18
    assert outcome.realized_effect == pytest.approx(20.0)
    assert outcome.realized_effectiveness == pytest.approx(1.0)
    assert outcome.security_before == 50.0
    assert outcome.security_after == pytest.approx(27.0)
    assert not outcome.ended_game
    print("✓ Nominal attack applied")


def test_defense_effect(defender_state, nominal_rng):
    """Defense raises security and the attacker collects its income"""
    firewall = find_defense(1)
    state, outcome = apply_move(defender_state, firewall, nominal_rng)

    # 50 + 15 * 0.9 - 3
    assert state.security_level == pytest.approx(60.5)
    assert state.current_player == PlayerRole.ATTACKER
    assert state.defender.resources == 12
    assert state.attacker.resources == 17
    assert state.defender.last_move is firewall
    assert [m.id for m in state.defender.history] == [1]
    assert outcome.role == PlayerRole.DEFENDER


def test_roll_bands(state):
    """Rolls stay within the configured bands"""
    low_state, low = apply_move(state.clone(), TEST_ATTACK, FixedRoll(0.0))
    high_state, high = apply_move(state.clone(), TEST_ATTACK, FixedRoll(0.999999))

    assert low.realized_effectiveness == pytest.approx(0.8)
    assert high.realized_effectiveness == pytest.approx(1.2, abs=1e-5)


def test_each_move_draws_once(state):
    """One draw per applied move"""
    rng = FixedRoll(0.3)
    apply_move(state, TEST_ATTACK, rng)
    apply_move(state, find_defense(3), rng)
    assert rng.draws == 2


def test_alternation_and_turns(state):
    """Players alternate and the turn increments once per move"""
    rng = np.random.default_rng(11)
    expected = PlayerRole.ATTACKER
    for turn in range(6):
        assert state.current_player == expected
        move = find_attack(1) if expected == PlayerRole.ATTACKER else find_defense(3)
        apply_move(state, move, rng)
        assert state.turn == turn + 1
        expected = expected.opponent
    assert state.current_player == PlayerRole.ATTACKER


def test_security_bounds():
    """Security never leaves [min, max]"""
    rng = np.random.default_rng(5)
    heavy = AttackMove(97, "Wipe", AttackCategory.MALWARE, cost=0, damage=500, effectiveness=1.0)

    state = GameState.initial()
    apply_move(state, heavy, rng)
    assert state.security_level == 0.0

    state = GameState.initial()
    state.current_player = PlayerRole.DEFENDER
    apply_move(state, LOCKDOWN, rng)
    assert state.security_level == 100.0


def test_decay_clamps_at_min(nominal_rng):
    """Decay cannot push security below the floor"""
    state = GameState.initial()
    state.network.security_level = 2.0
    apply_move(state, NULL_ATTACK, nominal_rng)
    assert state.security_level == 0.0
    assert state.winner == PlayerRole.ATTACKER


def test_clone_independent(state, nominal_rng):
    """Mutating a clone leaves the original untouched"""
    before = state.to_dict()
    clone = state.clone()
    apply_move(clone, TEST_ATTACK, nominal_rng)
    assert state.to_dict() == before
    assert clone.turn == 1


def test_applied_effect_respects_ceiling(defender_state, nominal_rng):
    """Near the ceiling only the headroom is applied and reported"""
    defender_state.network.security_level = 95.0
    state, outcome = apply_move(defender_state, find_defense(1), nominal_rng)

    assert outcome.realized_effect == pytest.approx(13.5)
    assert outcome.applied_effect == pytest.approx(5.0)

    summary = DefenseSummary.from_outcome(outcome)
    assert summary.boost == pytest.approx(5.0)
    assert summary.rolled_boost == pytest.approx(13.5)
    assert "security +5.0" in summary.message
    assert summary.to_dict()["boost"] == pytest.approx(5.0)


def test_applied_effect_respects_floor(nominal_rng):
    state = GameState.initial()
    state.network.security_level = 10.0
    state, outcome = apply_move(state, TEST_ATTACK, nominal_rng)

    assert outcome.realized_effect == pytest.approx(20.0)
    assert outcome.applied_effect == pytest.approx(10.0)
    assert outcome.to_dict()["applied_effect"] == pytest.approx(10.0)


# =============================================================================
# Victory Conditions
# =============================================================================

def test_one_step_lockdown_wins(defender_state, nominal_rng):
    """A boost that reaches max security ends the game for the defender"""
    state, outcome = apply_move(defender_state, LOCKDOWN, nominal_rng)

    assert state.game_over
    assert state.winner == PlayerRole.DEFENDER
    assert state.victory_condition == VictoryCondition.NETWORK_SECURED
    assert state.security_level == 100.0
    assert outcome.ended_game
    print("✓ Defender wins by securing the network")


def test_breach_wins_for_attacker(nominal_rng):
    """Security reaching zero ends the game for the attacker"""
    state = GameState.initial()
    state.network.security_level = 15.0
    apply_move(state, TEST_ATTACK, nominal_rng)

    assert state.game_over
    assert state.winner == PlayerRole.ATTACKER
    assert state.victory_condition == VictoryCondition.NETWORK_BREACHED


def test_exhaustion_at_midpoint_goes_to_defender(nominal_rng):
    """Both sides broke with security exactly at the baseline: defender wins"""
    state = GameState.initial()
    state.network.security_level = 53.0
    state.attacker.resources = 2
    state.defender.resources = -3

    apply_move(state, NULL_ATTACK, nominal_rng)

    assert state.security_level == pytest.approx(50.0)
    assert state.attacker.resources == 0
    assert state.defender.resources == 0
    assert state.winner == PlayerRole.DEFENDER
    assert state.victory_condition == VictoryCondition.RESOURCES_EXHAUSTED


def test_exhaustion_check_order():
    """Exhaustion is judged against the baseline"""
    state = GameState.initial()
    state.attacker.resources = 0
    state.defender.resources = -1
    state.network.security_level = 49.9
    assert check_game_end(state)
    assert state.winner == PlayerRole.ATTACKER

    state = GameState.initial()
    state.attacker.resources = 0
    state.defender.resources = 0
    state.network.security_level = 50.0
    assert check_game_end(state)
    assert state.winner == PlayerRole.DEFENDER


def test_no_end_while_resources_remain():
    state = GameState.initial()
    state.attacker.resources = 0
    assert not check_game_end(state)
    assert not state.game_over


def test_game_over_is_monotonic(defender_state, nominal_rng):
    """A finished game stays finished and its winner is fixed"""
    apply_move(defender_state, LOCKDOWN, nominal_rng)
    defender_state.network.security_level = 0.0
    check_game_end(defender_state)
    assert defender_state.winner == PlayerRole.DEFENDER


# =============================================================================
# Rejected Moves
# =============================================================================

def test_move_after_game_over_rejected(defender_state, nominal_rng):
    apply_move(defender_state, LOCKDOWN, nominal_rng)
    with pytest.raises(InvalidTurnError):
        apply_move(defender_state, TEST_ATTACK, nominal_rng)


def test_wrong_side_rejected(state, nominal_rng):
    with pytest.raises(InvalidTurnError):
        apply_move(state, find_defense(1), nominal_rng)


def test_unaffordable_rejected(state, nominal_rng):
    state.attacker.resources = 1
    with pytest.raises(InsufficientResourcesError):
        apply_move(state, TEST_ATTACK, nominal_rng)
    assert state.turn == 0


def test_executor_uses_own_config(nominal_rng):
    """An executor built with a config ignores the state's config"""
    executor = MoveExecutor(GameConfig(security_decay=0.0))
    state = GameState.initial()
    executor.execute(state, TEST_ATTACK, nominal_rng)
    assert state.security_level == pytest.approx(30.0)


# =============================================================================
# Validator
# =============================================================================

def test_legal_moves_respect_resources(state):
    validator = MoveValidator()
    state.attacker.resources = 3
    legal = validator.get_legal_moves(state)
    assert [m.id for m in legal] == [1, 2, 4]

    ok, message = validator.validate(state, find_attack(5))
    assert not ok
    assert "Not enough resources" in message


def test_no_legal_moves_after_game_over(defender_state, nominal_rng):
    apply_move(defender_state, LOCKDOWN, nominal_rng)
    assert MoveValidator().get_legal_moves(defender_state) == []
