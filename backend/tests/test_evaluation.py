"""
Evaluation Tests

Tests for the defender-perspective state scorer.
"""

import pytest

from cyberduel.core import (
    GameState, GameConfig, PlayerRole, VictoryCondition,
    EvaluationWeights, EvaluationScheme, find_attack, find_defense,
)
from cyberduel.ai import StateEvaluator


def test_opening_position_rich(state):
    """Opening: half security, even resources, no posture"""
    evaluator = StateEvaluator()
    assert evaluator.evaluate(state) == pytest.approx(30.0)
    components = evaluator.components(state)
    assert components["security"] == pytest.approx(30.0)
    assert components["resources"] == 0.0
    assert components["posture"] == 0.0
    assert components["repetition"] == 0.0


def test_opening_position_simple(state):
    evaluator = StateEvaluator(EvaluationWeights.simple())
    assert evaluator.weights.scheme == EvaluationScheme.SIMPLE
    assert evaluator.evaluate(state) == pytest.approx(25.0)
    assert "repetition" not in evaluator.components(state)


def test_evaluation_is_pure(state):
    """Same state, same score, state untouched"""
    state.attacker.record_move(find_attack(2))
    state.defender.record_move(find_defense(1))
    before = state.to_dict()

    evaluator = StateEvaluator()
    first = evaluator.evaluate(state)
    second = evaluator.evaluate(state)

    assert first == second
    assert state.to_dict() == before


def test_terminal_scores(state):
    evaluator = StateEvaluator()

    won = state.clone()
    won.end_game(PlayerRole.DEFENDER, VictoryCondition.NETWORK_SECURED)
    assert evaluator.evaluate(won) == 1000.0

    lost = state.clone()
    lost.end_game(PlayerRole.ATTACKER, VictoryCondition.NETWORK_BREACHED)
    assert evaluator.evaluate(lost) == -1000.0


def test_terminal_dominates_non_terminal(state):
    """No non-terminal position scores beyond the win score"""
    evaluator = StateEvaluator()
    state.network.security_level = 100.0
    state.defender.resources = 500
    assert evaluator.evaluate(state) < 1000.0


def test_resource_component_caps_lead_only(state):
    """A lead is capped at the weight, a deficit keeps growing"""
    evaluator = StateEvaluator()

    state.defender.resources = 40
    state.attacker.resources = 0
    assert evaluator.components(state)["resources"] == pytest.approx(20.0)

    state.defender.resources = 0
    state.attacker.resources = 40
    assert evaluator.components(state)["resources"] == pytest.approx(-80.0)

    state.defender.resources = 20
    state.attacker.resources = 15
    assert evaluator.components(state)["resources"] == pytest.approx(10.0)


def test_counter_posture(state):
    """Training answers phishing at its own effectiveness"""
    evaluator = StateEvaluator()
    state.attacker.record_move(find_attack(1))
    state.defender.record_move(find_defense(4))
    assert evaluator.components(state)["posture"] == pytest.approx(16.0)

    state.defender.record_move(find_defense(1))
    assert evaluator.components(state)["posture"] == 0.0


def test_repetition_penalty(state):
    """Three identical defenses in a row cost 10 points"""
    evaluator = StateEvaluator()
    patch = find_defense(3)
    for _ in range(2):
        state.defender.record_move(patch)
    assert evaluator.components(state)["repetition"] == 0.0

    state.defender.record_move(patch)
    assert evaluator.components(state)["repetition"] == -10.0

    state.defender.record_move(find_defense(1))
    assert evaluator.components(state)["repetition"] == 0.0


def test_simple_posture_counts_defenses(state):
    evaluator = StateEvaluator(EvaluationWeights.simple())
    for _ in range(4):
        state.defender.record_move(find_defense(3))
    assert evaluator.components(state)["posture"] == pytest.approx(8.0)

    for _ in range(20):
        state.defender.record_move(find_defense(3))
    assert evaluator.components(state)["posture"] == pytest.approx(20.0)


def test_security_uses_configured_max():
    state = GameState.initial(GameConfig(max_security=200.0, initial_security=50.0))
    assert StateEvaluator().components(state)["security"] == pytest.approx(15.0)


def test_simple_resource_deficit_is_unbounded(state):
    """SIMPLE scheme: 1.5 points per resource, capped at 30 on the upside only"""
    evaluator = StateEvaluator(EvaluationWeights.simple())

    state.defender.resources = 0
    state.attacker.resources = 40
    assert evaluator.components(state)["resources"] == pytest.approx(-60.0)

    state.defender.resources = 40
    state.attacker.resources = 0
    assert evaluator.components(state)["resources"] == pytest.approx(30.0)
