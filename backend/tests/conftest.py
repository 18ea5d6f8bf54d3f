"""
Shared fixtures for the Cyber Duel tests.
"""

import pytest

from cyberduel.core import GameState, GameConfig


class FixedRoll:
    """Stands in for a numpy Generator: every draw returns the same value"""

    def __init__(self, value: float = 0.5):
        self.value = value
        self.draws = 0

    def random(self) -> float:
        self.draws += 1
        return self.value


class ConstantEvaluator:
    """Scores every position the same, so only root adjustments decide"""

    def evaluate(self, state) -> float:
        return 0.0


@pytest.fixture
def nominal_rng():
    """Roll that lands exactly in the middle of every band (factor 1.0)"""
    return FixedRoll(0.5)


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def state(config):
    return GameState.initial(config)


@pytest.fixture
def defender_state(config):
    """Opening position with the defender to move"""
    from cyberduel.core import PlayerRole

    state = GameState.initial(config)
    state.current_player = PlayerRole.DEFENDER
    return state
