# =============================================================================
# Cyber Duel - Enumerations
# =============================================================================
"""
All enumeration types used throughout the game.
These define the discrete values for game elements.
"""

from enum import Enum, auto


class PlayerRole(Enum):
    """
    The two opposing roles in the game.
    """
    ATTACKER = auto()   # Red team - drives security down
    DEFENDER = auto()   # Blue team - drives security up

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def opponent(self) -> 'PlayerRole':
        """Return the opposing role"""
        if self == PlayerRole.ATTACKER:
            return PlayerRole.DEFENDER
        return PlayerRole.ATTACKER


class AttackCategory(Enum):
    """
    Families of offensive techniques.
    Defenses declare which of these they counter.
    """
    SOCIAL_ENGINEERING = auto()
    DENIAL_OF_SERVICE = auto()
    EXPLOIT = auto()
    MALWARE = auto()
    INJECTION = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class DefenseCategory(Enum):
    """
    Families of defensive measures.
    """
    PERIMETER = auto()      # Firewalls, filtering
    MONITORING = auto()     # Intrusion detection
    HARDENING = auto()      # Patching, configuration
    TRAINING = auto()       # User awareness
    RECOVERY = auto()       # Backups and restore

    def __str__(self) -> str:
        return self.name.lower()


class VictoryCondition(Enum):
    """
    Ways the game can end.
    """
    NETWORK_BREACHED = auto()       # Security reached the minimum
    NETWORK_SECURED = auto()        # Security reached the maximum
    RESOURCES_EXHAUSTED = auto()    # Both sides ran dry, decided by baseline

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class EvaluationScheme(Enum):
    """
    Heuristic evaluation variants.
    """
    RICH = auto()     # Counter-aware posture plus anti-repetition penalty
    SIMPLE = auto()   # Posture is a capped count of applied defenses

    def __str__(self) -> str:
        return self.name.lower()
