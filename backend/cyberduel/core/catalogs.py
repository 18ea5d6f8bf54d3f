# =============================================================================
# Cyber Duel - Move Catalogs
# =============================================================================
"""
Static attack and defense definitions.
Catalogs are tuples of frozen moves and are never modified at runtime.
"""

from typing import Optional, Sequence, Tuple

from .enums import AttackCategory, DefenseCategory
from .data_structures import AttackMove, DefenseMove


ATTACK_CATALOG: Tuple[AttackMove, ...] = (
    AttackMove(1, "Phishing", AttackCategory.SOCIAL_ENGINEERING,
               cost=2, damage=14.0, effectiveness=0.7),
    AttackMove(2, "DDoS", AttackCategory.DENIAL_OF_SERVICE,
               cost=3, damage=18.0, effectiveness=0.6),
    AttackMove(3, "Zero-Day Exploit", AttackCategory.EXPLOIT,
               cost=4, damage=20.0, effectiveness=0.85),
    AttackMove(4, "SQL Injection", AttackCategory.INJECTION,
               cost=3, damage=16.0, effectiveness=0.75),
    AttackMove(5, "Ransomware", AttackCategory.MALWARE,
               cost=5, damage=26.0, effectiveness=0.8),
)

DEFENSE_CATALOG: Tuple[DefenseMove, ...] = (
    DefenseMove(1, "Firewall", DefenseCategory.PERIMETER,
                cost=3, security_boost=15.0, effectiveness=0.9,
                effective_against=frozenset({AttackCategory.DENIAL_OF_SERVICE,
                                             AttackCategory.INJECTION})),
    DefenseMove(2, "Intrusion Detection System", DefenseCategory.MONITORING,
                cost=4, security_boost=20.0, effectiveness=0.85,
                effective_against=frozenset({AttackCategory.EXPLOIT,
                                             AttackCategory.MALWARE})),
    DefenseMove(3, "Security Patch", DefenseCategory.HARDENING,
                cost=2, security_boost=8.0, effectiveness=0.95,
                effective_against=frozenset({AttackCategory.EXPLOIT,
                                             AttackCategory.INJECTION})),
    DefenseMove(4, "Awareness Training", DefenseCategory.TRAINING,
                cost=3, security_boost=12.0, effectiveness=0.8,
                effective_against=frozenset({AttackCategory.SOCIAL_ENGINEERING})),
    DefenseMove(5, "Backup & Recovery", DefenseCategory.RECOVERY,
                cost=5, security_boost=24.0, effectiveness=0.9,
                effective_against=frozenset({AttackCategory.MALWARE,
                                             AttackCategory.DENIAL_OF_SERVICE})),
)


def find_attack(attack_id: int,
                catalog: Sequence[AttackMove] = ATTACK_CATALOG) -> Optional[AttackMove]:
    """Look up an attack by id"""
    for attack in catalog:
        if attack.id == attack_id:
            return attack
    return None


def find_defense(defense_id: int,
                 catalog: Sequence[DefenseMove] = DEFENSE_CATALOG) -> Optional[DefenseMove]:
    """Look up a defense by id"""
    for defense in catalog:
        if defense.id == defense_id:
            return defense
    return None
