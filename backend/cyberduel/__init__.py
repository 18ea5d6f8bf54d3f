# =============================================================================
# Cyber Duel - Backend Package
# =============================================================================
"""
Cyber Duel Backend

A turn-based attacker vs defender contest over a network's security level,
with a MinMax AI playing the defender.
"""

__version__ = "0.1.0"
