"""
HTTP boundary of Cyber Duel.
"""
