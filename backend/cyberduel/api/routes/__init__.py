"""
Routes Module

Contains API route definitions.
"""

from . import game

__all__ = ['game']
