"""
Optimization runners for facility location.

This module provides the discrete PSO engine: single optimization runs and
the coefficient parameter sweep built on top of them.
"""

from .ndpso import NDPSO, ProblemResults

__all__ = [
    'NDPSO',
    'ProblemResults'
]
