"""
trim/ - Equilibrium draft solver
"""

from .solver import TrimSolution, TrimSolver

__all__ = [
    "TrimSolution",
    "TrimSolver",
]
