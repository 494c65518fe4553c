"""
Planar Euclidean TSP route optimizer: nearest neighbor, 2-opt, a genetic
algorithm and their hybrid over an immutable city snapshot.
"""

from .engine import STRATEGIES, Solver, solve, validate_cities, validate_route
from .solvers.base import City, TourResult

__all__ = [
    "data",
    "engine",
    "evaluation",
    "exceptions",
    "solvers",
    "City",
    "TourResult",
    "Solver",
    "STRATEGIES",
    "solve",
    "validate_cities",
    "validate_route",
]
